import re

TARGET_ITEMS = [
    {"shortDescription": "Mountain Dew 12PK", "price": "6.49"},
    {"shortDescription": "Emils Cheese Pizza", "price": "12.25"},
    {"shortDescription": "Knorr Creamy Chicken", "price": "1.26"},
    {"shortDescription": "Doritos Nacho Cheese", "price": "3.35"},
    {"shortDescription": "   Klarbrunn 12-PK 12 FL OZ  ", "price": "12.00"},
]


def target_payload(**overrides) -> dict:
    """Receipt worth 28 points before any bonus."""
    payload = {
        "retailer": "Target",
        "total": "35.35",
        "purchaseDate": "2022-01-01",
        "purchaseTime": "13:01",
        "items": [dict(item) for item in TARGET_ITEMS],
    }
    payload.update(overrides)
    return payload


def corner_market_payload(**overrides) -> dict:
    """Receipt worth 109 points before any bonus."""
    payload = {
        "retailer": "M&M Corner Market",
        "total": "9.00",
        "purchaseDate": "2022-03-20",
        "purchaseTime": "14:33",
        "items": [{"shortDescription": "Gatorade", "price": "2.25"} for _ in range(4)],
    }
    payload.update(overrides)
    return payload


def clean_cli_output(output: str) -> str:
    """
    Remove ANSI escape codes, Rich formatting characters, whitespace, and newlines
    from CLI output to make assertions robust against terminal wrapping.
    """
    # 1. Remove ANSI escape codes
    ansi_escape = re.compile(r"\x1B(?:[@-Z\\-_]|\[[0-?]*[ -/]*[@-~])")
    output = ansi_escape.sub("", output)

    # 2. Remove:
    # \s - all whitespace (space, tab, newline, etc.)
    # │, ╭, ╮, ╰, ╯, ─ - Rich box characters
    return re.sub(r"[\s│╭╮╰╯─]", "", output)
