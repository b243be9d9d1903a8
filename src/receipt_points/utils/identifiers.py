import re

# Receipt identifiers are opaque; only their shape is checked
IDENTIFIER_PATTERN = re.compile(r"\S+")


def is_valid_identifier(identifier: str | None) -> bool:
    """
    Returns True if the identifier is non-empty and contains no whitespace.
    Says nothing about whether a receipt exists for it.
    """
    if not identifier:
        return False
    return IDENTIFIER_PATTERN.fullmatch(identifier) is not None
