"""Example usage of the submission service.

This example submits the same receipt three times for one submitter to show
the first-use bonus decaying, then looks each score up by its identifier.
"""

import json
from pathlib import Path

from receipt_points.engine import calculate_points
from receipt_points.errors import ReceiptNotFoundError
from receipt_points.service import create_service, parse_receipt


def main():
    """Example of submitting and querying receipts."""
    receipt_path = Path(__file__).parent / "receipts" / "morning_receipt.json"
    payload = json.loads(receipt_path.read_text(encoding="utf-8"))

    service = create_service()
    base_points = calculate_points(parse_receipt(payload))
    print(f"Base points without bonus: {base_points}")

    # Each submission from the same submitter earns a smaller bonus
    for attempt in range(1, 4):
        receipt_id = service.submit(payload, submitter_key="example-user")
        print(f"Submission {attempt}: {receipt_id} -> {service.query(receipt_id)}")

    try:
        service.query("not-a-real-id")
    except ReceiptNotFoundError as e:
        print(f"\nUnknown ID: {e}")


if __name__ == "__main__":
    main()
