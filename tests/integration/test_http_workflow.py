"""End-to-end tests for the receipt points HTTP workflow.

Tests the complete flow: HTTP request → parsing → validation → bonus →
scoring → store → HTTP query, through a single application instance the way
a client would use the running service.

Run with: pytest -m integration
"""

from concurrent.futures import ThreadPoolExecutor

import pytest
from fastapi.testclient import TestClient

from receipt_points.api import SUBMITTER_HEADER, create_app
from receipt_points.config import Settings
from tests.utils import corner_market_payload, target_payload

# Mark all tests in this module as integration tests
pytestmark = pytest.mark.integration

INVALID_RECEIPT = "The receipt is invalid."
NOT_FOUND = "No receipt found for that ID."


@pytest.fixture
def client():
    with TestClient(create_app(settings=Settings())) as test_client:
        yield test_client


def process(client, payload, submitter="e2e-user"):
    return client.post(
        "/receipts/process", json=payload, headers={SUBMITTER_HEADER: submitter}
    )


def points(client, receipt_id):
    return client.get(f"/receipts/{receipt_id}/points")


# Rejections


@pytest.mark.parametrize(
    "payload",
    [
        target_payload(items=[]),
        target_payload(
            items=target_payload()["items"][:4]
            + [{"shortDescription": "Klarbrunn 12-PK", "price": "NOT a price"}]
        ),
        target_payload(
            items=target_payload()["items"][:4]
            + [{"shortDescription": "", "price": "12.00"}]
        ),
        target_payload(retailer=""),
        target_payload(total="NOT a total"),
        target_payload(purchaseDate="Jan 01"),
        target_payload(purchaseTime="8:00 PM"),
    ],
)
def test_invalid_receipts_are_rejected(client, payload):
    response = process(client, payload)
    assert response.status_code == 400
    assert response.text == INVALID_RECEIPT


def test_rejections_leave_no_trace(client):
    process(client, target_payload(items=[]), submitter="careful")
    receipt_id = process(client, target_payload(), submitter="careful").json()["id"]
    assert points(client, receipt_id).json() == {"points": 1028}


# Happy path


def test_process_then_query_sample_receipts(client):
    target_id = process(client, target_payload(), submitter="first").json()["id"]
    market_id = process(client, corner_market_payload(), submitter="second")
    market_id = market_id.json()["id"]

    assert target_id != market_id
    assert points(client, target_id).json() == {"points": 28 + 1000}
    assert points(client, market_id).json() == {"points": 109 + 1000}


def test_bonus_tiers_for_one_submitter(client):
    ids = [process(client, corner_market_payload()).json()["id"] for _ in range(5)]
    assert [points(client, i).json()["points"] for i in ids] == [
        1109,
        609,
        359,
        109,
        109,
    ]


def test_scores_are_stable_across_queries(client):
    receipt_id = process(client, target_payload()).json()["id"]
    assert {points(client, receipt_id).json()["points"] for _ in range(3)} == {1028}


# Lookups


def test_query_invalid_id(client):
    response = points(client, "NOT A UUID")
    assert response.status_code == 404
    assert response.text == NOT_FOUND


def test_query_nonexistent_receipt(client):
    response = points(client, "6c1a2a43-5e0b-4d0d-9d0b-1f04e8c1b6a2")
    assert response.status_code == 404
    assert response.text == NOT_FOUND


# Concurrency


def test_concurrent_submissions_grant_each_tier_once(client):
    def submit(_):
        response = process(client, target_payload(), submitter="busy")
        return response.json()["id"]

    with ThreadPoolExecutor(max_workers=8) as executor:
        ids = list(executor.map(submit, range(24)))

    assert len(set(ids)) == 24
    scores = sorted((points(client, i).json()["points"] for i in ids), reverse=True)
    assert scores == [1028, 528, 278] + [28] * 21
