"""HTTP-level tests for the offer routes.

The parser is a MagicMock; the tracker runs against in-memory SQLite with a
fixed clock.
"""

from __future__ import annotations

import asyncio
import sqlite3
from typing import Any
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from offerdesk.app import create_app
from offerdesk.domain.errors import InputTooShortError, ParsingUnavailableError
from offerdesk.domain.models import StructuredOffer
from offerdesk.extraction import PlainTextExtractor
from offerdesk.tracking import OfferTracker

HEADERS = {"X-Creator-Id": "creator-1"}
OTHER = {"X-Creator-Id": "creator-2"}


@pytest.fixture()
def parser() -> MagicMock:
    return MagicMock()


@pytest.fixture()
def client(
    records_conn: sqlite3.Connection, tracker: OfferTracker, parser: MagicMock
) -> TestClient:
    services = {
        "records_conn": records_conn,
        "tracker": tracker,
        "parser": parser,
        "extractor": PlainTextExtractor(),
    }
    return TestClient(create_app(services))


def _create(client: TestClient, **overrides) -> dict:
    body = {
        "brand_name": "Glow Co",
        "product_description": "Vitamin C serum",
        "product_value": "85",
    }
    body.update(overrides)
    response = client.post("/records", json=body, headers=HEADERS)
    assert response.status_code == 201
    return response.json()


class TestParseRoutes:
    def test_parse_brief(self, client: TestClient, parser: MagicMock) -> None:
        parser.parse_offer.return_value = StructuredOffer(raw_text="brief")

        response = client.post("/parse/brief", json={"text": "brief"})

        assert response.status_code == 200
        assert response.json()["raw_text"] == "brief"
        parser.parse_offer.assert_called_once_with("brief")

    def test_short_text_is_422(self, client: TestClient, parser: MagicMock) -> None:
        parser.parse_offer.side_effect = InputTooShortError(5, 50, label="Brief text")

        response = client.post("/parse/brief", json={"text": "short"})

        assert response.status_code == 422
        assert "at least 50 characters" in response.json()["detail"]

    def test_parsing_unavailable_is_503_and_retryable(
        self, client: TestClient, parser: MagicMock
    ) -> None:
        parser.parse_dm.side_effect = ParsingUnavailableError({"anthropic": RuntimeError()})

        response = client.post("/parse/dm", json={"text": "Hey, want to try our serum?"})

        assert response.status_code == 503
        assert response.json()["retryable"] is True

    def test_parse_file_passes_bytes_and_extractor(
        self, client: TestClient, parser: MagicMock
    ) -> None:
        parser.parse_offer_file.return_value = StructuredOffer()

        response = client.post(
            "/parse/brief/file", params={"filename": "brief.txt"}, content=b"brief body"
        )

        assert response.status_code == 200
        data, filename, extractor = parser.parse_offer_file.call_args.args
        assert (data, filename) == (b"brief body", "brief.txt")
        assert isinstance(extractor, PlainTextExtractor)


class TestEvaluateRoute:
    def test_evaluate_returns_evaluation_and_reply(self, client: TestClient) -> None:
        response = client.post(
            "/evaluate",
            json={
                "offer": {
                    "product_value": "300",
                    "estimated_hours": "1",
                    "brand_quality": "major_brand",
                    "would_buy": True,
                    "has_website": True,
                    "prior_creator_collabs": True,
                },
                "profile": {"tier": "micro"},
                "context": {"brand_name": "Glow Co"},
            },
        )

        assert response.status_code == 200
        body = response.json()
        assert body["evaluation"]["worth_score"] == 100
        assert body["evaluation"]["recommendation"] == "accept_with_hook"
        assert body["response"]["message"].startswith("Hi Glow Co!")

    def test_invalid_offer_is_422(self, client: TestClient) -> None:
        response = client.post("/evaluate", json={"offer": {"product_value": "0"}})
        assert response.status_code == 422

    def test_response_types(self, client: TestClient) -> None:
        body = client.get("/responses/types").json()
        assert set(body) == {
            "accept_with_hook",
            "counter_hybrid",
            "ask_budget_first",
            "decline_politely",
            "run_away",
        }


class TestRecordRoutes:
    def test_requires_creator_header(self, client: TestClient) -> None:
        assert client.get("/records").status_code == 422

    def test_create_get_list(self, client: TestClient) -> None:
        record = _create(client)

        fetched = client.get(f"/records/{record['id']}", headers=HEADERS)
        listed = client.get("/records", headers=HEADERS)

        assert fetched.status_code == 200
        assert fetched.json()["status"] == "received"
        assert [r["id"] for r in listed.json()] == [record["id"]]

    def test_not_found_vs_forbidden(self, client: TestClient) -> None:
        record = _create(client)

        assert client.get("/records/missing", headers=HEADERS).status_code == 404
        assert client.get(f"/records/{record['id']}", headers=OTHER).status_code == 403

    def test_lifecycle_flow(self, client: TestClient) -> None:
        record_id = _create(client)["id"]

        content = client.post(
            f"/records/{record_id}/content",
            json={"content_type": "reel", "content_date": "2025-02-20T10:00:00Z"},
            headers=HEADERS,
        )
        assert content.status_code == 200
        assert content.json()["follow_up_date"].startswith("2025-03-06T10:00:00")

        due = client.get("/records/follow-ups-due", headers=HEADERS).json()
        assert due == []

        follow_up = client.post(
            f"/records/{record_id}/follow-up", json={"notes": "Sent stats"}, headers=HEADERS
        )
        assert follow_up.json()["status"] == "followed_up"

        converted = client.post(
            f"/records/{record_id}/convert",
            json={"converted_amount": "500"},
            headers=HEADERS,
        )
        assert converted.json()["status"] == "converted"

        analytics = client.get("/analytics", headers=HEADERS).json()
        assert analytics["converted_count"] == 1
        assert analytics["conversion_rate"] == 1.0

    def test_invalid_transition_is_409(self, client: TestClient) -> None:
        record_id = _create(client)["id"]

        response = client.post(f"/records/{record_id}/follow-up", json={}, headers=HEADERS)

        assert response.status_code == 409
        assert response.json()["state"] == "received"
        assert response.json()["event"] == "log_follow_up"

    def test_delete(self, client: TestClient) -> None:
        record_id = _create(client)["id"]

        assert client.delete(f"/records/{record_id}", headers=OTHER).status_code == 403
        assert client.delete(f"/records/{record_id}", headers=HEADERS).status_code == 204
        assert client.get(f"/records/{record_id}", headers=HEADERS).status_code == 404

    def test_script_defaults_to_suggested_stage(self, client: TestClient) -> None:
        record_id = _create(client)["id"]

        response = client.get(f"/records/{record_id}/script", headers=HEADERS)

        assert response.status_code == 200
        assert response.json()["stage"] == "performance_share"
        assert "[X] views" in response.json()["script"]


def _loop_running() -> bool:
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        return False
    return True


class LoopCheckingTracker:
    """Delegates to a real tracker, noting whether each call ran on the event loop."""

    def __init__(self, inner: OfferTracker) -> None:
        self._inner = inner
        self.calls: list[tuple[str, bool]] = []

    def __getattr__(self, name: str) -> Any:
        method = getattr(self._inner, name)

        def call(*args: Any, **kwargs: Any) -> Any:
            self.calls.append((name, _loop_running()))
            return method(*args, **kwargs)

        return call


class TestTrackerCallsOffEventLoop:
    def test_record_routes_call_tracker_in_worker_threads(
        self, records_conn: sqlite3.Connection, tracker: OfferTracker, parser: MagicMock
    ) -> None:
        checking = LoopCheckingTracker(tracker)
        services = {
            "records_conn": records_conn,
            "tracker": checking,
            "parser": parser,
            "extractor": PlainTextExtractor(),
        }
        client = TestClient(create_app(services))

        record = _create(client)
        assert client.get("/records", headers=HEADERS).status_code == 200
        assert client.get("/analytics", headers=HEADERS).status_code == 200
        script = client.get(f"/records/{record['id']}/script", headers=HEADERS)
        assert script.status_code == 200
        assert client.delete(f"/records/{record['id']}", headers=HEADERS).status_code == 204

        names = [name for name, _ in checking.calls]
        assert names == [
            "create",
            "list_records",
            "analytics",
            "suggest_follow_up",
            "conversion_script",
            "delete",
        ]
        assert not any(on_loop for _, on_loop in checking.calls)
