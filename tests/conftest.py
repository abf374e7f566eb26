"""Shared fixtures: an in-process fake of the external prediction service."""

from __future__ import annotations

from dataclasses import replace
from datetime import date, timedelta
from typing import Any, Optional

import pytest
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, PlainTextResponse, Response
from fastapi.testclient import TestClient

from pricing_helper.services.prediction_client import PredictionServiceClient
from pricing_helper.services.workflow_service import PricingWorkflowService
from pricing_helper.utils.config import get_settings


TEST_BASE_URL = "http://testserver"


class FakePredictionService:
    """Records every request and answers with canned or failing responses."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, Optional[dict[str, Any]]]] = []
        self.final_price = 132.7
        self.failures: dict[str, tuple[int, Any]] = {}
        self.app = FastAPI()
        self._register_routes()

    @property
    def paths(self) -> list[str]:
        return [path for path, _ in self.calls]

    def last_payload(self, path: str) -> Optional[dict[str, Any]]:
        for called_path, payload in reversed(self.calls):
            if called_path == path:
                return payload
        raise AssertionError(f"{path} was never called")

    def fail(self, path: str, status_code: int, body: Any = None) -> None:
        self.failures[path] = (status_code, body)

    def recover(self, path: str) -> None:
        self.failures.pop(path, None)

    def _respond(self, path: str, payload: Optional[dict[str, Any]], body: Any) -> Response:
        self.calls.append((path, payload))
        if path in self.failures:
            status_code, failure_body = self.failures[path]
            if failure_body is None:
                return Response(status_code=status_code)
            if isinstance(failure_body, str):
                return PlainTextResponse(failure_body, status_code=status_code)
            return JSONResponse(failure_body, status_code=status_code)
        return JSONResponse(body)

    def _recommendation(self, row_index: Optional[int]) -> dict[str, Any]:
        return {
            "row_index": row_index,
            "listing_id": 9001 if row_index is not None else None,
            "city": "Seattle",
            "neighbourhood": "Capitol Hill",
            "peer_median_price": 120.0,
            "regression_price": 140.0,
            "final_price": self.final_price,
            "price_bucket_static": "mid",
        }

    def _booking_week(self, payload: dict[str, Any]) -> dict[str, Any]:
        start = date.fromisoformat(payload["start_date"])
        base_price = float(payload["base_price"])
        return {
            "row_index": payload.get("row_index"),
            "base_price": base_price,
            "results": [
                {
                    "date": (start + timedelta(days=offset)).isoformat(),
                    "effective_price": base_price + offset,
                    # Deliberately not complementary.
                    "prob_booked_pct": 70.0,
                    "prob_vacant_pct": 20.0,
                }
                for offset in range(7)
            ],
        }

    def _register_routes(self) -> None:
        app = self.app

        @app.get("/health")
        async def health() -> Response:
            return self._respond(
                "/health",
                None,
                {"status": "ok", "n_rows": 3818, "booking_model_loaded": True},
            )

        @app.post("/recommend_by_index")
        async def recommend_by_index(request: Request) -> Response:
            payload = await request.json()
            return self._respond(
                "/recommend_by_index",
                payload,
                self._recommendation(payload.get("row_index")),
            )

        @app.post("/recommend_from_features")
        async def recommend_from_features(request: Request) -> Response:
            payload = await request.json()
            return self._respond("/recommend_from_features", payload, self._recommendation(None))

        @app.post("/booking_week_by_index")
        async def booking_week_by_index(request: Request) -> Response:
            payload = await request.json()
            return self._respond("/booking_week_by_index", payload, self._booking_week(payload))

        @app.post("/booking_week_from_features")
        async def booking_week_from_features(request: Request) -> Response:
            payload = await request.json()
            return self._respond(
                "/booking_week_from_features",
                payload,
                self._booking_week(payload),
            )


@pytest.fixture
def test_settings():
    get_settings.cache_clear()
    return replace(get_settings(), api_base_url=TEST_BASE_URL, request_timeout_seconds=2.0)


@pytest.fixture
def fake_service() -> FakePredictionService:
    return FakePredictionService()


@pytest.fixture
def client(fake_service, test_settings) -> PredictionServiceClient:
    return PredictionServiceClient(
        base_url=TEST_BASE_URL,
        settings=test_settings,
        http_session=TestClient(fake_service.app),
    )


@pytest.fixture
def workflow(client, test_settings) -> PricingWorkflowService:
    return PricingWorkflowService(settings=test_settings, client=client)
