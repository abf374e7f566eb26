"""HTTP client for the external price prediction service."""

from __future__ import annotations

import json
from typing import Any, Optional, TypeVar

import requests
from pydantic import BaseModel, ValidationError

from pricing_helper.domain.schemas import (
    BookingWeek,
    BookingWeekByIndexRequest,
    BookingWeekFromFeaturesRequest,
    HealthStatus,
    Recommendation,
    RecommendByIndexRequest,
    RecommendFromFeaturesRequest,
)
from pricing_helper.utils.config import Settings, get_settings
from pricing_helper.utils.logger import get_logger


logger = get_logger(__name__)

ResponseModel = TypeVar("ResponseModel", bound=BaseModel)


class PredictionServiceError(Exception):
    """Base exception for prediction service exchanges."""


class ServiceUnreachableError(PredictionServiceError):
    """Raised when the service cannot be reached at all."""


class ServiceResponseError(PredictionServiceError):
    """Raised when the service answers with a non-success status."""

    def __init__(self, status_code: int, message: str) -> None:
        super().__init__(message)
        self.status_code = status_code


class MalformedResponseError(PredictionServiceError):
    """Raised when a success response is empty, not JSON, or the wrong shape."""


def extract_error_message(data: Any, status_code: int) -> str:
    if isinstance(data, dict):
        detail = data.get("detail")
        if isinstance(detail, str) and detail:
            return detail
        if isinstance(detail, list) and detail:
            messages = [
                str(item.get("msg")) if isinstance(item, dict) and item.get("msg") else str(item)
                for item in detail
            ]
            return "; ".join(messages)
        if detail:
            return str(detail)
        message = data.get("message")
        if message:
            return str(message)
    return f"Request failed ({status_code})"


class PredictionServiceClient:
    """JSON-over-HTTP exchange with the prediction service.

    ``http_session`` only needs a ``request(method, url, json=, headers=,
    timeout=)`` method returning an object with ``status_code`` and ``text``,
    so tests can pass a FastAPI ``TestClient`` in place of ``requests``.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        settings: Optional[Settings] = None,
        http_session: Optional[Any] = None,
    ) -> None:
        self._settings = settings or get_settings()
        self._base_url = (base_url or self._settings.api_base_url).rstrip("/")
        self._http = http_session or requests.Session()

    @property
    def base_url(self) -> str:
        return self._base_url

    @base_url.setter
    def base_url(self, value: str) -> None:
        self._base_url = value.strip().rstrip("/")

    def exchange(
        self,
        method: str,
        path: str,
        payload: Optional[dict[str, Any]] = None,
        timeout: Optional[float] = None,
    ) -> Any:
        """Send one request and return the parsed JSON body, or ``None`` if empty."""
        url = f"{self._base_url}{path}"
        try:
            response = self._http.request(
                method,
                url,
                json=payload,
                headers={"Content-Type": "application/json"},
                timeout=timeout or self._settings.request_timeout_seconds,
            )
        except requests.exceptions.RequestException as exc:
            logger.warning("Prediction service unreachable | method=%s url=%s", method, url)
            raise ServiceUnreachableError(f"Backend connection failed: {exc}") from exc

        status_code = int(response.status_code)
        ok = 200 <= status_code < 300
        text = response.text
        data: Any = None
        if text:
            try:
                data = json.loads(text)
            except ValueError as exc:
                if ok:
                    raise MalformedResponseError(
                        f"Response from {path} is not valid JSON"
                    ) from exc
                data = None

        if not ok:
            message = extract_error_message(data, status_code)
            logger.warning(
                "Prediction service error | path=%s status=%s detail=%s",
                path,
                status_code,
                message,
            )
            raise ServiceResponseError(status_code, message)

        logger.debug("Prediction service response | path=%s status=%s", path, status_code)
        return data

    def _parse(self, path: str, data: Any, model_cls: type[ResponseModel]) -> ResponseModel:
        if data is None:
            raise MalformedResponseError(f"Empty response from {path}")
        try:
            return model_cls.model_validate(data)
        except ValidationError as exc:
            raise MalformedResponseError(
                f"Unexpected response shape from {path}: {exc.error_count()} invalid field(s)"
            ) from exc

    def _post(self, path: str, body: BaseModel, model_cls: type[ResponseModel]) -> ResponseModel:
        data = self.exchange("POST", path, body.model_dump(mode="json"))
        return self._parse(path, data, model_cls)

    def health(self) -> HealthStatus:
        data = self.exchange("GET", "/health", timeout=self._settings.health_timeout_seconds)
        return self._parse("/health", data, HealthStatus)

    def recommend_by_index(self, body: RecommendByIndexRequest) -> Recommendation:
        return self._post("/recommend_by_index", body, Recommendation)

    def recommend_from_features(self, body: RecommendFromFeaturesRequest) -> Recommendation:
        return self._post("/recommend_from_features", body, Recommendation)

    def booking_week_by_index(self, body: BookingWeekByIndexRequest) -> BookingWeek:
        return self._post("/booking_week_by_index", body, BookingWeek)

    def booking_week_from_features(self, body: BookingWeekFromFeaturesRequest) -> BookingWeek:
        return self._post("/booking_week_from_features", body, BookingWeek)
