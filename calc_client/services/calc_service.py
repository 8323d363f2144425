"""HTTP client for the expression calculator service."""

from __future__ import annotations

import logging
from time import perf_counter
from typing import Any, Dict, List, Optional, Type, TypeVar
from urllib.parse import quote

import requests
from pydantic import BaseModel
from pydantic import ValidationError as ShapeError

from calc_client.config import CALCULATE_PATH, EXPRESSION_PATH, EXPRESSIONS_PATH
from calc_client.errors import DecodeError, RequestFailed, TransportError
from calc_client.models import (
    ExpressionDetailResponse,
    ExpressionListResponse,
    ExpressionRecord,
    Identifier,
    SubmitResponse,
)
from calc_client.settings import Settings

logger = logging.getLogger(__name__)

ResponseModel = TypeVar("ResponseModel", bound=BaseModel)


class ServiceClient:
    """Synchronous client for the calculator API.

    The base URL is fixed per instance; nothing else is cached between calls.
    """

    def __init__(
        self,
        base_url: str,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    def _url(self, path: str) -> str:
        return f"{self.base_url}{path}"

    def _request(
        self,
        method: str,
        path: str,
        model: Type[ResponseModel],
        json: Optional[Dict[str, Any]] = None,
    ) -> ResponseModel:
        """Make one HTTP call and decode the body into ``model``."""
        url = self._url(path)
        t0 = perf_counter()
        try:
            response = self.session.request(
                method=method,
                url=url,
                json=json,
                timeout=self.timeout,
            )
        except requests.exceptions.RequestException as e:
            raise TransportError(str(e)) from e
        logger.debug(
            "%s %s -> %s in %.1f ms", method, url, response.status_code, (perf_counter() - t0) * 1e3
        )

        if not 200 <= response.status_code < 300:
            raise RequestFailed(response.status_code)

        try:
            payload = response.json()
        except ValueError as e:
            raise DecodeError(f"Invalid JSON from {path}: {e}") from e
        try:
            return model.model_validate(payload)
        except ShapeError as e:
            raise DecodeError(f"Unexpected response shape from {path}: {e.error_count()} error(s)") from e

    def submit(self, expression: str) -> Identifier:
        """Send an expression for evaluation and return its identifier."""
        data = self._request("POST", CALCULATE_PATH, SubmitResponse, json={"expression": expression})
        return data.id

    def list_all(self) -> List[ExpressionRecord]:
        """All known expressions, in the order the service returns them."""
        data = self._request("GET", EXPRESSIONS_PATH, ExpressionListResponse)
        return data.expressions

    def get_by_id(self, identifier: Identifier) -> ExpressionRecord:
        path = EXPRESSION_PATH.format(id=quote(str(identifier), safe=""))
        data = self._request("GET", path, ExpressionDetailResponse)
        return data.expression

    def close(self) -> None:
        self.session.close()


def create_client(settings: Settings) -> ServiceClient:
    """Create a client bound to the configured service address."""
    return ServiceClient(base_url=settings.api_base_url, timeout=settings.request_timeout)
