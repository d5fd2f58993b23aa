"""
HTTP 实现：POST JSON 到下游 DME API
"""
import logging

import httpx
from django.conf import settings

from dme_extractor.exceptions import RecordSinkError

from .base import BaseRecordSink

logger = logging.getLogger(__name__)


class HttpRecordSink(BaseRecordSink):
    """下游 DME API（默认 https://alert-api.com/DrExtract）"""

    sink_id = "http"

    def __init__(
        self,
        *,
        endpoint: str | None = None,
        timeout: float | None = None,
        transport: httpx.BaseTransport | None = None,
    ):
        self._endpoint = endpoint or getattr(settings, "DME_API_ENDPOINT", "https://alert-api.com/DrExtract")
        self._timeout = timeout if timeout is not None else getattr(settings, "SINK_TIMEOUT_SECONDS", 10.0)
        self._transport = transport

    @property
    def endpoint(self) -> str:
        return self._endpoint

    def send(self, payload: dict) -> None:
        if not payload:
            raise ValueError("Equipment payload cannot be empty")

        logger.info("Sending equipment data to API: %s", self._endpoint)
        logger.debug("Payload: %s", payload)

        try:
            with httpx.Client(timeout=self._timeout, transport=self._transport) as client:
                response = client.post(self._endpoint, json=payload)
        except httpx.HTTPError as exc:
            logger.error("HTTP error sending data to API %s: %s", self._endpoint, exc)
            raise RecordSinkError(
                message=f"HTTP error sending data to API: {exc}",
                detail={"endpoint": self._endpoint, "error": type(exc).__name__},
            ) from exc

        if not response.is_success:
            logger.error("API call failed with status: %s", response.status_code)
            raise RecordSinkError(
                message=f"API request failed: {response.status_code}",
                detail={"endpoint": self._endpoint, "status_code": response.status_code},
            )

        logger.info("Equipment data sent successfully to API")
