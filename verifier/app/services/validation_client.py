"""
HTTP client for a DSS-style signature validation service.

Sends a ValidationRequest as a JSON POST and returns the parsed report.

HARD GUARANTEES:
- Single attempt. No retries, no polling.
- No client-imposed body size ceiling.
- No timeout unless one is explicitly configured. httpx applies a 5 s
  default otherwise, which would abort validation of large documents.
- The endpoint is injected at construction; there is no module-level URL.

httpx exceptions are translated into the verifier error taxonomy here
and nowhere else.
"""

from __future__ import annotations

import logging
from typing import Annotated, Any, Optional

import httpx

from verifier.app.core.config import Settings
from verifier.app.core.errors import (
    ServiceConnectionError,
    ServiceError,
    TransportError,
)
from verifier.app.schemas.validation_request import ValidationRequest

logger = logging.getLogger("verifier.validation_client")


class DssValidationClient:
    """Async client for the remote ``validateSignature`` endpoint."""

    _HEADERS = {
        "Content-Type": "application/json",
        "Accept": "application/json",
    }

    def __init__(
        self,
        endpoint: str,
        http_client: Annotated[
            httpx.AsyncClient,
            "Invocation-scoped HTTP client",
        ],
        timeout: Optional[float] = None,
    ):
        self.endpoint = str(endpoint)
        self.client = http_client
        self.timeout = timeout

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        http_client: httpx.AsyncClient,
    ) -> "DssValidationClient":
        return cls(
            endpoint=str(settings.dss_validation_url),
            http_client=http_client,
            timeout=settings.request_timeout_seconds,
        )

    async def validate(self, request: ValidationRequest) -> Any:
        """
        Submit ``request`` and return the decoded JSON report.

        Raises:
            ServiceConnectionError: the service could not be reached.
            ServiceError: the service answered with a non-2xx status.
            TransportError: any other transport or decoding failure.
        """
        logger.info(
            "submitting %s to %s",
            request.signed_document.name,
            self.endpoint,
        )

        try:
            response = await self.client.post(
                self.endpoint,
                json=request.to_payload(),
                headers=self._HEADERS,
                # None disables every httpx timeout for this request.
                timeout=self.timeout,
            )
        except (httpx.ConnectError, httpx.ConnectTimeout) as exc:
            logger.error(
                "validation_service_unreachable",
                extra={"endpoint": self.endpoint, "error": str(exc)},
            )
            raise ServiceConnectionError(
                self.endpoint, str(exc) or type(exc).__name__
            ) from exc
        except httpx.RequestError as exc:
            logger.error(
                "validation_request_failed",
                extra={
                    "endpoint": self.endpoint,
                    "error_type": type(exc).__name__,
                },
            )
            raise TransportError(
                self.endpoint, str(exc) or type(exc).__name__
            ) from exc

        if not response.is_success:
            logger.error(
                "validation_service_error",
                extra={
                    "endpoint": self.endpoint,
                    "status_code": response.status_code,
                    "response_body": response.text,
                },
            )
            raise ServiceError(
                endpoint=self.endpoint,
                status_code=response.status_code,
                reason_phrase=response.reason_phrase,
                body=response.text,
            )

        try:
            report = response.json()
        except ValueError as exc:
            raise TransportError(
                self.endpoint,
                f"response body is not valid JSON ({exc})",
            ) from exc

        logger.info(
            "report received from %s (%d bytes)",
            self.endpoint,
            len(response.content),
        )
        return report
