"""JSON-over-HTTP client base for the backend services.

Each service client owns a ``requests.Session`` bound to one base URL.
Bearer credentials are attached when present; this layer never inspects
them. Every call carries a timeout. Transport problems and non-2xx
responses both surface as ``ServiceError``.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any, TypeVar

import requests
import structlog
from pydantic import BaseModel, ValidationError

if TYPE_CHECKING:
    from requests import Response

logger = structlog.get_logger(__name__)

TokenProvider = Callable[[], str | None]
ModelT = TypeVar("ModelT", bound=BaseModel)


class ServiceError(Exception):
    """A remote call did not produce a usable response.

    ``status_code`` is ``None`` when the request never got a response
    (connection refused, timeout, DNS failure).
    """

    def __init__(self, service: str, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.service = service
        self.message = message
        self.status_code = status_code

    @property
    def is_transport_error(self) -> bool:
        return self.status_code is None

    def __repr__(self) -> str:
        return f"ServiceError(service={self.service!r}, status_code={self.status_code!r}, message={self.message!r})"


def extract_error_detail(response: Response) -> str:
    """Extract a human-readable error message from an API error response.

    Handles the error shapes the backend services produce:

    - Spring error bodies: {"message": "...", "error": "Bad Request", "status": 400}
    - Validation errors: {"detail": [{"loc": [...], "msg": "..."}]}
    - Plain errors: {"error": "msg"} or {"error": {"field": "msg"}}
    """
    try:
        body = response.json()
    except ValueError:
        text = getattr(response, "text", "") or ""
        return text[:300] or f"HTTP {response.status_code}"

    if not isinstance(body, dict):
        return str(body)[:300]

    if body.get("message"):
        return str(body["message"])

    if "detail" in body and isinstance(body["detail"], list):
        parts = []
        for err in body["detail"]:
            loc = ".".join(str(p) for p in err.get("loc", []))
            msg = err.get("msg", str(err))
            parts.append(f"{loc}: {msg}" if loc else msg)
        return " | ".join(parts)

    if "error" in body:
        error = body["error"]
        if isinstance(error, dict):
            return " | ".join(f"{k}: {v}" for k, v in error.items())
        return str(error)

    return str(body)[:300]


class ServiceClient:
    """Base class for a single backend service."""

    service_name = "service"

    def __init__(
        self,
        base_url: str,
        token_provider: TokenProvider | None = None,
        timeout: float = 10.0,
        session: requests.Session | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.token_provider = token_provider
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.setdefault("Content-Type", "application/json")
        self.session.headers.setdefault("Accept", "application/json")

    def _headers(self, extra: dict[str, str] | None = None) -> dict[str, str]:
        headers: dict[str, str] = {}
        token = self.token_provider() if self.token_provider else None
        if token:
            headers["Authorization"] = f"Bearer {token}"
        if extra:
            headers.update(extra)
        return headers

    def request(
        self,
        method: str,
        path: str,
        json: Any = None,
        headers: dict[str, str] | None = None,
    ) -> Any:
        """Send one request and return the decoded JSON body (or None when empty)."""
        url = f"{self.base_url}{path}"
        try:
            response = self.session.request(
                method,
                url,
                json=json,
                headers=self._headers(headers),
                timeout=self.timeout,
            )
        except requests.Timeout as exc:
            logger.warning("Service call timed out", service=self.service_name, method=method, url=url)
            raise ServiceError(self.service_name, f"{self.service_name} did not respond in time") from exc
        except requests.RequestException as exc:
            logger.warning(
                "Service unreachable",
                service=self.service_name,
                method=method,
                url=url,
                error=str(exc),
            )
            raise ServiceError(self.service_name, f"{self.service_name} is unreachable") from exc

        if response.status_code in (401, 403):
            logger.error(
                "Authentication error",
                service=self.service_name,
                status_code=response.status_code,
                url=url,
            )

        if response.status_code >= 400:
            detail = extract_error_detail(response)
            logger.warning(
                "Service returned an error",
                service=self.service_name,
                method=method,
                url=url,
                status_code=response.status_code,
                detail=detail,
            )
            raise ServiceError(self.service_name, detail, status_code=response.status_code)

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as exc:
            raise ServiceError(
                self.service_name,
                f"{self.service_name} returned a non-JSON body",
                status_code=response.status_code,
            ) from exc

    def parse(self, model: type[ModelT], body: Any) -> ModelT:
        """Validate a response body, treating a malformed one as a failed call."""
        try:
            return model.model_validate(body)
        except ValidationError as exc:
            logger.warning("Unexpected response body", service=self.service_name, model=model.__name__)
            raise ServiceError(self.service_name, f"{self.service_name} returned an unexpected response") from exc
