"""HTTP client for the fantasy REST backend."""

from typing import Any, Callable, Dict, Optional

import httpx

from ..config.logging import get_logger
from ..config.settings import get_settings
from ..exceptions import (
    ApiError,
    ForbiddenError,
    NetworkError,
    ServerError,
    UnauthorizedError,
)

logger = get_logger(__name__)

GENERIC_ERROR_MESSAGE = "An unexpected error occurred"


def _server_message(response: httpx.Response) -> Optional[str]:
    try:
        body = response.json()
    except ValueError:
        return None
    if isinstance(body, dict) and isinstance(body.get("message"), str):
        return body["message"]
    return None


def handle_api_error(exc: Exception) -> ApiError:
    """
    Rewrap any failure of a backend call into a single ``ApiError``.

    The server's ``message`` is used when the response carries one, else a
    fallback for the status class.
    """
    if isinstance(exc, ApiError):
        return exc

    if isinstance(exc, httpx.HTTPStatusError):
        response = exc.response
        status = response.status_code
        message = _server_message(response)
        details = {"url": str(exc.request.url), "method": exc.request.method}

        if status == 401:
            logger.error("Unauthorized access - please login", **details)
            return UnauthorizedError(message or "Unauthorized", status, details)
        if status == 403:
            logger.error("Forbidden - insufficient permissions", **details)
            return ForbiddenError(message or "Forbidden", status, details)
        if status == 404:
            logger.warning("Resource not found", **details)
            return ApiError(message or "Resource not found", status, details)
        if status >= 500:
            logger.error("Server error - please try again later", status_code=status, **details)
            return ServerError(message or "Server error - please try again later", status, details)

        logger.warning("API error", status_code=status, message=message, **details)
        return ApiError(message or f"Request failed with status {status}", status, details)

    if isinstance(exc, httpx.RequestError):
        logger.error("Network error - please check your connection", error=str(exc))
        return NetworkError("Network error - please check your connection")

    return ApiError(str(exc) or GENERIC_ERROR_MESSAGE)


class ApiClient:
    """Thin async JSON client over ``httpx.AsyncClient``.

    Every call is made once; failures are raised as ``ApiError`` subclasses.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        client: Optional[httpx.AsyncClient] = None,
        token_provider: Optional[Callable[[], Optional[str]]] = None,
    ):
        settings = get_settings()
        self.logger = logger.bind(component="api_client")
        self.base_url = (base_url or settings.api_base_url).rstrip("/")
        self.token_provider = token_provider
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout or settings.api_timeout_seconds,
            headers={"Content-Type": "application/json"},
        )

    async def __aenter__(self) -> "ApiClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    def _headers(self) -> Dict[str, str]:
        # No auth is sent until the backend issues tokens
        token = self.token_provider() if self.token_provider else None
        return {"Authorization": f"Bearer {token}"} if token else {}

    async def request(
        self,
        method: str,
        path: str,
        params: Optional[Dict[str, Any]] = None,
        json: Any = None,
    ) -> Any:
        """
        Send one request and decode its JSON body.

        Returns:
            Decoded JSON, or None for empty responses

        Raises:
            ApiError: On any HTTP or transport failure
        """
        query = {k: v for k, v in (params or {}).items() if v is not None}
        try:
            response = await self._client.request(
                method,
                path,
                params=query or None,
                json=json,
                headers=self._headers(),
            )
            response.raise_for_status()
        except Exception as e:
            raise handle_api_error(e) from e

        self.logger.debug(
            "API response",
            method=method,
            path=path,
            status_code=response.status_code,
        )
        if response.status_code == 204 or not response.content:
            return None
        return response.json()

    async def get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        return await self.request("GET", path, params=params)

    async def get_or_none(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        """GET that maps a 404 to None."""
        try:
            return await self.get(path, params=params)
        except ApiError as e:
            if e.status_code == 404:
                return None
            raise

    async def post(self, path: str, json: Any = None) -> Any:
        return await self.request("POST", path, json=json)

    async def put(self, path: str, json: Any = None) -> Any:
        return await self.request("PUT", path, json=json)

    async def delete(self, path: str, json: Any = None) -> Any:
        return await self.request("DELETE", path, json=json)
