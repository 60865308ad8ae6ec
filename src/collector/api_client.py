from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Sequence

import httpx


class APIClientError(Exception):
    pass


class APINotFoundError(APIClientError):
    pass


class RateLimitError(APIClientError):
    pass


class APITimeoutError(APIClientError):
    pass


class APIServerError(APIClientError):
    pass


class APIUnexpectedStatusError(APIClientError):
    def __init__(self, status_code: int, body_text: str | None = None) -> None:
        super().__init__(f"Unexpected status code: {status_code}")
        self.status_code = status_code
        self.body_text = body_text


@dataclass(frozen=True)
class APIResult:
    status_code: int
    data: Any
    headers: dict[str, str]


DEFAULT_FIELDS = ("cca2", "flag", "name", "translations", "region", "subregion", "continents", "idd")


class RestCountriesClient:
    """
    REST Countries client
    - GET-only
    - No auth, no custom headers
    - Async httpx, one request per run (no retry)
    """

    def __init__(
        self,
        *,
        base_url: str = "https://restcountries.com",
        endpoint: str = "/v3.1/all",
        timeout_seconds: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._endpoint = endpoint if endpoint.startswith("/") else f"/{endpoint}"

        client_kwargs: dict[str, Any] = {"base_url": self._base_url, "headers": {}}
        # None keeps httpx's own default timeout.
        if timeout_seconds is not None:
            client_kwargs["timeout"] = float(timeout_seconds)
        if transport is not None:
            client_kwargs["transport"] = transport
        self._client = httpx.AsyncClient(**client_kwargs)

    async def __aenter__(self) -> RestCountriesClient:
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def fetch_all(self, fields: Sequence[str] = DEFAULT_FIELDS) -> APIResult:
        params = {"fields": ",".join(fields)} if fields else None
        return await self.get(self._endpoint, params=params)

    async def get(self, endpoint: str, params: dict[str, Any] | None = None) -> APIResult:
        return await self.request("GET", endpoint, params=params)

    async def request(
        self,
        method: str,
        endpoint: str,
        *,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> APIResult:
        if method.upper() != "GET":
            raise ValueError("GET only: POST/PUT/DELETE are not supported by REST Countries")

        if headers:
            raise ValueError("Custom headers are not sent to REST Countries.")

        if not endpoint.startswith("/"):
            endpoint = f"/{endpoint}"

        try:
            resp = await self._client.request(method="GET", url=endpoint, params=params or {})
        except httpx.TimeoutException as e:
            raise APITimeoutError("Request timeout") from e
        except httpx.RequestError as e:
            raise APIClientError(f"Request error: {e}") from e

        resp_headers = {k: v for k, v in resp.headers.items()}

        if resp.status_code == 200:
            try:
                data = resp.json()
            except ValueError as e:
                raise APIClientError("Failed to parse JSON") from e
            return APIResult(status_code=200, data=data, headers=resp_headers)

        if resp.status_code == 404:
            raise APINotFoundError(f"Not Found (404): {endpoint}")

        if resp.status_code == 429:
            raise RateLimitError("Too Many Requests (429): rate limit exceeded")

        if 500 <= resp.status_code < 600:
            raise APIServerError(f"API server error ({resp.status_code})")

        raise APIUnexpectedStatusError(resp.status_code, body_text=resp.text)
