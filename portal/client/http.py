# portal/client/http.py
import logging
from dataclasses import dataclass, field, replace
from typing import Any, Dict, Mapping, Optional

import httpx

from portal.client.refresh import RefreshCoordinator
from portal.client.storage import CredentialStore
from portal.core.errors import ApiError, AuthenticationError, SessionExpiredError

logger = logging.getLogger(__name__)

REFRESH_PATH = "/auth/refresh-token"
# a 401 from these means bad credentials, not a stale token
NO_REFRESH_PATHS = ("/auth/login", "/auth/google", REFRESH_PATH)


@dataclass(frozen=True)
class RequestContext:
    """One outgoing request. Retrying builds a new context instead of
    mutating this one."""

    method: str
    path: str
    params: Optional[Dict[str, Any]] = None
    json: Any = None
    files: Any = None
    headers: Mapping[str, str] = field(default_factory=dict)
    retried: bool = False

    def with_token(self, token: str) -> "RequestContext":
        headers = dict(self.headers)
        headers["Authorization"] = f"Bearer {token}"
        return replace(self, headers=headers, retried=True)


def clean_params(params: Optional[Mapping[str, Any]]) -> Optional[Dict[str, Any]]:
    """Drop empty filters so they never reach the query string."""
    if not params:
        return None
    cleaned = {k: v for k, v in params.items() if v is not None and v != ""}
    return cleaned or None


def extract_message(response: httpx.Response) -> Optional[str]:
    try:
        data = response.json()
    except ValueError:
        return None
    if isinstance(data, dict):
        for key in ("message", "detail", "error"):
            value = data.get(key)
            if isinstance(value, str) and value:
                return value
    return None


class ApiClient:
    """Bearer-authenticated client for the terminal REST API.

    A 401 on any request other than login/OAuth exchange triggers one token
    refresh shared by every request that hits a 401 meanwhile; each such
    request is retried once with the new token.
    """

    def __init__(
        self,
        base_url: str,
        credentials: CredentialStore,
        *,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.credentials = credentials
        self._http = httpx.AsyncClient(base_url=base_url, timeout=timeout, transport=transport)
        if credentials.access_token:
            self._http.headers["Authorization"] = f"Bearer {credentials.access_token}"
        self.coordinator = RefreshCoordinator(self._refresh_access_token)

    async def __aenter__(self) -> "ApiClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    @property
    def is_closed(self) -> bool:
        return self._http.is_closed

    # === credentials ===
    def set_access_token(self, access_token: str, refresh_token: Optional[str] = None) -> None:
        self.credentials.set_access_token(access_token, refresh_token)
        self._http.headers["Authorization"] = f"Bearer {access_token}"

    def clear_credentials(self, full: bool = True) -> None:
        """``full`` is a logout; otherwise only the access token and user go."""
        if full:
            self.credentials.clear()
        else:
            self.credentials.clear_session()
        self._http.headers.pop("Authorization", None)

    # === requests ===
    async def request(
        self,
        method: str,
        path: str,
        *,
        params: Optional[Mapping[str, Any]] = None,
        json: Any = None,
        files: Any = None,
        headers: Optional[Mapping[str, str]] = None,
    ) -> httpx.Response:
        ctx = RequestContext(
            method=method.upper(),
            path=path,
            params=clean_params(params),
            json=json,
            files=files,
            headers=dict(headers or {}),
        )
        return await self.send(ctx)

    async def get(self, path: str, **kw) -> httpx.Response:
        return await self.request("GET", path, **kw)

    async def post(self, path: str, **kw) -> httpx.Response:
        return await self.request("POST", path, **kw)

    async def put(self, path: str, **kw) -> httpx.Response:
        return await self.request("PUT", path, **kw)

    async def patch(self, path: str, **kw) -> httpx.Response:
        return await self.request("PATCH", path, **kw)

    async def delete(self, path: str, **kw) -> httpx.Response:
        return await self.request("DELETE", path, **kw)

    async def send(self, ctx: RequestContext) -> httpx.Response:
        response = await self._dispatch(ctx)
        if response.status_code == 401 and self._can_refresh(ctx):
            token = await self.coordinator.acquire()
            response = await self._dispatch(ctx.with_token(token))
        if response.is_error:
            raise self._error_for(response, ctx)
        return response

    def _can_refresh(self, ctx: RequestContext) -> bool:
        if ctx.retried:
            return False
        return not any(p in ctx.path for p in NO_REFRESH_PATHS)

    async def _dispatch(self, ctx: RequestContext) -> httpx.Response:
        headers = dict(ctx.headers)
        if "Authorization" not in headers and self.credentials.access_token:
            headers["Authorization"] = f"Bearer {self.credentials.access_token}"
        try:
            return await self._http.request(
                ctx.method,
                ctx.path,
                params=ctx.params,
                json=ctx.json,
                files=ctx.files,
                headers=headers,
            )
        except httpx.RequestError as e:
            logger.warning("%s %s failed: %s", ctx.method, ctx.path, e)
            raise ApiError(str(e) or "Network Error", path=ctx.path) from e

    def _error_for(self, response: httpx.Response, ctx: RequestContext) -> ApiError:
        server_message = extract_message(response)
        message = server_message or f"Request failed with status code {response.status_code}"
        cls = AuthenticationError if response.status_code == 401 else ApiError
        return cls(message, status_code=response.status_code, server_message=server_message, path=ctx.path)

    async def _refresh_access_token(self) -> str:
        refresh_token = self.credentials.refresh_token
        ctx = RequestContext("POST", REFRESH_PATH, json={"refreshToken": refresh_token} if refresh_token else None)
        logger.info("Access token rejected, refreshing")
        try:
            response = await self._dispatch(ctx)
            if response.is_error:
                raise self._error_for(response, ctx)
            data = response.json()
            access_token = data.get("accessToken") if isinstance(data, dict) else None
            if not access_token:
                raise ApiError("Refresh response did not include an access token",
                               status_code=response.status_code, path=REFRESH_PATH)
        except (ApiError, ValueError) as e:
            self.clear_credentials(full=False)
            logger.warning("Token refresh failed, session cleared: %s", e)
            if isinstance(e, ApiError):
                raise SessionExpiredError(e.message, status_code=e.status_code,
                                          server_message=e.server_message, path=REFRESH_PATH) from e
            raise SessionExpiredError("Invalid refresh response", path=REFRESH_PATH) from e

        self.set_access_token(access_token, data.get("refreshToken"))
        logger.info("Access token refreshed")
        return access_token
