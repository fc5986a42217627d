"""
Hosted backend client.

One explicitly constructed instance per process, created at startup and
injected into the data-access services and the session gateway. It wraps
the remote table API (PostgREST, ``/rest/v1``) and the identity provider
(GoTrue, ``/auth/v1``) over a shared ``httpx.AsyncClient``.
"""

import logging
from dataclasses import dataclass
from typing import Any, Iterable, Mapping, Optional

import httpx

from gietcrm.core.config import Settings
from gietcrm.core.exceptions import (
    AuthError,
    AuthorizationError,
    BackendError,
    ConfigurationError,
    NotFoundError,
)


logger = logging.getLogger(__name__)

REST_PATH = "/rest/v1"
AUTH_PATH = "/auth/v1"


def _error_message(response: httpx.Response) -> str:
    """Best-effort extraction of the backend's error text."""
    try:
        body = response.json()
    except ValueError:
        return response.text or response.reason_phrase
    if isinstance(body, dict):
        for key in ("message", "msg", "error_description", "error"):
            if body.get(key):
                return str(body[key])
    return response.text or response.reason_phrase


class BackendClient:
    """HTTP client for the table API and the identity provider."""

    def __init__(
        self,
        url: str,
        anon_key: str,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.url = (url or "").strip().rstrip("/")
        self.anon_key = (anon_key or "").strip()
        self._http: Optional[httpx.AsyncClient] = None

        if self.is_configured:
            self._http = httpx.AsyncClient(
                base_url=self.url,
                timeout=timeout,
                transport=transport,
            )

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> "BackendClient":
        return cls(
            settings.SUPABASE_URL,
            settings.SUPABASE_ANON_KEY,
            timeout=settings.BACKEND_TIMEOUT,
            transport=transport,
        )

    @property
    def is_configured(self) -> bool:
        """Pure check of the connection parameters, no network access."""
        return bool(self.url and self.anon_key)

    async def aclose(self) -> None:
        if self._http is not None:
            await self._http.aclose()

    def connect(self, access_token: Optional[str]) -> "Connection":
        """Table API handle acting with the given user's access token."""
        return Connection(backend=self, access_token=access_token)

    def _headers(self, access_token: Optional[str], prefer: Optional[str]) -> dict[str, str]:
        headers = {
            "apikey": self.anon_key,
            "Authorization": f"Bearer {access_token or self.anon_key}",
        }
        if prefer:
            headers["Prefer"] = prefer
        return headers

    async def request(
        self,
        method: str,
        path: str,
        *,
        access_token: Optional[str] = None,
        params: Optional[Mapping[str, str]] = None,
        json: Any = None,
        prefer: Optional[str] = None,
    ) -> httpx.Response:
        """
        Send one request and translate failures into the error taxonomy.

        Raises:
            ConfigurationError: If the connection parameters are missing
            AuthError: On 401 (missing or expired session)
            AuthorizationError: On 403 (row ownership policy)
            NotFoundError: On 404
            BackendError: On any other failure, including transport errors
        """
        if self._http is None:
            raise ConfigurationError()

        logger.debug(f"{method} {path} {dict(params or {})}")
        try:
            response = await self._http.request(
                method,
                path,
                params=params,
                json=json,
                headers=self._headers(access_token, prefer),
            )
        except httpx.HTTPError as e:
            raise BackendError(f"Servidor no disponible: {e}") from e

        if response.is_success:
            return response

        message = _error_message(response)
        if response.status_code == 401:
            raise AuthError(message)
        if response.status_code == 403:
            raise AuthorizationError(message)
        if response.status_code == 404:
            raise NotFoundError(message)
        raise BackendError(message, status_code=response.status_code)

    # Identity provider

    async def sign_in_with_password(self, email: str, password: str) -> dict:
        """
        Password grant against the identity provider.

        Returns:
            The session payload (access_token, expires_at, user, ...)

        Raises:
            AuthError: If the credentials are rejected
        """
        try:
            response = await self.request(
                "POST",
                f"{AUTH_PATH}/token",
                params={"grant_type": "password"},
                json={"email": email, "password": password},
            )
        except BackendError as e:
            if e.status_code in (400, 422):
                raise AuthError(e.message) from e
            raise
        return response.json()

    async def get_user(self, access_token: str) -> dict:
        """User behind an access token. Raises AuthError if it is not valid."""
        try:
            response = await self.request(
                "GET", f"{AUTH_PATH}/user", access_token=access_token
            )
        except (AuthorizationError, NotFoundError) as e:
            raise AuthError(e.message) from e
        return response.json()

    async def sign_out(self, access_token: str) -> None:
        await self.request("POST", f"{AUTH_PATH}/logout", access_token=access_token)


def _filter_params(filters: Optional[Mapping[str, Any]]) -> dict[str, str]:
    params = {}
    for column, value in (filters or {}).items():
        if isinstance(value, bool):
            value = str(value).lower()
        params[column] = f"eq.{value}"
    return params


@dataclass(frozen=True)
class Connection:
    """Table API operations bound to one user's access token."""

    backend: BackendClient
    access_token: Optional[str]

    async def select(
        self,
        table: str,
        *,
        filters: Optional[Mapping[str, Any]] = None,
        order: Iterable[tuple[str, bool]] = (),
    ) -> list[dict]:
        params = {"select": "*", **_filter_params(filters)}
        ordering = ",".join(
            f"{column}.{'asc' if ascending else 'desc'}" for column, ascending in order
        )
        if ordering:
            params["order"] = ordering

        response = await self.backend.request(
            "GET",
            f"{REST_PATH}/{table}",
            access_token=self.access_token,
            params=params,
        )
        return response.json() or []

    async def insert(self, table: str, row: Mapping[str, Any]) -> dict:
        response = await self.backend.request(
            "POST",
            f"{REST_PATH}/{table}",
            access_token=self.access_token,
            json=[dict(row)],
            prefer="return=representation",
        )
        rows = response.json() or []
        if not rows:
            raise BackendError("El servidor no devolvió el registro creado")
        return rows[0]

    async def update(
        self,
        table: str,
        values: Mapping[str, Any],
        *,
        filters: Mapping[str, Any],
    ) -> list[dict]:
        response = await self.backend.request(
            "PATCH",
            f"{REST_PATH}/{table}",
            access_token=self.access_token,
            params=_filter_params(filters),
            json=dict(values),
            prefer="return=representation",
        )
        return response.json() or []

    async def delete(self, table: str, *, filters: Mapping[str, Any]) -> list[dict]:
        response = await self.backend.request(
            "DELETE",
            f"{REST_PATH}/{table}",
            access_token=self.access_token,
            params=_filter_params(filters),
            prefer="return=representation",
        )
        return response.json() or []
