"""
Session gateway.
Handles sign-in, sign-out and the current user against the identity provider.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Optional

from gietcrm.core.backend import BackendClient
from gietcrm.core.exceptions import AuthError, BackendError, ConfigurationError, CRMError
from gietcrm.core.security import decode_token, is_expired
from gietcrm.models.user import User
from gietcrm.schemas.auth import SignInResult


logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Credenciales inválidas. Verifica tu email y contraseña."


class SessionState(str, Enum):
    """Session state enumeration."""
    UNCONFIGURED = "unconfigured"
    SIGNED_OUT = "signed_out"
    SIGNED_IN = "signed_in"


@dataclass(frozen=True)
class Session:
    """Local session established with the identity provider."""
    access_token: str
    user: User
    refresh_token: Optional[str] = None
    expires_at: Optional[datetime] = None


def _expires_at(payload: dict) -> Optional[datetime]:
    """Expiry of a session payload, from the payload or from the token claims."""
    try:
        if payload.get("expires_at"):
            return datetime.fromtimestamp(int(payload["expires_at"]), tz=timezone.utc)
        if payload.get("expires_in"):
            return datetime.now(timezone.utc) + timedelta(seconds=int(payload["expires_in"]))
    except (TypeError, ValueError, OverflowError, OSError):
        logger.warning("Caducidad de sesión ilegible, se usa la del token")
    token_data = decode_token(payload.get("access_token", ""))
    return token_data.expires_at if token_data else None


class SessionGateway:
    """
    Session state machine over the identity provider.

    Unconfigured is terminal for the lifetime of the backend client;
    otherwise the gateway moves between SignedOut and SignedIn.
    """

    def __init__(self, backend: BackendClient):
        self.backend = backend
        self._session: Optional[Session] = None

    def is_configured(self) -> bool:
        """Whether the backend connection parameters are present."""
        return self.backend.is_configured

    @property
    def session(self) -> Optional[Session]:
        """The live session, None once signed out or expired."""
        if self._session is not None and is_expired(self._session.expires_at):
            logger.info(f"Sesión expirada para {self._session.user.email}")
            self._session = None
        return self._session

    @property
    def state(self) -> SessionState:
        if not self.is_configured():
            return SessionState.UNCONFIGURED
        if self.session is None:
            return SessionState.SIGNED_OUT
        return SessionState.SIGNED_IN

    @property
    def access_token(self) -> Optional[str]:
        session = self.session
        return session.access_token if session else None

    def current_user(self) -> Optional[User]:
        """The signed-in user, or None. Never raises."""
        session = self.session
        return session.user if session else None

    async def sign_in(self, email: str, password: str) -> SignInResult:
        """
        Authenticate with email and password.

        Returns:
            SignInResult; rejected credentials give ``ok=False`` and leave
            the gateway signed out

        Raises:
            ConfigurationError: If the backend is not configured
            BackendError: If the identity provider could not be reached or
                answered without a session
        """
        if not self.is_configured():
            raise ConfigurationError()

        try:
            payload = await self.backend.sign_in_with_password(email, password)
        except AuthError as e:
            logger.warning(f"Inicio de sesión rechazado para {email}: {e}")
            self._session = None
            return SignInResult(ok=False, error=INVALID_CREDENTIALS)

        identity = payload.get("user") or {}
        if not payload.get("access_token") or not identity.get("id"):
            logger.error(f"Respuesta de inicio de sesión incompleta para {email}")
            raise BackendError("Respuesta de inicio de sesión incompleta")

        session = Session(
            access_token=payload["access_token"],
            refresh_token=payload.get("refresh_token"),
            expires_at=_expires_at(payload),
            user=User.from_identity(identity),
        )
        self._session = session
        logger.info(f"Sesión iniciada: {session.user.email}")

        return SignInResult(
            ok=True,
            user=session.user,
            access_token=session.access_token,
            refresh_token=session.refresh_token,
            expires_at=session.expires_at,
        )

    async def restore(self, access_token: str) -> Optional[User]:
        """
        Adopt an access token issued earlier, after checking it with the
        identity provider.

        Returns:
            The token's user, or None if the token is rejected or expired
        """
        if not self.is_configured():
            raise ConfigurationError()

        token_data = decode_token(access_token)
        if token_data is not None and is_expired(token_data.expires_at):
            logger.debug("Token expirado")
            self._session = None
            return None

        try:
            payload = await self.backend.get_user(access_token)
        except AuthError as e:
            logger.warning(f"Token rechazado por el proveedor de identidad: {e}")
            self._session = None
            return None

        if not payload.get("id"):
            logger.warning("El proveedor de identidad no devolvió el usuario del token")
            self._session = None
            return None

        self._session = Session(
            access_token=access_token,
            expires_at=token_data.expires_at if token_data else None,
            user=User.from_identity(payload),
        )
        return self._session.user

    async def sign_out(self) -> None:
        """
        Drop the local session. Calling it while signed out is a no-op.
        A failing remote logout is logged; the local session is dropped anyway.
        """
        session, self._session = self._session, None
        if session is None or not self.is_configured():
            return
        try:
            await self.backend.sign_out(session.access_token)
        except CRMError as e:
            logger.warning(f"Cierre de sesión remoto fallido: {e}")
        else:
            logger.info(f"Sesión cerrada: {session.user.email}")
