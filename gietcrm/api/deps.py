"""
API Dependencies.
Backend client, session gateway and current user resolution.
"""

import logging
from typing import Annotated
from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from gietcrm.core.backend import BackendClient, Connection
from gietcrm.core.exceptions import AuthError, ConfigurationError
from gietcrm.models.user import User
from gietcrm.services.session import SessionGateway


# Logger
logger = logging.getLogger(__name__)

# Bearer token scheme
security = HTTPBearer(auto_error=False)


def get_backend(request: Request) -> BackendClient:
    """Backend client created at application startup."""
    return request.app.state.backend


def require_configured(
    backend: BackendClient = Depends(get_backend),
) -> BackendClient:
    """
    Gate every API route on the backend configuration.

    Raises:
        ConfigurationError: If SUPABASE_URL or SUPABASE_ANON_KEY is missing
    """
    if not backend.is_configured:
        raise ConfigurationError()
    return backend


async def get_session_gateway(
    credentials: HTTPAuthorizationCredentials = Depends(security),
    backend: BackendClient = Depends(require_configured),
) -> SessionGateway:
    """
    Session gateway for this request, restored from the bearer token if any.
    """
    gateway = SessionGateway(backend)
    if credentials:
        await gateway.restore(credentials.credentials)
    return gateway


async def get_current_user(
    gateway: SessionGateway = Depends(get_session_gateway),
) -> User:
    """
    Authenticated user of the request.

    Raises:
        AuthError: If there is no valid session
    """
    user = gateway.current_user()
    if user is None:
        logger.warning("Acceso sin sesión válida")
        raise AuthError("Token de autenticación inválido o expirado")

    logger.debug(f"Usuario autenticado: {user.email}")
    return user


def get_db(
    gateway: SessionGateway = Depends(get_session_gateway),
) -> Connection:
    """Table API handle acting as the request's user."""
    return gateway.backend.connect(gateway.access_token)


# Type aliases for cleaner route signatures
CurrentUser = Annotated[User, Depends(get_current_user)]
DbSession = Annotated[Connection, Depends(get_db)]
Gateway = Annotated[SessionGateway, Depends(get_session_gateway)]
