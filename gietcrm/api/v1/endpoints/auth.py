"""
Authentication endpoints.
Login, logout, current user.
"""

from fastapi import APIRouter

from gietcrm.api.deps import CurrentUser, Gateway
from gietcrm.core.exceptions import AuthError
from gietcrm.models.user import User
from gietcrm.schemas.auth import LoginRequest, TokenResponse
from gietcrm.schemas.base import MessageResponse


router = APIRouter()


@router.post(
    "/login",
    response_model=TokenResponse,
    summary="Iniciar sesión",
    description="Iniciar sesión con email y contraseña",
)
async def login(
    data: LoginRequest,
    gateway: Gateway,
) -> TokenResponse:
    """Iniciar sesión y obtener el token de acceso."""
    result = await gateway.sign_in(data.email, data.password)
    if not result.ok:
        raise AuthError(result.error)
    return TokenResponse(
        access_token=result.access_token,
        refresh_token=result.refresh_token,
        expires_at=result.expires_at,
        user=result.user,
    )


@router.post(
    "/logout",
    response_model=MessageResponse,
    summary="Cerrar sesión",
)
async def logout(gateway: Gateway) -> MessageResponse:
    """Cerrar la sesión actual. Sin sesión no hace nada."""
    await gateway.sign_out()
    return MessageResponse(message="Sesión cerrada")


@router.get(
    "/me",
    response_model=User,
    summary="Usuario actual",
    description="Obtener el usuario de la sesión",
)
async def get_current_user(current_user: CurrentUser) -> User:
    """Usuario autenticado."""
    return current_user
