"""
Error taxonomy shared by the data-access layer, the session gateway
and the HTTP layer.
"""


class CRMError(Exception):
    """Base class for every error raised by GietCRM."""

    default_message = "Error inesperado"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ConfigurationError(CRMError):
    """Backend connection parameters are missing."""

    default_message = (
        "Configuración requerida: define SUPABASE_URL y SUPABASE_ANON_KEY"
    )


class AuthError(CRMError):
    """Sign-in rejected, or no session for an operation that needs one."""

    default_message = "Sesión no iniciada o credenciales inválidas"


class AuthorizationError(CRMError):
    """The backend's row ownership policy rejected the operation."""

    default_message = "No tienes permiso sobre este registro"


class ValidationError(CRMError):
    """A required field is missing on create."""

    default_message = "Faltan campos obligatorios"

    def __init__(self, message: str | None = None, fields: list[str] | None = None):
        self.fields = fields or []
        if message is None and self.fields:
            message = f"Campos obligatorios: {', '.join(self.fields)}"
        super().__init__(message)


class NotFoundError(CRMError):
    """The referenced id does not exist."""

    default_message = "Registro no encontrado"


class BackendError(CRMError):
    """The remote call failed for any other reason (network or backend)."""

    default_message = "Error de comunicación con el servidor"

    def __init__(self, message: str | None = None, status_code: int | None = None):
        self.status_code = status_code
        super().__init__(message)
