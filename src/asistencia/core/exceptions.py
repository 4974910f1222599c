class DomainError(Exception):
    """Base exception for business rule violations."""

    code = "domain_error"
    default_message = "No se pudo completar la operación"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.default_message)


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""

    code = "validation_error"
    default_message = "Datos inválidos"


class EmptyName(ValidationError):
    """Raised when the submitted name is blank after trimming."""

    code = "empty_name"
    default_message = "Por favor ingresa tu nombre"


class IdentityUnavailable(ValidationError):
    """Raised when the browser has not produced a device hint yet."""

    code = "identity_unavailable"
    default_message = "No se pudo identificar el dispositivo, recarga la página e inténtalo de nuevo"


class DuplicateSubmission(DomainError):
    """Raised when the one-submission-per-device-per-day policy is violated."""

    code = "duplicate_submission"
    default_message = "Este dispositivo ya realizó este registro hoy"


class AlreadyCheckedOut(DuplicateSubmission):
    """Raised when the target record already has a check-out time."""

    code = "already_checked_out"
    default_message = "La salida de este registro ya fue registrada"


class NotFound(DomainError):
    """Raised when a referenced record does not exist (e.g. stale page)."""

    code = "not_found"
    default_message = "El registro no existe o no corresponde al día de hoy"


class StoreUnavailable(DomainError):
    """Raised on transient database/network faults. Safe to retry manually."""

    code = "store_unavailable"
    default_message = "El servicio de registro no está disponible, inténtalo de nuevo en unos momentos"
