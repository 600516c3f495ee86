"""Error taxonomy shared by repositories, services and routers."""

from __future__ import annotations


class AppError(Exception):
    """Base error carrying a machine code and the HTTP status used at the boundary."""

    code = "error"
    status_code = 500

    def __init__(self, message: str, code: str | None = None, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code
        if status_code is not None:
            self.status_code = status_code


class StorageUnavailable(AppError):
    """Backing store could not be read, parsed or written."""

    code = "storage_unavailable"
    status_code = 503


class NotFound(AppError):
    """Operation targeted an identifier that does not exist."""

    code = "not_found"
    status_code = 404


class ExternalServiceFailure(AppError):
    """PDF rendering or email delivery collaborator failed."""

    code = "external_service_failure"
    status_code = 502


class InvalidInput(AppError):
    """Submitted fields could not be interpreted (e.g. a malformed date)."""

    code = "invalid_input"
    status_code = 400
