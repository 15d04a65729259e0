# =========================================================
# DOMAIN ERRORS
# Services raise AppError with a kind; the HTTP status is
# only decided at the API boundary (see STATUS_BY_KIND).
# =========================================================

from enum import Enum


class ErrorKind(str, Enum):
    VALIDATION = "validation"
    BAD_REQUEST = "bad_request"
    UNAUTHORIZED = "unauthorized"
    FORBIDDEN = "forbidden"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    INTERNAL = "internal"


STATUS_BY_KIND = {
    ErrorKind.VALIDATION: 400,
    ErrorKind.BAD_REQUEST: 400,
    ErrorKind.UNAUTHORIZED: 401,
    ErrorKind.FORBIDDEN: 403,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.CONFLICT: 409,
    ErrorKind.INTERNAL: 500,
}


class AppError(Exception):
    def __init__(
        self,
        kind: ErrorKind,
        message: str,
        errors: dict[str, list[str]] | None = None,
    ):
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.errors = errors or {}

    @property
    def status_code(self) -> int:
        return STATUS_BY_KIND[self.kind]

    def __repr__(self):
        return f"AppError({self.kind.value!r}, {self.message!r})"


def not_found(message: str) -> AppError:
    return AppError(ErrorKind.NOT_FOUND, message)


def forbidden(message: str) -> AppError:
    return AppError(ErrorKind.FORBIDDEN, message)


def conflict(message: str) -> AppError:
    return AppError(ErrorKind.CONFLICT, message)


def unauthorized(message: str) -> AppError:
    return AppError(ErrorKind.UNAUTHORIZED, message)


def bad_request(message: str) -> AppError:
    return AppError(ErrorKind.BAD_REQUEST, message)


def is_unique_violation(exc) -> bool:
    """True when an IntegrityError was raised by a UNIQUE constraint.

    psycopg2 exposes the SQLSTATE as ``pgcode`` (23505); other drivers
    (sqlite in tests) only carry it in the message.
    """
    orig = getattr(exc, "orig", exc)

    if getattr(orig, "pgcode", None) == "23505":
        return True

    return "unique" in str(orig).lower()
