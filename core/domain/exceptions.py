from __future__ import annotations


class DomainError(Exception):
    """
    Base class for errors the HTTP layer turns into `{"error": message}` responses.
    """

    status_code: int = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class DomainValidationError(DomainError):
    """Malformed or out-of-range input, or a dangling soft reference."""

    status_code = 400


class UnauthorizedError(DomainError):
    status_code = 401


class NotFoundError(DomainError):
    status_code = 404


class ConflictError(DomainError):
    """A natural key (chain_id, network_id+address) is already taken."""

    status_code = 409
