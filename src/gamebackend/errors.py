# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2026 Gamebackend Contributors

"""Typed failures raised by the service layer.

Every error is raised before anything is written, so a failed operation
never leaves partial state behind. The API layer maps each class to an HTTP
status code (see ``gamebackend.main``).
"""

from __future__ import annotations


class DomainError(Exception):
    status_code: int = 500

    def __init__(
        self,
        message: str,
        errors: dict[str, list[str]] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.errors = errors


class NotFoundError(DomainError):
    """The referenced entity does not exist."""

    status_code = 404

    def __init__(self, resource: str, identifier: object) -> None:
        super().__init__(f"{resource} with this ID doesn't exist.")
        self.resource = resource
        self.identifier = identifier


class ForbiddenError(DomainError):
    """The caller has no rights over the target entity."""

    status_code = 403


class InvalidOperationError(DomainError):
    """A state or business-rule precondition does not hold."""

    status_code = 400


class ConflictError(DomainError):
    """A uniqueness or exclusivity invariant would be violated."""

    status_code = 409

    def __init__(
        self,
        message: str = "Conflict occurred.",
        errors: dict[str, list[str]] | None = None,
    ) -> None:
        super().__init__(message, errors)

    @classmethod
    def for_field(cls, field: str, message: str) -> ConflictError:
        return cls(errors={field: [message]})


class UnprocessableEntityError(DomainError):
    """The request is valid but cannot be satisfied given current state."""

    status_code = 422

    def __init__(
        self,
        message: str = "Logic error.",
        errors: dict[str, list[str]] | None = None,
    ) -> None:
        super().__init__(message, errors)

    @classmethod
    def for_field(cls, field: str, message: str) -> UnprocessableEntityError:
        return cls(errors={field: [message]})
