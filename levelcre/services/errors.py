"""Access-control error taxonomy shared by services and both storage backends.

Resolvers never raise these for missing data; they return Role.none or None.
The mutation gateway, link manager and workspace service turn those values
into terminal errors, and the API layer maps them to HTTP status codes.
"""

from __future__ import annotations


class AccessError(Exception):
    """Base class. `detail` is safe to show to the caller."""

    status_code = 400

    def __init__(self, detail: str) -> None:
        super().__init__(detail)
        self.detail = detail


class NotFoundError(AccessError):
    """The referenced workspace, prospect, member or user does not exist."""

    status_code = 404


class ForbiddenError(AccessError):
    """The resource exists but the caller's role is insufficient."""

    status_code = 403


class ConflictError(AccessError):
    """Structural violation, e.g. a duplicate membership row or a member row for the owner."""

    status_code = 409
