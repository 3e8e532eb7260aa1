"""
core.domain.exceptions: Domain-specific exception hierarchy.

These exceptions represent business-rule violations inside the service
layer and the storage implementations.  They are deliberately **not** DRF
exceptions so that the domain layer stays framework-agnostic.  The global
handler in ``core.domain.exception_handler`` maps them to HTTP responses.

Mapping cheatsheet
------------------
┌─────────────────────┬──────────────────────────────┬──────┐
│ Domain Exception    │ DRF / HTTP equivalent        │ Code │
├─────────────────────┼──────────────────────────────┼──────┤
│ DomainError         │ ValidationError / 400        │ 400  │
│ NotFound            │ NotFound / 404               │ 404  │
│ Conflict            │ APIException / 409           │ 409  │
└─────────────────────┴──────────────────────────────┴──────┘

Recommended usage inside a service::

    from core.domain.exceptions import NotFound

    case = self.store.get_case(case_id)
    if case is None:
        raise NotFound("Case not found")
"""

from __future__ import annotations


class DomainError(Exception):
    """
    Base class for all domain / business-rule errors.

    Caught by the global exception handler and converted to a 400 Bad
    Request unless a subclass maps to something more specific.
    """

    def __init__(self, message: str = "A business rule was violated.") -> None:
        self.message = message
        super().__init__(self.message)


class NotFound(DomainError):
    """
    The requested resource does not exist.

    Storage lookups return ``None`` / ``False`` for missing ids; the
    service layer raises this when such a sentinel must become a 404.
    """

    def __init__(self, message: str = "The requested resource was not found.") -> None:
        super().__init__(message)


class Conflict(DomainError):
    """
    The operation conflicts with the current state of the store.

    Typical usage: creating a user whose username is already taken.
    Maps to HTTP 409.
    """

    def __init__(self, message: str = "The operation conflicts with the current state.") -> None:
        super().__init__(message)
