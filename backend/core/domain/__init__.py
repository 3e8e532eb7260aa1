"""
core.domain: Shared domain utilities for cross-app service layers.

Modules
-------
exceptions         Domain-specific exceptions that map cleanly to HTTP responses.
exception_handler  Global DRF handler rendering every failure as ``{"message": ...}``.
access             Role helpers and the ``HasRole`` DRF permission class.

Usage from any app::

    from core.domain.exceptions import DomainError, NotFound
    from core.domain.access import HasRole
"""
