"""
Runtime for localized error descriptions.

Core components:
- Clause: Display text with named, reorderable parameter substitutions
- Catalog: Localized string tables with locale fallback
- Severity: Ordered criticality levels
- ErrorRecord / make_error: Immutable error details and the factory
- LocalizedError: Base for error types with localized texts
"""

from .clause import Clause, placeholders
from .catalog import Catalog, CatalogIssue, get_default_catalog, set_default_catalog, locale_chain
from .severity import Severity
from .record import ErrorRecord, make_error, truncate_name
from .localized import (
    ErrorKind,
    LocalizedError,
    as_localized_error,
    error_description,
    failure_reason,
    recovery_suggestion,
    short_description,
    full_description,
)

__all__ = [
    "Clause",
    "placeholders",
    "Catalog",
    "CatalogIssue",
    "get_default_catalog",
    "set_default_catalog",
    "locale_chain",
    "Severity",
    "ErrorRecord",
    "make_error",
    "truncate_name",
    "ErrorKind",
    "LocalizedError",
    "as_localized_error",
    "error_description",
    "failure_reason",
    "recovery_suggestion",
    "short_description",
    "full_description",
]
