"""
Error taxonomy for fehlerteufel.

Error code ranges:
- E001-E099: Clause construction and template substitution errors
- E100-E199: Catalog loading errors
- E200-E299: Cause chain errors
"""

from typing import Optional


class FehlerteufelError(Exception):
    """Base class for all fehlerteufel errors."""

    def __init__(
        self,
        code: str,
        message: str,
        hint: Optional[str] = None
    ):
        """
        Initialize fehlerteufel error.

        Args:
            code: Error code (e.g., "E001")
            message: Human-readable error message
            hint: Optional suggestion for fixing the error
        """
        self.code = code
        self.message = message
        self.hint = hint
        super().__init__(f"[{code}] {message}")


class ClauseError(FehlerteufelError):
    """Clause construction and substitution errors (E001-E099)."""
    pass


class MissingParameterError(ClauseError):
    """A template references a parameter the Clause never bound (E001)."""

    def __init__(self, parameter: str, template: str, hint: Optional[str] = None):
        self.parameter = parameter
        self.template = template
        super().__init__(
            code="E001",
            message=f"Template references unbound parameter '{parameter}': {template!r}",
            hint=hint or "Placeholders in a translation must use the names bound in the original text"
        )


class CatalogError(FehlerteufelError):
    """Catalog loading errors (E100-E199)."""
    pass


class UnresolvableCauseError(FehlerteufelError):
    """A cause cannot be interpreted as a localized error (E200)."""

    def __init__(self, cause: BaseException):
        self.cause = cause
        super().__init__(
            code="E200",
            message=f"Non localized error: {cause!r}"
        )


# Specific error codes documentation:
#
# E001: Template placeholder names a parameter that was never bound
# E002: Malformed Clause (conflicting parameter values, fragment count mismatch)
# E100: Catalog file unreadable or not a flat string mapping
# E200: Cause is not a localized error
