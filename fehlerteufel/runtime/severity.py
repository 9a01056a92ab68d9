"""Severity levels for localized errors."""

from enum import Enum
from functools import total_ordering


@total_ordering
class Severity(Enum):
    """Criticality of an error, ordered info < warning < error < fatal.

    Descriptions are read from the "Severity" table.
    """
    INFO = "info"            # Just an informational note
    WARNING = "warning"      # Nothing really bad
    ERROR = "error"
    FATAL = "fatal"          # Better exit the application

    @property
    def rank(self) -> int:
        return _ORDER.index(self)

    @property
    def key(self) -> str:
        """Lookup key, e.g. "severity.warning"."""
        return f"severity.{self.value}"

    def describe(self, catalog=None) -> str:
        """Localized description, or the key when there is no translation."""
        if catalog is None:
            from .catalog import get_default_catalog
            catalog = get_default_catalog()
        return catalog.lookup(self.key, SEVERITY_TABLE)

    def __lt__(self, other):
        if not isinstance(other, Severity):
            return NotImplemented
        return self.rank < other.rank


SEVERITY_TABLE = "Severity"
_ORDER = (Severity.INFO, Severity.WARNING, Severity.ERROR, Severity.FATAL)
