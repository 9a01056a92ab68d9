"""
Localized errors with severity and position independent parameter substitution.

All text of an error (description, failure reason and recovery suggestion)
is a Clause, so values are given right where the text is written:

    class StorageError(LocalizedError, prefix="StorageError", table="StorageErrors"):

        @classmethod
        def file_error(cls, name, path):
            return cls.make(
                severity=Severity.WARNING,
                failure=lambda: Clause("File ", ("name", name), " not found at ", ("path", path), "."),
            )

    err = StorageError.file_error("data.csv", "/tmp")
    err.name                # "file_error", captured from the calling classmethod
    err.error_description   # "file_error"
    err.failure_reason      # "File data.csv not found at /tmp."

Adding a "StorageErrors" table makes the texts translatable:

    "StorageError.file_error": "Datei-Fehler"
    "StorageError.file_error.failure.File {name} not found at {path}.": "{path} hat keine Datei {name}."

Lookup keys:
- description: "<prefix>.<name>" while the description is the name,
  otherwise "<prefix>.<name>.<description skeleton>"
- failure: "<prefix>.<name>.<failure_prefix>.<failure skeleton>"
- recovery: "<prefix>.<name>.<recovery_prefix>.<recovery skeleton>"

An empty failure_prefix or recovery_prefix looks the text up by its bare
skeleton. Texts are resolved on every access, never cached.
"""

import logging
from typing import ClassVar, Optional, Protocol, runtime_checkable

from ..config import get_default_config
from ..errors import UnresolvableCauseError
from .clause import Clause
from .record import ErrorRecord, make_error, caller_name
from .severity import Severity

logger = logging.getLogger(__name__)


@runtime_checkable
class ErrorKind(Protocol):
    """
    Capabilities an error type needs for the functions in this module.

    `record` holds the details, `from_record` builds an instance from them.
    The remaining attributes are per-type settings.
    """
    record: ErrorRecord
    prefix: str
    table_name: Optional[str]
    failure_prefix: str
    recovery_prefix: str

    @classmethod
    def from_record(cls, record: ErrorRecord): ...


def prefixed_name(error: ErrorKind) -> str:
    """Key stem "<prefix>.<name>", or just the name when the prefix is empty."""
    return f"{error.prefix}.{error.record.name}" if error.prefix else error.record.name


def _table(error: ErrorKind) -> str:
    return error.table_name or get_default_config().default_table


def error_description(error: ErrorKind, catalog=None) -> str:
    """Localized title of the error."""
    name = error.record.name

    def select(skeleton: str) -> str:
        return error.prefix if skeleton == name else prefixed_name(error)

    return error.record.description.localize(_table(error), select, catalog)


def _localize_detail(error: ErrorKind, clause: Optional[Clause], detail_prefix: str, catalog) -> Optional[str]:
    if clause is None:
        return None
    key_prefix = f"{prefixed_name(error)}.{detail_prefix}" if detail_prefix else ""
    return clause.localize(_table(error), lambda _: key_prefix, catalog)


def failure_reason(error: ErrorKind, catalog=None) -> Optional[str]:
    """Localized failure reason, or None when the error has none."""
    return _localize_detail(error, error.record.failure, error.failure_prefix, catalog)


def recovery_suggestion(error: ErrorKind, catalog=None) -> Optional[str]:
    """Localized recovery suggestion, or None when the error has none."""
    return _localize_detail(error, error.record.recovery, error.recovery_prefix, catalog)


def as_localized_error(cause: BaseException, strict: bool = False) -> Optional[ErrorKind]:
    """
    Return `cause` if it is a localized error.

    Non localized causes are logged and give None, or raise
    UnresolvableCauseError when `strict` is set.
    """
    if isinstance(cause, ErrorKind):
        return cause
    if strict:
        raise UnresolvableCauseError(cause)
    logger.warning(f"Non localized error: {cause!r}")
    return None


def short_description(error: ErrorKind, separator: Optional[str] = None, catalog=None) -> str:
    """Title, failure reason and recovery suggestion, without causes."""
    if separator is None:
        separator = get_default_config().separator

    parts = [error_description(error, catalog) or prefixed_name(error)]
    failure = failure_reason(error, catalog)
    if failure is not None:
        parts.append(failure)
    recovery = recovery_suggestion(error, catalog)
    if recovery is not None:
        parts.append(recovery)
    return separator.join(parts)


def full_description(
    error: ErrorKind,
    include_cause: Optional[bool] = None,
    separator: Optional[str] = None,
    catalog=None
) -> str:
    """
    short_description() followed by the chain of causes.

    Localized causes add their own full description. Other causes add
    str(cause) when `include_cause` is set and nothing otherwise.
    `include_cause` defaults to the error type's setting, then the config.
    """
    config = get_default_config()
    if separator is None:
        separator = config.separator
    if include_cause is None:
        include_cause = getattr(error, "include_cause", None)
    if include_cause is None:
        include_cause = config.include_cause

    text = short_description(error, separator, catalog)
    cause = error.record.cause
    if cause is None:
        return text

    localized = as_localized_error(cause)
    if localized is not None:
        return separator.join([text, full_description(localized, include_cause, separator, catalog)])
    if include_cause:
        return separator.join([text, str(cause)])
    return text


class LocalizedError(Exception):
    """
    Base for error types with localized texts.

    Subclasses declare their key prefix and table as class keywords:

        class MyError(LocalizedError, prefix="MyError", table="MyErrors"):
            ...

    Without a prefix, keys start with the error name. Without a table, the
    configured default table ("Localizable") is used. Subclasses inherit
    both from their parent.

    Two errors are equal when they have the same concrete type and name.
    """

    prefix: ClassVar[str] = ""
    table_name: ClassVar[Optional[str]] = None
    failure_prefix: ClassVar[str] = "failure"
    recovery_prefix: ClassVar[str] = "recovery"
    include_cause: ClassVar[Optional[bool]] = None

    def __init_subclass__(cls, prefix: Optional[str] = None, table: Optional[str] = None, **kwargs):
        super().__init_subclass__(**kwargs)
        if prefix is not None:
            cls.prefix = prefix
        if table is not None:
            cls.table_name = table

    def __init__(self, record: ErrorRecord):
        super().__init__(record.name)
        self.record = record
        if record.cause is not None:
            self.__cause__ = record.cause

    @classmethod
    def from_record(cls, record: ErrorRecord) -> "LocalizedError":
        return cls(record)

    @classmethod
    def make(
        cls,
        name: Optional[str] = None,
        code: Optional[int] = None,
        severity: Optional[Severity] = None,
        description=None,
        cause: Optional[BaseException] = None,
        recovery=None,
        failure=None
    ):
        """
        Build an instance of this type; see make_error().

        Called from a classmethod of the error type, the name defaults to
        that classmethod's name.
        """
        if name is None:
            name = caller_name()
        return make_error(
            cls, name,
            code=code,
            severity=severity,
            description=description,
            cause=cause,
            recovery=recovery,
            failure=failure,
        )

    @property
    def name(self) -> str:
        return self.record.name

    @property
    def code(self) -> Optional[int]:
        return self.record.code

    @property
    def severity(self) -> Optional[Severity]:
        return self.record.severity

    @property
    def cause(self) -> Optional[BaseException]:
        return self.record.cause

    @property
    def error_description(self) -> str:
        return error_description(self)

    @property
    def failure_reason(self) -> Optional[str]:
        return failure_reason(self)

    @property
    def recovery_suggestion(self) -> Optional[str]:
        return recovery_suggestion(self)

    @property
    def short_description(self) -> str:
        return short_description(self)

    @property
    def description(self) -> str:
        return full_description(self)

    def __str__(self) -> str:
        return full_description(self)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.record.name!r})"

    def __reduce__(self):
        return (type(self), (self.record,))

    def __eq__(self, other):
        if type(other) is not type(self):
            return NotImplemented
        return self.record.name == other.record.name

    def __hash__(self):
        return hash((type(self), self.record.name))
