"""
Immutable error details and the factory that builds errors from them.
"""

import sys
from dataclasses import dataclass, field
from typing import Callable, Optional, Type, TypeVar, Union

from .clause import Clause
from .severity import Severity

T = TypeVar("T")

Text = Union[Clause, str]
FailureText = Callable[[], Text]


def truncate_name(name: str) -> str:
    """Cut `name` at the first "(", so "file_error(path)" becomes "file_error"."""
    return name.split("(", 1)[0]


def caller_name(depth: int = 1) -> str:
    """Name of the function `depth` frames above the caller."""
    return sys._getframe(depth + 1).f_code.co_name


def _as_clause(text: Optional[Text]) -> Optional[Clause]:
    if text is None or isinstance(text, Clause):
        return text
    if isinstance(text, str):
        return Clause(text)
    raise TypeError(f"Expected Clause or str, got {type(text).__name__}")


@dataclass(frozen=True)
class ErrorRecord:
    """
    Details of one error instance.

    `name` is truncated at the first "(" and `description` defaults to the
    name. `cause` is borrowed: the record neither copies nor owns it.
    """
    name: str
    code: Optional[int] = None
    severity: Optional[Severity] = None
    description: Optional[Clause] = None
    cause: Optional[BaseException] = field(default=None, compare=False)
    recovery: Optional[Clause] = None
    failure: Optional[Clause] = None

    def __post_init__(self):
        name = truncate_name(self.name)
        object.__setattr__(self, "name", name)
        object.__setattr__(self, "description", _as_clause(self.description) or Clause(name))
        object.__setattr__(self, "recovery", _as_clause(self.recovery))
        object.__setattr__(self, "failure", _as_clause(self.failure))


def make_error(
    kind: Type[T],
    name: Optional[str] = None,
    code: Optional[int] = None,
    severity: Optional[Severity] = None,
    description: Optional[Text] = None,
    cause: Optional[BaseException] = None,
    recovery: Optional[Text] = None,
    failure: Optional[Union[FailureText, Text]] = None
) -> T:
    """
    Build an error of type `kind` from its details.

    Args:
        kind: Any type with a `from_record(record)` constructor
        name: Unique name; text from the first "(" on is dropped.
              Defaults to the name of the calling function.
        code: Optional numeric code
        severity: Optional severity
        description: Title text (default: the name)
        cause: Error that caused this one
        recovery: Recovery suggestion text
        failure: Failure reason, usually a zero-argument callable so the
                 text is only built when the error is. Called exactly once.

    Returns:
        kind.from_record(record)
    """
    if name is None:
        name = caller_name()
    if callable(failure):
        failure = failure()
    record = ErrorRecord(
        name=name,
        code=code,
        severity=severity,
        description=description,
        cause=cause,
        recovery=recovery,
        failure=failure,
    )
    return kind.from_record(record)
