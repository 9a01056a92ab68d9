"""
Clause: display text with named, reorderable parameter substitutions.

A Clause is built from literal fragments interleaved with named values:

    Clause("File ", ("name", name), " not found at ", ("path", path), ".")

Its skeleton, "File {name} not found at {path}.", is the key used to look up
a translation. A translated template may use the placeholders in any order,
or leave some out:

    "{path} hat keine Datei {name}."

Template syntax:
- {name}: Value bound to `name` when the Clause was built
- {{ and }}: Literal braces

A placeholder naming a parameter that was never bound raises E001.
"""

import re
import logging
from types import MappingProxyType
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Tuple, Union

from ..errors import ClauseError, MissingParameterError

logger = logging.getLogger(__name__)

PLACEHOLDER_PATTERN = re.compile(r'\{\{|\}\}|\{([a-zA-Z_][a-zA-Z0-9_]*)\}')
NAME_PATTERN = re.compile(r'^[a-zA-Z_][a-zA-Z0-9_]*$')

Part = Union[str, Tuple[str, Any]]
KeySelector = Callable[[str], str]


def placeholders(template: str) -> List[str]:
    """
    List the parameter names a template references.

    Names are returned in order of first appearance, without duplicates.
    Escaped braces are not placeholders.
    """
    names: List[str] = []
    for match in PLACEHOLDER_PATTERN.finditer(template):
        name = match.group(1)
        if name and name not in names:
            names.append(name)
    return names


def _escape(text: str) -> str:
    return text.replace("{", "{{").replace("}", "}}")


def _check_name(name: Any) -> str:
    if not isinstance(name, str) or not NAME_PATTERN.match(name):
        raise ClauseError(
            code="E002",
            message=f"Invalid parameter name: {name!r}",
            hint="Parameter names must be identifiers (letters, digits, underscore)"
        )
    return name


class Clause:
    """
    Immutable templated text.

    Attributes:
        fragments: Literal segments, one more than the number of slots
        slots: Parameter name for every substitution, in construction order
        parameters: Read-only mapping of parameter name to string value
    """

    __slots__ = ("_fragments", "_slots", "_parameters")

    def __init__(self, *parts: Part):
        """
        Build a Clause from literal strings and (name, value) pairs.

        Adjacent literals are merged. Values are converted with str().
        A name may be used more than once if it is bound to the same value.

        Raises:
            ClauseError: On invalid names or conflicting values (E002)
            TypeError: If a part is neither a string nor a pair
        """
        fragments = [""]
        slots: List[str] = []
        parameters: Dict[str, str] = {}

        for part in parts:
            if isinstance(part, str):
                fragments[-1] += part
            elif isinstance(part, tuple) and len(part) == 2:
                name = _check_name(part[0])
                self._bind(parameters, name, part[1])
                slots.append(name)
                fragments.append("")
            else:
                raise TypeError(
                    f"Clause parts must be str or (name, value) pairs, got {type(part).__name__}"
                )

        self._fragments = tuple(fragments)
        self._slots = tuple(slots)
        self._parameters = MappingProxyType(parameters)

    @staticmethod
    def _bind(parameters: Dict[str, str], name: str, value: Any) -> None:
        value = str(value)
        if name in parameters and parameters[name] != value:
            raise ClauseError(
                code="E002",
                message=f"Parameter '{name}' bound to conflicting values: "
                        f"{parameters[name]!r} and {value!r}"
            )
        parameters[name] = value

    @classmethod
    def from_parts(cls, fragments: Iterable[str], parameters: Mapping[str, Any]) -> "Clause":
        """
        Build a Clause from explicit fragments and an ordered parameter mapping.

        Fragment i is followed by the i-th parameter; the last fragment closes
        the text.

        Raises:
            ClauseError: If len(fragments) != len(parameters) + 1 (E002)
        """
        fragments = list(fragments)
        if len(fragments) != len(parameters) + 1:
            raise ClauseError(
                code="E002",
                message=f"Expected {len(parameters) + 1} fragments for "
                        f"{len(parameters)} parameters, got {len(fragments)}"
            )
        parts: List[Part] = [fragments[0]]
        for (name, value), fragment in zip(parameters.items(), fragments[1:]):
            parts.append((name, value))
            parts.append(fragment)
        return cls(*parts)

    @classmethod
    def parse(cls, template: str, **values: Any) -> "Clause":
        """
        Build a Clause from a {name} template and keyword values.

        Example:
            >>> Clause.parse("File {name} not found.", name="data.csv").render()
            'File data.csv not found.'

        Raises:
            MissingParameterError: If a placeholder has no value (E001)
        """
        parts: List[Part] = []
        position = 0
        for match in PLACEHOLDER_PATTERN.finditer(template):
            parts.append(template[position:match.start()])
            position = match.end()
            token = match.group(0)
            name = match.group(1)
            if name is None:
                parts.append(token[0])
            elif name in values:
                parts.append((name, values[name]))
            else:
                raise MissingParameterError(name, template)
        parts.append(template[position:])
        return cls(*parts)

    @property
    def fragments(self) -> Tuple[str, ...]:
        return self._fragments

    @property
    def slots(self) -> Tuple[str, ...]:
        return self._slots

    @property
    def parameters(self) -> Mapping[str, str]:
        return self._parameters

    @property
    def skeleton(self) -> str:
        """Literal text with every parameter written as {name}."""
        out = [_escape(self._fragments[0])]
        for name, fragment in zip(self._slots, self._fragments[1:]):
            out.append(f"{{{name}}}")
            out.append(_escape(fragment))
        return "".join(out)

    def render(self) -> str:
        """Concatenate fragments and values in construction order."""
        out = [self._fragments[0]]
        for name, fragment in zip(self._slots, self._fragments[1:]):
            out.append(self._parameters[name])
            out.append(fragment)
        return "".join(out)

    def substitute(self, template: str) -> str:
        """
        Fill a template's placeholders with this Clause's values.

        Placeholders are resolved by name, so their order in the template
        does not need to match the construction order.

        Raises:
            MissingParameterError: If the template names an unbound parameter
        """
        def _replace(match):
            name = match.group(1)
            if name is None:
                return match.group(0)[0]
            if name not in self._parameters:
                raise MissingParameterError(name, template)
            return self._parameters[name]

        return PLACEHOLDER_PATTERN.sub(_replace, template)

    def key(self, key_selector: Optional[KeySelector] = None) -> str:
        """
        Lookup key for this Clause.

        `key_selector` receives the skeleton and returns a key prefix. An
        empty prefix (or no selector) leaves the bare skeleton.
        """
        skeleton = self.skeleton
        prefix = key_selector(skeleton) if key_selector else ""
        return f"{prefix}.{skeleton}" if prefix else skeleton

    def localize(
        self,
        table: Optional[str] = None,
        key_selector: Optional[KeySelector] = None,
        catalog=None
    ) -> str:
        """
        Resolve the localized text of this Clause.

        Args:
            table: String table name (default: configured default table)
            key_selector: Maps the skeleton to a key prefix
            catalog: Lookup service (default: process-wide catalog)

        Returns:
            The translated template with values substituted, or render()
            when the catalog has no entry for the key

        Raises:
            MissingParameterError: If the translation names an unbound parameter
        """
        if catalog is None:
            from .catalog import get_default_catalog
            catalog = get_default_catalog()
        if table is None:
            from ..config import get_default_config
            table = get_default_config().default_table

        key = self.key(key_selector)
        template = catalog.lookup(key, table)
        if template == key:
            logger.debug(f"No translation for {key!r} in table {table!r}")
            return self.render()
        return self.substitute(template)

    def __str__(self) -> str:
        return self.render()

    def __repr__(self) -> str:
        return f"Clause({self.skeleton!r}, {dict(self._parameters)!r})"

    def __reduce__(self):
        parts: List[Part] = [self._fragments[0]]
        for name, fragment in zip(self._slots, self._fragments[1:]):
            parts.append((name, self._parameters[name]))
            parts.append(fragment)
        return (type(self), tuple(parts))

    def __eq__(self, other) -> bool:
        if not isinstance(other, Clause):
            return NotImplemented
        return (
            self._fragments == other._fragments
            and self._slots == other._slots
            and dict(self._parameters) == dict(other._parameters)
        )

    def __hash__(self) -> int:
        return hash((self._fragments, self._slots, tuple(self._parameters.items())))
