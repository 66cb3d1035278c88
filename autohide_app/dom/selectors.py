"""
CSS selector subset used for host page lookups.

Supported: type selectors, ``*``, ``#id``, ``.class``, attribute tests
(``[a]``, ``[a=v]``, ``[a*=v]``, ``[a^=v]``, ``[a$=v]``), the ``:hover``
pseudo-class, descendant and child (``>``) combinators and comma-separated
selector lists. Compiled selectors are cached by source string.
"""

import re
from dataclasses import dataclass
from functools import lru_cache
from typing import TYPE_CHECKING, Optional

from ..errors import InvalidSelectorError

if TYPE_CHECKING:
    from .models import Element

_IDENT = re.compile(r"-?[A-Za-z_][\w-]*")
_ATTRIBUTE = re.compile(
    r"""\[\s*([\w:-]+)\s*(?:([*^$]?=)\s*(?:"([^"]*)"|'([^']*)'|([\w-]+))\s*)?\]"""
)
_SUPPORTED_PSEUDO_CLASSES = frozenset({"hover"})


@dataclass(frozen=True)
class AttributeTest:
    """Single ``[name op value]`` test."""
    name: str
    operator: Optional[str] = None
    value: Optional[str] = None

    def matches(self, element: "Element") -> bool:
        actual = element.get_attribute(self.name)
        if actual is None:
            return False
        if self.operator is None:
            return True
        if self.operator == "=":
            return actual == self.value
        # Substring operators never match an empty value
        if not self.value:
            return False
        if self.operator == "*=":
            return self.value in actual
        if self.operator == "^=":
            return actual.startswith(self.value)
        if self.operator == "$=":
            return actual.endswith(self.value)
        return False


@dataclass(frozen=True)
class CompoundSelector:
    """Sequence of simple selectors that all apply to one element."""
    tag: Optional[str] = None
    ids: tuple[str, ...] = ()
    classes: tuple[str, ...] = ()
    attributes: tuple[AttributeTest, ...] = ()
    pseudo_classes: tuple[str, ...] = ()

    def matches(self, element: "Element") -> bool:
        if self.tag is not None and element.tag_name != self.tag:
            return False
        element_id = element.get_attribute("id")
        if any(element_id != id_ for id_ in self.ids):
            return False
        if not all(element.has_class(name) for name in self.classes):
            return False
        if not all(test.matches(element) for test in self.attributes):
            return False
        if "hover" in self.pseudo_classes and not element.hovered:
            return False
        return True


@dataclass(frozen=True)
class ComplexSelector:
    """Compound selectors joined by combinators, matched right to left."""
    compounds: tuple[CompoundSelector, ...]
    combinators: tuple[str, ...] = ()

    def matches(self, element: "Element") -> bool:
        return self._match_from(element, len(self.compounds) - 1)

    def _match_from(self, element: "Element", index: int) -> bool:
        if not self.compounds[index].matches(element):
            return False
        if index == 0:
            return True

        if self.combinators[index - 1] == ">":
            parent = element.parent
            return parent is not None and self._match_from(parent, index - 1)

        ancestor = element.parent
        while ancestor is not None:
            if self._match_from(ancestor, index - 1):
                return True
            ancestor = ancestor.parent
        return False


@dataclass(frozen=True)
class SelectorList:
    """Comma-separated selector list; matches if any member matches."""
    source: str
    selectors: tuple[ComplexSelector, ...]

    def matches(self, element: "Element") -> bool:
        return any(selector.matches(element) for selector in self.selectors)


class _SelectorParser:
    """Recursive descent parser over a selector string."""

    def __init__(self, source: str) -> None:
        self.source = source
        self.pos = 0

    def parse(self) -> SelectorList:
        selectors = []
        while True:
            self._skip_whitespace()
            selectors.append(self._parse_complex())
            self._skip_whitespace()
            if self._at_end():
                break
            if self.source[self.pos] != ",":
                raise self._error("Unexpected character")
            self.pos += 1

        return SelectorList(source=self.source, selectors=tuple(selectors))

    def _parse_complex(self) -> ComplexSelector:
        compounds = [self._parse_compound()]
        combinators = []

        while True:
            had_whitespace = self._skip_whitespace()
            if self._at_end() or self.source[self.pos] == ",":
                break
            if self.source[self.pos] == ">":
                self.pos += 1
                self._skip_whitespace()
                combinators.append(">")
            elif had_whitespace:
                combinators.append(" ")
            else:
                raise self._error("Expected combinator")
            compounds.append(self._parse_compound())

        return ComplexSelector(compounds=tuple(compounds), combinators=tuple(combinators))

    def _parse_compound(self) -> CompoundSelector:
        start = self.pos
        tag = None
        ids: list[str] = []
        classes: list[str] = []
        attributes: list[AttributeTest] = []
        pseudo_classes: list[str] = []

        if not self._at_end() and self.source[self.pos] == "*":
            self.pos += 1
        else:
            match = _IDENT.match(self.source, self.pos)
            if match:
                tag = match.group().lower()
                self.pos = match.end()

        while not self._at_end():
            char = self.source[self.pos]
            if char == "#":
                self.pos += 1
                ids.append(self._parse_identifier())
            elif char == ".":
                self.pos += 1
                classes.append(self._parse_identifier())
            elif char == "[":
                attributes.append(self._parse_attribute())
            elif char == ":":
                self.pos += 1
                name = self._parse_identifier().lower()
                if name not in _SUPPORTED_PSEUDO_CLASSES:
                    raise self._error(f"Unsupported pseudo-class ':{name}'")
                pseudo_classes.append(name)
            else:
                break

        if self.pos == start:
            raise self._error("Expected selector")

        return CompoundSelector(
            tag=tag,
            ids=tuple(ids),
            classes=tuple(classes),
            attributes=tuple(attributes),
            pseudo_classes=tuple(pseudo_classes),
        )

    def _parse_identifier(self) -> str:
        match = _IDENT.match(self.source, self.pos)
        if not match:
            raise self._error("Expected identifier")
        self.pos = match.end()
        return match.group()

    def _parse_attribute(self) -> AttributeTest:
        match = _ATTRIBUTE.match(self.source, self.pos)
        if not match:
            raise self._error("Malformed attribute selector")
        self.pos = match.end()

        name, operator = match.group(1), match.group(2)
        if operator is None:
            return AttributeTest(name=name)

        value = next(group for group in match.group(3, 4, 5) if group is not None)
        return AttributeTest(name=name, operator=operator, value=value)

    def _skip_whitespace(self) -> bool:
        start = self.pos
        while not self._at_end() and self.source[self.pos].isspace():
            self.pos += 1
        return self.pos > start

    def _at_end(self) -> bool:
        return self.pos >= len(self.source)

    def _error(self, message: str) -> InvalidSelectorError:
        return InvalidSelectorError(
            f"{message} at position {self.pos} in selector {self.source!r}",
            selector=self.source,
            position=self.pos,
        )


@lru_cache(maxsize=256)
def compile_selector(source: str) -> SelectorList:
    """
    Compile a selector string.

    Raises:
        InvalidSelectorError: If the selector is empty or malformed
    """
    if not source or not source.strip():
        raise InvalidSelectorError("Empty selector", selector=source, position=0)
    return _SelectorParser(source).parse()
