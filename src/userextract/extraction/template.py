"""Replacement templates for extraction rules.

Rule documents write templates with ``$``-style group references::

    $1        numbered group
    ${realm}  named group, defined as (?P<realm>...) in the pattern
    \\$       literal dollar sign (any escaped character is taken literally)

Templates are compiled once against the rule's pattern so that a bad
reference fails when the rule is built, never while a request is served.
"""

from __future__ import annotations

import re

from ..errors import ConfigError

_NAME_REGEX = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")
_DIGITS = "0123456789"


class GroupName(str):
    """Marks a named group reference among the literal parts."""


class ReplacementTemplate:
    """A template compiled against one pattern."""

    __slots__ = ("_source", "_parts")

    def __init__(self, source: str, pattern: re.Pattern):
        if not isinstance(source, str):
            raise ConfigError(f"Replacement template must be a string, got {type(source).__name__}")
        self._source = source
        self._parts = tuple(_compile(source, pattern))

    @property
    def source(self) -> str:
        return self._source

    def expand(self, match: re.Match) -> str:
        """Substitute group references with the text they captured.

        Groups that did not take part in the match expand to "".
        """
        out = []
        for part in self._parts:
            if isinstance(part, (GroupName, int)):
                out.append(match.group(part) or "")
            else:
                out.append(part)
        return "".join(out)

    def __repr__(self) -> str:
        return f"ReplacementTemplate({self._source!r})"


def _compile(source: str, pattern: re.Pattern) -> list:
    parts: list = []
    literal: list = []
    group_count = pattern.groups
    i = 0
    n = len(source)

    def flush():
        if literal:
            parts.append("".join(literal))
            literal.clear()

    while i < n:
        ch = source[i]

        if ch == "\\":
            if i + 1 >= n:
                raise ConfigError(f"Template {source!r}: character to be escaped is missing")
            literal.append(source[i + 1])
            i += 2
            continue

        if ch != "$":
            literal.append(ch)
            i += 1
            continue

        i += 1
        if i >= n:
            raise ConfigError(f"Template {source!r}: illegal group reference at end of template")

        if source[i] == "{":
            end = source.find("}", i + 1)
            if end == -1:
                raise ConfigError(f"Template {source!r}: named group reference is missing '}}'")
            name = source[i + 1 : end]
            if not _NAME_REGEX.fullmatch(name):
                raise ConfigError(f"Template {source!r}: invalid group name {name!r}")
            if name not in pattern.groupindex:
                raise ConfigError(
                    f"Template {source!r}: pattern {pattern.pattern!r} has no group named {name!r}"
                )
            flush()
            parts.append(GroupName(name))
            i = end + 1
            continue

        if source[i] not in _DIGITS:
            raise ConfigError(f"Template {source!r}: illegal group reference '${source[i]}'")

        ref = int(source[i])
        if ref > group_count:
            raise ConfigError(
                f"Template {source!r}: pattern {pattern.pattern!r} has no group {ref} "
                f"(it defines {group_count})"
            )
        i += 1
        # Greedy, but only while the number still names an existing group
        while i < n and source[i] in _DIGITS:
            candidate = ref * 10 + int(source[i])
            if candidate > group_count:
                break
            ref = candidate
            i += 1

        flush()
        parts.append(ref)

    flush()
    return parts
