# jira_bridge/utils/templating.py
from __future__ import annotations

from string import Formatter
from typing import Any, List, Sequence
from urllib.parse import quote, quote_plus

from jira_bridge.errors import InvalidTemplate, UnsafeRouteValue

_formatter = Formatter()

# Once a literal opens the query (or fragment), every later slot is a query value.
_QUERY_MARKERS = ("?", "#")
_DOT_SEGMENTS = (".", "..")


def _quote(text: str, quoter) -> str:
    try:
        return quoter(text, safe="")
    except UnicodeEncodeError as e:
        raise UnsafeRouteValue(f"Route value is not encodable as UTF-8: {text!r}") from e


def encode_path_value(value: Any) -> str:
    text = str(value)
    if text in _DOT_SEGMENTS:
        raise UnsafeRouteValue(f"Refusing path segment {text!r}")
    return _quote(text, quote)


def encode_query_value(value: Any) -> str:
    return _quote(str(value), quote_plus)


def build_route(literals: Sequence[str], values: Sequence[Any]) -> str:
    """
    Interleave trusted ``literals`` with untrusted ``values``:
    literal0, value0, literal1, value1, ..., literalN.

    Literals are emitted verbatim. Each value is percent-encoded for the place
    it lands in, so ``/ ? # & =`` inside a value never become delimiters.
    """
    if len(literals) != len(values) + 1:
        raise InvalidTemplate(
            f"Template has {max(len(literals) - 1, 0)} slot(s) but {len(values)} value(s) were given"
        )

    parts: List[str] = [literals[0]]
    in_query = any(m in literals[0] for m in _QUERY_MARKERS)
    for value, literal in zip(values, literals[1:]):
        parts.append(encode_query_value(value) if in_query else encode_path_value(value))
        parts.append(literal)
        in_query = in_query or any(m in literal for m in _QUERY_MARKERS)
    return "".join(parts)


def split_template(template: str) -> List[str]:
    """Split a ``{}``-slotted template into its literal fragments."""
    literals: List[str] = []
    current = ""
    try:
        parsed = list(_formatter.parse(template))
    except ValueError as e:
        raise InvalidTemplate(f"Unparseable template {template!r}: {e}") from e

    for literal, field, spec, conversion in parsed:
        current += literal
        if field is None:
            continue
        if field or spec or conversion:
            raise InvalidTemplate(f"Only bare '{{}}' slots are allowed, got {{{field}}} in {template!r}")
        literals.append(current)
        current = ""
    literals.append(current)
    return literals


def route(template: str, *values: Any) -> str:
    return build_route(split_template(template), values)
