# traffic_filter/export/serializer.py

import re
from typing import Iterable

from traffic_filter.tree.nodes import COMPARISON_ALIASES, FilterNode, Group, Operator

# Values written without quotes: decimal, dotted (versions, IPv4) and hex
_BARE_VALUE = re.compile(r'^(?:0[xX][0-9a-fA-F]+|[0-9.]+)$')

# Fields that read back as a single plain atom
_BARE_FIELD = re.compile(r'^[^\s()"!<>=~&|\\]+$')
_RESERVED_WORDS = {'and', 'or', 'not'} | set(COMPARISON_ALIASES)

_ESCAPES = {'\\': '\\\\', '"': '\\"', '\n': '\\n', '\r': '\\r', '\t': '\\t'}


def quote(text: str) -> str:
    """Double-quote text, escaping backslashes, quotes and line breaks"""
    return '"' + ''.join(_ESCAPES.get(char, char) for char in text) + '"'


def format_value(value: str) -> str:
    """Render a condition value, quoting anything that is not numeric or hex"""
    if not value:
        return '""'
    if _BARE_VALUE.match(value):
        return value
    return quote(value)


def format_field(field: str) -> str:
    """Render a field name, quoting it when it would not parse back as one atom"""
    if _BARE_FIELD.match(field) and field.lower() not in _RESERVED_WORDS:
        return field
    return quote(field)


def serialize_node(node: FilterNode) -> str:
    if isinstance(node, Group):
        prefix = '!' if node.negated else ''
        return f"{prefix}({serialize(node.children)})"

    field = format_field(node.field)
    if node.operator is Operator.EXISTS:
        return field
    if node.operator is Operator.NEGATED_EXISTS:
        return f"!{field}"
    return f"{field} {node.operator.value} {format_value(node.value)}"


def serialize(nodes: Iterable[FilterNode]) -> str:
    """
    Build the canonical single-line filter expression for a sibling list.

    Accepts a FilterTree or any sequence of nodes.
    """
    parts = []
    for index, node in enumerate(nodes):
        if index:
            parts.append(f" {node.logic.value} ")
        parts.append(serialize_node(node))
    return ''.join(parts)
