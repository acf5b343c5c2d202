"""
Bidirectional display-filter engine.

Parses filter expressions such as ``http.request.method == "GET" && tcp.port eq 80``
into an editable tree, and renders trees back into canonical expressions and
plain-language descriptions.
"""

from traffic_filter.tree import (
    FilterNode, Condition, Group, Logic, Operator, NodeKind,
    FilterTree, FilterTreeError
)
from traffic_filter.parser import tokenize, parse_filter
from traffic_filter.export import serialize, FilterTranslator

__version__ = '0.1.0'
__all__ = [
    'FilterNode', 'Condition', 'Group', 'Logic', 'Operator', 'NodeKind',
    'FilterTree', 'FilterTreeError', 'tokenize', 'parse_filter',
    'serialize', 'FilterTranslator'
]
