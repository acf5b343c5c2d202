# traffic_filter/tree/__init__.py

from traffic_filter.tree.nodes import (
    FilterNode, Condition, Group, Logic, Operator, NodeKind,
    FilterTreeError, COMPARISON_ALIASES
)
from traffic_filter.tree.store import FilterTree

__all__ = [
    'FilterNode', 'Condition', 'Group', 'Logic', 'Operator', 'NodeKind',
    'FilterTreeError', 'COMPARISON_ALIASES', 'FilterTree'
]
