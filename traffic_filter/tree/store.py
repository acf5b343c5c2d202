# traffic_filter/tree/store.py

import dataclasses
import logging
from typing import Any, Dict, Iterable, Iterator, List, Optional, Tuple, Union

from traffic_filter.tree.nodes import (
    Condition, FilterNode, FilterTreeError, Group, Logic, NodeKind, Operator
)

logger = logging.getLogger(__name__)

_TRUE_WORDS = ('true', 'yes', 'on', '1')
_FALSE_WORDS = ('false', 'no', 'off', '0', '')


def _coerce_flag(value):
    if isinstance(value, str):
        text = value.strip().lower()
        if text in _TRUE_WORDS:
            return True
        if text in _FALSE_WORDS:
            return False
        raise FilterTreeError(f"Not a boolean flag: {value!r}")
    return bool(value)


# Patchable attributes per node kind, with the coercion applied to each value
_PATCHABLE = {
    NodeKind.CONDITION: {
        'logic': Logic.coerce,
        'field': str,
        'operator': Operator.coerce,
        'value': str,
    },
    NodeKind.GROUP: {
        'logic': Logic.coerce,
        'negated': _coerce_flag,
    },
}


def _walk(nodes: Iterable[FilterNode]) -> Iterator[FilterNode]:
    for node in nodes:
        yield node
        if isinstance(node, Group):
            yield from _walk(node.children)


def _rewrite(nodes, node_id, transform):
    """
    Rebuild `nodes` with the node `node_id` replaced by `transform(node)`.

    A transform returning None drops the node; a group left without children
    is dropped with it. Returns None when `node_id` does not occur, so
    untouched sequences are never copied.
    """
    for index, node in enumerate(nodes):
        if node.id == node_id:
            replacement = transform(node)
        elif isinstance(node, Group):
            children = _rewrite(node.children, node_id, transform)
            if children is None:
                continue
            replacement = dataclasses.replace(node, children=children) if children else None
        else:
            continue
        middle = (replacement,) if replacement is not None else ()
        return nodes[:index] + middle + nodes[index + 1:]
    return None


def _apply_patch(node: FilterNode, changes: Dict[str, Any]) -> FilterNode:
    allowed = _PATCHABLE[node.kind]
    coerced = {}
    for key, value in changes.items():
        if key not in allowed:
            raise FilterTreeError(f"Cannot update '{key}' on a {node.kind.value} node")
        coerced[key] = allowed[key](value)
    return dataclasses.replace(node, **coerced)


@dataclasses.dataclass(frozen=True)
class FilterTree:
    """
    Immutable forest of FilterNodes with the id counter used to grow it.

    Every editing operation returns a new tree and leaves this one intact.
    Operations that cannot apply return the tree itself.
    """
    roots: Tuple[FilterNode, ...]
    next_id: int = 1

    def __post_init__(self):
        roots = tuple(self.roots)
        if not roots:
            raise FilterTreeError("A filter tree must contain at least one node")
        object.__setattr__(self, 'roots', roots)

        seen = set()
        for node in _walk(roots):
            if node.id in seen:
                raise FilterTreeError(f"Duplicate node id {node.id}")
            seen.add(node.id)
        object.__setattr__(self, 'next_id', max(self.next_id, max(seen) + 1))

    @classmethod
    def initial(cls, field='http'):
        """Single-condition tree the editor starts from"""
        return cls((Condition(id=1, field=field),))

    @classmethod
    def from_nodes(cls, nodes: Iterable[FilterNode]):
        return cls(tuple(nodes))

    def __iter__(self):
        return iter(self.roots)

    def __len__(self):
        return len(self.roots)

    def walk(self) -> Iterator[FilterNode]:
        """Yield every node depth-first, parents before their children"""
        return _walk(self.roots)

    def ids(self) -> List[int]:
        return [node.id for node in self.walk()]

    def find(self, node_id) -> Optional[FilterNode]:
        for node in self.walk():
            if node.id == node_id:
                return node
        return None

    def to_list(self) -> List[Dict[str, Any]]:
        return [node.to_dict() for node in self.roots]

    def update(self, node_id, patch: Optional[Dict[str, Any]] = None, **changes):
        """
        Apply partial changes to the node `node_id`.

        Accepts `logic`, `field`, `operator` and `value` on conditions and
        `logic` and `negated` on groups.
        """
        changes = dict(patch or {}, **changes)
        if self.find(node_id) is None:
            logger.debug(f"Update ignored, no node with id {node_id}")
            return self
        roots = _rewrite(self.roots, node_id, lambda node: _apply_patch(node, changes))
        return FilterTree(roots, self.next_id)

    def add(self, parent_id=None, kind: Union[NodeKind, str] = NodeKind.CONDITION):
        """
        Append a default node at the root, or inside the group `parent_id`.

        New groups are seeded with one default condition so they are never
        empty. Conditions cannot hold children; adding under one is ignored.
        """
        kind = NodeKind(kind)
        node_id = self.next_id
        if kind is NodeKind.GROUP:
            new_node = Group(id=node_id, children=(Condition(id=node_id + 1),))
            next_id = node_id + 2
        else:
            new_node = Condition(id=node_id)
            next_id = node_id + 1

        if parent_id is None:
            return FilterTree(self.roots + (new_node,), next_id)

        parent = self.find(parent_id)
        if not isinstance(parent, Group):
            logger.debug(f"Add ignored, {parent_id} is not a group in this tree")
            return self
        roots = _rewrite(
            self.roots, parent_id,
            lambda group: dataclasses.replace(group, children=group.children + (new_node,))
        )
        return FilterTree(roots, next_id)

    def remove(self, node_id):
        """
        Remove the node `node_id` wherever it occurs.

        Groups emptied by the removal go as well. Refused when the tree
        would be left without any root node.
        """
        if self.find(node_id) is None:
            logger.debug(f"Remove ignored, no node with id {node_id}")
            return self
        roots = _rewrite(self.roots, node_id, lambda node: None)
        if not roots:
            logger.debug(f"Remove of {node_id} refused, the tree would be empty")
            return self
        return FilterTree(roots, self.next_id)

    def load_expression(self, text: str):
        """
        Replace the tree with the parse of `text`.

        Ids continue from this tree's counter. When the text yields no nodes
        the current tree is kept.
        """
        from traffic_filter.parser.filter_parser import parse_filter

        nodes = parse_filter(text, first_id=self.next_id)
        if not nodes:
            logger.info("Expression produced no filter nodes, keeping the current tree")
            return self
        return FilterTree(nodes, self.next_id)
