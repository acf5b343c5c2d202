# traffic_filter/tree/nodes.py

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar, Dict, Tuple

logger = logging.getLogger(__name__)


class FilterTreeError(ValueError):
    """Raised when a caller tries to build a tree that breaks its invariants"""


class Logic(Enum):
    """Combinator joining a node to its preceding sibling"""
    AND = '&&'
    OR = '||'

    @classmethod
    def coerce(cls, value):
        if isinstance(value, cls):
            return value
        text = str(value).strip().lower()
        if text in ('&&', 'and'):
            return cls.AND
        if text in ('||', 'or'):
            return cls.OR
        raise FilterTreeError(f"Unknown logic combinator: {value!r}")


class Operator(Enum):
    """Closed set of condition operators, valued by their canonical symbol"""
    EQUALS = '=='
    NOT_EQUALS = '!='
    CONTAINS = 'contains'
    MATCHES = 'matches'
    GREATER_THAN = '>'
    LESS_THAN = '<'
    GREATER_OR_EQUAL = '>='
    LESS_OR_EQUAL = '<='
    EXISTS = 'exists'
    NEGATED_EXISTS = '!'

    @property
    def takes_value(self):
        return self not in (Operator.EXISTS, Operator.NEGATED_EXISTS)

    @classmethod
    def coerce(cls, value):
        """
        Map an operator member, identifier or alias onto the closed set.

        Unrecognized input degrades to EXISTS instead of failing.
        """
        if isinstance(value, cls):
            return value
        text = str(value).strip().lower()
        for member in cls:
            if text == member.value or text == member.name.lower():
                return member
        if text in COMPARISON_ALIASES:
            return COMPARISON_ALIASES[text]
        logger.debug(f"Unknown operator {value!r}, falling back to exists")
        return cls.EXISTS


# Every spelling the tokenizer accepts between a field and its value
COMPARISON_ALIASES = {
    '==': Operator.EQUALS,
    'eq': Operator.EQUALS,
    '!=': Operator.NOT_EQUALS,
    'ne': Operator.NOT_EQUALS,
    'contains': Operator.CONTAINS,
    'matches': Operator.MATCHES,
    '~': Operator.MATCHES,
    '>': Operator.GREATER_THAN,
    'gt': Operator.GREATER_THAN,
    '<': Operator.LESS_THAN,
    'lt': Operator.LESS_THAN,
    '>=': Operator.GREATER_OR_EQUAL,
    'ge': Operator.GREATER_OR_EQUAL,
    '<=': Operator.LESS_OR_EQUAL,
    'le': Operator.LESS_OR_EQUAL,
}


class NodeKind(Enum):
    CONDITION = 'condition'
    GROUP = 'group'


@dataclass(frozen=True)
class FilterNode:
    """
    Base of the filter tree.

    `logic` relates the node to its immediately preceding sibling and is
    ignored for the first node of any sibling list.
    """
    id: int
    logic: Logic = Logic.AND

    kind: ClassVar[NodeKind]

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'kind': self.kind.value,
            'logic': self.logic.value,
        }


@dataclass(frozen=True)
class Condition(FilterNode):
    """Leaf comparing a field against a value, or testing its presence"""
    field: str = ''
    operator: Operator = Operator.EXISTS
    value: str = ''

    kind: ClassVar[NodeKind] = NodeKind.CONDITION

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data.update({
            'field': self.field,
            'operator': self.operator.value,
            'value': self.value,
        })
        return data


@dataclass(frozen=True)
class Group(FilterNode):
    """Parenthesized run of sibling nodes, optionally excluded as a whole"""
    negated: bool = False
    children: Tuple[FilterNode, ...] = ()

    kind: ClassVar[NodeKind] = NodeKind.GROUP

    def __post_init__(self):
        children = tuple(self.children)
        if not children:
            raise FilterTreeError(f"Group {self.id} must contain at least one node")
        object.__setattr__(self, 'children', children)

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data.update({
            'negated': self.negated,
            'children': [child.to_dict() for child in self.children],
        })
        return data
