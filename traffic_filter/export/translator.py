# traffic_filter/export/translator.py

from typing import Dict, Iterable, Optional

from traffic_filter.tree.nodes import FilterNode, Group, Logic, Operator
from traffic_filter.utils.dictionaries import (
    DEFAULT_FIELD_LABELS, DEFAULT_OPERATOR_LABELS, DEFAULT_VOCABULARY, as_operator_label
)


class FilterTranslator:
    """
    Describes a filter tree in natural language.

    Field and operator labels come from lookup tables keyed by the raw
    identifiers; anything missing from a table is shown as-is.
    """
    def __init__(self, field_labels: Optional[Dict[str, str]] = None,
                 operator_labels: Optional[Dict[str, object]] = None,
                 vocabulary: Optional[Dict[str, str]] = None):
        self.field_labels = DEFAULT_FIELD_LABELS if field_labels is None else field_labels
        if operator_labels is None:
            operator_labels = DEFAULT_OPERATOR_LABELS
        # Accepts OperatorLabel pairs, bare label strings or {symbol, label} mappings
        self.operator_labels = {
            identifier: as_operator_label(identifier, entry)
            for identifier, entry in operator_labels.items()
        }
        self.vocabulary = dict(DEFAULT_VOCABULARY)
        if vocabulary:
            self.vocabulary.update(vocabulary)

    @classmethod
    def from_dictionaries(cls, dictionaries):
        """Build a translator from a LabelDictionaries bundle"""
        return cls(dictionaries.fields, dictionaries.operators, dictionaries.vocabulary)

    def field_label(self, field: str) -> str:
        return self.field_labels.get(field) or field

    def operator_label(self, operator: Operator) -> str:
        entry = self.operator_labels.get(operator.value)
        if entry is None:
            return operator.value
        return entry.label or operator.value

    def logic_label(self, logic: Logic) -> str:
        return self.vocabulary['and' if logic is Logic.AND else 'or']

    def translate_node(self, node: FilterNode) -> str:
        if isinstance(node, Group):
            prefix = f"{self.vocabulary['exclude']} " if node.negated else ''
            return f"{prefix}({self.translate(node.children)})"

        label = self.field_label(node.field)
        if node.operator is Operator.EXISTS:
            return f"{self.vocabulary['capture']} {label}"
        if node.operator is Operator.NEGATED_EXISTS:
            return f"{self.vocabulary['exclude']} {label}"

        value = f'"{node.value}"' if node.value else self.vocabulary['empty']
        return f"{label} {self.operator_label(node.operator)} {value}"

    def translate(self, nodes: Iterable[FilterNode]) -> str:
        parts = []
        for index, node in enumerate(nodes):
            if index:
                parts.append(f" {self.logic_label(node.logic)} ")
            parts.append(self.translate_node(node))
        return ''.join(parts)
