# traffic_filter/utils/__init__.py

from traffic_filter.utils.helpers import setup_logging, load_config, deep_merge
from traffic_filter.utils.dictionaries import (
    OperatorLabel, LabelDictionaries, load_dictionaries, as_operator_label,
    DEFAULT_FIELD_LABELS, DEFAULT_OPERATOR_LABELS, DEFAULT_VOCABULARY,
    BUNDLED_LABELS_ZH
)

__all__ = [
    'setup_logging', 'load_config', 'deep_merge',
    'OperatorLabel', 'LabelDictionaries', 'load_dictionaries', 'as_operator_label',
    'DEFAULT_FIELD_LABELS', 'DEFAULT_OPERATOR_LABELS', 'DEFAULT_VOCABULARY',
    'BUNDLED_LABELS_ZH'
]
