# traffic_filter/export/__init__.py

from traffic_filter.export.serializer import (
    serialize, serialize_node, format_value, format_field, quote
)
from traffic_filter.export.translator import FilterTranslator

__all__ = [
    'serialize', 'serialize_node', 'format_value', 'format_field', 'quote',
    'FilterTranslator'
]
