# traffic_filter/parser/__init__.py

from traffic_filter.parser.tokenizer import Token, TokenType, tokenize
from traffic_filter.parser.filter_parser import FilterParser, parse_filter

__all__ = ['Token', 'TokenType', 'tokenize', 'FilterParser', 'parse_filter']
