# traffic_filter/parser/tokenizer.py

import re
from dataclasses import dataclass
from enum import Enum
from typing import List

from traffic_filter.tree.nodes import COMPARISON_ALIASES


class TokenType(Enum):
    AND = 'and'
    OR = 'or'
    LPAREN = '('
    RPAREN = ')'
    NOT = 'not'
    COMPARISON = 'comparison'
    ATOM = 'atom'


_TOKEN_PATTERN = re.compile(r'''
      (?P<string>"(?:[^"\\]|\\.)*(?:"|\\?$))
    | (?P<symbol>&&|\|\||<=|>=|==|!=|[()!<>~])
    | (?P<word>[^\s()"!<>=~&|]+)
    | (?P<other>\S)
''', re.VERBOSE | re.DOTALL)

_ESCAPE_PATTERN = re.compile(r'\\(.)', re.DOTALL)

# Escapes with a meaning of their own; any other escaped character stands for itself
_ESCAPED_CHARS = {'n': '\n', 'r': '\r', 't': '\t'}

_SYMBOL_TYPES = {
    '&&': TokenType.AND,
    '||': TokenType.OR,
    '(': TokenType.LPAREN,
    ')': TokenType.RPAREN,
    '!': TokenType.NOT,
}

_KEYWORD_TYPES = {
    'and': TokenType.AND,
    'or': TokenType.OR,
    'not': TokenType.NOT,
}


@dataclass(frozen=True)
class Token:
    type: TokenType
    text: str

    @property
    def quoted(self):
        return self.type is TokenType.ATOM and self.text.startswith('"')

    @property
    def unquoted(self):
        """The literal with surrounding quotes removed and escapes resolved"""
        if not self.quoted:
            return self.text
        body = self.text[1:]
        if body.endswith('"') and not _ends_with_escape(body[:-1]):
            body = body[:-1]
        return _ESCAPE_PATTERN.sub(_resolve_escape, body)


def _resolve_escape(match):
    char = match.group(1)
    return _ESCAPED_CHARS.get(char, char)


def _ends_with_escape(text):
    trailing = len(text) - len(text.rstrip('\\'))
    return trailing % 2 == 1


def _classify(text):
    if text in _SYMBOL_TYPES:
        return _SYMBOL_TYPES[text]
    lowered = text.lower()
    if lowered in _KEYWORD_TYPES:
        return _KEYWORD_TYPES[lowered]
    if lowered in COMPARISON_ALIASES:
        return TokenType.COMPARISON
    return TokenType.ATOM


def tokenize(text: str) -> List[Token]:
    """
    Split a filter expression into tokens.

    Never fails: anything that is not a known operator, keyword or
    parenthesis becomes an ATOM. Double-quoted strings keep their quotes.
    """
    tokens = []
    for match in _TOKEN_PATTERN.finditer(text or ''):
        kind = match.lastgroup
        lexeme = match.group(kind)
        if kind == 'string':
            tokens.append(Token(TokenType.ATOM, lexeme))
        elif kind == 'other':
            tokens.append(Token(TokenType.ATOM, lexeme))
        else:
            tokens.append(Token(_classify(lexeme), lexeme))
    return tokens
