# tests/test_tokenizer.py

import pytest
from traffic_filter.parser.tokenizer import TokenType, tokenize


def types(text):
    return [token.type for token in tokenize(text)]


def test_end_to_end_expression():
    tokens = tokenize('http.request.method == "GET" && tcp.port eq 80')
    assert [t.text for t in tokens] == ['http.request.method', '==', '"GET"', '&&', 'tcp.port', 'eq', '80']
    assert [t.type for t in tokens] == [
        TokenType.ATOM, TokenType.COMPARISON, TokenType.ATOM, TokenType.AND,
        TokenType.ATOM, TokenType.COMPARISON, TokenType.ATOM
    ]


def test_symbols_without_whitespace():
    assert types('!(a>=1)||b<2') == [
        TokenType.NOT, TokenType.LPAREN, TokenType.ATOM, TokenType.COMPARISON, TokenType.ATOM,
        TokenType.RPAREN, TokenType.OR, TokenType.ATOM, TokenType.COMPARISON, TokenType.ATOM
    ]


@pytest.mark.parametrize('word', ['eq', 'ne', 'gt', 'lt', 'ge', 'le', 'contains', 'matches', '~', 'EQ'])
def test_comparison_aliases(word):
    assert types(f'field {word} 1')[1] is TokenType.COMPARISON


def test_keywords_are_whole_words():
    assert types('android or orange') == [TokenType.ATOM, TokenType.OR, TokenType.ATOM]
    assert tokenize('android')[0].text == 'android'


def test_keywords_ignore_case():
    assert types('a AND b Or c') == [TokenType.ATOM, TokenType.AND, TokenType.ATOM, TokenType.OR, TokenType.ATOM]
    assert types('not http') == [TokenType.NOT, TokenType.ATOM]


def test_quoted_string_keeps_quotes():
    token = tokenize('http.host contains "a \\"b\\" c"')[2]
    assert token.type is TokenType.ATOM
    assert token.text == '"a \\"b\\" c"'
    assert token.quoted
    assert token.unquoted == 'a "b" c'


def test_quoted_string_with_operators_inside():
    tokens = tokenize('x == "a && (b)"')
    assert len(tokens) == 3
    assert tokens[2].unquoted == 'a && (b)'


def test_unterminated_string_runs_to_end():
    token = tokenize('x == "abc def')[2]
    assert token.text == '"abc def'
    assert token.unquoted == 'abc def'


def test_bare_atom_is_not_unquoted():
    token = tokenize('80')[0]
    assert not token.quoted
    assert token.unquoted == '80'


def test_stray_characters_become_atoms():
    tokens = tokenize('= & |')
    assert [t.type for t in tokens] == [TokenType.ATOM] * 3
    assert [t.text for t in tokens] == ['=', '&', '|']


@pytest.mark.parametrize('text', ['', '   ', '\t\n', None])
def test_blank_input(text):
    assert tokenize(text) == []


def test_control_escapes_are_decoded():
    token = tokenize('x == "a\\nb\\tc\\rd\\qe"')[2]
    assert token.unquoted == 'a\nb\tc\rdqe'
