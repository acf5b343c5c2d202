# tests/test_serializer.py

import pytest
from traffic_filter.parser.filter_parser import parse_filter
from traffic_filter.export.serializer import format_field, format_value, serialize, serialize_node
from traffic_filter.tree.nodes import Condition, Group, Logic, Operator
from traffic_filter.tree.store import FilterTree


def test_quoting_policy():
    text = serialize([Condition(id=1, field='http.request.method', operator=Operator.EQUALS, value='GET')])
    assert text == 'http.request.method == "GET"'
    text = serialize([Condition(id=1, field='tcp.port', operator=Operator.EQUALS, value='80')])
    assert text == 'tcp.port == 80'


@pytest.mark.parametrize('value,expected', [
    ('', '""'),
    ('80', '80'),
    ('1.5', '1.5'),
    ('10.0.0.1', '10.0.0.1'),
    ('0x1F', '0x1F'),
    ('0xzz', '"0xzz"'),
    ('GET', '"GET"'),
    ('a b', '"a b"'),
    ('say "hi"', '"say \\"hi\\""'),
    ('C:\\temp', '"C:\\\\temp"'),
])
def test_format_value(value, expected):
    assert format_value(value) == expected


def test_exists_operators():
    assert serialize_node(Condition(id=1, field='http')) == 'http'
    assert serialize_node(Condition(id=1, field='http', operator=Operator.NEGATED_EXISTS)) == '!http'


def test_value_ignored_for_exists():
    assert serialize_node(Condition(id=1, field='http', value='GET')) == 'http'


def test_empty_value_renders_empty_quotes():
    node = Condition(id=1, field='http.host', operator=Operator.CONTAINS)
    assert serialize_node(node) == 'http.host contains ""'


def test_logic_prefixes():
    nodes = [
        Condition(id=1, field='a', logic=Logic.OR),
        Condition(id=2, field='b', logic=Logic.OR),
        Condition(id=3, field='c'),
    ]
    assert serialize(nodes) == 'a || b && c'


def test_groups():
    tree = FilterTree((
        Group(id=1, negated=True, children=(
            Condition(id=2, field='http'),
            Condition(id=3, field='tcp'),
        )),
        Condition(id=4, field='dns', logic=Logic.OR),
    ))
    assert serialize(tree) == '!(http && tcp) || dns'


def test_serialize_parsed_expression():
    text = '!(http.request.method == "POST" || http.response.code >= 400) && !arp && ip.src == 10.0.0.1'
    assert serialize(parse_filter(text)) == text


def test_empty_sequence():
    assert serialize([]) == ''


@pytest.mark.parametrize('field,expected', [
    ('tcp.port', 'tcp.port'),
    ('sip.Request-Line', 'sip.Request-Line'),
    ('', '""'),
    ('ip src', '"ip src"'),
    ('a(b)', '"a(b)"'),
    ('x==y', '"x==y"'),
    ('and', '"and"'),
    ('OR', '"OR"'),
    ('not', '"not"'),
    ('eq', '"eq"'),
    ('contains', '"contains"'),
    ('say"hi', '"say\\"hi"'),
])
def test_format_field(field, expected):
    assert format_field(field) == expected


@pytest.mark.parametrize('value,expected', [
    ('a\nb', '"a\\nb"'),
    ('a\r\nb', '"a\\r\\nb"'),
    ('col1\tcol2', '"col1\\tcol2"'),
])
def test_control_characters_are_escaped(value, expected):
    assert format_value(value) == expected


def test_multiline_value_stays_on_one_line():
    node = Condition(id=1, field='http.user_agent', operator=Operator.CONTAINS, value='line1\nline2\r\tend')
    text = serialize([node])
    assert '\n' not in text and '\r' not in text and '\t' not in text
    reparsed = parse_filter(text)
    assert reparsed[0].value == 'line1\nline2\r\tend'
    assert serialize(reparsed) == text


def test_quoted_field_is_read_back_unquoted():
    node = parse_filter('"ip src" == 1')[0]
    assert node.field == 'ip src'
    assert serialize([node]) == '"ip src" == 1'
