# tests/test_roundtrip.py

import random

import pytest
from traffic_filter.parser.filter_parser import parse_filter
from traffic_filter.export.serializer import serialize
from traffic_filter.tree.nodes import Condition, Group, Operator
from traffic_filter.tree.store import FilterTree

FIELDS = ['http', 'tcp.port', 'http.host', 'ip.src', 'dns.qry.name', 'frame.len']
VALUES = ['GET', '80', '0x1F', 'a b', 'say "hi"', '', '10.0.0.1', 'back\\slash', 'x && (y)']


def build_random_tree(seed, steps=40):
    rng = random.Random(seed)
    tree = FilterTree.initial()
    for _ in range(steps):
        groups = [node.id for node in tree.walk() if isinstance(node, Group)]
        parent = rng.choice([None] + groups)
        tree = tree.add(parent_id=parent, kind=rng.choice(['condition', 'condition', 'group']))
        if rng.random() < 0.2:
            tree = tree.remove(rng.choice(tree.ids()))

    for node in list(tree.walk()):
        if isinstance(node, Condition):
            tree = tree.update(
                node.id,
                field=rng.choice(FIELDS),
                operator=rng.choice(list(Operator)),
                value=rng.choice(VALUES),
                logic=rng.choice(['&&', '||']),
            )
        else:
            tree = tree.update(node.id, negated=rng.random() < 0.5, logic=rng.choice(['&&', '||']))
    return tree


@pytest.mark.parametrize('seed', range(25))
def test_textual_round_trip(seed):
    tree = build_random_tree(seed)
    text = serialize(tree)
    reparsed = tree.load_expression(text)
    assert reparsed is not tree
    assert serialize(reparsed) == text


@pytest.mark.parametrize('text', [
    'http.request.method == "GET" && tcp.port eq 80',
    '!(http && tcp) or dns',
    'a contains "x y" || (b ~ "^GET" && !(c ne 0x10))',
    'tcp.port == 80 ) trailing',
    '(unclosed && group',
    '!tcp.port == 80',
    'a b c',
])
def test_serialization_is_idempotent(text):
    once = serialize(parse_filter(text))
    assert serialize(parse_filter(once)) == once


def assert_round_trips(tree):
    text = serialize(tree)
    reparsed = tree.load_expression(text)
    assert reparsed is not tree
    assert serialize(reparsed) == text
    assert len(list(reparsed.walk())) == len(list(tree.walk()))


def test_untouched_added_condition_round_trips():
    tree = FilterTree.initial().add()
    assert serialize(tree) == 'http && ""'
    assert_round_trips(tree)


def test_untouched_added_group_round_trips():
    tree = FilterTree.initial().add(kind='group')
    assert serialize(tree) == 'http && ("")'
    assert_round_trips(tree)


def test_untouched_edits_round_trip():
    tree = FilterTree.initial()
    for _ in range(3):
        tree = tree.add().add(kind='group')
    tree = tree.add(parent_id=tree.ids()[-2], kind='group')
    assert_round_trips(tree)


@pytest.mark.parametrize('field', [
    '', 'ip src', 'and', 'OR', 'not', 'eq', 'contains', 'matches',
    'a(b)', 'x==y', 'a&b', 'pipe|d', 'til~de', 'say"hi', 'back\\slash',
    'line\nbreak', 'tab\there', '!bang', '<tag>',
])
@pytest.mark.parametrize('operator', [Operator.EXISTS, Operator.NEGATED_EXISTS, Operator.EQUALS])
def test_unusual_field_names_round_trip(field, operator):
    tree = FilterTree.initial().add().update(2, field=field, operator=operator, value='GET')
    assert_round_trips(tree)
    assert tree.load_expression(serialize(tree)).roots[1].field == field
