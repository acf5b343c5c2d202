# traffic_filter/parser/filter_parser.py

import logging
from typing import List, Optional, Sequence, Tuple

from traffic_filter.parser.tokenizer import Token, TokenType, tokenize
from traffic_filter.tree.nodes import (
    COMPARISON_ALIASES, Condition, FilterNode, Group, Logic, Operator
)

logger = logging.getLogger(__name__)

# Tokens that may stand in the value slot of a comparison
_VALUE_TYPES = (TokenType.ATOM, TokenType.COMPARISON)


class FilterParser:
    """
    Recursive-descent parser turning a token stream into sibling FilterNodes.

    The grammar has a single nonterminal, a sequence of conditions and
    parenthesized groups joined by && / ||. Parsing is total: malformed
    input yields whatever well-formed prefix could be recovered.
    """
    def __init__(self, tokens: Sequence[Token], first_id: int = 1):
        self.tokens = list(tokens)
        self.position = 0
        self.next_id = first_id

    def parse(self) -> Tuple[FilterNode, ...]:
        """Parse the whole token stream into a (possibly empty) forest"""
        nodes = self._parse_sequence(nested=False)
        return tuple(nodes)

    def _peek(self) -> Optional[Token]:
        if self.position < len(self.tokens):
            return self.tokens[self.position]
        return None

    def _mint_id(self):
        node_id = self.next_id
        self.next_id += 1
        return node_id

    def _parse_sequence(self, nested: bool) -> List[FilterNode]:
        nodes = []
        logic = Logic.AND
        negate = False

        while self.position < len(self.tokens):
            token = self.tokens[self.position]

            if token.type is TokenType.LPAREN:
                self.position += 1
                group = self._parse_group(logic, negate)
                if group is not None:
                    nodes.append(group)
                negate = False

            elif token.type is TokenType.RPAREN:
                if not nested:
                    logger.warning(
                        f"Unmatched ')' at token {self.position}, "
                        f"ignoring {len(self.tokens) - self.position} trailing token(s)"
                    )
                    self.position = len(self.tokens)
                return nodes

            elif token.type is TokenType.AND:
                logic = Logic.AND
                self.position += 1

            elif token.type is TokenType.OR:
                logic = Logic.OR
                self.position += 1

            elif token.type is TokenType.NOT:
                negate = not negate
                self.position += 1

            else:
                # A comparison operator where a field belongs is read as a field name
                nodes.append(self._parse_condition(logic, negate))
                negate = False

        return nodes

    def _parse_group(self, logic: Logic, negate: bool) -> Optional[Group]:
        group_id = self._mint_id()
        children = self._parse_sequence(nested=True)

        closing = self._peek()
        if closing is not None and closing.type is TokenType.RPAREN:
            self.position += 1
        else:
            logger.debug(f"Group {group_id} is not closed before end of input")

        if not children:
            logger.debug(f"Dropping empty group {group_id}")
            return None
        return Group(id=group_id, logic=logic, negated=negate, children=children)

    def _parse_condition(self, logic: Logic, negate: bool) -> FilterNode:
        field = self.tokens[self.position].unquoted
        self.position += 1

        operator_token = self._peek()
        if operator_token is None or operator_token.type is not TokenType.COMPARISON:
            operator = Operator.NEGATED_EXISTS if negate else Operator.EXISTS
            return Condition(id=self._mint_id(), logic=logic, field=field, operator=operator)

        self.position += 1
        operator = COMPARISON_ALIASES[operator_token.text.lower()]

        value = ''
        value_token = self._peek()
        if value_token is not None and value_token.type in _VALUE_TYPES:
            value = value_token.unquoted
            self.position += 1

        if not negate:
            return Condition(
                id=self._mint_id(), logic=logic, field=field, operator=operator, value=value
            )

        # !field == value excludes the whole comparison
        group_id = self._mint_id()
        condition = Condition(id=self._mint_id(), field=field, operator=operator, value=value)
        return Group(id=group_id, logic=logic, negated=True, children=(condition,))


def parse_filter(text: str, first_id: int = 1) -> Tuple[FilterNode, ...]:
    """
    Parse a filter expression into an ordered forest of FilterNodes.

    Node ids are minted from `first_id` upwards. An empty tuple means the
    text held nothing usable (empty input, pure punctuation, ...).
    """
    tokens = tokenize(text)
    nodes = FilterParser(tokens, first_id=first_id).parse()
    logger.debug(f"Parsed {len(tokens)} token(s) into {len(nodes)} root node(s)")
    return nodes
