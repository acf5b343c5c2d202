# traffic_filter/main.py
import argparse
import json
import logging
import sys

from traffic_filter.tree.nodes import Group
from traffic_filter.tree.store import FilterTree
from traffic_filter.export.serializer import serialize
from traffic_filter.export.translator import FilterTranslator
from traffic_filter.utils.helpers import setup_logging, load_config
from traffic_filter.utils.dictionaries import load_dictionaries, BUNDLED_LABELS_ZH

logger = logging.getLogger('traffic_filter')


def format_tree(nodes, indent=0):
    """Render the tree as an indented outline, one node per line"""
    lines = []
    for index, node in enumerate(nodes):
        pad = '  ' * indent
        logic = f"{node.logic.value} " if index else ''
        if isinstance(node, Group):
            marker = '!( ... )' if node.negated else '( ... )'
            lines.append(f"{pad}{logic}[{node.id}] {marker}")
            lines.extend(format_tree(node.children, indent + 1))
        else:
            value = f" {node.value!r}" if node.operator.takes_value else ''
            lines.append(f"{pad}{logic}[{node.id}] {node.field} {node.operator.value}{value}")
    return lines


def main(argv=None):
    parser = argparse.ArgumentParser(description='Display filter builder and translator')
    parser.add_argument('expression', nargs='?', help='Filter expression to parse')
    parser.add_argument('-c', '--config', type=str, default='config.yaml', help='YAML configuration file')
    parser.add_argument('-l', '--labels', type=str, help='YAML label dictionary for the translation')
    parser.add_argument('--zh', action='store_true', help='Use the bundled Chinese label dictionary')
    parser.add_argument('--tree', action='store_true', help='Print the parsed tree as an outline')
    parser.add_argument('--json', action='store_true', help='Print the parsed tree as JSON')
    parser.add_argument('--list-fields', action='store_true', help='List known fields and exit')
    parser.add_argument('-v', '--verbose', action='store_true', help='Verbose output')
    parser.add_argument('--version', action='version', version='traffic-filter 0.1.0')
    args = parser.parse_args(argv)

    config = load_config(args.config)
    level = logging.DEBUG if args.verbose else config['logging']['level']
    setup_logging(level, config['logging']['file'])
    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)
        logger.debug("Verbose logging enabled.")

    labels_path = args.labels or (BUNDLED_LABELS_ZH if args.zh else config['dictionaries']['path'])
    try:
        dictionaries = load_dictionaries(labels_path)
    except (OSError, ValueError) as e:
        logger.error(f"Failed to load label dictionary {labels_path}: {e}")
        return 1

    if args.list_fields:
        print("Known fields:")
        for field, label in sorted(dictionaries.fields.items()):
            print(f"• {field} - {label}")
        return 0

    if args.expression is None:
        parser.error('an expression is required unless --list-fields is given')

    initial = FilterTree.initial(config['tree']['initial_field'])
    tree = initial.load_expression(args.expression)
    if tree is initial:
        logger.error(f"No filter could be parsed from {args.expression!r}")
        return 1

    translator = FilterTranslator.from_dictionaries(dictionaries)

    if args.json:
        print(json.dumps(tree.to_list(), indent=2, ensure_ascii=False))
        return 0

    print(f"Expression: {serialize(tree)}")
    print(f"Description: {translator.translate(tree)}")
    if args.tree:
        print("Tree:")
        for line in format_tree(tree, indent=1):
            print(line)

    return 0


if __name__ == '__main__':
    sys.exit(main())
