"""
Command line front end for yapCSG.

Usage:
    python -m yapcsg OPERATION A.stl B.stl -o OUT.stl [--epsilon E]
                     [--config FILE.yaml] [--ascii] [-v]

OPERATION is one of ``union``, ``subtract`` (``difference``) or
``intersect``.  The result is written as STL and a one-line summary
(polygon count and enclosed volume) is printed.

Examples:
    python -m yapcsg union base.stl boss.stl -o part.stl
    python -m yapcsg difference part.stl hole.stl -o drilled.stl --epsilon 1e-6
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional, Sequence

from yapcsg.analysis import volume
from yapcsg.boolean import combine
from yapcsg.config import CsgConfig, load_config
from yapcsg.errors import CsgError
from yapcsg.io.stl import read_stl, write_stl

logger = logging.getLogger(__name__)

_OPERATIONS = ('union', 'subtract', 'subtraction', 'difference',
               'intersect', 'intersection')


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='yapcsg',
        description='Boolean operations on closed STL meshes using BSP trees.',
    )
    parser.add_argument('operation', choices=_OPERATIONS,
                        help='boolean operation to perform')
    parser.add_argument('a', help='first operand (STL)')
    parser.add_argument('b', help='second operand (STL)')
    parser.add_argument('-o', '--output', required=True, help='output STL path')
    parser.add_argument('--epsilon', type=float, default=None,
                        help='plane coincidence tolerance (overrides --config)')
    parser.add_argument('--config', default=None,
                        help='YAML file with tolerance settings')
    parser.add_argument('--ascii', action='store_true',
                        help='write ASCII STL instead of binary')
    parser.add_argument('-v', '--verbose', action='count', default=0,
                        help='increase log verbosity (-v info, -vv debug)')
    return parser


def _configure_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG
    logging.basicConfig(level=level, format='%(levelname)s %(name)s: %(message)s')


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    _configure_logging(args.verbose)

    try:
        config = load_config(args.config) if args.config else CsgConfig()
        if args.epsilon is not None:
            config = CsgConfig(epsilon=args.epsilon)
        logger.info('reading %s and %s', args.a, args.b)
        soup_a = read_stl(args.a)
        soup_b = read_stl(args.b)
        result = combine(args.operation, soup_a, soup_b, config.epsilon)
        write_stl(result, args.output, binary=not args.ascii)
    except CsgError as exc:
        print(f'error: {exc}', file=sys.stderr)
        return 2
    except OSError as exc:
        print(f'error: {exc}', file=sys.stderr)
        return 1

    logger.info('wrote %s', args.output)
    print(f'{args.operation}: {len(result)} polygons, volume {volume(result):.6g}')
    return 0


if __name__ == '__main__':  # pragma: no cover
    sys.exit(main())
