#!/usr/bin/env python3
from __future__ import annotations

import argparse
import sys
from typing import List, Optional

from .api import RunOptions, run_string
from .errors import BrainFuckError
from .interpreter import CELL_DTYPES, DEFAULT_CELL_BITS, DEFAULT_CELL_CAPACITY
from .output import StreamSink
from .tokens import DEFAULT_TOKEN_CAPACITY


def _read_source(path: str) -> bytes:
    if path == '-':
        return sys.stdin.buffer.read()
    with open(path, 'rb') as f:
        return f.read()


def _format_cells(cells: List[int], dp: int) -> str:
    rows: List[str] = []
    for i in range(0, len(cells), 8):
        row = []
        for j, v in enumerate(cells[i:i + 8], start=i):
            row.append(f'[{v}]' if j == dp else str(v))
        rows.append(f'{i:4d}: ' + ' '.join(row))
    return '\n'.join(rows)


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        prog='bfinterp',
        description='Fixed-capacity Brainfuck interpreter.',
    )
    parser.add_argument('file', help="Program file, or '-' for stdin")
    parser.add_argument('--tokens', type=int, default=DEFAULT_TOKEN_CAPACITY,
                        help=f'Token buffer capacity (default {DEFAULT_TOKEN_CAPACITY})')
    parser.add_argument('--cells', type=int, default=DEFAULT_CELL_CAPACITY,
                        help=f'Cell tape capacity (default {DEFAULT_CELL_CAPACITY})')
    parser.add_argument('--cell-bits', type=int, default=DEFAULT_CELL_BITS, choices=sorted(CELL_DTYPES),
                        help=f'Cell width in bits (default {DEFAULT_CELL_BITS})')
    parser.add_argument('--trace', action='store_true', help='Print the execution trace to stderr')
    parser.add_argument('--dump-cells', action='store_true', help='Print the final tape after the run')
    parser.add_argument('--quiet', action='store_true', help='Suppress the banner lines')
    args = parser.parse_args(argv)

    try:
        source = _read_source(args.file)
    except OSError as e:
        print(f"Couldn't read {args.file}: {e}", file=sys.stderr)
        return 1

    if args.tokens < 1 or args.cells < 1:
        print('Capacities must be at least 1', file=sys.stderr)
        return 1

    options = RunOptions(
        token_capacity=args.tokens,
        cell_capacity=args.cells,
        cell_bits=args.cell_bits,
        trace=args.trace,
    )

    if not args.quiet:
        print('> Running brainfuck')
    try:
        result = run_string(source, options=options, sink=StreamSink(sys.stdout))
    except BrainFuckError as e:
        sys.stdout.flush()
        print(f'\n{e}', file=sys.stderr)
        return 1

    if args.trace:
        for line in result.trace:
            print(line, file=sys.stderr)
    if not args.quiet:
        print('\n> Done.')
    if args.dump_cells:
        print(_format_cells(result.cells, result.dp))
    return 0


if __name__ == '__main__':
    raise SystemExit(main())
