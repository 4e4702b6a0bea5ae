from __future__ import annotations

from enum import IntEnum
from typing import Dict, Iterator, Union

import numpy as np

from .errors import TokensOverflow, make_error

DEFAULT_TOKEN_CAPACITY = 4096


class Token(IntEnum):
    STOP = 0  # sentinel: empty slot and end of program
    INC_PTR = 1
    DEC_PTR = 2
    INC_CELL = 3
    DEC_CELL = 4
    OUTPUT = 5
    INPUT = 6
    OPEN_BRACKET = 7
    CLOSE_BRACKET = 8


CHAR_TO_TOKEN: Dict[int, Token] = {
    ord('>'): Token.INC_PTR,
    ord('<'): Token.DEC_PTR,
    ord('+'): Token.INC_CELL,
    ord('-'): Token.DEC_CELL,
    ord('.'): Token.OUTPUT,
    ord(','): Token.INPUT,
    ord('['): Token.OPEN_BRACKET,
    ord(']'): Token.CLOSE_BRACKET,
}

TOKEN_TO_CHAR: Dict[Token, str] = {tok: chr(c) for c, tok in CHAR_TO_TOKEN.items()}


class Tokenizer:
    """Translates program text into a fixed-capacity token buffer.

    The buffer is pre-filled with ``Token.STOP``; the first ``STOP`` marks the
    logical end of the program. Recognised characters are appended in order,
    everything else is dropped. A tokenizer parses once: after an overflow it
    stays failed.
    """

    def __init__(self, capacity: int = DEFAULT_TOKEN_CAPACITY):
        if capacity < 1:
            raise ValueError(f'Token capacity must be at least 1, got {capacity}')
        self.capacity = int(capacity)
        self.tokens = np.full(self.capacity, Token.STOP, dtype=np.uint8)
        self.length = 0
        self.failed = False
        self.parsed = False

    def parse(self, source: Union[bytes, bytearray, str]) -> None:
        if self.failed:
            raise self._overflow('Tokenizer already failed on a previous parse')
        if self.parsed:
            raise RuntimeError('Tokenizer instances parse once; create a new one')
        self.parsed = True
        if isinstance(source, str):
            source = source.encode('utf-8')

        for byte in source:
            tok = CHAR_TO_TOKEN.get(byte)
            if tok is None:
                continue
            if self.length == self.capacity:
                self.failed = True
                raise self._overflow(f'Program has more than {self.capacity} instructions')
            self.tokens[self.length] = tok
            self.length += 1

    def _overflow(self, message: str) -> TokensOverflow:
        return make_error(TokensOverflow, message=message, program=self.to_source())

    def __len__(self) -> int:
        return self.length

    def __iter__(self) -> Iterator[Token]:
        for i in range(self.length):
            yield Token(int(self.tokens[i]))

    def to_source(self) -> str:
        return ''.join(TOKEN_TO_CHAR[tok] for tok in self)


def tokenize(source: Union[bytes, bytearray, str], *, capacity: int = DEFAULT_TOKEN_CAPACITY) -> Tokenizer:
    tokenizer = Tokenizer(capacity)
    tokenizer.parse(source)
    return tokenizer
