from .api import RunOptions, RunResult, run_file, run_string
from .errors import (
    BrainFuckError,
    CellsOverflow,
    CellsUnderflow,
    JumpsError,
    TokensOverflow,
    TokensUnderflow,
)
from .interpreter import DEFAULT_CELL_BITS, DEFAULT_CELL_CAPACITY, Interpreter
from .output import CaptureSink, Char, DecimalText, InputNotImplemented, NonPrintable, StreamSink
from .tokens import DEFAULT_TOKEN_CAPACITY, Token, Tokenizer, tokenize

__all__ = [
    'Token',
    'Tokenizer',
    'tokenize',
    'Interpreter',
    'RunOptions',
    'RunResult',
    'run_string',
    'run_file',
    'CaptureSink',
    'StreamSink',
    'Char',
    'NonPrintable',
    'DecimalText',
    'InputNotImplemented',
    'BrainFuckError',
    'TokensOverflow',
    'TokensUnderflow',
    'CellsOverflow',
    'CellsUnderflow',
    'JumpsError',
    'DEFAULT_TOKEN_CAPACITY',
    'DEFAULT_CELL_CAPACITY',
    'DEFAULT_CELL_BITS',
]
