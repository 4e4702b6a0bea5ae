from __future__ import annotations

from typing import Dict, List, Optional

import numpy as np

from .errors import (
    BrainFuckError,
    CellsOverflow,
    CellsUnderflow,
    JumpsError,
    TokensOverflow,
    TokensUnderflow,
    make_error,
)
from .output import CaptureSink, InputNotImplemented, Sink, classify
from .state import ExecutionState
from .tokens import Token, Tokenizer

DEFAULT_CELL_CAPACITY = 32
DEFAULT_CELL_BITS = 32

CELL_DTYPES: Dict[int, type] = {
    8: np.uint8,
    16: np.uint16,
    32: np.uint32,
    64: np.uint64,
}


class Interpreter:
    """Executes a parsed token buffer against a fixed-capacity cell tape.

    Brackets are matched lazily: every jump scans the token buffer linearly
    from the bracket being executed. No jump table is built.

    Cells are unsigned integers of ``cell_bits`` width and wrap on
    increment/decrement, so decrementing 0 yields ``2**cell_bits - 1``.
    """

    def __init__(
        self,
        tokenizer: Tokenizer,
        *,
        cells: int = DEFAULT_CELL_CAPACITY,
        cell_bits: int = DEFAULT_CELL_BITS,
        sink: Optional[Sink] = None,
        trace: bool = False,
    ):
        if tokenizer.failed:
            raise make_error(
                TokensOverflow,
                message='Cannot execute a program that failed to parse',
                program=tokenizer.to_source(),
            )
        if cells < 1:
            raise ValueError(f'Cell capacity must be at least 1, got {cells}')
        if cell_bits not in CELL_DTYPES:
            raise ValueError(f'Unsupported cell width {cell_bits}; expected one of {sorted(CELL_DTYPES)}')

        self.tokens = tokenizer.tokens.copy()
        self.token_capacity = tokenizer.capacity
        self.program = tokenizer.to_source()
        self.cell_capacity = int(cells)
        self.cell_bits = cell_bits
        self.cell_mask = (1 << cell_bits) - 1
        self.cells = np.zeros(self.cell_capacity, dtype=CELL_DTYPES[cell_bits])
        self.sink: Sink = sink if sink is not None else CaptureSink()
        self.state = ExecutionState(is_tracing=trace)
        self.halted = False
        self.error: Optional[BrainFuckError] = None
        self._started = False

    def _error(self, kind, message: str) -> BrainFuckError:
        self.error = make_error(kind, message=message, program=self.program, ip=self.state.ip, dp=self.state.dp)
        return self.error

    def _token_at(self, idx: int) -> Token:
        return Token(int(self.tokens[idx]))

    def cell_values(self) -> List[int]:
        return [int(v) for v in self.cells]

    def execute(self) -> None:
        if self._started:
            raise RuntimeError('Interpreter instances run once; create a new one')
        self._started = True
        while not self.step():
            pass

    def step(self) -> bool:
        """Execute the instruction under the instruction pointer.

        Returns True once the sentinel is reached. Raises a ``BrainFuckError``
        subclass on any overflow, underflow or jump failure; after that the
        same error is raised again on every call.
        """
        if self.error is not None:
            raise self.error
        if self.halted:
            return True
        st = self.state
        tok = self._token_at(st.ip)

        if tok == Token.STOP:
            self.halted = True
            return True

        st.add_trace(f'Executing {tok.name} @ {st.ip}')

        if tok == Token.INC_PTR:
            if st.dp + 1 == self.cell_capacity:
                raise self._error(CellsOverflow, f'Data pointer moved past cell {self.cell_capacity - 1}')
            st.dp += 1
        elif tok == Token.DEC_PTR:
            if st.dp == 0:
                raise self._error(CellsUnderflow, 'Data pointer moved left of cell 0')
            st.dp -= 1
        elif tok == Token.INC_CELL:
            self.cells[st.dp] = (int(self.cells[st.dp]) + 1) & self.cell_mask
        elif tok == Token.DEC_CELL:
            self.cells[st.dp] = (int(self.cells[st.dp]) - 1) & self.cell_mask
        elif tok == Token.OUTPUT:
            self.sink.write(classify(int(self.cells[st.dp])))
        elif tok == Token.INPUT:
            self.sink.write(InputNotImplemented())
        elif tok == Token.OPEN_BRACKET:
            self._open_bracket()
        elif tok == Token.CLOSE_BRACKET:
            self._close_bracket()

        st.steps += 1
        if st.ip + 1 == self.token_capacity:
            raise self._error(TokensOverflow, 'Instruction pointer ran off the end of the token buffer')
        st.ip += 1
        return False

    def _open_bracket(self) -> None:
        st = self.state
        if st.nesting != 0:
            raise self._error(JumpsError, f'Entered a bracket with nesting {st.nesting}')
        if self.cells[st.dp] != 0:
            return

        start = st.ip
        while True:
            if st.ip + 1 == self.token_capacity:
                raise self._error(JumpsError, f"No matching ']' for '[' at {start}")
            st.ip += 1
            tok = self._token_at(st.ip)
            if tok == Token.CLOSE_BRACKET:
                if st.nesting == 0:
                    break
                st.nesting -= 1
            elif tok == Token.OPEN_BRACKET:
                st.nesting += 1
        st.add_trace(f'Jump forward {start} -> {st.ip}')

    def _close_bracket(self) -> None:
        st = self.state
        if st.nesting != 0:
            raise self._error(JumpsError, f'Entered a bracket with nesting {st.nesting}')
        if self.cells[st.dp] == 0:
            return

        start = st.ip
        while True:
            if st.ip == 0:
                raise self._error(TokensUnderflow, f"No matching '[' for ']' at {start}")
            st.ip -= 1
            tok = self._token_at(st.ip)
            if tok == Token.OPEN_BRACKET:
                if st.nesting == 0:
                    break
                st.nesting -= 1
            elif tok == Token.CLOSE_BRACKET:
                st.nesting += 1
        st.add_trace(f'Jump back {start} -> {st.ip}')
