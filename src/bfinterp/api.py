from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Tuple, Union

from .interpreter import DEFAULT_CELL_BITS, DEFAULT_CELL_CAPACITY, Interpreter
from .output import CaptureSink, Event, Sink, TeeSink, render
from .tokens import DEFAULT_TOKEN_CAPACITY, tokenize


@dataclass(frozen=True)
class RunOptions:
    token_capacity: int = DEFAULT_TOKEN_CAPACITY
    cell_capacity: int = DEFAULT_CELL_CAPACITY
    cell_bits: int = DEFAULT_CELL_BITS
    trace: bool = False


@dataclass(frozen=True)
class RunResult:
    events: Tuple[Event, ...]
    cells: List[int]
    dp: int
    steps: int
    trace: List[str]

    @property
    def text(self) -> str:
        return ''.join(render(e) for e in self.events)


def run_string(
    source: Union[str, bytes],
    *,
    options: Optional[RunOptions] = None,
    sink: Optional[Sink] = None,
) -> RunResult:
    opts = options or RunOptions()
    program = tokenize(source, capacity=opts.token_capacity)
    capture = CaptureSink()
    interp = Interpreter(
        program,
        cells=opts.cell_capacity,
        cell_bits=opts.cell_bits,
        sink=capture if sink is None else TeeSink(capture, sink),
        trace=opts.trace,
    )
    interp.execute()
    return RunResult(
        events=tuple(capture.events),
        cells=interp.cell_values(),
        dp=interp.state.dp,
        steps=interp.state.steps,
        trace=list(interp.state.trace),
    )


def run_file(
    path: Union[str, Path],
    *,
    options: Optional[RunOptions] = None,
    sink: Optional[Sink] = None,
) -> RunResult:
    return run_string(Path(path).read_bytes(), options=options, sink=sink)
