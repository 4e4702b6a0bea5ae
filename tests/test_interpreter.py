#!/usr/bin/env python3
"""
Interpreter state machine: pointer moves, wraparound, loops, jump failures.
"""

import sys
import os
sys.path.append(os.path.join(os.path.dirname(__file__), '..', 'src'))

import pytest

from bfinterp import (
    CaptureSink,
    CellsOverflow,
    CellsUnderflow,
    Char,
    InputNotImplemented,
    Interpreter,
    JumpsError,
    NonPrintable,
    Token,
    TokensOverflow,
    TokensUnderflow,
    Tokenizer,
    tokenize,
)


def run(source, *, tokens=64, cells=8, cell_bits=32, trace=False):
    sink = CaptureSink()
    interp = Interpreter(tokenize(source, capacity=tokens), cells=cells, cell_bits=cell_bits, sink=sink, trace=trace)
    interp.execute()
    return interp, sink


def test_empty_program_halts_after_zero_steps():
    interp, sink = run('')
    assert interp.state.steps == 0
    assert interp.state.ip == 0
    assert interp.halted
    assert sink.events == []


def test_comment_only_program_halts():
    interp, _ = run('no instructions here')
    assert interp.state.steps == 0


def test_move_left_from_zero_underflows():
    with pytest.raises(CellsUnderflow) as exc:
        run('<')
    assert exc.value.dp == 0
    assert exc.value.ip == 0


def test_move_right_from_last_cell_overflows():
    interp, _ = run('>>>', cells=4)
    assert interp.state.dp == 3
    with pytest.raises(CellsOverflow) as exc:
        run('>>>>', cells=4)
    assert exc.value.dp == 3


@pytest.mark.parametrize('n', [0, 1, 5, 42])
def test_transfer_loop(n):
    interp, _ = run('+' * n + '[->+<]', tokens=128)
    assert interp.cell_values()[:2] == [0, n]
    assert interp.state.nesting == 0


def test_transfer_loop_from_wrapped_value():
    # 0 - 1 wraps to 255 in an 8-bit cell
    interp, _ = run('-[->+<]', tokens=16, cell_bits=8)
    assert interp.cell_values()[:2] == [0, 255]


@pytest.mark.parametrize('bits', [8, 16, 32, 64])
def test_decrement_zero_wraps_to_max(bits):
    interp, _ = run('-', cell_bits=bits)
    assert interp.cell_values()[0] == 2 ** bits - 1


def test_increment_wraps_to_zero():
    interp, _ = run('-+', cell_bits=8)
    assert interp.cell_values()[0] == 0
    interp, _ = run('+' * 256, tokens=512, cell_bits=8)
    assert interp.cell_values()[0] == 0


def test_nested_loops():
    # 3 * 4 into cell 2 using an inner loop
    src = '+++[>++++[>+<-]<-]'
    interp, _ = run(src)
    assert interp.cell_values()[:3] == [0, 0, 12]


def test_skipped_loop_with_nested_brackets():
    interp, _ = run('[[+]>+]+')
    assert interp.cell_values()[:2] == [1, 0]
    assert interp.state.nesting == 0


def test_output_events():
    _, sink = run('+' * 65 + '.', tokens=128)
    assert sink.events == [Char('A')]


def test_end_to_end_two_is_one_event():
    _, sink = run('++.', cells=1, cell_bits=8)
    assert sink.events == [NonPrintable(2)]


def test_input_is_a_stub():
    interp, sink = run('+,')
    assert sink.events == [InputNotImplemented()]
    assert interp.cell_values()[0] == 1


def test_unmatched_open_bracket_with_zero_cell():
    with pytest.raises(JumpsError):
        run('[+', tokens=16)


def test_unmatched_open_bracket_with_nonzero_cell_enters_body():
    interp, _ = run('+[>+', tokens=16)
    assert interp.cell_values()[:2] == [1, 1]


def test_unmatched_close_bracket_with_nonzero_cell():
    with pytest.raises(TokensUnderflow) as exc:
        run('+>+]', tokens=16)
    assert exc.value.ip == 0


def test_unmatched_close_bracket_with_zero_cell_falls_through():
    interp, _ = run(']+')
    assert interp.cell_values()[0] == 1


def test_nonzero_nesting_on_bracket_entry():
    interp = Interpreter(tokenize('+[-]'), cells=4)
    interp.state.nesting = 1
    with pytest.raises(JumpsError):
        interp.execute()


def test_full_buffer_runs_off_the_end():
    with pytest.raises(TokensOverflow):
        run('+' * 8, tokens=8)


def test_infinite_loop_stops_at_tape_bound():
    with pytest.raises(CellsOverflow):
        run('+[>+]', cells=4)


def test_interpreter_runs_once():
    interp, _ = run('+')
    with pytest.raises(RuntimeError):
        interp.execute()


def test_failed_tokenizer_is_rejected():
    t = Tokenizer(capacity=1)
    with pytest.raises(TokensOverflow):
        t.parse('++')
    with pytest.raises(TokensOverflow):
        Interpreter(t)


def test_step_by_step():
    interp = Interpreter(tokenize('+>+'), cells=4)
    assert interp.step() is False
    assert interp.cell_values()[0] == 1
    assert interp.step() is False
    assert interp.state.dp == 1
    assert interp.step() is False
    assert interp.step() is True
    assert interp.state.steps == 3


def test_trace_records_instructions_and_jumps():
    interp, _ = run('++[-]', trace=True)
    assert interp.state.trace[0] == 'Executing INC_CELL @ 0'
    assert 'Jump back 4 -> 2' in interp.state.trace


def test_trace_disabled_by_default():
    interp, _ = run('+[-]')
    assert interp.state.trace == []


def test_invalid_configuration():
    with pytest.raises(ValueError):
        Interpreter(tokenize('+'), cells=0)
    with pytest.raises(ValueError):
        Interpreter(tokenize('+'), cell_bits=12)


def test_failed_run_cannot_be_resumed():
    interp = Interpreter(tokenize('+.]'), cells=4)
    with pytest.raises(TokensUnderflow) as first:
        interp.execute()
    assert interp.error is first.value
    assert not interp.halted
    with pytest.raises(TokensUnderflow) as again:
        interp.step()
    assert again.value is first.value
    assert interp.cell_values()[0] == 1


def test_program_is_fixed_at_construction():
    t = Tokenizer(capacity=8)
    t.parse('+')
    interp = Interpreter(t, cells=4)
    t.tokens[1] = Token.INC_CELL
    interp.execute()
    assert interp.cell_values()[0] == 1
