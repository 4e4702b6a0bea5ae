from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Type, TypeVar


def _build_context(program: str, ip: Optional[int], *, context: int = 12) -> str:
    if not program:
        return ''
    if ip is None:
        return f'  | {program[-2 * context:]}'
    idx = max(0, min(ip, len(program)))
    start = max(0, idx - context)
    end = min(len(program), idx + context + 1)
    window = program[start:end]
    return f'  | {window}\n  | {" " * (idx - start)}^'


def _hint_for(kind: str, message: str) -> Optional[str]:
    msg = message.lower()
    if kind == 'TokensOverflow':
        if 'failed' in msg:
            return 'Create a new tokenizer; this one overflowed.'
        if 'instructions' in msg:
            return 'Raise the token capacity or shorten the program.'
        return 'The program ran off the end of the token buffer without a terminating slot.'
    if kind == 'TokensUnderflow':
        return "Check for a ']' without a matching '[' before it."
    if kind == 'CellsOverflow':
        return 'Raise the cell capacity or check for a runaway \'>\' loop.'
    if kind == 'CellsUnderflow':
        return "The data pointer starts at cell 0; check for an extra '<'."
    if kind == 'JumpsError':
        if 'nesting' in msg:
            return None
        return "Check for a '[' without a matching ']' after it."
    return None


@dataclass
class BrainFuckError(Exception):
    message: str
    ip: Optional[int] = None
    dp: Optional[int] = None
    context: str = ''

    def __str__(self) -> str:
        return self.message


class TokensOverflow(BrainFuckError):
    pass


class TokensUnderflow(BrainFuckError):
    pass


class CellsOverflow(BrainFuckError):
    pass


class CellsUnderflow(BrainFuckError):
    pass


class JumpsError(BrainFuckError):
    pass


E = TypeVar('E', bound=BrainFuckError)


def make_error(
    kind: Type[E],
    *,
    message: str,
    program: str = '',
    ip: Optional[int] = None,
    dp: Optional[int] = None,
) -> E:
    name = kind.__name__
    where = ''
    if ip is not None:
        where = f' (ip {ip}' + (f', dp {dp})' if dp is not None else ')')
    ctx = _build_context(program, ip)
    hint = _hint_for(name, message)
    ctx_block = f'\n{ctx}' if ctx else ''
    hint_block = f'\nHint: {hint}' if hint else ''
    return kind(
        message=f'{name}: {message}{where}{ctx_block}{hint_block}',
        ip=ip,
        dp=dp,
        context=ctx,
    )
