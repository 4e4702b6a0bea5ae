from __future__ import annotations

from dataclasses import dataclass, field
from typing import List


@dataclass
class ExecutionState:
    ip: int = 0
    dp: int = 0
    # Bracket-scan depth. Back to 0 whenever a scan completes.
    nesting: int = 0
    steps: int = 0
    trace: List[str] = field(default_factory=list)
    is_tracing: bool = False

    def add_trace(self, message: str) -> None:
        if self.is_tracing:
            self.trace.append(message)
