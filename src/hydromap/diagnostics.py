"""Append-only diagnostic sink.

Collects the human-readable progress and warning lines produced while
fetching (fallback triggered, zero rows, a station or layer skipped). Each
line is forwarded to the ``hydromap.diagnostics`` logger for the console and
kept in order so the rendered page can show it in its debug panel.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterator

logger = logging.getLogger("hydromap.diagnostics")


class DiagnosticLog:
    """Ordered list of diagnostic lines. Lines are only ever appended.

    A plain class rather than a dataclass: Prefect rebuilds dataclass task
    arguments while resolving inputs, and every task must append to the
    same instance.
    """

    def __init__(self) -> None:
        self.lines: list[str] = []

    def info(self, message: str) -> None:
        self.lines.append(message)
        logger.info(message)

    def warning(self, message: str) -> None:
        self.lines.append(f"WARNING: {message}")
        logger.warning(message)

    def __len__(self) -> int:
        return len(self.lines)

    def __iter__(self) -> Iterator[str]:
        return iter(list(self.lines))

    def __repr__(self) -> str:
        return f"DiagnosticLog({len(self.lines)} lines)"
