"""
In-place progress display while report files are being aggregated.
"""

import sys
from typing import Optional, TextIO

from .models import Summary
from .reporting.console import format_summary

BLOCK_HEIGHT = 5
CURSOR_UP = f"\x1b[{BLOCK_HEIGHT}A"
CURSOR_DOWN = f"\x1b[{BLOCK_HEIGHT}B"


class ProgressDisplay:
    """
    Redraws the running summary in place on an interactive terminal.

    Only the aggregating thread may call update() and finish().
    """

    def __init__(self, sink: Optional[TextIO] = None, enabled: Optional[bool] = None):
        self.sink = sink if sink is not None else sys.stdout
        if enabled is None:
            enabled = hasattr(self.sink, "isatty") and self.sink.isatty()
        self.enabled = enabled
        self._drawn = False

    def update(self, summary: Summary) -> None:
        if not self.enabled:
            return
        lines = format_summary(summary)
        self.sink.write("\n".join(lines) + "\n")
        self.sink.write(f"\r{CURSOR_UP}")
        self.sink.flush()
        self._drawn = True

    def finish(self) -> None:
        """Move the cursor below the last drawn block."""
        if not self.enabled or not self._drawn:
            return
        self.sink.write(f"{CURSOR_DOWN}\n")
        self.sink.flush()
