"""
Transfer progress display.

A reporter keeps a single console line up to date while a transfer runs by
erasing the line it printed last time before printing the new total.
"""

import sys

from phoneftp.common.constants import CLEAR_SCREEN_DOWN, CURSOR_UP
from phoneftp.common.protocol_definitions import ProgressEvent
from phoneftp.common.units import format_bytes


class ProgressReporter:
    """Progress callback for exactly one transfer."""

    def __init__(self, stream=None):
        self.stream = stream if stream is not None else sys.stdout
        self.calls = 0

    def __call__(self, event: ProgressEvent):
        if self.calls > 0:
            self.stream.write(CURSOR_UP + CLEAR_SCREEN_DOWN)
        self.stream.write(f"{event.name} - {format_bytes(event.bytes_overall)}\n")
        self.stream.flush()
        self.calls += 1


def make_reporter(stream=None) -> ProgressReporter:
    """Create a fresh reporter; never reuse one across transfers."""
    return ProgressReporter(stream)
