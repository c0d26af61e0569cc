"""
Log Sink

Author: Vaquar Khan (vaquar.khan@gmail.com)

Progress output goes through an injected sink: any callable taking one line
of text. Benchmarks print to the console; tests capture lines in memory.
"""

import traceback
from typing import Callable, List

LogSink = Callable[[str], None]


def console_sink(line: str):
    """Print a progress line immediately"""
    print(line, flush=True)


class MemorySink:
    """Collects progress lines in a list"""

    def __init__(self):
        self.lines: List[str] = []

    def __call__(self, line: str):
        self.lines.append(line)

    def text(self) -> str:
        return "\n".join(self.lines)


def log_exception(sink: LogSink, exc: BaseException):
    """Write the error message followed by its full stack trace"""
    sink(str(exc) or type(exc).__name__)
    sink("".join(traceback.format_exception(type(exc), exc, exc.__traceback__)).rstrip())
