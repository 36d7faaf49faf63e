import sys
import time
from typing import Optional, TextIO


class Console:
    """Host services behind the `clock` and `input` natives."""

    def __init__(self, stdin: Optional[TextIO] = None):
        self.stdin = stdin

    def clock(self) -> float:
        return time.time()

    def read_line(self) -> Optional[str]:
        stream = self.stdin if self.stdin is not None else sys.stdin
        line = stream.readline()
        if line == '':
            return None  # end of input
        return line.rstrip('\r\n')
