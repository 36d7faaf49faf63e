"""Interactive read-eval-print loop."""

from __future__ import annotations

import io
import logging
import sys
from typing import List, Optional, TextIO

from .ast import Expression, Print, Stmt
from .errors import Diagnostics
from .interpreter import Interpreter
from .parser import parse_program

logger = logging.getLogger(__name__)

BANNER = "Kwento REPL (type 'help' for help, 'exit' to quit)"

HELP = """\
Enter Kwento statements, one line at a time:
  var x = 1;            declare a variable
  print x + 1;          print a value
  x * 2                 a lone expression prints its value
Variables and functions persist between lines.
Commands: help, exit, quit"""

EXIT_COMMANDS = ('exit', 'quit')


class Repl:
    def __init__(
        self,
        interpreter: Optional[Interpreter] = None,
        stdin: Optional[TextIO] = None,
        stdout: Optional[TextIO] = None,
    ):
        self.stdin = stdin if stdin is not None else sys.stdin
        self.stdout = stdout if stdout is not None else sys.stdout
        self.interpreter = interpreter if interpreter is not None else Interpreter(out=self.stdout)

    def run(self):
        print(BANNER, file=self.stdout)
        while True:
            self.stdout.write('> ')
            self.stdout.flush()
            line = self.stdin.readline()
            if line == '':
                # end of input; finish the prompt line
                print(file=self.stdout)
                return
            if not self.handle(line.strip()):
                return

    def handle(self, line: str) -> bool:
        """Process one line; return False when the session should end."""
        if not line:
            return True
        if line in EXIT_COMMANDS:
            return False
        if line == 'help':
            print(HELP, file=self.stdout)
            return True
        self.evaluate(line)
        return True

    def evaluate(self, line: str) -> bool:
        statements = self.parse_line(line)
        if statements is None:
            # report the errors of the line as typed
            parse_program(line, self.interpreter.diagnostics)
            return False
        if len(statements) == 1 and isinstance(statements[0], Expression):
            logger.debug("repl expression: %s", line)
            statements = [Print(statements[0].expression)]
        return self.interpreter.interpret(statements)

    def parse_line(self, line: str) -> Optional[List[Stmt]]:
        """Parse a line, accepting a lone expression without its `;`."""
        for source in (line, line + ';'):
            scratch = Diagnostics(io.StringIO())
            statements = parse_program(source, scratch)
            if not scratch.had_error:
                return statements
        return None
