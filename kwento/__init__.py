# Kwento language package
# This package provides a scanner, parser and tree-walking interpreter for
# the Kwento language, plus a compiler for game-configuration files.
from .errors import Diagnostics, KwentoError
from .interpreter import Interpreter, run_program
from .parser import parse_program
from .dsl import compile_config

__all__ = [
    'parse_program',
    'run_program',
    'Interpreter',
    'KwentoError',
    'Diagnostics',
    'compile_config',
]
