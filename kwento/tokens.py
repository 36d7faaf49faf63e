"""Token definitions for the Kwento language.

The scanner turns source text into a flat list of `Token` records. Each
token remembers its kind, the exact source text it was made from, an
optional literal value (for numbers and strings) and the line it started
on, which is what diagnostics report.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any, Dict


class TokenType(enum.Enum):
    # Single-character tokens
    LEFT_PAREN = '('
    RIGHT_PAREN = ')'
    LEFT_BRACE = '{'
    RIGHT_BRACE = '}'
    LEFT_BRACKET = '['
    RIGHT_BRACKET = ']'
    COMMA = ','
    DOT = '.'
    MINUS = '-'
    PLUS = '+'
    SEMICOLON = ';'
    SLASH = '/'
    STAR = '*'
    PERCENT = '%'

    # One or two character tokens
    BANG = '!'
    BANG_EQUAL = '!='
    EQUAL = '='
    EQUAL_EQUAL = '=='
    GREATER = '>'
    GREATER_EQUAL = '>='
    LESS = '<'
    LESS_EQUAL = '<='

    # Literals
    IDENTIFIER = 'identifier'
    STRING = 'string'
    NUMBER = 'number'

    # Keywords
    AND = 'and'
    ELSE = 'else'
    FALSE = 'false'
    FOR = 'for'
    FUN = 'fun'
    IF = 'if'
    NIL = 'nil'
    OR = 'or'
    PRINT = 'print'
    RETURN = 'return'
    TRUE = 'true'
    VAR = 'var'
    WHILE = 'while'

    EOF = 'eof'


KEYWORDS: Dict[str, TokenType] = {
    'and': TokenType.AND,
    'else': TokenType.ELSE,
    'false': TokenType.FALSE,
    'for': TokenType.FOR,
    'fun': TokenType.FUN,
    'if': TokenType.IF,
    'nil': TokenType.NIL,
    'or': TokenType.OR,
    'print': TokenType.PRINT,
    'return': TokenType.RETURN,
    'true': TokenType.TRUE,
    'var': TokenType.VAR,
    'while': TokenType.WHILE,

    # Hiligaynon spellings, accepted alongside the English ones
    'DEKLARAR': TokenType.FUN,
    'basi': TokenType.VAR,
    'sulat': TokenType.PRINT,
    'kung': TokenType.IF,
    'kung_indi': TokenType.ELSE,
    'samtang': TokenType.WHILE,
    'kada': TokenType.FOR,
    'balik': TokenType.RETURN,
    'ibalik': TokenType.RETURN,
    'korik': TokenType.TRUE,
    'atik': TokenType.FALSE,
    'waay': TokenType.NIL,
    'kag': TokenType.AND,
    'ukon': TokenType.OR,

    # word forms of operators
    'dugang': TokenType.PLUS,
    'buhin': TokenType.MINUS,
    'padamo': TokenType.STAR,
    'dibaydibay': TokenType.SLASH,
    'kambyo': TokenType.PERCENT,
    'mas_dako': TokenType.GREATER,
    'mas_gamay': TokenType.LESS,
    'dako_ukon_pareho': TokenType.GREATER_EQUAL,
    'gamay_ukon_pareho': TokenType.LESS_EQUAL,
    'parehos': TokenType.EQUAL_EQUAL,
    'lain': TokenType.BANG_EQUAL,
    'indi': TokenType.BANG,
    'ituon_sa': TokenType.EQUAL,
}

# Tokens that can begin a declaration or statement; the parser stops
# discarding input at one of these when recovering from an error.
STATEMENT_STARTS = frozenset({
    TokenType.FUN,
    TokenType.VAR,
    TokenType.FOR,
    TokenType.IF,
    TokenType.WHILE,
    TokenType.PRINT,
    TokenType.RETURN,
})


@dataclass(frozen=True)
class Token:
    type: TokenType
    lexeme: str
    literal: Any
    line: int

    def __repr__(self) -> str:
        return f"Token({self.type.name}, {self.lexeme!r}, {self.literal!r}, line={self.line})"
