"""Scanner for the Kwento language.

The scanner walks the source one character at a time and produces a list
of tokens that always ends with a single EOF token. Problems such as an
unexpected character or an unterminated string are reported to the
diagnostics stream and scanning carries on, so one run reports as many
problems as possible.
"""

from __future__ import annotations

import logging
from typing import Any, List, Optional

from .errors import Diagnostics
from .tokens import KEYWORDS, Token, TokenType

logger = logging.getLogger(__name__)

SINGLE_CHAR_TOKENS = {
    '(': TokenType.LEFT_PAREN,
    ')': TokenType.RIGHT_PAREN,
    '{': TokenType.LEFT_BRACE,
    '}': TokenType.RIGHT_BRACE,
    '[': TokenType.LEFT_BRACKET,
    ']': TokenType.RIGHT_BRACKET,
    ',': TokenType.COMMA,
    '.': TokenType.DOT,
    '-': TokenType.MINUS,
    '+': TokenType.PLUS,
    ';': TokenType.SEMICOLON,
    '*': TokenType.STAR,
    '%': TokenType.PERCENT,
}

# first char -> (token if followed by '=', token otherwise)
EQUALS_PAIRS = {
    '!': (TokenType.BANG_EQUAL, TokenType.BANG),
    '=': (TokenType.EQUAL_EQUAL, TokenType.EQUAL),
    '<': (TokenType.LESS_EQUAL, TokenType.LESS),
    '>': (TokenType.GREATER_EQUAL, TokenType.GREATER),
}


def is_digit(c: str) -> bool:
    return '0' <= c <= '9'


def is_alpha(c: str) -> bool:
    return ('a' <= c <= 'z') or ('A' <= c <= 'Z') or c == '_'


def is_alphanumeric(c: str) -> bool:
    return is_alpha(c) or is_digit(c)


class Scanner:
    def __init__(self, source: str, diagnostics: Optional[Diagnostics] = None):
        self.source = source
        self.diagnostics = diagnostics if diagnostics is not None else Diagnostics()
        self.tokens: List[Token] = []
        self.start = 0
        self.current = 0
        self.line = 1

    def scan_tokens(self) -> List[Token]:
        while not self.is_at_end():
            self.start = self.current
            self.scan_token()
        self.tokens.append(Token(TokenType.EOF, '', None, self.line))
        logger.debug("scanned %d tokens", len(self.tokens))
        return self.tokens

    def is_at_end(self) -> bool:
        return self.current >= len(self.source)

    def scan_token(self):
        c = self.advance()
        if c in SINGLE_CHAR_TOKENS:
            self.add_token(SINGLE_CHAR_TOKENS[c])
        elif c in EQUALS_PAIRS:
            with_equal, alone = EQUALS_PAIRS[c]
            self.add_token(with_equal if self.match('=') else alone)
        elif c == '/':
            if self.match('/'):
                self.skip_line_comment()
            elif self.match('*'):
                self.block_comment()
            else:
                self.add_token(TokenType.SLASH)
        elif c == '#':
            self.skip_line_comment()
        elif c in ' \r\t':
            pass
        elif c == '\n':
            self.line += 1
        elif c == '"':
            self.string()
        elif is_digit(c):
            self.number()
        elif is_alpha(c):
            self.identifier()
        else:
            self.diagnostics.error(self.line, f"Unexpected character: {c!r}")

    def skip_line_comment(self):
        while self.peek() != '\n' and not self.is_at_end():
            self.advance()

    def block_comment(self):
        start_line = self.line
        while not (self.peek() == '*' and self.peek_next() == '/'):
            if self.is_at_end():
                self.diagnostics.error(start_line, "Unterminated comment.")
                return
            if self.peek() == '\n':
                self.line += 1
            self.advance()
        self.advance()  # *
        self.advance()  # /

    def string(self):
        start_line = self.line
        while self.peek() != '"' and not self.is_at_end():
            if self.peek() == '\n':
                self.line += 1
            self.advance()
        if self.is_at_end():
            self.diagnostics.error(start_line, "Unterminated string.")
            return
        self.advance()  # closing quote
        value = self.source[self.start + 1:self.current - 1]
        self.add_token(TokenType.STRING, value, line=start_line)

    def number(self):
        while is_digit(self.peek()):
            self.advance()
        if self.peek() == '.' and is_digit(self.peek_next()):
            self.advance()
            while is_digit(self.peek()):
                self.advance()
        self.add_token(TokenType.NUMBER, float(self.source[self.start:self.current]))

    def identifier(self):
        while is_alphanumeric(self.peek()):
            self.advance()
        text = self.source[self.start:self.current]
        self.add_token(KEYWORDS.get(text, TokenType.IDENTIFIER))

    def advance(self) -> str:
        c = self.source[self.current]
        self.current += 1
        return c

    def match(self, expected: str) -> bool:
        if self.is_at_end() or self.source[self.current] != expected:
            return False
        self.current += 1
        return True

    def peek(self) -> str:
        if self.is_at_end():
            return '\0'
        return self.source[self.current]

    def peek_next(self) -> str:
        if self.current + 1 >= len(self.source):
            return '\0'
        return self.source[self.current + 1]

    def add_token(self, type_: TokenType, literal: Any = None, line: Optional[int] = None):
        text = self.source[self.start:self.current]
        self.tokens.append(Token(type_, text, literal, self.line if line is None else line))


def scan(source: str, diagnostics: Optional[Diagnostics] = None) -> List[Token]:
    """Convert source code into a list of tokens ending with EOF."""
    return Scanner(source, diagnostics).scan_tokens()
