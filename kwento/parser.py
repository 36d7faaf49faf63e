"""Parser for the Kwento language.

A recursive-descent parser with one method per grammar rule. Expression
methods are ordered from lowest to highest precedence:

    assignment -> or -> and -> equality -> comparison -> term -> factor
               -> unary -> call/index -> primary

When a statement is malformed the error is reported once, the parser
discards tokens up to the next statement boundary and carries on, so the
returned statement list still holds every well-formed statement.

`parse_program` is the public entry point combining scanning and parsing.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from .ast import (
    Expr, Stmt, Literal, Grouping, Unary, Binary, Logical, Variable, Assign,
    Call, ArrayLiteral, IndexGet, IndexSet,
    Expression, Print, Var, Block, If, While, Function, Return,
)
from .errors import Diagnostics, ParseError
from .lexer import scan
from .tokens import STATEMENT_STARTS, Token, TokenType

logger = logging.getLogger(__name__)

MAX_ARGUMENTS = 255


class Parser:
    def __init__(self, tokens: List[Token], diagnostics: Optional[Diagnostics] = None):
        self.tokens = tokens
        self.diagnostics = diagnostics if diagnostics is not None else Diagnostics()
        self.current = 0

    def parse(self) -> List[Stmt]:
        statements: List[Stmt] = []
        while not self.is_at_end():
            stmt = self.declaration()
            if stmt is not None:
                statements.append(stmt)
        return statements

    def parse_expression(self) -> Optional[Expr]:
        """Parse a lone expression (used by the REPL and tests)."""
        try:
            return self.expression()
        except ParseError:
            return None

    # Declarations and statements

    def declaration(self) -> Optional[Stmt]:
        try:
            if self.match(TokenType.FUN):
                return self.function('function')
            if self.match(TokenType.VAR):
                return self.var_declaration()
            return self.statement()
        except ParseError:
            self.synchronize()
            return None
        except RecursionError:
            self.error(self.peek(), "Expression nesting too deep.")
            self.synchronize()
            return None

    def function(self, kind: str) -> Function:
        name = self.consume(TokenType.IDENTIFIER, f"Expect {kind} name.")
        self.consume(TokenType.LEFT_PAREN, f"Expect '(' after {kind} name.")
        params: List[Token] = []
        if not self.check(TokenType.RIGHT_PAREN):
            while True:
                if len(params) >= MAX_ARGUMENTS:
                    self.error(self.peek(), f"Can't have more than {MAX_ARGUMENTS} parameters.")
                params.append(self.consume(TokenType.IDENTIFIER, "Expect parameter name."))
                if not self.match(TokenType.COMMA):
                    break
        self.consume(TokenType.RIGHT_PAREN, "Expect ')' after parameters.")
        self.consume(TokenType.LEFT_BRACE, f"Expect '{{' before {kind} body.")
        body = self.block()
        return Function(name, params, body)

    def var_declaration(self) -> Var:
        name = self.consume(TokenType.IDENTIFIER, "Expect variable name.")
        initializer = None
        if self.match(TokenType.EQUAL):
            initializer = self.expression()
        self.consume(TokenType.SEMICOLON, "Expect ';' after variable declaration.")
        return Var(name, initializer)

    def statement(self) -> Stmt:
        if self.match(TokenType.FOR):
            return self.for_statement()
        if self.match(TokenType.IF):
            return self.if_statement()
        if self.match(TokenType.PRINT):
            return self.print_statement()
        if self.match(TokenType.RETURN):
            return self.return_statement()
        if self.match(TokenType.WHILE):
            return self.while_statement()
        if self.match(TokenType.LEFT_BRACE):
            return Block(self.block())
        return self.expression_statement()

    def for_statement(self) -> Stmt:
        self.consume(TokenType.LEFT_PAREN, "Expect '(' after 'for'.")
        if self.match(TokenType.SEMICOLON):
            initializer = None
        elif self.match(TokenType.VAR):
            initializer = self.var_declaration()
        else:
            initializer = self.expression_statement()

        condition = None
        if not self.check(TokenType.SEMICOLON):
            condition = self.expression()
        self.consume(TokenType.SEMICOLON, "Expect ';' after loop condition.")

        increment = None
        if not self.check(TokenType.RIGHT_PAREN):
            increment = self.expression()
        self.consume(TokenType.RIGHT_PAREN, "Expect ')' after for clauses.")

        body = self.statement()

        # { initializer; while (condition) { body; increment; } }
        if increment is not None:
            body = Block([body, Expression(increment)])
        if condition is None:
            condition = Literal(True)
        loop: Stmt = While(condition, body)
        statements: List[Stmt] = [loop] if initializer is None else [initializer, loop]
        return Block(statements)

    def if_statement(self) -> If:
        self.consume(TokenType.LEFT_PAREN, "Expect '(' after 'if'.")
        condition = self.expression()
        self.consume(TokenType.RIGHT_PAREN, "Expect ')' after if condition.")
        then_branch = self.statement()
        else_branch = None
        if self.match(TokenType.ELSE):
            else_branch = self.statement()
        return If(condition, then_branch, else_branch)

    def print_statement(self) -> Print:
        value = self.expression()
        self.consume(TokenType.SEMICOLON, "Expect ';' after value.")
        return Print(value)

    def return_statement(self) -> Return:
        keyword = self.previous()
        value = None
        if not self.check(TokenType.SEMICOLON):
            value = self.expression()
        self.consume(TokenType.SEMICOLON, "Expect ';' after return value.")
        return Return(keyword, value)

    def while_statement(self) -> While:
        self.consume(TokenType.LEFT_PAREN, "Expect '(' after 'while'.")
        condition = self.expression()
        self.consume(TokenType.RIGHT_PAREN, "Expect ')' after condition.")
        body = self.statement()
        return While(condition, body)

    def block(self) -> List[Stmt]:
        statements: List[Stmt] = []
        while not self.check(TokenType.RIGHT_BRACE) and not self.is_at_end():
            stmt = self.declaration()
            if stmt is not None:
                statements.append(stmt)
        self.consume(TokenType.RIGHT_BRACE, "Expect '}' after block.")
        return statements

    def expression_statement(self) -> Expression:
        expr = self.expression()
        self.consume(TokenType.SEMICOLON, "Expect ';' after expression.")
        return Expression(expr)

    # Expressions, lowest precedence first

    def expression(self) -> Expr:
        return self.assignment()

    def assignment(self) -> Expr:
        expr = self.logic_or()
        if self.match(TokenType.EQUAL):
            equals = self.previous()
            value = self.assignment()
            if isinstance(expr, Variable):
                return Assign(expr.name, value)
            if isinstance(expr, IndexGet):
                return IndexSet(expr.target, expr.bracket, expr.index, value)
            # reported without unwinding: the parser is not confused here
            self.error(equals, "Invalid assignment target.")
        return expr

    def logic_or(self) -> Expr:
        expr = self.logic_and()
        while self.match(TokenType.OR):
            operator = self.previous()
            right = self.logic_and()
            expr = Logical(expr, operator, right)
        return expr

    def logic_and(self) -> Expr:
        expr = self.equality()
        while self.match(TokenType.AND):
            operator = self.previous()
            right = self.equality()
            expr = Logical(expr, operator, right)
        return expr

    def equality(self) -> Expr:
        return self.binary_left(self.comparison, TokenType.BANG_EQUAL, TokenType.EQUAL_EQUAL)

    def comparison(self) -> Expr:
        return self.binary_left(
            self.term,
            TokenType.GREATER, TokenType.GREATER_EQUAL, TokenType.LESS, TokenType.LESS_EQUAL,
        )

    def term(self) -> Expr:
        return self.binary_left(self.factor, TokenType.MINUS, TokenType.PLUS)

    def factor(self) -> Expr:
        return self.binary_left(self.unary, TokenType.SLASH, TokenType.STAR, TokenType.PERCENT)

    def binary_left(self, operand, *operators: TokenType) -> Expr:
        """Parse a left-associative chain of `operand (op operand)*`."""
        expr = operand()
        while self.match(*operators):
            operator = self.previous()
            right = operand()
            expr = Binary(expr, operator, right)
        return expr

    def unary(self) -> Expr:
        if self.match(TokenType.BANG, TokenType.MINUS):
            operator = self.previous()
            right = self.unary()
            return Unary(operator, right)
        return self.call()

    def call(self) -> Expr:
        expr = self.primary()
        while True:
            if self.match(TokenType.LEFT_PAREN):
                expr = self.finish_call(expr)
            elif self.match(TokenType.LEFT_BRACKET):
                bracket = self.previous()
                index = self.expression()
                self.consume(TokenType.RIGHT_BRACKET, "Expect ']' after index.")
                expr = IndexGet(expr, bracket, index)
            else:
                break
        return expr

    def finish_call(self, callee: Expr) -> Call:
        arguments: List[Expr] = []
        if not self.check(TokenType.RIGHT_PAREN):
            while True:
                if len(arguments) >= MAX_ARGUMENTS:
                    self.error(self.peek(), f"Can't have more than {MAX_ARGUMENTS} arguments.")
                arguments.append(self.expression())
                if not self.match(TokenType.COMMA):
                    break
        paren = self.consume(TokenType.RIGHT_PAREN, "Expect ')' after arguments.")
        return Call(callee, paren, arguments)

    def primary(self) -> Expr:
        if self.match(TokenType.FALSE):
            return Literal(False)
        if self.match(TokenType.TRUE):
            return Literal(True)
        if self.match(TokenType.NIL):
            return Literal(None)
        if self.match(TokenType.NUMBER, TokenType.STRING):
            return Literal(self.previous().literal)
        if self.match(TokenType.IDENTIFIER):
            return Variable(self.previous())
        if self.match(TokenType.LEFT_PAREN):
            expr = self.expression()
            self.consume(TokenType.RIGHT_PAREN, "Expect ')' after expression.")
            return Grouping(expr)
        if self.match(TokenType.LEFT_BRACKET):
            bracket = self.previous()
            elements: List[Expr] = []
            if not self.check(TokenType.RIGHT_BRACKET):
                while True:
                    elements.append(self.expression())
                    if not self.match(TokenType.COMMA):
                        break
            self.consume(TokenType.RIGHT_BRACKET, "Expect ']' after array elements.")
            return ArrayLiteral(bracket, elements)
        raise self.error(self.peek(), "Expect expression.")

    # Token helpers

    def match(self, *types: TokenType) -> bool:
        for type_ in types:
            if self.check(type_):
                self.advance()
                return True
        return False

    def consume(self, type_: TokenType, message: str) -> Token:
        if self.check(type_):
            return self.advance()
        raise self.error(self.peek(), message)

    def check(self, type_: TokenType) -> bool:
        if self.is_at_end():
            return False
        return self.peek().type == type_

    def advance(self) -> Token:
        if not self.is_at_end():
            self.current += 1
        return self.previous()

    def is_at_end(self) -> bool:
        return self.peek().type == TokenType.EOF

    def peek(self) -> Token:
        return self.tokens[self.current]

    def previous(self) -> Token:
        return self.tokens[self.current - 1]

    def error(self, token: Token, message: str) -> ParseError:
        self.diagnostics.error_at(token, message)
        return ParseError(message)

    def synchronize(self):
        """Discard tokens until the start of the next statement."""
        self.advance()
        while not self.is_at_end():
            if self.previous().type == TokenType.SEMICOLON:
                return
            if self.peek().type in STATEMENT_STARTS:
                return
            self.advance()


def parse_program(source: str, diagnostics: Optional[Diagnostics] = None) -> List[Stmt]:
    """Scan and parse Kwento source into a list of statements.

    Syntax errors are reported to `diagnostics` rather than raised; the
    returned list holds every statement that parsed cleanly.
    """
    diagnostics = diagnostics if diagnostics is not None else Diagnostics()
    tokens = scan(source, diagnostics)
    statements = Parser(tokens, diagnostics).parse()
    logger.debug("parsed %d statements (%d diagnostics)", len(statements), len(diagnostics.items))
    return statements
