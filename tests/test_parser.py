import io

import pytest

from kwento.ast import Block, Expression, Print, Var, While
from kwento.errors import Diagnostics
from kwento.lexer import scan
from kwento.parser import Parser, parse_program
from kwento.printer import AstPrinter


def expr(source):
    return AstPrinter().print(Parser(scan(source)).parse_expression())


def program(source):
    diagnostics = Diagnostics(io.StringIO())
    statements = parse_program(source, diagnostics)
    return statements, diagnostics


@pytest.mark.parametrize('source, expected', [
    ('1 + 2 * 3', '(+ 1 (* 2 3))'),
    ('(1 + 2) * 3', '(* (group (+ 1 2)) 3)'),
    ('10 - 4 - 3', '(- (- 10 4) 3)'),
    ('7 % 4 / 2', '(/ (% 7 4) 2)'),
    ('!!true', '(! (! true))'),
    ('-a[0](1)', '(- (call (index a 0) 1))'),
    ('a = b = 3', '(= a (= b 3))'),
    ('x or y and z', '(or x (and y z))'),
    ('1 < 2 == true', '(== (< 1 2) true)'),
    ('a[1] = "s"', "(index= a 1 's')"),
    ('[1, nil, [2.5]]', '(array 1 nil (array 2.5))'),
])
def test_expression_precedence(source, expected):
    assert expr(source) == expected


def test_for_loop_desugars_to_while():
    statements, diagnostics = program('for (var i = 0; i < 3; i = i + 1) print i;')
    assert not diagnostics.had_error
    assert len(statements) == 1
    outer = statements[0]
    assert isinstance(outer, Block)
    assert isinstance(outer.statements[0], Var)
    assert isinstance(outer.statements[1], While)
    assert AstPrinter().print(outer) == (
        '(block (var i 0) (while (< i 3) (block (print i) (; (= i (+ i 1))))))'
    )


def test_for_loop_without_clauses_loops_forever():
    statements, _ = program('for (;;) print 1;')
    assert AstPrinter().print(statements[0]) == '(block (while true (print 1)))'


def test_statement_forms():
    statements, diagnostics = program(
        'fun add(a, b) { return a + b; }\n'
        'if (x) print 1; else print 2;\n'
        'while (false) {}\n'
        'var y;\n'
        'return;\n'
    )
    assert not diagnostics.had_error
    assert AstPrinter().print_program(statements).split('\n') == [
        '(fun add (a b) (return (+ a b)))',
        '(if-else x (print 1) (print 2))',
        '(while false (block))',
        '(var y)',
        '(return)',
    ]


def test_synchronization_keeps_good_statements():
    statements, diagnostics = program('var = 1;\nprint 2;\nvar x = ;\nprint 3;')
    assert [type(s) for s in statements] == [Print, Print]
    assert diagnostics.messages == [
        "[line 1] Error at '=': Expect variable name.",
        "[line 3] Error at ';': Expect expression.",
    ]


def test_missing_semicolon_at_end():
    _, diagnostics = program('print 1')
    assert diagnostics.messages == ["[line 1] Error at end: Expect ';' after value."]


def test_invalid_assignment_target_is_reported_without_unwinding():
    statements, diagnostics = program('1 = 2;\nprint 3;')
    assert diagnostics.messages == ["[line 1] Error at '=': Invalid assignment target."]
    assert isinstance(statements[0], Expression)
    assert isinstance(statements[1], Print)


def test_parse_expression_returns_none_on_error():
    parser = Parser(scan('1 +'), Diagnostics(io.StringIO()))
    assert parser.parse_expression() is None
    assert parser.diagnostics.had_error


def test_deep_nesting_is_reported_not_raised():
    source = 'print ' + '(' * 2000 + '1' + ')' * 2000 + ';\nprint 2;'
    statements, diagnostics = program(source)
    assert len(diagnostics.items) == 1
    assert diagnostics.items[0].message == 'Expression nesting too deep.'
    assert AstPrinter().print_program(statements) == '(print 2)'


def test_recovery_skips_the_statement_start_it_failed_on():
    # the error is reported at `var`, and recovery resumes after the next `;`
    statements, diagnostics = program('print 1\nvar x = 2;\nprint 3;')
    assert diagnostics.messages == ["[line 2] Error at 'var': Expect ';' after value."]
    assert AstPrinter().print_program(statements) == '(print 3)'
