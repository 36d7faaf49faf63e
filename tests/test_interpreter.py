import io

import pytest

from kwento.errors import IndexOutOfBounds
from kwento.interpreter import Interpreter, run_program
from kwento.types import ArrayVal, to_string, values_equal


def run(source, stdin=None):
    out, err = io.StringIO(), io.StringIO()
    interp = Interpreter(out=out, err=err, stdin=stdin)
    ok = interp.run(source)
    return ok, out.getvalue().split('\n')[:-1], interp


def runtime_error(source):
    ok, out, interp = run(source)
    assert not ok
    diagnostic = interp.diagnostics.items[-1]
    assert diagnostic.kind == 'runtime'
    return diagnostic


def test_arithmetic_and_precedence():
    _, out, _ = run('print 1 + 2 * 3; print (1 + 2) * 3; print 7 % 3; print 1 / 4;')
    assert out == ['7', '9', '1', '0.25']


def test_number_formatting():
    _, out, _ = run('print 3.0; print 2.5; print 1 / 3; print -0.5;')
    assert out == ['3', '2.5', '0.3333333333333333', '-0.5']


def test_string_concatenation_rules():
    _, out, _ = run(
        'print "a" + "b"; print "a" + 1; print 1 + "a"; print "x" + nil;'
        'print true + "!"; print "arr " + [1, 2];'
    )
    assert out == ['ab', 'a1', 'a1', 'xnil', '!true', 'arr [1, 2]']


@pytest.mark.parametrize('source', [
    'print true + 1;',
    'print nil + nil;',
    'print [1] + [2];',
    'print "a" - 1;',
    'print -"a";',
    'print 1 < "2";',
])
def test_type_mismatch(source):
    assert runtime_error(source).name == 'TypeMismatch'


def test_division_and_modulo_by_zero():
    diagnostic = runtime_error('print 5 / 0;')
    assert diagnostic.name == 'DivisionByZero'
    assert diagnostic.message == 'Division by zero.'
    assert runtime_error('print 5 % 0;').message == 'Modulo by zero.'


def test_truthiness_and_equality():
    _, out, _ = run(
        'print !0; print !""; print !nil; print true == 1; print nil == false;'
        'print "a" == "a"; print [1, [2]] == [1, [2]]; print [1] == [2];'
        'fun f() {} print f == f;'
    )
    assert out == ['false', 'false', 'true', 'false', 'false', 'true', 'true', 'false', 'true']


def test_logical_operators_return_deciding_operand():
    _, out, _ = run('print nil or 2; print 1 and 2; print false and boom; print "x" or boom;')
    assert out == ['2', '2', 'false', 'x']


def test_counter_closures_are_independent():
    source = '''
    fun makeCounter() {
        var count = 0;
        fun counter() { count = count + 1; return count; }
        return counter;
    }
    var a = makeCounter();
    print a();
    print a();
    var b = makeCounter();
    print b();
    '''
    _, out, _ = run(source)
    assert out == ['1', '2', '1']


def test_closures_see_later_changes_to_captured_scope():
    _, out, _ = run('var x = 1; fun show() { print x; } x = 2; show();')
    assert out == ['2']


def test_function_without_return_yields_nil():
    _, out, _ = run('fun noop() { 1 + 1; } print noop(); fun early() { return; print "no"; } print early();')
    assert out == ['nil', 'nil']


def test_return_unwinds_nested_blocks_and_loops():
    source = '''
    fun firstOver(xs, limit) {
        var i = 0;
        while (true) {
            { if (xs[i] > limit) return xs[i]; }
            i = i + 1;
        }
    }
    print firstOver([1, 5, 9], 4);
    '''
    _, out, _ = run(source)
    assert out == ['5']


def test_recursion():
    _, out, _ = run('fun fact(n) { if (n <= 1) return 1; return n * fact(n - 1); } print fact(10);')
    assert out == ['3628800']


def test_return_outside_function():
    diagnostic = runtime_error('print 1;\nreturn 2;')
    assert diagnostic.name == 'ReturnOutsideFunction'
    assert diagnostic.line == 2


def test_undefined_variable_read_and_assign():
    assert runtime_error('print ghost;').message == "Undefined variable 'ghost'."
    assert runtime_error('ghost = 1;').name == 'UndefinedVariable'


def test_block_locals_are_invisible_afterwards():
    ok, out, interp = run('{ var inner = 1; print inner; }\nprint inner;')
    assert out == ['1']
    assert interp.diagnostics.items[-1].name == 'UndefinedVariable'
    assert interp.diagnostics.items[-1].line == 2


def test_for_loop_variable_is_scoped_to_the_loop():
    ok, out, interp = run('for (var i = 0; i < 3; i = i + 1) print i;\nprint i;')
    assert out == ['0', '1', '2']
    assert interp.diagnostics.items[-1].name == 'UndefinedVariable'


def test_call_errors():
    assert runtime_error('var x = "str"; x();').name == 'NotCallable'
    diagnostic = runtime_error('fun f(a) {}\nf();')
    assert diagnostic.name == 'ArityMismatch'
    assert diagnostic.message == 'Expected 1 arguments but got 0.'
    assert diagnostic.line == 2


def test_arguments_evaluate_left_to_right():
    source = '''
    var log = [];
    fun note(x) { push(log, x); return x; }
    fun pair(a, b) { return a - b; }
    print pair(note(1), note(2));
    print log;
    '''
    _, out, _ = run(source)
    assert out == ['-1', '[1, 2]']


def test_array_aliasing_and_mutation():
    _, out, _ = run('var a = [1, 2]; var b = a; b[0] = 9; push(a, 3); print a; print b; print len(b);')
    assert out == ['[9, 2, 3]', '[9, 2, 3]', '3']


def test_string_index_assignment_does_not_alias():
    _, out, _ = run('var s = "abc"; var t = s; s[1] = "X"; print s; print t; print s[2];')
    assert out == ['aXc', 'abc', 'c']


def test_string_inside_array_is_rebound_in_its_slot():
    _, out, _ = run('var xs = ["hi"]; var ys = xs; xs[0][0] = "p"; print ys;')
    assert out == ['[pi]']


@pytest.mark.parametrize('source, name', [
    ('print [1, 2][2];', 'IndexOutOfBounds'),
    ('print "ab"[-1];', 'IndexOutOfBounds'),
    ('print [1][0.5];', 'TypeMismatch'),
    ('print [1]["0"];', 'TypeMismatch'),
    ('print 5[0];', 'TypeMismatch'),
    ('var s = "abc"; s[0] = 1;', 'TypeMismatch'),
    ('"abc"[0] = "x";', 'TypeMismatch'),
])
def test_index_errors(source, name):
    assert runtime_error(source).name == name


def test_index_out_of_bounds_carries_index_and_length():
    assert runtime_error('var xs = [1, 2, 3];\nprint xs[3];').message == 'index 3 out of bounds for length 3'
    err = IndexOutOfBounds(None, 7, 2)
    assert (err.index, err.length) == (7, 2)


def test_natives():
    ok, out, _ = run(
        'print len("hello"); print len([]); print concat("n", 1); print push([], nil);'
        'print clock() > 0; print len;',
    )
    assert ok
    assert out == ['5', '0', 'n1', '[nil]', 'true', '<native fn len>']


def test_native_errors_point_at_the_call():
    diagnostic = runtime_error('\nprint len(1);')
    assert diagnostic.name == 'TypeMismatch'
    assert diagnostic.line == 2
    assert runtime_error('push(1, 2);').name == 'TypeMismatch'
    assert runtime_error('len(1, 2);').name == 'ArityMismatch'


def test_input_reads_lines_until_eof():
    _, out, _ = run('print input(); print input(); print input();', stdin=io.StringIO('first\nsecond'))
    assert out == ['first', 'second', 'nil']


def test_runtime_error_stops_execution_and_is_reported():
    ok, out, interp = run('print "one";\nprint 1 - nil;\nprint "two";')
    assert not ok
    assert out == ['one']
    assert interp.diagnostics.messages == [
        "[line 2] Runtime error (TypeMismatch): Operands of '-' must be numbers, got number and nil.",
    ]


def test_syntax_errors_prevent_execution():
    ok, out, interp = run('print "ran";\nprint ;')
    assert not ok
    assert out == []
    assert interp.diagnostics.had_error
    assert not interp.diagnostics.had_runtime_error


def test_globals_persist_across_runs():
    out = io.StringIO()
    interp = Interpreter(out=out, err=io.StringIO())
    assert interp.run('var total = 1;')
    assert not interp.run('print missing;')
    assert interp.run('total = total + 1; print total;')
    assert out.getvalue() == '2\n'


def test_function_values_print():
    _, out, _ = run('fun greet() {} print greet;')
    assert out == ['<fn greet>']


def test_run_program_uses_stdout(capsys):
    interp = run_program('print "hi";')
    assert capsys.readouterr().out == 'hi\n'
    assert not interp.diagnostics.items


def test_value_helpers():
    assert to_string(ArrayVal([1.0, 'a', None, True, ArrayVal([])])) == '[1, a, nil, true, []]'
    assert values_equal(None, None)
    assert not values_equal(0.0, False)
    assert not values_equal(ArrayVal([]), None)


def test_unbounded_recursion_is_a_runtime_error():
    ok, out, interp = run('fun f(n) { return f(n + 1); }\nprint "start";\nf(0);')
    assert not ok
    assert out == ['start']
    diagnostic = interp.diagnostics.items[-1]
    assert diagnostic.kind == 'runtime'
    assert diagnostic.name == 'StackOverflow'
    assert diagnostic.line == 1
    # the interpreter stays usable afterwards
    assert interp.run('print "after";')
    assert interp.out.getvalue().endswith('after\n')
