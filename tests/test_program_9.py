from pathlib import Path

from kwento.interpreter import Interpreter

EXAMPLES = Path(__file__).resolve().parent.parent / 'examples'


def test_program_9(capsys):
    with open(EXAMPLES / 'program_9.kw', 'r', encoding='utf-8') as f:
        source = f.read()
    interp = Interpreter()
    assert not interp.run(source)
    captured = capsys.readouterr()
    assert captured.out.strip() == 'before'
    assert captured.err.strip() == '[line 2] Runtime error (DivisionByZero): Division by zero.'
    assert interp.diagnostics.had_runtime_error
