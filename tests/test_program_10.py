from pathlib import Path

from kwento.interpreter import Interpreter

EXAMPLES = Path(__file__).resolve().parent.parent / 'examples'


def test_program_10(capsys):
    with open(EXAMPLES / 'program_10.kw', 'r', encoding='utf-8') as f:
        source = f.read()
    interp = Interpreter()
    assert interp.run(source)
    out = capsys.readouterr().out.strip()
    assert out.split('\n') == ['6', '120', '3', '2', '1', 'indi waay', '2.5', 'true']
