from pathlib import Path

from kwento.interpreter import Interpreter

EXAMPLES = Path(__file__).resolve().parent.parent / 'examples'


def test_program_4(capsys):
    with open(EXAMPLES / 'program_4.kw', 'r', encoding='utf-8') as f:
        source = f.read()
    interp = Interpreter()
    assert interp.run(source)
    out = capsys.readouterr().out.strip()
    assert out == '\n'.join(['0', '1', '1', '2', '3', '5', '8', '13', '21', '34'])
