from pathlib import Path

from kwento.interpreter import Interpreter

EXAMPLES = Path(__file__).resolve().parent.parent / 'examples'


def test_program_6(capsys):
    with open(EXAMPLES / 'program_6.kw', 'r', encoding='utf-8') as f:
        source = f.read()
    interp = Interpreter()
    assert interp.run(source)
    out = capsys.readouterr().out.strip().split('\n')
    assert out == ['bat', 'cat', '[dog, fig]', 'a1', 'a1', 'n=2.5', 'xtrue', '5', 'e']
