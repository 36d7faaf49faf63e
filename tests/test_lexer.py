import io

from kwento.errors import Diagnostics
from kwento.lexer import scan
from kwento.tokens import TokenType


def kinds(source):
    return [t.type for t in scan(source, Diagnostics(io.StringIO()))]


def test_single_eof_token_is_last():
    for source in ['', 'print 1;', '"unterminated', '@ $ ~', '/* open']:
        tokens = scan(source, Diagnostics(io.StringIO()))
        assert [t.type for t in tokens].count(TokenType.EOF) == 1
        assert tokens[-1].type == TokenType.EOF


def test_operators_and_punctuation():
    assert kinds('( ) { } [ ] , . - + ; / * % ! != = == > >= < <=') == [
        TokenType.LEFT_PAREN, TokenType.RIGHT_PAREN,
        TokenType.LEFT_BRACE, TokenType.RIGHT_BRACE,
        TokenType.LEFT_BRACKET, TokenType.RIGHT_BRACKET,
        TokenType.COMMA, TokenType.DOT, TokenType.MINUS, TokenType.PLUS,
        TokenType.SEMICOLON, TokenType.SLASH, TokenType.STAR, TokenType.PERCENT,
        TokenType.BANG, TokenType.BANG_EQUAL, TokenType.EQUAL, TokenType.EQUAL_EQUAL,
        TokenType.GREATER, TokenType.GREATER_EQUAL, TokenType.LESS, TokenType.LESS_EQUAL,
        TokenType.EOF,
    ]


def test_keywords_and_identifiers():
    tokens = scan('var fun orchid or nil_value nil')
    assert [t.type for t in tokens] == [
        TokenType.VAR, TokenType.FUN, TokenType.IDENTIFIER, TokenType.OR,
        TokenType.IDENTIFIER, TokenType.NIL, TokenType.EOF,
    ]
    assert tokens[2].lexeme == 'orchid'


def test_number_literals_are_floats():
    tokens = scan('12 3.5 7.')
    assert tokens[0].literal == 12.0
    assert tokens[1].literal == 3.5
    # a trailing dot is not part of the number
    assert [t.type for t in tokens[2:]] == [TokenType.NUMBER, TokenType.DOT, TokenType.EOF]


def test_strings_span_lines_and_keep_start_line():
    tokens = scan('\n"one\ntwo" x')
    assert tokens[0].type == TokenType.STRING
    assert tokens[0].literal == 'one\ntwo'
    assert tokens[0].line == 2
    assert tokens[1].line == 3


def test_comments_are_skipped():
    source = '// line\n# hash\n/* block\n comment */ print'
    tokens = scan(source)
    assert [t.type for t in tokens] == [TokenType.PRINT, TokenType.EOF]
    assert tokens[0].line == 4


def test_unterminated_string_is_reported():
    stream = io.StringIO()
    diagnostics = Diagnostics(stream)
    scan('print "oops', diagnostics)
    assert diagnostics.had_error
    assert stream.getvalue().strip() == '[line 1] Error: Unterminated string.'


def test_unterminated_block_comment_is_reported_at_start():
    diagnostics = Diagnostics(io.StringIO())
    scan('\n/* never\nclosed', diagnostics)
    assert diagnostics.messages == ['[line 2] Error: Unterminated comment.']


def test_unexpected_character_does_not_stop_scanning():
    diagnostics = Diagnostics(io.StringIO())
    tokens = scan('1 @ 2', diagnostics)
    assert [t.literal for t in tokens if t.type == TokenType.NUMBER] == [1.0, 2.0]
    assert diagnostics.messages == ["[line 1] Error: Unexpected character: '@'"]


def test_diagnostics_reset():
    diagnostics = Diagnostics(io.StringIO())
    scan('$', diagnostics)
    assert diagnostics.had_error
    diagnostics.reset()
    assert not diagnostics.had_error
    assert diagnostics.items == []


def test_hiligaynon_keywords_alias_the_english_ones():
    assert kinds('DEKLARAR basi sulat kung kung_indi samtang kada balik ibalik') == [
        TokenType.FUN, TokenType.VAR, TokenType.PRINT, TokenType.IF, TokenType.ELSE,
        TokenType.WHILE, TokenType.FOR, TokenType.RETURN, TokenType.RETURN, TokenType.EOF,
    ]
    assert kinds('korik atik waay kag ukon') == [
        TokenType.TRUE, TokenType.FALSE, TokenType.NIL, TokenType.AND, TokenType.OR, TokenType.EOF,
    ]


def test_operator_words():
    tokens = scan('a ituon_sa b dugang c buhin d padamo e dibaydibay f kambyo g')
    assert [t.type for t in tokens[1::2]] == [
        TokenType.EQUAL, TokenType.PLUS, TokenType.MINUS, TokenType.STAR,
        TokenType.SLASH, TokenType.PERCENT, TokenType.EOF,
    ]
    assert tokens[3].lexeme == 'dugang'
    assert kinds('mas_dako mas_gamay dako_ukon_pareho gamay_ukon_pareho parehos lain indi') == [
        TokenType.GREATER, TokenType.LESS, TokenType.GREATER_EQUAL, TokenType.LESS_EQUAL,
        TokenType.EQUAL_EQUAL, TokenType.BANG_EQUAL, TokenType.BANG, TokenType.EOF,
    ]
    # keywords are case sensitive and whole words only
    assert kinds('Basi basic') == [TokenType.IDENTIFIER, TokenType.IDENTIFIER, TokenType.EOF]
