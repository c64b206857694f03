import logging
import os

import pytest

import fk
from fk.tokens import Token, Keyword, Word, Number
from fk.tokens import OPEN_BRACE, CLOSE_BRACE, OPEN_PAREN, CLOSE_PAREN
from fk.tokens import RANGE_DECL, RATIO_DECL, EQ, PRIMARY_KEY


SIMPLE = os.path.join(os.path.dirname(__file__), 'simple.fk')


def sym(kind):
    return Token(kind)


def test_typedef_line():
    tokens = fk.lex_fk('type AdultAge int(18..70)')
    assert tokens == [
        Keyword('type'), Word('AdultAge'), Word('int'),
        sym(OPEN_PAREN), Number(18), sym(RANGE_DECL), Number(70), sym(CLOSE_PAREN),
    ]


def test_table_and_ratio_symbols():
    tokens = fk.lex_fk('table P { +id = GUIDv4 }\nP -> C(3)')
    assert tokens == [
        Keyword('table'), Word('P'), sym(OPEN_BRACE),
        sym(PRIMARY_KEY), Word('id'), sym(EQ), Word('GUIDv4'), sym(CLOSE_BRACE),
        Word('P'), sym(RATIO_DECL), Word('C'), sym(OPEN_PAREN), Number(3), sym(CLOSE_PAREN),
    ]


def test_keywords_are_case_sensitive():
    assert fk.lex_fk('Table TYPE table') == [Word('Table'), Word('TYPE'), Keyword('table')]


def test_words_may_contain_digits():
    assert fk.lex_fk('GUIDv4 a1b2') == [Word('GUIDv4'), Word('a1b2')]


def test_number_followed_by_letters():
    assert fk.lex_fk('18abc') == [Number(18), Word('abc')]


def test_comment_produces_no_tokens():
    text = 'type A int # type B string ( ..\ntype C string'
    assert fk.lex_fk(text) == [
        Keyword('type'), Word('A'), Word('int'),
        Keyword('type'), Word('C'), Word('string'),
    ]


def test_comment_at_end_of_input():
    assert fk.lex_fk('x # no newline') == [Word('x')]


def test_positions():
    tokens = fk.lex_fk('# comment\ntype  A\n  int(5)')
    assert [(t.lineno, t.charno) for t in tokens] == [
        (2, 1), (2, 7), (3, 3), (3, 6), (3, 7), (3, 8),
    ]
    assert tokens[1].pos == 16


def test_lexing_is_deterministic():
    with open(SIMPLE, encoding='utf-8') as f:
        text = f.read()
    assert fk.lex_fk(text) == fk.lex_fk(text)


def test_simple_file():
    def prop(name, typename):
        return [Word(name), sym(EQ), Word(typename)]

    tokens = fk.lex_fk_file(SIMPLE)
    assert tokens == (
        [Keyword('type'), Word('AdultAge'), Word('int'),
         sym(OPEN_PAREN), Number(18), sym(RANGE_DECL), Number(70), sym(CLOSE_PAREN)]
        + [Keyword('type'), Word('ChildAge'), Word('int'),
           sym(OPEN_PAREN), Number(0), sym(RANGE_DECL), Number(17), sym(CLOSE_PAREN)]
        + [Keyword('table'), Word('Parent'), sym(OPEN_BRACE), sym(PRIMARY_KEY)]
        + prop('id', 'GUIDv4') + prop('first', 'FirstName') + prop('last', 'LastName')
        + prop('age', 'AdultAge') + prop('country', 'CountryISO')
        + [sym(CLOSE_BRACE)]
        + [Keyword('table'), Word('Child'), sym(OPEN_BRACE), sym(PRIMARY_KEY)]
        + prop('id', 'GUIDv4') + prop('first', 'FirstName') + prop('last', 'LastName')
        + prop('age', 'ChildAge') + prop('parent', 'Parent')
        + [sym(CLOSE_BRACE)]
        + [Word('Parent'), sym(RATIO_DECL), sym(OPEN_PAREN), Number(10), sym(CLOSE_PAREN)]
        + [Word('Parent'), sym(RATIO_DECL), Word('Child'),
           sym(OPEN_PAREN), Number(0), sym(RANGE_DECL), Number(3), sym(CLOSE_PAREN)]
    )
    assert len(tokens) == 69


def test_missing_file():
    with pytest.raises(OSError):
        fk.lex_fk_file(os.path.join(os.path.dirname(__file__), 'does-not-exist.fk'))


def test_unknown_character_is_a_warning(caplog):
    with caplog.at_level(logging.WARNING, logger='fk.lexfk'):
        tokens = fk.lex_fk('a ! b > c')
    assert tokens == [Word('a'), Word('b'), Word('c')]
    assert len(caplog.records) == 2
    assert '"!"' in caplog.records[0].getMessage()
    assert 'line 1 char 3' in caplog.records[0].getMessage()


def test_unknown_character_splits_words(caplog):
    with caplog.at_level(logging.WARNING, logger='fk.lexfk'):
        tokens = fk.lex_fk('first_name')
    assert tokens == [Word('first'), Word('name')]


@pytest.mark.parametrize('text', ['1.2', '-.', '- >', '.-', 'a -', '1 .'])
def test_invalid_symbol_group(text):
    with pytest.raises(fk.LexError) as excinfo:
        fk.lex_fk(text)
    assert 'Invalid symbol group' in excinfo.value.errormsg


def test_invalid_symbol_group_position():
    with pytest.raises(fk.LexError) as excinfo:
        fk.lex_fk('type A int\n  (1.2)')
    e = excinfo.value
    assert (e.lineno, e.charno) == (2, 6)
    assert 'line 2 char 6' in str(e)


def test_largest_number():
    assert fk.lex_fk('4294967295') == [Number(4294967295)]


def test_number_overflow():
    with pytest.raises(fk.LexError) as excinfo:
        fk.lex_fk('x -> (4294967296)')
    assert excinfo.value.startpos == 6
    assert 'too large' in excinfo.value.errormsg


def test_file_with_invalid_utf8(tmp_path):
    path = tmp_path / 'bad.fk'
    path.write_bytes(b'type A int\n\xff\n')
    with pytest.raises(fk.LexError) as excinfo:
        fk.lex_fk_file(str(path))
    e = excinfo.value
    assert (e.lineno, e.charno) == (2, 1)
    assert 'byte offset 11' in e.errormsg
    assert isinstance(e.__cause__, UnicodeDecodeError)


def test_file_with_utf8_text(tmp_path):
    path = tmp_path / 'umlaut.fk'
    path.write_bytes('# Größe\ntype A int\n'.encode('utf-8'))
    assert fk.lex_fk_file(str(path)) == [Keyword('type'), Word('A'), Word('int')]
