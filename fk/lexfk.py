"""Module fk.lexfk: Lexer for fk schema text.

The lexer turns the whole input into a list of tokens before parsing begins.
Lexing is strict about two-character symbols ("..", "->") but lenient about
stray characters, which are reported with a warning and otherwise ignored.
"""

import logging

from .exceptions import LexError
from .tokens import Token
from .tokens import KEYWORD, KEYWORDS, NUMBER, WORD
from .tokens import OPEN_BRACE, CLOSE_BRACE, OPEN_PAREN, CLOSE_PAREN
from .tokens import RANGE_DECL, RATIO_DECL, EQ, PRIMARY_KEY


logger = logging.getLogger(__name__)

MAX_NUMBER = 0xffffffff

_single_char_symbols = {
    '+': PRIMARY_KEY,
    '{': OPEN_BRACE,
    '}': CLOSE_BRACE,
    '(': OPEN_PAREN,
    ')': CLOSE_PAREN,
    '=': EQ,
}

_two_char_symbols = {
    '..': RANGE_DECL,
    '->': RATIO_DECL,
}


def _is_letter(c):
    x = ord(c)
    return 0x41 <= x <= 0x5a or 0x61 <= x <= 0x7a


def _is_digit(c):
    return 0x30 <= ord(c) <= 0x39


def _is_space(c):
    return c in ' \t\n\r\x0b\x0c'


def _chardesc(text, i):
    if i >= len(text):
        return '(end of input)'

    return '"' + text[i] + '"'


def lex_fk_word(text, i):
    """Lex a run of ASCII letters and digits that begins with a letter.

    Returns:
        *(i, word)* where *i* is the index of the first unconsumed character.
    Raises:
        fk.LexError: If there is no letter at position *i*.
    """
    start = i
    end = len(text)
    if i >= end or not _is_letter(text[i]):
        raise LexError('Word', text, start, i, 'Word must begin with a letter, found: %s' %(_chardesc(text, i),))
    while i < end and (_is_letter(text[i]) or _is_digit(text[i])):
        i += 1
    return i, text[start:i]


def lex_fk_number(text, i):
    """Lex an unsigned 32-bit decimal number.

    Returns:
        *(i, n)* where *n* is the value as an *int*.
    Raises:
        fk.LexError: If there is no digit at position *i* or if the value
            does not fit into 32 bits.
    """
    start = i
    end = len(text)
    while i < end and _is_digit(text[i]):
        i += 1
    if i == start:
        raise LexError('Number', text, start, i, 'Number must begin with a digit, found: %s' %(_chardesc(text, i),))
    n = int(text[start:i])
    if n > MAX_NUMBER:
        raise LexError('Number', text, start, start, 'Number %s is too large (maximum is %d)' %(text[start:i], MAX_NUMBER))
    return i, n


def lex_fk_comment(text, i):
    """Skip a comment from "#" up to and including the next newline."""
    end = len(text)
    if i >= end or text[i] != '#':
        raise LexError('Comment', text, i, i, 'Comment must begin with "#", found: %s' %(_chardesc(text, i),))
    eol = text.find('\n', i)
    if eol == -1:
        return end, None
    return eol + 1, None


def lex_fk_symbol(text, i):
    """Lex a one- or two-character symbol.

    Returns:
        *(i, kind)* where *kind* is the token kind of the symbol, or *None* if
        the character at *i* is not a known symbol. In the latter case, the
        unknown character is consumed.
    Raises:
        fk.LexError: If a two-character symbol was started but not completed
            by the next character.
    """
    c = text[i]
    if c in _single_char_symbols:
        return i + 1, _single_char_symbols[c]

    for symbol, kind in _two_char_symbols.items():
        if c == symbol[0]:
            if text.startswith(symbol, i):
                return i + 2, kind
            raise LexError('Symbol', text, i, i + 1, 'Invalid symbol group: expected "%s" after "%s", found: %s' %(symbol[1], c, _chardesc(text, i + 1)))

    return i + 1, None


def lex_fk(text):
    """Lex fk schema text into a list of tokens.

    Args:
        text (str): The complete schema text.
    Returns:
        list: The *fk.Token* objects in input order.
    Raises:
        fk.LexError: On a malformed two-character symbol or a number that
            overflows 32 bits.
    """
    assert isinstance(text, str)

    tokens = []
    lineno = 1
    linestart = 0

    i = 0
    end = len(text)
    while i < end:
        start = i
        charno = start - linestart + 1
        c = text[i]

        if c == '#':
            i, _ = lex_fk_comment(text, i)
        elif _is_space(c):
            i += 1
        elif _is_letter(c):
            i, word = lex_fk_word(text, i)
            kind = KEYWORD if word in KEYWORDS else WORD
            tokens.append(Token(kind, word, start, lineno, charno))
        elif _is_digit(c):
            i, n = lex_fk_number(text, i)
            tokens.append(Token(NUMBER, n, start, lineno, charno))
        else:
            i, kind = lex_fk_symbol(text, i)
            if kind is None:
                logger.warning('Ignoring unhandled character %s at line %d char %d', _chardesc(text, start), lineno, charno)
            else:
                tokens.append(Token(kind, None, start, lineno, charno))

        nl = text.rfind('\n', start, i)
        if nl != -1:
            lineno += text.count('\n', start, i)
            linestart = nl + 1

    return tokens


def lex_fk_file(path):
    """Read a UTF-8 encoded schema file and lex it.

    Raises:
        OSError: If the file can't be read.
        fk.LexError: If the file is not valid UTF-8 or lexing fails.
    """
    with open(path, 'rb') as f:
        data = f.read()

    try:
        text = data.decode('utf-8')
    except UnicodeDecodeError as e:
        valid = data[:e.start].decode('utf-8')
        raise LexError('Text', valid, 0, len(valid), 'Invalid UTF-8 byte 0x%.2x at byte offset %d' %(data[e.start], e.start)) from e

    return lex_fk(text)
