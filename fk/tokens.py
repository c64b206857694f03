"""Module fk.tokens: Token objects produced by the lexer"""

KEYWORD = 'Keyword'
OPEN_BRACE = 'OpenBrace'
CLOSE_BRACE = 'CloseBrace'
OPEN_PAREN = 'OpenParen'
CLOSE_PAREN = 'CloseParen'
NUMBER = 'Number'
RANGE_DECL = 'RangeDecl'
RATIO_DECL = 'RatioDecl'
EQ = 'Eq'
WORD = 'Word'
PRIMARY_KEY = 'PrimaryKey'

KEYWORD_TABLE = 'table'
KEYWORD_TYPE = 'type'

KEYWORDS = (KEYWORD_TABLE, KEYWORD_TYPE)

_kinds_with_value = (KEYWORD, NUMBER, WORD)

_symbols = {
    OPEN_BRACE: '{',
    CLOSE_BRACE: '}',
    OPEN_PAREN: '(',
    CLOSE_PAREN: ')',
    RANGE_DECL: '..',
    RATIO_DECL: '->',
    EQ: '=',
    PRIMARY_KEY: '+',
}


class Token:
    """A single lexeme of schema text

    Attributes:
        kind (str): One of the kind constants of this module.
        value: The keyword (str) for KEYWORD tokens, the word (str) for WORD
            tokens, the value (int) for NUMBER tokens, *None* otherwise.
        pos (int): 0-based index of the first character in the lexed text.
        lineno (int): 1-based line number of the first character.
        charno (int): 1-based position of the first character in its line.

    Two tokens compare equal if kind and value are equal. The position is
    informational only.
    """
    __slots__ = ('kind', 'value', 'pos', 'lineno', 'charno')

    def __init__(self, kind, value=None, pos=0, lineno=1, charno=1):
        assert isinstance(kind, str)
        assert (value is not None) == (kind in _kinds_with_value)
        assert kind != KEYWORD or value in KEYWORDS
        assert kind != NUMBER or isinstance(value, int)
        assert kind != WORD or isinstance(value, str)

        self.kind = kind
        self.value = value
        self.pos = pos
        self.lineno = lineno
        self.charno = charno

    def __eq__(self, other):
        if not isinstance(other, Token):
            return NotImplemented
        return self.kind == other.kind and self.value == other.value

    def __hash__(self):
        return hash((self.kind, self.value))

    def __repr__(self):
        if self.value is None:
            return self.kind
        return '%s(%r)' %(self.kind, self.value)

    def text(self):
        """The token as it would appear in schema text"""
        if self.kind in _kinds_with_value:
            return str(self.value)
        return _symbols[self.kind]


def Keyword(keyword):
    return Token(KEYWORD, keyword)


def Word(word):
    return Token(WORD, word)


def Number(n):
    return Token(NUMBER, n)
