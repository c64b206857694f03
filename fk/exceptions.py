def compute_line_and_column(text, i):
    lines = text[:i].split('\n')
    lineno = len(lines)
    charno = i + 1 - sum(len(l) + 1 for l in lines[:-1])
    return lineno, charno


class FkValueError(ValueError):
    """Base class for all schema loading exceptions"""


class LexError(FkValueError):
    """LexError represents schema text tokenization errors

    Attributes:
        lexicaltype (str): Name of the lexical type that could not be lexed.
        text (str): The *str* buffer from which the token could not be lexed.
        startpos (int): Position in *text* from which the lexing of the token started.
        errorpos (int): Position in *text* where the lexing error occurred.
        errormsg (str): Description of the lexing error.
    """

    def __init__(self, lexicaltype, text, startpos, errorpos, errormsg):

        assert isinstance(lexicaltype, str)
        assert isinstance(text, str)
        assert isinstance(startpos, int)
        assert isinstance(errorpos, int)
        assert isinstance(errormsg, str)

        startline, startcolumn = compute_line_and_column(text, startpos)
        errorline, errorcolumn = compute_line_and_column(text, errorpos)

        message = 'While lexing %s (starting at line %d char %d): At line %d char %d: %s' %(lexicaltype, startline, startcolumn, errorline, errorcolumn, errormsg)

        super().__init__(message)

        self.lexicaltype = lexicaltype
        self.text = text
        self.startpos = startpos
        self.errorpos = errorpos
        self.errormsg = errormsg
        self.lineno = errorline
        self.charno = errorcolumn


class ParseError(FkValueError):
    """Raised on syntax errors in the token stream

    Attributes:
        context (str): The declaration that was being parsed.
        token (fk.Token): The offending token, or *None* at end of input.
        errormsg (str): Description of the error.
    """

    def __init__(self, context, token, errormsg):

        assert isinstance(context, str)
        assert isinstance(errormsg, str)

        if token is None:
            where = 'at end of input'
        else:
            where = 'at line %d char %d' %(token.lineno, token.charno)

        super().__init__('While parsing %s: %s: %s' %(context, where, errormsg))

        self.context = context
        self.token = token
        self.errormsg = errormsg


class UnresolvedReferenceError(ParseError):
    """Raised when a type name or table name was not declared before use"""

    def __init__(self, context, token, name, errormsg):

        assert isinstance(name, str)

        super().__init__(context, token, errormsg)

        self.name = name


class SchemaError(ParseError):
    """Raised on structural schema problems

    Examples are a table without primary key, a malformed specifier or the
    redeclaration of a name.
    """
