"""Module fk.parse: Functionality for parsing fk schemas.

The parser consumes the token list from left to right. Each declaration is
handled by a *parse_*_decl()* function that takes the token list and an index
and returns *(i, obj)* where *i* is the index of the first unconsumed token.
Names are resolved against the partially built schema as soon as they are
read, so types and tables must be declared before they are referenced.
Every token must belong to some declaration.
"""

import logging

from .datatype import Const, Range, ForeignKey, get_builtin_datatypes
from .exceptions import ParseError, SchemaError, UnresolvedReferenceError
from .lexfk import lex_fk, lex_fk_file
from .schema import Schema, TypeDef, Property, Table, Ratio
from .tokens import KEYWORD, KEYWORD_TABLE, KEYWORD_TYPE, NUMBER, WORD
from .tokens import OPEN_BRACE, CLOSE_BRACE, OPEN_PAREN, CLOSE_PAREN
from .tokens import RANGE_DECL, RATIO_DECL, EQ, PRIMARY_KEY


logger = logging.getLogger(__name__)


def _peek(tokens, i):
    if i < len(tokens):
        return tokens[i]
    return None


def _tokdesc(token):
    if token is None:
        return '(end of input)'
    return '"%s"' %(token.text(),)


def _is_keyword(token, keyword):
    return token is not None and token.kind == KEYWORD and token.value == keyword


def _looking_at(tokens, i, *kinds):
    """Check whether the tokens starting at index *i* are of the given kinds"""
    if i + len(kinds) > len(tokens):
        return False
    for token, kind in zip(tokens[i:], kinds):
        if token.kind != kind:
            return False
    return True


def parse_token(tokens, i, kind, context, desc, error=ParseError):
    """Parse a single token of the given kind.

    Returns:
        *(i, token)*
    Raises:
        *error* (fk.ParseError or a subclass) if the token at *i* is missing
        or of a different kind.
    """
    token = _peek(tokens, i)
    if token is None or token.kind != kind:
        raise error(context, token, 'Expected %s, found %s' %(desc, _tokdesc(token)))
    return i + 1, token


def parse_specifier(tokens, i, context):
    """Parse a parenthesized specifier: "(" Number [".." Number] ")".

    Returns:
        *(i, specifier)* where *specifier* is a *Const* or a *Range*.
    Raises:
        fk.SchemaError: If the specifier is malformed.
    """
    i, _ = parse_token(tokens, i, OPEN_PAREN, context, '"("', SchemaError)
    i, start = parse_token(tokens, i, NUMBER, context, 'number in specifier', SchemaError)

    if _looking_at(tokens, i, RANGE_DECL):
        i, end = parse_token(tokens, i + 1, NUMBER, context, 'number after ".."', SchemaError)
        specifier = Range(start.value, end.value)
    else:
        specifier = Const(start.value)

    i, _ = parse_token(tokens, i, CLOSE_PAREN, context, '")" to close specifier', SchemaError)
    return i, specifier


def parse_optional_specifier(tokens, i, context):
    """Parse a specifier if one follows at *i*.

    Returns:
        *(i, specifier, token)* where *specifier* and *token* (the opening
        parenthesis) are *None* if there is no specifier.
    """
    token = _peek(tokens, i)
    if token is None or token.kind != OPEN_PAREN:
        return i, None, None
    i, specifier = parse_specifier(tokens, i, context)
    return i, specifier, token


def make_builtin_datatype(nametoken, specifier, datatypes, context):
    """Construct a datatype from a base type name and an optional specifier.

    Args:
        nametoken (fk.Token): The WORD token naming the base type.
        specifier: A *Const* or *Range*, or *None*.
        datatypes (dict): Maps base type names to datatype classes.
    Returns:
        fk.DataType: The datatype object.
    Raises:
        fk.UnresolvedReferenceError: If the name is not a known base type.
    """
    name = nametoken.value
    cls = datatypes.get(name)
    if cls is None:
        raise UnresolvedReferenceError(context, nametoken, name, 'Unknown data type "%s"' %(name,))

    if cls.takes_specifier:
        if specifier is None:
            specifier = Const(0)
        return cls(specifier)

    if specifier is not None:
        logger.warning('Line %d char %d: data type "%s" does not take a specifier, ignoring (%s)',
                       nametoken.lineno, nametoken.charno, name, specifier.spec())
    return cls()


def parse_typedef_decl(tokens, i, schema, datatypes):
    """Parse a type alias declaration: "type" Word Word [specifier].

    Returns:
        *(i, typedef)*
    Raises:
        fk.ParseError: If the declaration is malformed or the name is already
            declared.
    """
    context = 'type declaration'
    i, kw = parse_token(tokens, i, KEYWORD, context, '"type" keyword')
    assert kw.value == KEYWORD_TYPE
    i, nametoken = parse_token(tokens, i, WORD, context, 'type name')
    i, basetoken = parse_token(tokens, i, WORD, context, 'base type name')
    i, specifier, _ = parse_optional_specifier(tokens, i, context)

    if schema.contains_typedef(nametoken.value) is not None:
        raise SchemaError(context, nametoken, 'Redeclaration of type "%s"' %(nametoken.value,))

    datatype = make_builtin_datatype(basetoken, specifier, datatypes, context)
    return i, TypeDef(nametoken.value, datatype)


def resolve_property_datatype(typetoken, specifier, spectoken, schema, datatypes, context):
    """Resolve the type name of a property.

    A type alias takes precedence over a table, which takes precedence over
    the built-in base types. A specifier given together with a type alias or
    a table name is ignored.
    """
    name = typetoken.value

    typedef = schema.contains_typedef(name)
    if typedef is not None:
        if specifier is not None:
            logger.warning('Line %d char %d: type "%s" is an alias, ignoring local specifier (%s)',
                           spectoken.lineno, spectoken.charno, name, specifier.spec())
        return typedef.datatype

    table = schema.contains_table(name)
    if table is not None:
        if specifier is not None:
            logger.warning('Line %d char %d: type "%s" is a table, ignoring local specifier (%s)',
                           spectoken.lineno, spectoken.charno, name, specifier.spec())
        return ForeignKey(table.name, table.primary_key.name)

    return make_builtin_datatype(typetoken, specifier, datatypes, context)


def parse_property_decl(tokens, i, schema, datatypes, context):
    """Parse a property declaration: ["+"] Word "=" Word [specifier].

    Returns:
        *(i, (prop, marker))* where *marker* is the primary key token or
        *None* if the property is not marked as primary key.
    """
    marker = None
    if _looking_at(tokens, i, PRIMARY_KEY):
        marker = tokens[i]
        i += 1

    i, nametoken = parse_token(tokens, i, WORD, context, 'property name')
    i, _ = parse_token(tokens, i, EQ, context, '"=" after property name')
    i, typetoken = parse_token(tokens, i, WORD, context, 'property type')
    i, specifier, spectoken = parse_optional_specifier(tokens, i, context)

    datatype = resolve_property_datatype(typetoken, specifier, spectoken, schema, datatypes, context)
    return i, (Property(nametoken.value, datatype), marker)


def parse_table_decl(tokens, i, schema, datatypes):
    """Parse a table declaration: "table" Word "{" property* "}".

    Returns:
        *(i, table)*
    Raises:
        fk.ParseError: If the declaration is malformed.
        fk.SchemaError: If the table has no or more than one primary key, or
            if a name is declared twice.
        fk.UnresolvedReferenceError: If a property type can't be resolved.
    """
    context = 'table declaration'
    i, kw = parse_token(tokens, i, KEYWORD, context, '"table" keyword')
    assert kw.value == KEYWORD_TABLE
    i, nametoken = parse_token(tokens, i, WORD, context, 'table name')
    i, _ = parse_token(tokens, i, OPEN_BRACE, context, '"{"')

    name = nametoken.value
    context = 'table "%s"' %(name,)

    if schema.contains_table(name) is not None:
        raise SchemaError(context, nametoken, 'Redeclaration of table "%s"' %(name,))

    properties = []
    primary_key = None
    while not _looking_at(tokens, i, CLOSE_BRACE):
        if _peek(tokens, i) is None:
            raise ParseError(context, None, 'Expected "}" to close table')
        propstart = tokens[i]
        i, (prop, marker) = parse_property_decl(tokens, i, schema, datatypes, context)

        if any(p.name == prop.name for p in properties):
            raise SchemaError(context, propstart, 'Property "%s" declared twice' %(prop.name,))
        if marker is not None:
            if primary_key is not None:
                raise SchemaError(context, marker, 'More than one primary key ("%s" and "%s")' %(primary_key, prop.name))
            primary_key = prop.name
        properties.append(prop)

    i += 1

    if primary_key is None:
        raise SchemaError(context, nametoken, 'Table must have primary key')

    return i, Table(name, tuple(properties), primary_key)


def _resolve_table(nametoken, schema, context, which):
    table = schema.contains_table(nametoken.value)
    if table is None:
        raise UnresolvedReferenceError(context, nametoken, nametoken.value, 'Ratio must have valid %s table, "%s" is not declared' %(which, nametoken.value))
    return table


def parse_ratio_decl(tokens, i, schema):
    """Parse a ratio declaration: Word "->" [Word] specifier.

    Returns:
        *(i, ratio)*
    Raises:
        fk.UnresolvedReferenceError: If a table is not declared.
        fk.ParseError: If the shape after "->" is invalid.
        fk.SchemaError: If the specifier is malformed.
    """
    context = 'ratio declaration'
    i, firsttoken = parse_token(tokens, i, WORD, context, 'table name')
    i, _ = parse_token(tokens, i, RATIO_DECL, context, '"->"')

    first = _resolve_table(firsttoken, schema, context, 'first')

    if _looking_at(tokens, i, OPEN_PAREN):
        second = None
    elif _looking_at(tokens, i, WORD, OPEN_PAREN):
        second = _resolve_table(tokens[i], schema, context, 'second')
        i += 1
    else:
        token = _peek(tokens, i)
        raise ParseError(context, token, 'Invalid ratio syntax: expected "(" or table name followed by "(", found %s' %(_tokdesc(token),))

    i, specifier = parse_specifier(tokens, i, context)
    return i, Ratio(first.name, second.name if second is not None else None, specifier)


def parse_tokens(tokens, datatypes=None):
    """Parse a list of tokens into a schema.

    Args:
        tokens (list): *fk.Token* objects as returned by *fk.lex_fk()*.
        datatypes (dict): maps base type names to datatype classes. If not
            given, the built-in datatypes are used.
    Returns:
        fk.Schema: The parsed schema object
    Raises:
        fk.ParseError: If the parse failed. No partial schema is returned.
    """
    if datatypes is None:
        datatypes = get_builtin_datatypes()

    schema = Schema()

    i = 0
    end = len(tokens)
    while i < end:
        token = tokens[i]
        if _is_keyword(token, KEYWORD_TYPE):
            i, typedef = parse_typedef_decl(tokens, i, schema, datatypes)
            schema._add_typedef(typedef)
            logger.debug('Declared type %r', typedef)
        elif _is_keyword(token, KEYWORD_TABLE):
            i, table = parse_table_decl(tokens, i, schema, datatypes)
            schema._add_table(table)
            logger.debug('Declared table %r', table)
        elif _looking_at(tokens, i, WORD, RATIO_DECL):
            i, ratio = parse_ratio_decl(tokens, i, schema)
            schema._add_ratio(ratio)
            logger.debug('Declared ratio %r', ratio)
        else:
            raise ParseError('schema', token, 'Unexpected %s, expected a type, table or ratio declaration' %(_tokdesc(token),))

    return schema


def parse_schema(text, datatypes=None):
    """Lex and parse fk schema text.

    Args:
        text (str): The schema text.
        datatypes (dict): See *parse_tokens()*.
    Returns:
        fk.Schema: The parsed schema object
    Raises:
        fk.LexError: If lexing failed.
        fk.ParseError: If parsing failed.
    """
    return parse_tokens(lex_fk(text), datatypes)


def parse_file(path, datatypes=None):
    """Convenience function to load a schema from a UTF-8 encoded file.

    Raises:
        OSError: If the file can't be read.
        fk.LexError: If lexing failed.
        fk.ParseError: If parsing failed.
    """
    return parse_tokens(lex_fk_file(path), datatypes)
