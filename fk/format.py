"""Module fk.format: Functionality for serialization of fk schemas"""

from .schema import Schema, Table


def format_schema(schema):
    """Encode a schema object as fk schema text.

    Args:
        schema (fk.Schema): The schema object
    Returns:
        str: Schema text with all declarations in their original order.
        Tables, and runs of type aliases or ratios, are separated by an
        empty line. Parsing the text yields an equal schema.
    """
    assert isinstance(schema, Schema)

    chunks = []

    previous = None
    for decl in schema.declarations:
        if previous is not None and (isinstance(decl, Table) or type(decl) is not type(previous)):
            chunks.append('\n')
        chunks.append(str(decl) + '\n')
        previous = decl

    return ''.join(chunks)
