from .exceptions import FkValueError, LexError, ParseError, UnresolvedReferenceError, SchemaError
from .tokens import Token
from .datatype import Const, Range, DataType, ForeignKey, get_builtin_datatypes
from .datatype import Int, String, GUIDv4, FirstName, LastName, CountryISO, PhoneNo, Email
from .schema import Schema, TypeDef, Property, Table, Ratio
from .lexfk import lex_fk, lex_fk_file
from .parse import parse_tokens, parse_schema, parse_file
from .format import format_schema
