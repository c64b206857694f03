"""Module fk.datatype: Specifiers and built-in fk datatypes.

A datatype class is looked up by the base type name used in a schema (e.g.
"int" or "GUIDv4"). Classes with *takes_specifier* set are constructed with a
specifier (*Const* or *Range*); the others are constructed without arguments.

Users can add their own datatypes by passing a modified copy of
*get_builtin_datatypes()* to *fk.parse_tokens()*.
"""


class Const:
    """Specifier holding a single constant"""

    def __init__(self, value):
        assert isinstance(value, int)
        self.value = value

    def __eq__(self, other):
        if not isinstance(other, Const):
            return NotImplemented
        return self.value == other.value

    def __hash__(self):
        return hash(('Const', self.value))

    def __repr__(self):
        return 'Const(%d)' %(self.value,)

    def spec(self):
        return '%d' %(self.value,)


class Range:
    """Specifier holding an inclusive range.

    The bounds are kept in input order. *start* may be larger than *end*.
    """

    def __init__(self, start, end):
        assert isinstance(start, int)
        assert isinstance(end, int)
        self.start = start
        self.end = end

    def __eq__(self, other):
        if not isinstance(other, Range):
            return NotImplemented
        return (self.start, self.end) == (other.start, other.end)

    def __hash__(self):
        return hash(('Range', self.start, self.end))

    def __repr__(self):
        return 'Range(%d, %d)' %(self.start, self.end)

    def spec(self):
        return '%d..%d' %(self.start, self.end)


def _is_specifier(x):
    return isinstance(x, (Const, Range))


class DataType:
    """Base class for datatypes without parameters"""
    name = None
    takes_specifier = False

    def _key(self):
        return ()

    def __eq__(self, other):
        if not isinstance(other, DataType):
            return NotImplemented
        return type(self) is type(other) and self._key() == other._key()

    def __hash__(self):
        return hash((type(self).__name__,) + self._key())

    def __repr__(self):
        return type(self).__name__

    def spec(self):
        """The datatype as written in schema text"""
        return self.name


class SpecifiedDataType(DataType):
    """Base class for datatypes qualified by a specifier"""
    takes_specifier = True

    def __init__(self, specifier):
        assert _is_specifier(specifier)
        self.specifier = specifier

    def _key(self):
        return (self.specifier,)

    def __repr__(self):
        return '%s(%r)' %(type(self).__name__, self.specifier)

    def spec(self):
        return '%s(%s)' %(self.name, self.specifier.spec())


class Int(SpecifiedDataType):
    name = 'int'


class String(SpecifiedDataType):
    name = 'string'


class GUIDv4(DataType):
    name = 'GUIDv4'


class FirstName(DataType):
    name = 'FirstName'


class LastName(DataType):
    name = 'LastName'


class CountryISO(DataType):
    name = 'CountryISO'


class PhoneNo(DataType):
    name = 'PhoneNo'


class Email(DataType):
    name = 'Email'


class ForeignKey(DataType):
    """Reference to another table through its primary key.

    Attributes:
        table (str): Name of the referenced table.
        property (str): Name of the primary key property of that table.

    Use *fk.Schema.resolve_foreign_key()* to get the objects.
    """

    def __init__(self, table, propname):
        assert isinstance(table, str)
        assert isinstance(propname, str)
        self.table = table
        self.property = propname

    def _key(self):
        return (self.table, self.property)

    def __repr__(self):
        return 'ForeignKey(%s, %s)' %(self.table, self.property)

    def spec(self):
        return self.table


_builtin_datatypes = {
    'int': Int,
    'string': String,
    'GUIDv4': GUIDv4,
    'FirstName': FirstName,
    'LastName': LastName,
    'CountryISO': CountryISO,
    'PhoneNo': PhoneNo,
    'Email': Email,
}


def get_builtin_datatypes():
    """Get a dict containing all datatypes built-in to this library.

    The dict is freshly created, so can be modified by the caller.

    Returns:
        dict: A dictionary mapping base type names to datatype classes.
    """
    return dict(_builtin_datatypes)
