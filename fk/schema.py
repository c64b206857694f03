"""Module fk.schema: python classes representing a parsed fk schema"""

from .datatype import Const, Range, DataType, ForeignKey


def _is_string(x):
    return isinstance(x, str)


def _is_specifier(x):
    return isinstance(x, (Const, Range))


def _is_tuple_of(tp, x):
    if not isinstance(x, tuple):
        return False
    for y in x:
        if not isinstance(y, tp):
            return False
    return True


class TypeDef:
    """Type alias

    Attributes:
        name (str): Name of the alias as used in property declarations.
        datatype (fk.DataType): The datatype the name stands for.
    """
    def __init__(self, name, datatype):
        assert _is_string(name)
        assert isinstance(datatype, DataType)

        self.name = name
        self.datatype = datatype

    def __eq__(self, other):
        if not isinstance(other, TypeDef):
            return NotImplemented
        return (self.name, self.datatype) == (other.name, other.datatype)

    def __repr__(self):
        return 'TypeDef(%s, %r)' %(self.name, self.datatype)

    def __str__(self):
        return 'type %s %s' %(self.name, self.datatype.spec())


class Property:
    """Table property

    Attributes:
        name (str): Name of the property.
        datatype (fk.DataType): Resolved datatype of the property.
    """
    def __init__(self, name, datatype):
        assert _is_string(name)
        assert isinstance(datatype, DataType)

        self.name = name
        self.datatype = datatype

    def __eq__(self, other):
        if not isinstance(other, Property):
            return NotImplemented
        return (self.name, self.datatype) == (other.name, other.datatype)

    def __repr__(self):
        return 'Property(%s, %r)' %(self.name, self.datatype)

    def __str__(self):
        return '%s = %s' %(self.name, self.datatype.spec())


class Table:
    """Table object

    Attributes:
        name (str): Name of the table.
        properties: A tuple of *Property* objects in declaration order.
        primary_key (Property): The primary key property. It is one of the
            objects in *properties*.
    """
    def __init__(self, name, properties, primary_key):
        assert _is_string(name)
        assert _is_tuple_of(Property, properties)

        seen = set()
        for prop in properties:
            if prop.name in seen:
                raise ValueError('Table "%s" has more than one property named "%s"' %(name, prop.name))
            seen.add(prop.name)

        if primary_key is None:
            raise ValueError('Table "%s" must have a primary key' %(name,))
        if primary_key not in seen:
            raise ValueError('Primary key "%s" is not a property of table "%s"' %(primary_key, name))

        self.name = name
        self.properties = properties
        self.primary_key = self.get_property(primary_key)

    def get_property(self, name):
        """Get the property named *name*, or *None*"""
        for prop in self.properties:
            if prop.name == name:
                return prop
        return None

    def __eq__(self, other):
        if not isinstance(other, Table):
            return NotImplemented
        return ((self.name, self.properties, self.primary_key)
                == (other.name, other.properties, other.primary_key))

    def __repr__(self):
        return 'Table(%s, primary_key=%s, %r)' %(self.name, self.primary_key.name, list(self.properties))

    def __str__(self):
        out = ['table %s {' %(self.name,)]
        for prop in self.properties:
            marker = '+' if prop is self.primary_key else ''
            out.append('    %s%s' %(marker, prop))
        out.append('}')
        return '\n'.join(out)


class Ratio:
    """Relative cardinality of one or two tables

    Attributes:
        first (str): Name of the first table.
        second (str): Name of the second table, or *None* if the ratio gives
            an absolute row count of the first table.
        ratio: A *Const* or *Range* specifier.
    """
    def __init__(self, first, second, ratio):
        assert _is_string(first)
        assert second is None or _is_string(second)
        assert _is_specifier(ratio)

        self.first = first
        self.second = second
        self.ratio = ratio

    def __eq__(self, other):
        if not isinstance(other, Ratio):
            return NotImplemented
        return ((self.first, self.second, self.ratio)
                == (other.first, other.second, other.ratio))

    def __repr__(self):
        return 'Ratio(%s, %s, %r)' %(self.first, self.second, self.ratio)

    def __str__(self):
        if self.second is None:
            return '%s -> (%s)' %(self.first, self.ratio.spec())
        return '%s -> %s(%s)' %(self.first, self.second, self.ratio.spec())


class Schema:
    """A parsed fk schema.

    Attributes:
        type_defs: A tuple of *TypeDef* objects in declaration order.
        tables: A tuple of *Table* objects in declaration order.
        ratios: A tuple of *Ratio* objects in declaration order.
        declarations: A tuple of all *TypeDef*, *Table* and *Ratio* objects
            in the order in which they were declared.

    Each table is stored once. Foreign keys and ratios refer to tables by
    name, to be looked up with *contains_table()* or
    *resolve_foreign_key()*.

    Names must be declared before they are used, so type aliases and tables
    can only be added to a schema in an order in which every reference
    resolves to something already present.

    The schema is filled in by the parser through the private *_add_*()*
    methods and must not be changed after it has been returned.
    """
    def __init__(self, type_defs=(), tables=(), ratios=()):
        self._type_defs = []
        self._tables = []
        self._ratios = []
        self._declarations = []
        self._type_defs_by_name = {}
        self._tables_by_name = {}

        for typedef in type_defs:
            self._add_typedef(typedef)
        for table in tables:
            self._add_table(table)
        for ratio in ratios:
            self._add_ratio(ratio)

    @property
    def type_defs(self):
        return tuple(self._type_defs)

    @property
    def tables(self):
        return tuple(self._tables)

    @property
    def ratios(self):
        return tuple(self._ratios)

    @property
    def declarations(self):
        return tuple(self._declarations)

    def contains_typedef(self, name):
        """Get the type alias named *name*, or *None*"""
        return self._type_defs_by_name.get(name)

    def contains_table(self, name):
        """Get the table named *name*, or *None*"""
        return self._tables_by_name.get(name)

    def resolve_foreign_key(self, foreignkey):
        """Look up the table and property referenced by a foreign key.

        Args:
            foreignkey (fk.ForeignKey): A foreign key datatype.
        Returns:
            (fk.Table, fk.Property): The referenced table and its primary key.
        Raises:
            KeyError: If the table is not part of this schema.
        """
        assert isinstance(foreignkey, ForeignKey)
        table = self._tables_by_name[foreignkey.table]
        return table, table.get_property(foreignkey.property)

    def _add_typedef(self, typedef):
        assert isinstance(typedef, TypeDef)
        if typedef.name in self._type_defs_by_name:
            raise ValueError('Redeclaration of type "%s"' %(typedef.name,))
        self._check_datatype(typedef.datatype, 'Type "%s"' %(typedef.name,))
        self._type_defs.append(typedef)
        self._declarations.append(typedef)
        self._type_defs_by_name[typedef.name] = typedef

    def _add_table(self, table):
        assert isinstance(table, Table)
        if table.name in self._tables_by_name:
            raise ValueError('Redeclaration of table "%s"' %(table.name,))
        for prop in table.properties:
            self._check_datatype(prop.datatype, 'Property "%s" of table "%s"' %(prop.name, table.name))
        self._tables.append(table)
        self._declarations.append(table)
        self._tables_by_name[table.name] = table

    def _add_ratio(self, ratio):
        assert isinstance(ratio, Ratio)
        for name in (ratio.first, ratio.second):
            if name is not None and name not in self._tables_by_name:
                raise ValueError('Ratio references table "%s" which is not defined' %(name,))
        self._ratios.append(ratio)
        self._declarations.append(ratio)

    def _check_datatype(self, datatype, what):
        if not isinstance(datatype, ForeignKey):
            return
        table = self._tables_by_name.get(datatype.table)
        if table is None:
            raise ValueError('%s references table "%s" which is not defined' %(what, datatype.table))
        if table.primary_key.name != datatype.property:
            raise ValueError('%s references "%s.%s" which is not the primary key' %(what, datatype.table, datatype.property))

    def __eq__(self, other):
        if not isinstance(other, Schema):
            return NotImplemented
        return self._declarations == other._declarations

    def __repr__(self):
        return 'Schema(type_defs=%r, tables=%r, ratios=%r)' %(self._type_defs, self._tables, self._ratios)
