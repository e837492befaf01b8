"""
A Field is "fundamental" datatype from the format point of view, something directly
unpackable from a stream without need of knowing what is around it.
"""
import logging
from enum import Flag, auto

from .meta import FieldBase, STRUCT_TOKENS
from .properties import PropertyDescriptor
from .exceptions import RIFXException


class Field(FieldBase):
    """Base class to subclass from"""

    def __init__(self, name=None, father=None, default=None, offset=None):
        super().__init__()
        self.logger = logging.getLogger(__name__)
        self.name = name
        self.father = father
        self.default = default
        self.offset = offset

        self.init()

    def init(self):
        self.value = self.value_from_default()

    def value_from_default(self):
        return self.default

    def __str__(self):
        return str(self.value)

    def _get_size(self):
        raise NotImplementedError(f"method {self.__class__.__name__}._get_size() not implemented")

    size = property(
        fget=lambda self: self._get_size(),
    )

    def unpack(self, stream):
        raise NotImplementedError('you need to implement this in the subclass')


class StructField(Field):
    """
    Simplest of the fields: mimic the behaviour of the struct module unpacking
    integers from bytes; the byte order is the one of the stream.
    """

    def __init__(self, format, default=0, **kw):
        if format not in STRUCT_TOKENS:
            raise ValueError(f"format '{format}' is not supported")

        self.format = format
        super().__init__(default=default, **kw)

    def __repr__(self):
        return '<%s(%s)>' % (self.__class__.__name__, hex(self.value))

    def _get_size(self):
        _, bits = STRUCT_TOKENS[self.format]
        return bits // 8

    def unpack(self, stream):
        self.value = stream.read_struct(self.format)


class FourCCField(Field):
    """Four character code identifying something, usually the type of a chunk."""

    def __init__(self, default='', **kw):
        super().__init__(default=default, **kw)

    def __repr__(self):
        return '<%s(%r)>' % (self.__class__.__name__, self.value)

    def _get_size(self):
        return 4

    def unpack(self, stream):
        self.value = stream.read_fourcc()


class ArrayField(Field):
    '''Unpack an array of fields.

    The number of elements is indicated via the parameter named "n", that can
    be an integer or a Dependency; each element is a copy of the field passed
    as first argument.

    This class must behave like a list in python.
    '''

    n = PropertyDescriptor('n', int)

    def __init__(self, field_cls, n=0, **kw):
        self.field_cls = field_cls
        self.n = n

        kw.setdefault('default', [])
        super().__init__(**kw)

    def __repr__(self):
        return f'<{self.__class__.__name__}({self.value!r})>'

    def __getitem__(self, item):
        return self.value[item]

    def __len__(self):
        return len(self.value)

    def __iter__(self):
        return iter(self.value)

    def value_from_default(self):
        return list(self.default)

    def _get_size(self):
        size = 0
        for element in self.value:
            size += element.size

        return size

    def instance_element(self):
        return self.field_cls.create(father=self)  # pass the father so that we don't lose the hierarchy

    def unpack(self, stream):
        n = self.n
        self.logger.debug('unpacking %d elements for \'%s\'' % (n, self.name))

        self.value = []
        for idx in range(n):
            element = self.instance_element()
            element.offset = stream.tell()
            try:
                element.unpack(stream)
            except RIFXException as e:
                e.chain.append(str(idx))
                raise
            self.value.append(element)


class SelectField(Field):
    """Allow to select the kind of final field based on the value of another field in
    the parent chunk. You need to pass the name of the field to use as key and a dictionary
    with the mapping between value and (class, args, kwargs) of the field to use;
    SelectField.Type.DEFAULT works as catch-all.

    If "length" is indicated (an integer or a Dependency), that many bytes are carved
    from the stream and the selected field is unpacked from this window, so that its
    offsets start from zero and it cannot read outside of it.

        class TLV(Chunk):
            type   = fields.FourCCField()
            length = fields.StructField('I')
            data   = fields.SelectField('type', type2field, length=Dependency('.length'))
    """
    class Type(Flag):
        DEFAULT = auto()

    length = PropertyDescriptor('length', int)

    def __init__(self, key, mapping, length=None, **kwargs):
        self._key = key
        self._mapping = mapping
        self._field = None

        if length is not None:
            self.length = length

        super().__init__(**kwargs)

    def __repr__(self):
        return f'<{self.__class__.__name__}{self._field!r}>'

    def init(self):
        self._field = None

    @property
    def value(self):
        return self._field.value if self._field is not None else None

    @property
    def field(self):
        return self._field

    def has_length(self):
        return 'length' in self.__dict__

    def _get_size(self):
        if self.has_length():
            return self.length

        return self._field.size if self._field is not None else 0

    def unpack(self, stream):
        self.logger.debug('resolving key \'%s\'' % self._key)
        field_key = getattr(self.father, self._key)

        key = field_key.value if field_key.value in self._mapping else SelectField.Type.DEFAULT

        self.logger.debug('using key \'%s\' (original was \'%s\')' % (key, field_key.value))

        if self.has_length():
            stream = stream.carve(self.length)

        field_class, args, kwargs = self._mapping[key]
        self._field = field_class(*args, **kwargs)
        self._field.father = self.father
        self._field.offset = stream.tell()

        self._field.unpack(stream)
        self.logger.debug(f'unpacked {self._field!r}')
