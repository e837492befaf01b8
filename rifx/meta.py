import copy
import logging
from enum import Enum


logger = logging.getLogger(__name__)


# format character -> (bitstring kind, number of bits)
STRUCT_TOKENS = {
    'B': ('uint', 8),
    'b': ('int', 8),
    'H': ('uint', 16),
    'h': ('int', 16),
    'I': ('uint', 32),
    'i': ('int', 32),
}


class Endianess(Enum):
    '''Byte order of a whole container, selected once from its leading marker.

    Besides the integers, it decides how a four-character code is read: files
    written by little-endian tooling store the whole structure reversed, so
    the 4 bytes of a tag must be flipped to read as a legible code.'''
    BIG_ENDIAN    = 'be'
    LITTLE_ENDIAN = 'le'

    def token(self, format):
        '''Return the bitstring token to read a struct-like format character.'''
        kind, bits = STRUCT_TOKENS[format]
        return '%s%s:%d' % (kind, self.value, bits)

    def fourcc(self, raw: bytes) -> bytes:
        if self is Endianess.LITTLE_ENDIAN:
            return raw[::-1]

        return raw


class FieldDescriptor(object):
    """Wrapper around field access of a Field related class."""

    def __init__(self, field_instance: "Field", field_name: str):
        self.logger = logging.getLogger(f"{self.__module__}.{self.__class__.__name__}")
        self.field = field_instance
        self.field.name = field_name

    def __get__(self, instance, type=None):
        if instance is None:
            return self

        data = instance.__dict__

        if self.field.name in data:
            return data[self.field.name]

        self.logger.debug("create new field for field named '%s'", self.field.name)
        new_field = self.field.create(father=instance)
        data[self.field.name] = new_field

        return new_field

    def __set__(self, instance, value):
        if not isinstance(value, self.field.__class__):
            raise ValueError(f"field '{self.field.name}' accepts only instances of {self.field.__class__.__name__}")

        value.father = instance
        value.name = self.field.name
        instance.__dict__[self.field.name] = value


class FieldBase(object):

    def contribute_to_chunk(self, cls, name):
        if name in cls.__dict__:
            raise AttributeError(f'field {name} is already present in class {cls.__name__}')

        setattr(cls, name, FieldDescriptor(self, name))

    def create(self, father):
        instance = copy.deepcopy(self)
        instance.father = father
        return instance


class Meta(object):
    """Class containing metadata about the abstraction"""

    def __init__(self):
        self.fields = []


class MetaChunk(type):

    def __new__(cls, names, bases, attrs):
        '''Fields are collected in declaration order, parents' ones first.'''
        module = attrs.pop('__module__')
        classcell = attrs.pop('__classcell__', None)

        new_attrs = {
            '__module__': module,
        }
        if classcell is not None:
            new_attrs['__classcell__'] = classcell
        new_cls = super(MetaChunk, cls).__new__(cls, names, bases, new_attrs)

        new_cls._meta = Meta()

        # handle inheritance
        parents = [_ for _ in bases if isinstance(_, MetaChunk)]
        for parent in parents:
            for obj_name in parent._meta.fields:
                setattr(new_cls, obj_name, parent.__dict__[obj_name])
                new_cls._meta.fields.append(obj_name)

        for obj_name, obj in attrs.items():
            new_cls.add_to_class(obj_name, obj)

        return new_cls

    def add_to_class(cls, name, value):
        if hasattr(value, 'contribute_to_chunk'):
            logger.debug('contribute_to_chunk() found for field \'%s\'' % name)
            cls._meta.fields.append(name)
            value.contribute_to_chunk(cls, name)
        else:
            setattr(cls, name, value)

