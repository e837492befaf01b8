"""
Core module for the abstraction of a chunked file format

"""
import copy
from typing import Tuple, List, Dict

from .fields import Field
from .meta import MetaChunk
from .streams import Stream
from .exceptions import RIFXException
from .properties import get_root_from_chunk


class Chunk(Field, metaclass=MetaChunk):
    """
    Together with Field is the main class that defines a format: its main attributes
    are offset and size that identify a Chunk.

    A Chunk can contain sub-chunks, declared as class attributes in the order
    they appear into the stream.

    If a stream (or raw bytes) is passed to the constructor the chunk is
    unpacked from it immediately.
    """

    def __init__(self, stream=None, **kwargs):
        super().__init__(**kwargs)

        if stream is not None:
            if not isinstance(stream, Stream):
                stream = Stream(stream)
            self.logger.debug('unpacking \'%s\' from %r' % (self.__class__.__name__, stream))
            self.unpack(stream)

    def init(self):
        pass

    @property
    def value(self):
        return self

    def get_ordered_fields_name(self) -> List[str]:
        return self._meta.fields

    def get_fields(self) -> List[Tuple[str, Field]]:
        '''It returns a list of couples (name, instance) for each field.'''
        return [(_, getattr(self, _)) for _ in self.get_ordered_fields_name()]

    def __repr__(self):
        msg = []
        for field_name, field in self.get_fields():
            msg.append('%s=%s' % (field_name, repr(field)))
        return '<%s(%s)>' % (self.__class__.__name__, ','.join(msg))

    def __str__(self):
        msg = ''
        for field_name, field in self.get_fields():
            msg += '%s: %s\n' % (field_name, repr(field))
        return msg

    def create(self, father):
        '''A prototype chunk owns only the fields that were accessed on it, the
        others are created again from the class; copy just those.'''
        instance = copy.copy(self)
        instance.father = father
        for name in self.get_ordered_fields_name():
            if name in self.__dict__:
                instance.__dict__[name] = self.__dict__[name].create(father=instance)

        return instance

    @property
    def root(self):
        '''Obtain the final father of this chunk'''
        return get_root_from_chunk(self)

    def _get_size(self):
        '''the size MUST be derived from the subchunks'''
        size = 0
        for _, field in self.get_fields():
            size += field.size

        return size

    @property
    def layout(self) -> Dict[str, Tuple[int, int]]:
        result = {}
        for name, field in self.get_fields():
            result[name] = (field.offset, field.size)

        return result

    def unpack_fields(self, stream, names):
        '''Unpack, in order, the fields with the given names from the actual
        position of the stream.

        When something goes wrong the exception is propagated as it is, but
        it records the name of the field that was unpacking.'''
        for field_name in names:
            field = getattr(self, field_name)
            offset = stream.tell()

            self.logger.debug('unpacking %s.%s at offset 0x%x' % (self.__class__.__name__, field_name, offset))

            try:
                field.unpack(stream)
            except RIFXException as e:
                e.chain.append(field_name)
                raise
            field.offset = offset

    def unpack(self, stream):
        '''This is one of the main APIs: its aim is to take binary data and
        transform it in the representation given by the class this method
        is implemented.

        After all the fields are unpacked, the validate() method, if present,
        is called; a chunk not passing it is only reported, its data is kept.'''
        self.offset = stream.tell()

        self.unpack_fields(stream, self.get_ordered_fields_name())

        if hasattr(self, 'validate'):
            ret = self.validate()
            if not ret:
                self.logger.warning(f'validation for chunk \'{self.__class__.__name__}\' failed')
