import logging

from bitstring import ConstBitStream, ReadError

from .meta import Endianess, STRUCT_TOKENS
from .exceptions import TruncatedInput, EncodingError


logger = logging.getLogger(__name__)


class Stream(object):
    '''Bounded cursor over an in-memory buffer.

    The data is loaded once into a ConstBitStream; carve() gives back a new
    Stream sharing it but restricted to a window, with its own zero-based
    position. In this way offsets read inside a payload are relative to the
    payload and nothing can be read outside the window.

    The byte order is carried by the stream itself and inherited by the
    windows carved from it.'''

    def __init__(self, obj, endianess=Endianess.BIG_ENDIAN):
        self.endianess = endianess
        self.obj = obj
        self.base = 0
        self.position = 0

        init_method_name = 'init_%s' % self.obj.__class__.__name__

        init_method = getattr(self, init_method_name, None)

        if init_method is None:
            raise ValueError('\'%s\' is the wrong kind of object to use as stream' % obj.__class__.__name__)

        init_method()

        self.length = self.obj.len // 8

    def __repr__(self):
        return '<%s(base=0x%x, length=0x%x, position=0x%x, %s)>' % (
            self.__class__.__name__,
            self.base,
            self.length,
            self.position,
            self.endianess.name,
        )

    def __len__(self):
        return self.length

    def init_bytes(self):
        self.obj = ConstBitStream(bytes=self.obj)

    def init_bytearray(self):
        self.obj = ConstBitStream(bytes=bytes(self.obj))

    def init_memoryview(self):
        self.obj = ConstBitStream(bytes=self.obj.tobytes())

    def tell(self):
        return self.position

    def absolute(self):
        '''Position of the cursor with respect to the start of the whole buffer'''
        return self.base + self.position

    @property
    def remaining(self):
        return max(self.length - self.position, 0)

    def seek(self, offset):
        if not isinstance(offset, int):
            raise ValueError('\'%s\' is the wrong kind of offset to use' % offset.__class__.__name__)
        if offset < 0:
            raise ValueError(f'negative offset {offset} is not allowed')

        self.position = offset

    def _check(self, size):
        if size > self.remaining:
            raise TruncatedInput(self.absolute(), size, self.remaining)

    def _read_token(self, token, size):
        self._check(size)

        self.obj.bytepos = self.absolute()
        try:
            value = self.obj.read(token)
        except ReadError:
            raise TruncatedInput(self.absolute(), size, self.remaining)

        self.position += size

        return value

    def read(self, size):
        '''Read raw bytes, no byte order applied'''
        if size == 0:
            return b''

        return self._read_token('bytes:%d' % size, size)

    def read_struct(self, format):
        _, bits = STRUCT_TOKENS[format]

        return self._read_token(self.endianess.token(format), bits // 8)

    def read_u8(self):
        return self.read_struct('B')

    def read_i8(self):
        return self.read_struct('b')

    def read_u16(self):
        return self.read_struct('H')

    def read_i16(self):
        return self.read_struct('h')

    def read_u32(self):
        return self.read_struct('I')

    def read_i32(self):
        return self.read_struct('i')

    def _decode(self, raw, offset):
        try:
            return raw.decode('utf-8')
        except UnicodeDecodeError:
            raise EncodingError(offset, raw)

    def read_string(self, length):
        offset = self.absolute()
        return self._decode(self.read(length), offset)

    def read_fourcc(self):
        '''The four character code is reversed under little endian.'''
        offset = self.absolute()
        raw = self.read(4)

        return self._decode(self.endianess.fourcc(raw), offset)

    def carve(self, length):
        '''Return a window of the given length starting at the actual position
        and move past it.'''
        self._check(length)

        window = self.__class__.__new__(self.__class__)
        window.endianess = self.endianess
        window.obj = self.obj
        window.base = self.absolute()
        window.length = length
        window.position = 0

        logger.debug('carved window of 0x%x bytes at 0x%x' % (length, window.base))

        self.position += length

        return window
