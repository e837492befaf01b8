'''
# RIFX container

Format used by a vintage multimedia authoring tool to store its movies and casts.
Everything is a chunk: a four character code, a 32 bit length and that many bytes
of payload.

The file starts with the "RIFX" chunk, that wraps all the others; in files written
by little endian tooling all the structure is byte-reversed, so the marker reads as
"XFIR" and every four character code must be read backward.

  .-------------------------------------.
  | RIFX  length  codec                 |  offset 0, only the codec is its payload
  | imap  length  count  offset ...     |  first offset locates the mmap
  | ...                                 |
  | mmap  length  header  entries ...   |  table of all the chunk slots
  | ...                                 |
  | XXXX  length  payload               |  the chunks the mmap points to
  '-------------------------------------'

Offsets found in the imap and mmap are relative to the start of the file.
'''
import logging

from .. import fields
from ..core import Chunk
from ..properties import Dependency
from ..exceptions import UnexpectedChunk
from .enum import (
    ChunkType,
    META_PAYLOAD_LENGTH,
    RECLAIMED_TYPES,
)


logger = logging.getLogger(__name__)


class RIFXMeta(Chunk):
    codec = fields.FourCCField()


class InitialMap(Chunk):
    '''Only the first entry has a known meaning: the offset of the memory map.'''
    entry_count = fields.StructField('I')
    entries     = fields.ArrayField(fields.StructField('I'), n=Dependency('.entry_count'))


class MemoryMapEntry(Chunk):
    fourcc       = fields.FourCCField()
    length       = fields.StructField('I')
    chunk_offset = fields.StructField('I')
    padding      = fields.StructField('h')
    unknown0     = fields.StructField('h')
    link         = fields.StructField('i')

    def is_reclaimed(self):
        return self.fourcc.value in RECLAIMED_TYPES


class MemoryMap(Chunk):
    '''The table of all the chunks physically present into the file, including
    the slots freed by the authoring tool (typed "free" or "junk").

    The meaning of the fields named unknown* is not known, they are kept as they are.'''
    unknown0         = fields.StructField('H')
    unknown1         = fields.StructField('H')
    chunk_count_max  = fields.StructField('I')
    chunk_count_used = fields.StructField('I')
    junk_pointer     = fields.StructField('i')
    unknown2         = fields.StructField('i')
    free_pointer     = fields.StructField('i')
    entries          = fields.ArrayField(MemoryMapEntry(), n=Dependency('.chunk_count_used'))

    def validate(self):
        return self.chunk_count_used.value <= self.chunk_count_max.value

    def live_entries(self):
        '''Iterate over (index, entry) for the slots that contain a chunk.'''
        for index, entry in enumerate(self.entries):
            if entry.is_reclaimed():
                continue

            yield index, entry


class Unimplemented(Chunk):
    '''Payload of a chunk we don't know how to interpret (yet).'''
    pass


fourcc2field = {
    ChunkType.RIFX.value: (RIFXMeta, (), {}),
    ChunkType.IMAP.value: (InitialMap, (), {}),
    ChunkType.MMAP.value: (MemoryMap, (), {}),
    fields.SelectField.Type.DEFAULT: (Unimplemented, (), {}),
}


class RIFXChunk(Chunk):
    '''Generic chunk: the payload is unpacked from a window of its own, so that
    it's not possible to read outside it and its offsets start from zero.

    If an expected four character code is given, the header is checked before
    touching the payload; the length too if an expected length is given.
    '''
    fourcc = fields.FourCCField()
    length = fields.StructField('I')
    data   = fields.SelectField('fourcc', fourcc2field, length=Dependency('.payload_length'))

    def __init__(self, stream=None, expected_fourcc=None, expected_length=None, **kwargs):
        self.expected_fourcc = expected_fourcc
        self.expected_length = expected_length
        super().__init__(stream, **kwargs)

    @property
    def variant(self):
        return self.data.field

    def payload_length(self):
        '''The RIFX chunk declares the length of the whole file but offsets
        inside it are relative to the file, so we pretend it contains only the codec.'''
        if self.fourcc.value == ChunkType.RIFX.value:
            return META_PAYLOAD_LENGTH

        return self.length.value

    def check_expectation(self):
        fourcc = self.fourcc.value
        length = self.length.value

        is_expected = fourcc == self.expected_fourcc
        if self.expected_length is not None:
            is_expected = is_expected and length == self.expected_length

        if not is_expected:
            raise UnexpectedChunk(
                self.offset,
                self.expected_fourcc,
                self.expected_length,
                fourcc,
                length,
            )

    def unpack(self, stream):
        self.offset = stream.tell()

        self.unpack_fields(stream, ['fourcc', 'length'])

        if self.expected_fourcc is not None:
            self.check_expectation()

        self.unpack_fields(stream, ['data'])


def read_chunk(stream, expected_fourcc, expected_length=None):
    '''Read the chunk at the actual position of the stream, that is left
    just after its payload.'''
    logger.debug('reading \'%s\' chunk at 0x%x (expected length %s)' % (expected_fourcc, stream.tell(), expected_length))

    return RIFXChunk(stream, expected_fourcc=expected_fourcc, expected_length=expected_length)
