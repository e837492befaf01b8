'''
Resolution of the table of chunks of a RIFX container.

The memory map is found bootstrapping from the start of the file

 1. the RIFX chunk at offset zero, that names the codec
 2. the imap immediately following it, whose first entry is the offset of
 3. the mmap, that lists all the chunk slots

then each slot not reclaimed is read and checked against its entry.
'''
import logging
from typing import Dict

from ..meta import Endianess
from ..streams import Stream
from ..exceptions import InvalidHeader, UnsupportedCodec, TruncatedInput
from . import RIFXChunk, read_chunk
from .enum import (
    ChunkType,
    Codec,
    MARKER,
    CHUNK_HEADER_SIZE,
)


logger = logging.getLogger(__name__)


def detect_endianess(data) -> Endianess:
    '''The leading marker is stored reversed by little endian tooling.'''
    marker = bytes(data[:len(MARKER)])

    if marker == MARKER:
        return Endianess.BIG_ENDIAN
    elif marker == MARKER[::-1]:
        return Endianess.LITTLE_ENDIAN

    raise InvalidHeader(marker)


class Movie(object):
    '''Registry of the chunks of a container, indexed by their slot in the memory map
    (the same four character code can be used by more slots).

    It's built all at once from the data passed to the constructor: if something
    goes wrong the exception is propagated and no Movie exists.'''

    def __init__(self, data):
        self.endianess = detect_endianess(data)
        logger.debug('container is %s' % self.endianess.name)

        stream = Stream(data, endianess=self.endianess)

        self.meta, self.imap, self.mmap = self._lookup_mmap(stream)
        self.chunks: Dict[int, RIFXChunk] = self._read_chunks(stream)

    def __repr__(self):
        return '<%s(%s, codec=%r, chunks=%d)>' % (
            self.__class__.__name__,
            self.endianess.name,
            self.codec,
            len(self.chunks),
        )

    def __len__(self):
        return len(self.chunks)

    def __contains__(self, index):
        return index in self.chunks

    def __getitem__(self, index):
        return self.chunks[index]

    def __iter__(self):
        return iter(sorted(self.chunks))

    def items(self):
        return [(_, self.chunks[_]) for _ in self]

    @property
    def codec(self):
        return self.meta.variant.codec.value

    def _lookup_mmap(self, stream):
        meta = read_chunk(stream, ChunkType.RIFX.value)

        codec = meta.variant.codec.value
        if codec not in [_.value for _ in Codec]:
            raise UnsupportedCodec(codec)

        imap = read_chunk(stream, ChunkType.IMAP.value)

        entries = imap.variant.entries
        if len(entries) == 0:
            # the offset of the mmap should be right after the count
            raise TruncatedInput(imap.offset + CHUNK_HEADER_SIZE + entries.offset, 4, 0)

        mmap_offset = entries[0].value
        logger.debug('memory map at offset 0x%x' % mmap_offset)

        stream.seek(mmap_offset)
        mmap = read_chunk(stream, ChunkType.MMAP.value)

        return meta, imap, mmap

    def _read_chunks(self, stream) -> Dict[int, RIFXChunk]:
        chunks = {}

        mmap = self.mmap.variant
        logger.debug('memory map with %d/%d slots used' % (mmap.chunk_count_used.value, mmap.chunk_count_max.value))

        for index, entry in mmap.live_entries():
            stream.seek(entry.chunk_offset.value)
            chunks[index] = read_chunk(stream, entry.fourcc.value, entry.length.value)

        return chunks
