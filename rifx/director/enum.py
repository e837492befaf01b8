from enum import Enum


class ChunkType(Enum):
    '''Four character codes with a meaning for the container itself.'''
    RIFX = 'RIFX'  # outermost chunk, its payload names the codec
    IMAP = 'imap'  # initial map, locates the memory map
    MMAP = 'mmap'  # memory map, table of all the chunk slots
    FREE = 'free'  # reclaimed slot
    JUNK = 'junk'  # reclaimed slot


class Codec(Enum):
    MV93 = 'MV93'


# raw leading bytes of a big endian container, a little endian one has them reversed
MARKER = b'RIFX'

# the RIFX chunk header declares the length of the whole file, but its offsets are
# file-absolute so its payload is considered to be only the codec
META_PAYLOAD_LENGTH = 4

CHUNK_HEADER_SIZE = 8

RECLAIMED_TYPES = (
    ChunkType.FREE.value,
    ChunkType.JUNK.value,
)
