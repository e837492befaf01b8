#!/usr/bin/env python3
'''
Dump the structure of a RIFX container (movie or cast) in the manner of readelf(1).

 $ readrifx.py movie.dir
 $ readrifx.py --fourcc CASt movie.dir
'''
import sys
import os
import logging

from rifx.exceptions import RIFXException
from rifx.director.movie import Movie
from rifx.director.utils import describe_error, get_chunks_by_fourcc


logging.basicConfig(level=logging.DEBUG if 'DEBUG' in os.environ else logging.INFO)
logger = logging.getLogger(__name__)


def usage(progname):
    print(f'usage: {progname} [--fourcc XXXX] <rifx file>')
    sys.exit(1)


def dump_header(movie):
    imap = movie.imap.variant
    print(f'''RIFX Header:
  Data:                              {movie.endianess.name}
  Codec:                             {movie.codec}
  Declared length:                   {movie.meta.length.value} (bytes)
  Initial map entries:               {', '.join('0x%08x' % _.value for _ in imap.entries)}''')


def dump_mmap(mmap):
    print(f'''
Memory map:
  Slots used/max:                    {mmap.chunk_count_used.value}/{mmap.chunk_count_max.value}
  Junk pointer:                      {mmap.junk_pointer.value}
  Free pointer:                      {mmap.free_pointer.value}
  Unknown:                           0x{mmap.unknown0.value:04x} 0x{mmap.unknown1.value:04x} 0x{mmap.unknown2.value:08x}

  [Nr] Type Offset     Length     Pad   Unk    Link''')
    for idx, entry in enumerate(mmap.entries):
        print(f'''  [{idx: >2d}] {entry.fourcc.value:<4} 0x{entry.chunk_offset.value:08x} 0x{entry.length.value:08x} {entry.padding.value:>5} {entry.unknown0.value:>5} {entry.link.value:>6}''')


def dump_chunks(chunks):
    print('''
Chunks:''')
    for idx, chunk in chunks:
        print(f'''  [{idx: >2d}] {chunk.fourcc.value:<4} at 0x{chunk.offset:08x} {chunk.variant.__class__.__name__}''')


if __name__ == '__main__':
    args = sys.argv[1:]
    fourcc = None

    if len(args) == 3 and args[0] == '--fourcc':
        fourcc = args[1]
        args = args[2:]

    if len(args) != 1:
        usage(sys.argv[0])

    path = args[0]

    with open(path, 'rb') as f:
        data = f.read()

    try:
        movie = Movie(data)
    except RIFXException as e:
        logger.debug('failed to read \'%s\'' % path, exc_info=True)
        print(f'{path}: {describe_error(e)}')
        sys.exit(1)

    dump_header(movie)
    dump_mmap(movie.mmap.variant)
    dump_chunks(get_chunks_by_fourcc(movie, fourcc) if fourcc else movie.items())
