from rifx.exceptions import (
    InvalidHeader,
    UnsupportedCodec,
    UnexpectedChunk,
    TruncatedInput,
    EncodingError,
)
from rifx.director.movie import Movie
from rifx.director.utils import describe_error, get_chunks_by_fourcc


def test_describe_error():
    assert describe_error(InvalidHeader(b'FORM')) == 'invalid header'
    assert describe_error(UnsupportedCodec('APPL')) == 'unsupported codec: APPL'
    assert describe_error(UnexpectedChunk(12, 'imap', 8, 'mmap', 24)) == (
        'at offset 12 expected a imap chunk with length 8, but got a mmap chunk with length 24'
    )
    assert describe_error(UnexpectedChunk(12, 'imap', None, 'mmap', 24)) == (
        'at offset 12 expected a imap chunk of unknown length, but got a mmap chunk with length 24'
    )
    assert describe_error(EncodingError(4, b'\xff')) == "at offset 4 found invalid text b'\\xff'"


def test_describe_error_with_chain():
    exc = TruncatedInput(100, 4, 2, chain=['chunk_offset', '1', 'entries', 'data'])

    assert describe_error(exc) == (
        'at offset 100 needed 4 bytes, but only 2 are available (while unpacking data.entries.1.chunk_offset)'
    )


def test_get_chunks_by_fourcc(builder):
    builder.add_chunk('CASt', b'\x00')
    builder.add_reclaimed()
    builder.add_chunk('STXT', b'\x00')
    builder.add_chunk('CASt', b'\x00\x00')

    movie = Movie(builder.build())

    casts = get_chunks_by_fourcc(movie, 'CASt')

    assert [index for index, _ in casts] == [0, 3]
    assert [chunk.length.value for _, chunk in casts] == [1, 2]
    assert get_chunks_by_fourcc(movie, 'BITD') == []


def test_exceptions_carry_their_data():
    exc = UnexpectedChunk(12, 'imap', 8, 'mmap', 24, chain=['data'])

    assert exc.args == (12, 'imap', 8, 'mmap', 24)
    assert str(exc) == "(12, 'imap', 8, 'mmap', 24)"
    assert exc.chain == ['data']
    assert TruncatedInput(100, 4, 2).args == (100, 4, 2)
    assert InvalidHeader(b'FORM').args == (b'FORM',)
    assert str(UnsupportedCodec('APPL')) == 'APPL'
