import logging

from ..exceptions import (
    RIFXException,
    InvalidHeader,
    UnsupportedCodec,
    UnexpectedChunk,
    TruncatedInput,
    EncodingError,
)


logger = logging.getLogger(__name__)


def describe_error(exc: RIFXException) -> str:
    '''Human readable description of the exceptions raised while reading a container.'''
    if isinstance(exc, InvalidHeader):
        msg = 'invalid header'
    elif isinstance(exc, UnsupportedCodec):
        msg = f'unsupported codec: {exc.codec}'
    elif isinstance(exc, UnexpectedChunk) and exc.expected_length is not None:
        msg = (f'at offset {exc.offset} expected a {exc.expected_fourcc} chunk with length {exc.expected_length}, '
               f'but got a {exc.fourcc} chunk with length {exc.length}')
    elif isinstance(exc, UnexpectedChunk):
        msg = (f'at offset {exc.offset} expected a {exc.expected_fourcc} chunk of unknown length, '
               f'but got a {exc.fourcc} chunk with length {exc.length}')
    elif isinstance(exc, TruncatedInput):
        msg = f'at offset {exc.offset} needed {exc.requested} bytes, but only {exc.available} are available'
    elif isinstance(exc, EncodingError):
        msg = f'at offset {exc.offset} found invalid text {exc.raw!r}'
    else:
        msg = repr(exc)

    if exc.chain:
        msg += ' (while unpacking %s)' % '.'.join(reversed(exc.chain))

    return msg


def get_chunks_by_fourcc(movie, fourcc):
    '''Return the list of (index, chunk) with the given four character code.'''
    chunks = [(index, chunk) for index, chunk in movie.items() if chunk.fourcc.value == fourcc]

    logger.debug('found %d chunks with fourcc \'%s\'' % (len(chunks), fourcc))

    return chunks
