class RIFXException(Exception):
    '''Base class to extend in order to throw exception in rifx.

    It takes as keyword argument the chain of the layer that caused the
    exception: each chunk the exception goes through appends the name of
    the field that was unpacking, so the innermost comes first.
    '''

    def __init__(self, *args, chain=None):
        self.chain = chain if chain is not None else []
        super().__init__(*args)


class UnpackException(RIFXException):
    '''A primitive value could not be decoded.'''
    pass


class TruncatedInput(UnpackException):

    def __init__(self, offset, requested, available, **kwargs):
        self.offset = offset
        self.requested = requested
        self.available = available
        super().__init__(offset, requested, available, **kwargs)


class EncodingError(UnpackException):
    '''Bytes where text was required are not valid UTF-8.'''

    def __init__(self, offset, raw, **kwargs):
        self.offset = offset
        self.raw = raw
        super().__init__(offset, raw, **kwargs)


class UnexpectedChunk(RIFXException):
    '''The chunk header found at an offset doesn't match what the caller
    expected to find there; expected_length is None when any length was fine.'''

    def __init__(self, offset, expected_fourcc, expected_length, fourcc, length, **kwargs):
        self.offset = offset
        self.expected_fourcc = expected_fourcc
        self.expected_length = expected_length
        self.fourcc = fourcc
        self.length = length
        super().__init__(offset, expected_fourcc, expected_length, fourcc, length, **kwargs)


class InvalidHeader(RIFXException):

    def __init__(self, marker, **kwargs):
        self.marker = marker
        super().__init__(marker, **kwargs)


class UnsupportedCodec(RIFXException):

    def __init__(self, codec, **kwargs):
        self.codec = codec
        super().__init__(codec, **kwargs)
