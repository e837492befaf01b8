"""
# RIFX file format ORM.

A container file is described as a sequence of chunks, each one declared as a
class whose attributes are the fields that compose it, in the order they are
found into the stream

    class MemoryMapEntry(Chunk):
        fourcc       = fields.FourCCField()
        length       = fields.StructField('I')
        chunk_offset = fields.StructField('I')
        ...

The only operation defined is unpack(): reading the binary data and build a
high-level representation of that. The chunk knows how many bytes needs to
read and starts from the actual position of the stream.

The byte order is not a property of the fields but of the Stream they are
read from, since for these containers it's known only after looking at the
first bytes of the file.
"""
