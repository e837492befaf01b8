import struct

from rifx.meta import Endianess


def pack_fourcc(fourcc, endianess=Endianess.BIG_ENDIAN):
    raw = fourcc.encode()
    return raw if endianess == Endianess.BIG_ENDIAN else raw[::-1]


def pack_ints(format, *values, endianess=Endianess.BIG_ENDIAN):
    prefix = '>' if endianess == Endianess.BIG_ENDIAN else '<'
    return struct.pack(prefix + format, *values)


def pack_chunk(fourcc, payload, length=None, endianess=Endianess.BIG_ENDIAN):
    return (
        pack_fourcc(fourcc, endianess) +
        pack_ints('I', len(payload) if length is None else length, endianess=endianess) +
        payload
    )


def pack_mmap_payload(entries, count_max=None, endianess=Endianess.BIG_ENDIAN):
    '''entries are tuples (fourcc, length, offset, padding, unknown0, link)'''
    payload = pack_ints(
        'HHIIiii',
        24, 20,
        len(entries) if count_max is None else count_max,
        len(entries),
        -1, 0, -1,
        endianess=endianess,
    )
    for fourcc, length, offset, padding, unknown0, link in entries:
        payload += pack_fourcc(fourcc, endianess)
        payload += pack_ints('IIhhi', length, offset, padding, unknown0, link, endianess=endianess)

    return payload


class ContainerBuilder(object):
    '''Build a synthetic container with the layout

        0x00 RIFX chunk (only the codec as payload)
        0x0c imap with a single entry
        0x1c mmap
        .... the chunks added, one after the other

    If bootstrap is True the first three slots of the memory map describe
    RIFX, imap and mmap themselves, like real files do.'''

    META_OFFSET = 0
    IMAP_OFFSET = 12
    MMAP_OFFSET = 28

    def __init__(self, endianess=Endianess.BIG_ENDIAN, codec='MV93', bootstrap=False):
        self.endianess = endianess
        self.codec = codec
        self.bootstrap = bootstrap
        self.slots = []
        self.entries = []

    def add_chunk(self, fourcc, payload=b''):
        self.slots.append((fourcc, payload))
        return len(self.slots) - 1 + (3 if self.bootstrap else 0)

    def add_reclaimed(self, fourcc='free'):
        self.slots.append((fourcc, None))
        return len(self.slots) - 1 + (3 if self.bootstrap else 0)

    def build(self, meta_length=None, count_max=None, tamper=None):
        '''tamper is called with the list of entries before packing them'''
        n_slots = len(self.slots) + (3 if self.bootstrap else 0)
        mmap_length = 24 + 20 * n_slots

        cursor = self.MMAP_OFFSET + 8 + mmap_length
        body = b''
        entries = []
        for fourcc, payload in self.slots:
            if payload is None:
                entries.append([fourcc, 0, 0, 0, 0, 0])
                continue

            entries.append([fourcc, len(payload), cursor, 0, 0, 0])
            chunk = pack_chunk(fourcc, payload, endianess=self.endianess)
            body += chunk
            cursor += len(chunk)

        total = cursor

        if self.bootstrap:
            entries = [
                ['RIFX', total - 8, self.META_OFFSET, 0, 0, 0],
                ['imap', 8, self.IMAP_OFFSET, 0, 0, 0],
                ['mmap', mmap_length, self.MMAP_OFFSET, 0, 0, 0],
            ] + entries

        if tamper:
            tamper(entries)

        self.entries = entries

        meta = pack_chunk(
            'RIFX',
            pack_fourcc(self.codec, self.endianess),
            length=total - 8 if meta_length is None else meta_length,
            endianess=self.endianess,
        )
        imap = pack_chunk(
            'imap',
            pack_ints('II', 1, self.MMAP_OFFSET, endianess=self.endianess),
            endianess=self.endianess,
        )
        mmap = pack_chunk(
            'mmap',
            pack_mmap_payload(entries, count_max=count_max, endianess=self.endianess),
            endianess=self.endianess,
        )

        data = meta + imap + mmap + body

        assert len(data) == total

        return data
