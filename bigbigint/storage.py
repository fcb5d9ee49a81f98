#
# The owned, big-endian byte buffer underlying every BigInt
#
# (c) The bigbigint authors 2026.  All rights reserved.
#

from enum import IntFlag
from struct import Struct

from .context import AllocationError, get_context, OP_ALLOCATE
from .endian import reverse_bytes, stage_magnitude, widen_to_i64, STAGING_BYTES


__all__ = ('Storage', 'StorageFlags', 'LIMB_BYTES', 'LIMB_BITS', 'LIMB_MASK', 'MIN_LENGTH')


# A limb is the unit of length and the unit multiplication works in
LIMB_BYTES = 4
LIMB_BITS = LIMB_BYTES * 8
LIMB_MASK = (1 << LIMB_BITS) - 1
# Every value has room for at least a staged native operand
MIN_LENGTH = 2

pack_limb = Struct('=I').pack
unpack_limb = Struct('=I').unpack


class StorageFlags(IntFlag):
    NEGATIVE = 0x01


class Storage:
    '''Internal Representation
       -----------------------

    A value is stored in sign-magnitude form.  data holds the magnitude, most significant
    byte first, and is always exactly num_bytes long.  length is the size in limbs and
    num_bytes is always length * LIMB_BYTES.  The sign lives in flags, never in data, so
    the magnitude is the same for a value and its negation.

    A zero magnitude may carry either sign; the arithmetic kernels always deliver zero
    with a clear sign.
    '''

    __slots__ = ('data', 'length', 'num_bytes', 'flags')

    def __init__(self, length=0):
        '''Allocate a zero value of max(length, MIN_LENGTH) limbs.'''
        self.construct(length)

    def construct(self, length):
        length = max(length, MIN_LENGTH)
        self.length = length
        self.num_bytes = length * LIMB_BYTES
        self.flags = StorageFlags(0)
        self.data = self._allocate(self.num_bytes)

    @classmethod
    def from_bytes(cls, raw, negative=False, length=0):
        '''Return storage holding the big-endian magnitude raw, right-aligned in at least
        length limbs.'''
        raw = bytes(raw)
        needed = -(-len(raw) // LIMB_BYTES)
        result = cls(max(length, needed))
        if raw:
            result.data[-len(raw):] = raw
        result.set_negative(negative)
        return result

    @classmethod
    def from_int(cls, value, length=0):
        '''Return storage holding the exact value of a Python integer of any size.'''
        magnitude = abs(value)
        size = max((magnitude.bit_length() + 7) // 8, 1)
        return cls.from_bytes(magnitude.to_bytes(size, 'big'), value < 0, length)

    @staticmethod
    def _allocate(num_bytes):
        context = get_context()
        if context.max_length is not None and num_bytes > context.max_length * LIMB_BYTES:
            raise AllocationError((OP_ALLOCATE, num_bytes), None)
        try:
            return bytearray(num_bytes)
        except MemoryError:
            raise AllocationError((OP_ALLOCATE, num_bytes), None) from None

    def destroy(self):
        '''Release the buffer.  The storage is unusable until constructed again.'''
        self.data = None
        self.length = 0
        self.num_bytes = 0

    def zero_fill(self, count=None):
        '''Zero the first count bytes, or all bytes if count is None.'''
        if count is None:
            count = self.num_bytes
        self.data[:count] = bytes(count)

    def upsize(self, new_length):
        '''Grow to new_length limbs, preserving the magnitude.  The existing bytes become the
        trailing bytes of the new buffer; the new leading bytes are zero.'''
        if new_length <= self.length:
            raise ValueError(f'cannot upsize from {self.length} to {new_length} limbs')
        new_num_bytes = new_length * LIMB_BYTES
        data = self._allocate(new_num_bytes)
        offset = new_num_bytes - self.num_bytes
        data[offset:] = self.data
        self.data = data
        self.length = new_length
        self.num_bytes = new_num_bytes

    def deep_copy(self, src):
        '''Install a fresh copy of src's buffer, length and flags.  The old buffer, if any,
        is released.'''
        data = self._allocate(src.num_bytes)
        data[:] = src.data
        self.data = data
        self.length = src.length
        self.num_bytes = src.num_bytes
        self.flags = src.flags

    def copy(self):
        result = Storage.__new__(Storage)
        result.deep_copy(self)
        return result

    def assign(self, src):
        '''Copy the value of src into this storage, growing it if src is wider.  A narrower
        src is right-aligned and the leading bytes are zeroed.'''
        if src is self:
            return
        if self.num_bytes == src.num_bytes:
            self.data[:] = src.data
        elif self.num_bytes < src.num_bytes:
            self.deep_copy(src)
        else:
            offset = self.num_bytes - src.num_bytes
            self.data[offset:] = src.data
            self.zero_fill(offset)
        self.flags = src.flags

    def widened(self, length):
        '''Return self if it is at least length limbs wide, otherwise a copy of that width.'''
        if self.length >= length:
            return self
        result = Storage(length)
        result.assign(self)
        return result

    def assign_native(self, raw, is_signed):
        '''Assign a native integer given as host-order bytes.'''
        value = widen_to_i64(raw, is_signed)
        self.flags = StorageFlags(0)
        if value < 0:
            self.flags |= StorageFlags.NEGATIVE
            value = -value

        self.zero_fill()
        # The magnitude of the most negative value of a type still fits in its size
        size = len(raw)
        self.data[-size:] = stage_magnitude(value)[STAGING_BYTES - size:]

    #
    # Limb access.  Limbs are indexed from the least significant, starting at zero.
    #

    def read_limb(self, index):
        offset = self.num_bytes - (index + 1) * LIMB_BYTES
        value, = unpack_limb(reverse_bytes(self.data[offset: offset + LIMB_BYTES]))
        return value

    def write_limb(self, index, value):
        offset = self.num_bytes - (index + 1) * LIMB_BYTES
        self.data[offset: offset + LIMB_BYTES] = reverse_bytes(pack_limb(value & LIMB_MASK))

    #
    # Sign and magnitude inquiries
    #

    def is_negative(self):
        return bool(self.flags & StorageFlags.NEGATIVE)

    def set_negative(self, negative):
        if negative:
            self.flags |= StorageFlags.NEGATIVE
        else:
            self.flags &= ~StorageFlags.NEGATIVE

    def is_zero(self):
        return not any(self.data)

    def normalize_zero(self):
        '''Clear the sign of a zero magnitude.  Returns self.'''
        if self.is_zero():
            self.set_negative(False)
        return self

    def bit_length(self):
        '''Return the number of significant bits in the magnitude.'''
        for index, byte in enumerate(self.data):
            if byte:
                return (self.num_bytes - index - 1) * 8 + byte.bit_length()
        return 0

    def __int__(self):
        magnitude = int.from_bytes(self.data, 'big')
        return -magnitude if self.is_negative() else magnitude

    def __repr__(self):
        sign = '-' if self.is_negative() else '+'
        return f'<Storage {sign}0x{self.data.hex()} length={self.length}>'
