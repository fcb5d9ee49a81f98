#
# Shifts and bitwise operations on sign-magnitude storage
#
# (c) The bigbigint authors 2026.  All rights reserved.
#

from .storage import Storage, LIMB_BITS


__all__ = ('shift_left', 'shift_right', 'bitwise_or', 'bitwise_and')


def _shift_bytes_left(data, count):
    size = len(data)
    byte_offset, bit_offset = divmod(count, 8)
    result = bytearray(size)
    if byte_offset >= size:
        return result
    if bit_offset == 0:
        result[:size - byte_offset] = data[byte_offset:]
        return result
    # Each result byte is the high byte of a two-byte window shifted left
    for index in range(size - byte_offset):
        src = index + byte_offset
        staging = data[src] << 8
        if src + 1 < size:
            staging |= data[src + 1]
        result[index] = ((staging << bit_offset) >> 8) & 0xff
    return result


def _shift_bytes_right(data, count):
    size = len(data)
    byte_offset, bit_offset = divmod(count, 8)
    result = bytearray(size)
    if byte_offset >= size:
        return result
    if bit_offset == 0:
        result[byte_offset:] = data[:size - byte_offset]
        return result
    for index in range(byte_offset, size):
        src = index - byte_offset
        staging = data[src]
        if src:
            staging |= data[src - 1] << 8
        result[index] = (staging >> bit_offset) & 0xff
    return result


def shift_left(src, count, grow=True):
    '''Return src shifted left count bits, keeping its sign.  A negative count shifts right.

    If grow is True the result is widened so that no significant bit is lost.  Otherwise
    it has the width of src and bits shifted off the top are discarded.
    '''
    if count < 0:
        return shift_right(src, -count)
    length = src.length
    if grow:
        length = max(length, -(-(src.bit_length() + count) // LIMB_BITS))
    work = src.widened(length)
    result = Storage(length)
    result.data[:] = _shift_bytes_left(work.data, count)
    result.set_negative(src.is_negative())
    return result.normalize_zero()


def shift_right(src, count):
    '''Return src with its magnitude shifted right count bits, keeping its sign.  The result
    is truncated towards zero.  A negative count shifts left.'''
    if count < 0:
        return shift_left(src, -count)
    result = Storage(src.length)
    result.data[:] = _shift_bytes_right(src.data, count)
    result.set_negative(src.is_negative())
    return result.normalize_zero()


def _bitwise(lhs, rhs, combine, negative):
    length = max(lhs.length, rhs.length)
    lhs = lhs.widened(length)
    rhs = rhs.widened(length)
    result = Storage(length)
    result.data[:] = bytes(combine(x, y) for x, y in zip(lhs.data, rhs.data))
    result.set_negative(negative)
    return result.normalize_zero()


def bitwise_or(lhs, rhs):
    '''OR the magnitudes.  The result is negative if either operand is.'''
    return _bitwise(lhs, rhs, int.__or__, lhs.is_negative() or rhs.is_negative())


def bitwise_and(lhs, rhs):
    '''AND the magnitudes.  The result is negative if both operands are.'''
    return _bitwise(lhs, rhs, int.__and__, lhs.is_negative() and rhs.is_negative())
