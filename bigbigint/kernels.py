#
# Schoolbook arithmetic kernels and the sign trellis
#
# (c) The bigbigint authors 2026.  All rights reserved.
#

from .bitops import bitwise_and, shift_left, shift_right
from .compare import compare_magnitude
from .context import Compare
from .endian import ones_complement, widen_to_i64
from .storage import Storage, LIMB_BITS, LIMB_BYTES, MIN_LENGTH


__all__ = ('add_magnitudes', 'subtract_magnitudes', 'multiply_magnitudes',
           'divide_magnitudes', 'add', 'subtract', 'multiply', 'divide',
           'divide_by_power_of_two', 'stage_native', 'integral_add', 'integral_subtract',
           'integral_multiply', 'absolute', 'negate')


def absolute(src):
    '''Return a copy of src with a clear sign.'''
    result = src.copy()
    result.set_negative(False)
    return result


def negate(src):
    '''Return a copy of src with the opposite sign.  Zero stays positive.'''
    result = src.copy()
    result.set_negative(not src.is_negative())
    return result.normalize_zero()


#
# Magnitude kernels.  These ignore the signs of their operands.
#

def add_magnitudes(lhs, rhs):
    '''Return |lhs| + |rhs|, non-negative, at least as wide as the wider operand.'''
    length = max(lhs.length, rhs.length)
    lhs = lhs.widened(length)
    rhs = rhs.widened(length)
    result = Storage(length)

    carry = 0
    for index in range(result.num_bytes - 1, -1, -1):
        carry += lhs.data[index] + rhs.data[index]
        result.data[index] = carry & 0xff
        carry >>= 8

    if carry:
        # The carry byte lands immediately above the old most significant byte
        result.upsize(length + 1)
        result.data[LIMB_BYTES - 1] = carry
    return result


def subtract_magnitudes(minuend, subtrahend):
    '''Return |minuend| - |subtrahend|, signed.

    Uses the ones-complement method: complement the subtrahend, add the minuend, and
    either fold the carry back in (positive result) or complement again (negative result).
    '''
    length = max(minuend.length, subtrahend.length)
    minuend = minuend.widened(length)
    result = Storage(length)
    result.assign(subtrahend)
    result.set_negative(False)
    ones_complement(result)

    carry = 0
    for index in range(result.num_bytes - 1, -1, -1):
        carry += result.data[index] + minuend.data[index]
        result.data[index] = carry & 0xff
        carry >>= 8

    if carry:
        # End-around carry
        for index in range(result.num_bytes - 1, -1, -1):
            carry += result.data[index]
            result.data[index] = carry & 0xff
            carry >>= 8
            if not carry:
                break
    else:
        ones_complement(result)
        result.set_negative(True)
    return result.normalize_zero()


def multiply_magnitudes(lhs, rhs):
    '''Return |lhs| * |rhs|, non-negative, of width lhs.length + rhs.length limbs.'''
    result = Storage(lhs.length + rhs.length)
    if lhs.length < rhs.length:
        lhs, rhs = rhs, lhs

    for j in range(rhs.length):
        multiplier = rhs.read_limb(j)
        if not multiplier:
            continue
        carry = 0
        for i in range(lhs.length):
            product = lhs.read_limb(i) * multiplier + result.read_limb(i + j) + carry
            result.write_limb(i + j, product)
            carry = product >> LIMB_BITS
        result.write_limb(j + lhs.length, carry)
    return result


def divide_magnitudes(dividend, divisor):
    '''Return a (quotient, remainder) pair of non-negative storages for |dividend| divided
    by |divisor|.  divisor must not be zero.

    Restoring division, one bit at a time from the most significant.
    '''
    if dividend.is_zero():
        return Storage(), Storage()
    order = compare_magnitude(dividend, divisor)
    if order == Compare.LESS_THAN:
        return Storage(), absolute(dividend)
    if order == Compare.EQUAL:
        return Storage.from_int(1), Storage()

    divisor = absolute(divisor)
    bits = dividend.bit_length()
    # Skip the leading zero bits so the dividend's top bit is the first shifted out
    work = shift_left(absolute(dividend), dividend.num_bytes * 8 - bits, grow=False)
    remainder = Storage(divisor.length + 1)
    quotient = Storage(MIN_LENGTH)

    for _ in range(bits):
        top_bit = work.data[0] >> 7
        remainder = shift_left(remainder, 1, grow=False)
        remainder.data[-1] |= top_bit
        work = shift_left(work, 1, grow=False)
        quotient = shift_left(quotient, 1, grow=False)

        trial = subtract_magnitudes(remainder, divisor)
        if not trial.is_negative():
            quotient.data[-1] |= 1
            remainder = trial

        if quotient.data[0] & 0x80:
            quotient.upsize(quotient.length + 1)

    return quotient, remainder


#
# Signed operations.  Each reduces to a magnitude kernel; see the table in add() and
# subtract().  Results with a zero magnitude are always positive.
#

def add(lhs, rhs):
    #    (+,+)  |a| + |b|
    #    (+,-)  |a| - |b|
    #    (-,+)  |b| - |a|
    #    (-,-)  -(|a| + |b|)
    if lhs.is_negative() == rhs.is_negative():
        result = add_magnitudes(lhs, rhs)
        result.set_negative(lhs.is_negative())
        return result.normalize_zero()
    if rhs.is_negative():
        return subtract_magnitudes(lhs, rhs)
    return subtract_magnitudes(rhs, lhs)


def subtract(lhs, rhs):
    #    (+,+)  |a| - |b|
    #    (+,-)  |a| + |b|
    #    (-,+)  -(|a| + |b|)
    #    (-,-)  |b| - |a|
    if lhs.is_negative() != rhs.is_negative():
        result = add_magnitudes(lhs, rhs)
        result.set_negative(lhs.is_negative())
        return result.normalize_zero()
    if lhs.is_negative():
        return subtract_magnitudes(rhs, lhs)
    return subtract_magnitudes(lhs, rhs)


def multiply(lhs, rhs):
    result = multiply_magnitudes(lhs, rhs)
    result.set_negative(lhs.is_negative() != rhs.is_negative())
    return result.normalize_zero()


def divide(dividend, divisor):
    '''Truncating division.  Returns (quotient, remainder); the quotient's sign is the XOR of
    the operand signs and the remainder takes the sign of the dividend.'''
    quotient, remainder = divide_magnitudes(dividend, divisor)
    quotient.set_negative(dividend.is_negative() != divisor.is_negative())
    remainder.set_negative(dividend.is_negative())
    return quotient.normalize_zero(), remainder.normalize_zero()


def divide_by_power_of_two(dividend, shift, divisor_negative=False):
    '''As for divide() with a divisor of magnitude 2^shift, by shifting and masking.'''
    quotient = shift_right(dividend, shift)
    quotient.set_negative(dividend.is_negative() != divisor_negative)
    remainder = bitwise_and(absolute(dividend), Storage.from_int((1 << shift) - 1))
    remainder.set_negative(dividend.is_negative())
    return quotient.normalize_zero(), remainder.normalize_zero()


#
# Native operand kernels.  The operand is given as host-order bytes and is staged in a
# 64-bit slot before reaching the signed operations.
#

def stage_native(raw, is_signed):
    '''Return a storage holding a native operand.'''
    staged = Storage(MIN_LENGTH)
    staged.assign_native(raw, is_signed)
    return staged


def integral_add(lhs, raw, is_signed):
    return add(lhs, stage_native(raw, is_signed))


def integral_subtract(lhs, raw, is_signed):
    return subtract(lhs, stage_native(raw, is_signed))


def integral_multiply(lhs, raw, is_signed):
    value = widen_to_i64(raw, is_signed)
    if value == 0:
        return Storage(lhs.length)
    if value == 1:
        return lhs.copy().normalize_zero()
    if value == -1:
        return negate(lhs)
    return multiply(lhs, stage_native(raw, is_signed))
