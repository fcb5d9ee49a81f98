#
# Byte-order and sign normalization of native operands
#
# (c) The bigbigint authors 2026.  All rights reserved.
#

import sys
from struct import Struct


__all__ = ('host_endianness', 'reverse_bytes', 'ones_complement', 'is_negative_native',
           'widen_to_i64', 'stage_magnitude', 'STAGING_BYTES')


# The byte order of the interpreter's build; fixed for the life of the process.
host_endianness = sys.byteorder

# Natives are staged in a 64-bit slot before any arithmetic
STAGING_BYTES = 8
pack_staging = Struct('=Q').pack


def reverse_bytes(raw):
    '''Return raw, in host byte order, as bytes in big-endian order, or the reverse.

    The operation is its own inverse.  On a big-endian host it is the identity.'''
    if host_endianness == 'little':
        return bytes(reversed(raw))
    return bytes(raw)


def ones_complement(storage):
    '''Bitwise-NOT every limb of storage in place.'''
    for index in range(storage.length):
        storage.write_limb(index, ~storage.read_limb(index))


def is_negative_native(raw, is_signed):
    '''Return True if the host-order bytes of a native integer represent a negative value.'''
    if not is_signed:
        return False
    msb = raw[-1] if host_endianness == 'little' else raw[0]
    return bool(msb & 0x80)


def widen_to_i64(raw, is_signed):
    '''Zero- or sign-extend the host-order bytes of a native integer into the 64-bit staging
    range and return the value.

    Signed operands land in [-2^63, 2^63); unsigned ones in [0, 2^64).'''
    if len(raw) > STAGING_BYTES:
        raise ValueError(f'native operands are at most {STAGING_BYTES} bytes; got {len(raw)}')
    fill = b'\xff' if is_negative_native(raw, is_signed) else b'\x00'
    padding = fill * (STAGING_BYTES - len(raw))
    if host_endianness == 'little':
        staging = bytes(raw) + padding
    else:
        staging = padding + bytes(raw)
    return int.from_bytes(staging, host_endianness, signed=is_signed)


def stage_magnitude(magnitude):
    '''Return the big-endian bytes of a staged magnitude.'''
    return reverse_bytes(pack_staging(magnitude))
