#
# Descriptors and typed values for the host's fixed-width numeric types
#
# (c) The bigbigint authors 2026.  All rights reserved.
#

import math
from collections import namedtuple
from enum import IntEnum
from struct import Struct, error as StructError

import attr

from .context import (
    DivideByZero, Inexact, InvalidOperand, get_context, OP_DIVIDE, OP_FROM_FLOAT,
)


__all__ = ('NativeKind', 'NativeType', 'NativeOperand', 'Native', 'native_type_of',
           'truncate_float', 'CHAR', 'UCHAR', 'SHORT', 'USHORT', 'INT', 'UINT', 'LONG',
           'ULONG', 'FLOAT', 'DOUBLE', 'NATIVE_TYPES', 'INTEGRAL_TYPES')


class NativeKind(IntEnum):
    SIGNED = 0
    UNSIGNED = 1
    FLOATING = 2


# A native integer ready for the integral kernels: its bytes in host order and whether
# its top bit is a sign bit.
NativeOperand = namedtuple('NativeOperand', 'raw is_signed')


@attr.s(slots=True, frozen=True)
class NativeType:
    '''Describes one of the host's numeric types.  Sizes follow the LP64 model.

    Calling a NativeType converts a Python number to a typed Native value with the host's
    conversion rules: integral types wrap, floats are truncated towards zero when
    converted to an integral type.
    '''

    name = attr.ib()
    kind = attr.ib()
    # The struct module format character
    code = attr.ib()
    struct = attr.ib(init=False, repr=False, eq=False)

    @struct.default
    def _make_struct(self):
        return Struct('=' + self.code)

    @property
    def size(self):
        return self.struct.size

    @property
    def is_signed(self):
        return self.kind != NativeKind.UNSIGNED

    @property
    def is_integral(self):
        return self.kind != NativeKind.FLOATING

    @property
    def min_value(self):
        self._require_integral()
        if self.kind == NativeKind.SIGNED:
            return -(1 << (self.size * 8 - 1))
        return 0

    @property
    def max_value(self):
        self._require_integral()
        if self.kind == NativeKind.SIGNED:
            return (1 << (self.size * 8 - 1)) - 1
        return (1 << (self.size * 8)) - 1

    def _require_integral(self):
        if not self.is_integral:
            raise TypeError(f'{self.name} is not an integral type')

    def in_range(self, value):
        return self.min_value <= value <= self.max_value

    def wrap(self, value):
        '''Narrow an integer to this type with two's-complement wrap-around.'''
        self._require_integral()
        bits = self.size * 8
        value &= (1 << bits) - 1
        if self.kind == NativeKind.SIGNED and value >> (bits - 1):
            value -= 1 << bits
        return value

    def convert(self, value):
        '''Return value converted to this type following C's conversion rules, silently.'''
        if self.is_integral:
            if isinstance(value, float):
                if not math.isfinite(value):
                    return 0
                value = int(value)
            return self.wrap(int(value))
        value = float(value)
        if self.code == 'd':
            return value
        try:
            return self.unpack(self.pack(value))
        except (StructError, OverflowError):
            return math.copysign(math.inf, value)

    def pack(self, value):
        '''Return the host-order bytes of value, which must be in range.'''
        return self.struct.pack(value)

    def unpack(self, raw):
        value, = self.struct.unpack(raw)
        return value

    def operand(self, value, context=None):
        '''Return value staged as a NativeOperand.

        Floating values are truncated to a signed 64-bit integer first; see
        truncate_float().'''
        if not self.is_integral:
            return LONG.operand(truncate_float(value, context))
        return NativeOperand(self.pack(self.wrap(value)), self.is_signed)

    def __call__(self, value):
        return Native(self, self.convert(value))

    def __str__(self):
        return self.name


def truncate_float(value, context=None):
    '''Truncate a float towards zero to a signed 64-bit integer, wrapping if out of range.

    NaNs and infinities signal InvalidOperand, with default result zero.  Any loss of
    information signals Inexact, with default result the truncated value.
    '''
    context = context or get_context()
    if not math.isfinite(value):
        return InvalidOperand((OP_FROM_FLOAT, value), 0).signal(context)
    result = LONG.wrap(int(value))
    if result != value:
        result = Inexact((OP_FROM_FLOAT, value), result).signal(context)
    return result


CHAR = NativeType('char', NativeKind.SIGNED, 'b')
UCHAR = NativeType('unsigned char', NativeKind.UNSIGNED, 'B')
SHORT = NativeType('short', NativeKind.SIGNED, 'h')
USHORT = NativeType('unsigned short', NativeKind.UNSIGNED, 'H')
INT = NativeType('int', NativeKind.SIGNED, 'i')
UINT = NativeType('unsigned int', NativeKind.UNSIGNED, 'I')
LONG = NativeType('long', NativeKind.SIGNED, 'q')
ULONG = NativeType('unsigned long', NativeKind.UNSIGNED, 'Q')
FLOAT = NativeType('float', NativeKind.FLOATING, 'f')
DOUBLE = NativeType('double', NativeKind.FLOATING, 'd')

INTEGRAL_TYPES = (CHAR, UCHAR, SHORT, USHORT, INT, UINT, LONG, ULONG)
NATIVE_TYPES = INTEGRAL_TYPES + (FLOAT, DOUBLE)


def native_type_of(value):
    '''Return the native type a plain Python number behaves as, or None.

    Integers prefer long, then unsigned long.  Integers too wide for either have no native
    type.'''
    if isinstance(value, float):
        return DOUBLE
    if isinstance(value, int):
        if LONG.in_range(value):
            return LONG
        if ULONG.in_range(value):
            return ULONG
    return None


@attr.s(slots=True, frozen=True, repr=False)
class Native:
    '''A value of a native numeric type.

    Compound assignment with a BigInt on the right (x += b, x -= b, x *= b, x /= b) casts
    the BigInt to x's type and does the arithmetic in that type.
    '''

    ctype = attr.ib()
    value = attr.ib()

    def raw(self):
        return self.ctype.pack(self.value)

    def is_negative(self):
        return self.value < 0

    def operand(self, context=None):
        return self.ctype.operand(self.value, context)

    def __int__(self):
        return int(self.value)

    def __index__(self):
        if not self.ctype.is_integral:
            raise TypeError(f'{self.ctype} values cannot be used as an index')
        return self.value

    def __float__(self):
        return float(self.value)

    def __repr__(self):
        return f'{self.ctype.name}({self.value!r})'

    def _cast(self, other, context):
        to_native = getattr(other, 'to_native', None)
        if to_native is None:
            return None
        return to_native(self.ctype, context)

    def __iadd__(self, other):
        rhs = self._cast(other, None)
        if rhs is None:
            return NotImplemented
        return self.ctype(self.value + rhs)

    def __isub__(self, other):
        rhs = self._cast(other, None)
        if rhs is None:
            return NotImplemented
        return self.ctype(self.value - rhs)

    def __imul__(self, other):
        rhs = self._cast(other, None)
        if rhs is None:
            return NotImplemented
        return self.ctype(self.value * rhs)

    def __itruediv__(self, other):
        context = get_context()
        rhs = self._cast(other, context)
        if rhs is None:
            return NotImplemented
        lhs = self.value
        if not rhs:
            if self.ctype.is_integral or not lhs:
                default = 0 if self.ctype.is_integral else math.nan
            else:
                default = math.copysign(math.inf, lhs) * math.copysign(1.0, rhs)
            return self.ctype(DivideByZero((OP_DIVIDE, self, other), default).signal(context))
        if self.ctype.is_integral:
            # C division truncates towards zero
            quotient = abs(lhs) // abs(rhs)
            return self.ctype(-quotient if (lhs < 0) != (rhs < 0) else quotient)
        return self.ctype(lhs / rhs)
