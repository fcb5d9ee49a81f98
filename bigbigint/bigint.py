#
# The BigInt arbitrary-precision signed integer type
#
# (c) The bigbigint authors 2026.  All rights reserved.
#

from .bitops import bitwise_and, bitwise_or, shift_left, shift_right
from .compare import compare
from .context import (
    Compare, DivideByZero, InvalidBitwise, Truncated, get_context,
    OP_AND, OP_DIVIDE, OP_DIVMOD, OP_MOD, OP_OR, OP_TO_NATIVE,
)
from .endian import is_negative_native, widen_to_i64
from .kernels import (
    absolute, add, divide, divide_by_power_of_two, integral_add, integral_multiply,
    integral_subtract, multiply, negate, stage_native, subtract,
)
from .natives import Native, NativeOperand, native_type_of, LONG
from .storage import Storage


__all__ = ('BigInt', 'convert_for_arith')


def convert_for_arith(value, context=None):
    '''Return value as an arithmetic operand, or None if it is of an unsupported type.

    BigInts and integers too wide for a native type become Storage.  Natives, native-sized
    integers and floats become a NativeOperand.'''
    if isinstance(value, BigInt):
        return value._storage
    if isinstance(value, Native):
        return value.operand(context)
    if isinstance(value, (int, float)):
        ctype = native_type_of(value)
        if ctype is None:
            return Storage.from_int(value)
        return ctype.operand(value, context)
    return None


def as_storage(operand):
    if isinstance(operand, NativeOperand):
        return stage_native(*operand)
    return operand


def divide_operands(dividend, divisor):
    '''Divide a dividend storage by a non-zero divisor operand.  Native powers of two take a
    shift-and-mask fast path.'''
    if isinstance(divisor, NativeOperand):
        value = widen_to_i64(*divisor)
        magnitude = abs(value)
        if magnitude & (magnitude - 1) == 0:
            return divide_by_power_of_two(dividend, magnitude.bit_length() - 1, value < 0)
        divisor = stage_native(*divisor)
    return divide(dividend, divisor)


def shift_count(count):
    '''Return a shift count as an int, or None if it is not a native integer.'''
    if isinstance(count, Native):
        return count.value if count.ctype.is_integral else None
    if isinstance(count, int):
        return count
    return None


class BigInt:
    '''An arbitrary-precision signed integer stored in sign-magnitude form.

    BigInts mix freely with each other, with Python ints and floats, and with Native values.
    Floats, and floating Natives, are truncated towards zero to a signed 64-bit integer
    before use.  Arithmetic operators return new values; assignment and the compound
    assignment operators modify a BigInt in place, so BigInts are not hashable.
    '''

    __slots__ = ('_storage', )

    def __init__(self, value=0, *, length=0, context=None):
        '''Construct with room for at least length limbs and assign value to it.'''
        self._storage = Storage(length)
        self.assign(value, context)

    @classmethod
    def _from_storage(cls, storage):
        result = cls.__new__(cls)
        result._storage = storage
        return result

    @classmethod
    def from_bytes(cls, raw, negative=False, length=0):
        '''Construct from a big-endian magnitude and a sign.'''
        return cls._from_storage(Storage.from_bytes(raw, negative, length))

    def assign(self, value, context=None):
        '''Assign value, which can be a BigInt, Native, int or float, in place.  The storage
        grows if needed and never shrinks.  Returns self.'''
        context = context or get_context()
        if isinstance(value, BigInt):
            self._storage.assign(value._storage)
            return self
        operand = convert_for_arith(value, context)
        if operand is None:
            raise TypeError(f'cannot assign a {type(value).__name__} to a BigInt')
        if isinstance(operand, NativeOperand):
            self._storage.assign_native(*operand)
        else:
            self._storage.assign(operand)
        return self

    def copy(self):
        return BigInt._from_storage(self._storage.copy())

    def __copy__(self):
        return self.copy()

    def __deepcopy__(self, memo):
        return self.copy()

    ##
    ## Inquiries
    ##

    @property
    def length(self):
        '''The number of limbs of storage.'''
        return self._storage.length

    @property
    def num_bytes(self):
        return self._storage.num_bytes

    def is_negative(self):
        return self._storage.is_negative()

    def is_zero(self):
        return self._storage.is_zero()

    def magnitude(self):
        '''Return the big-endian bytes of the magnitude, num_bytes long.'''
        return bytes(self._storage.data)

    def with_sign(self, sign):
        '''Return a copy with the given sign.  Zero is never negative.'''
        result = self._storage.copy()
        result.set_negative(sign)
        return BigInt._from_storage(result.normalize_zero())

    ##
    ## Conversions
    ##

    def to_native(self, ctype, context=None):
        '''Convert to a native type, returning a Python int or float.

        The trailing ctype.size bytes of the magnitude (8 for floating types) are read and
        negated if the value is negative, then narrowed to ctype.  If the result differs from
        the value Truncated is signalled with that result as the default.
        '''
        context = context or get_context()
        size = ctype.size if ctype.is_integral else LONG.size
        value = int.from_bytes(self._storage.data[-size:], 'big')
        if self.is_negative():
            value = -value
        result = ctype.convert(value)
        if result != int(self):
            result = Truncated((OP_TO_NATIVE, self, ctype), result).signal(context)
        return result

    def __int__(self):
        return int(self._storage)

    def __index__(self):
        return int(self._storage)

    def __float__(self):
        return float(int(self._storage))

    def __bool__(self):
        return not self._storage.is_zero()

    def __repr__(self):
        return f'BigInt({int(self):#x}, length={self.length})'

    ##
    ## Unary operators
    ##

    def __neg__(self):
        return BigInt._from_storage(negate(self._storage))

    def __pos__(self):
        return BigInt._from_storage(self._storage.copy().normalize_zero())

    def __abs__(self):
        return BigInt._from_storage(absolute(self._storage))

    def increment(self):
        '''Add one in place and return self.'''
        self._storage.assign(integral_add(self._storage, *LONG.operand(1)))
        return self

    def decrement(self):
        '''Subtract one in place and return self.'''
        self._storage.assign(integral_subtract(self._storage, *LONG.operand(1)))
        return self

    def post_increment(self):
        '''Add one in place and return the previous value.'''
        previous = self.copy()
        self.increment()
        return previous

    def post_decrement(self):
        '''Subtract one in place and return the previous value.'''
        previous = self.copy()
        self.decrement()
        return previous

    ##
    ## Arithmetic
    ##

    def __add__(self, other):
        other = convert_for_arith(other)
        if other is None:
            return NotImplemented
        if isinstance(other, NativeOperand):
            return BigInt._from_storage(integral_add(self._storage, *other))
        return BigInt._from_storage(add(self._storage, other))

    def __sub__(self, other):
        other = convert_for_arith(other)
        if other is None:
            return NotImplemented
        if isinstance(other, NativeOperand):
            return BigInt._from_storage(integral_subtract(self._storage, *other))
        return BigInt._from_storage(subtract(self._storage, other))

    def __mul__(self, other):
        other = convert_for_arith(other)
        if other is None:
            return NotImplemented
        if isinstance(other, NativeOperand):
            return BigInt._from_storage(integral_multiply(self._storage, *other))
        return BigInt._from_storage(multiply(self._storage, other))

    def __truediv__(self, other):
        return self._division(other, OP_DIVIDE, False)

    def __floordiv__(self, other):
        return self._division(other, OP_DIVIDE, False)

    def __mod__(self, other):
        return self._division(other, OP_MOD, False)

    def __divmod__(self, other):
        return self._division(other, OP_DIVMOD, False)

    def __radd__(self, other):
        return self.__add__(other)

    def __rsub__(self, other):
        other = convert_for_arith(other)
        if other is None:
            return NotImplemented
        if isinstance(other, NativeOperand):
            return BigInt._from_storage(negate(integral_subtract(self._storage, *other)))
        return BigInt._from_storage(subtract(other, self._storage))

    def __rmul__(self, other):
        return self.__mul__(other)

    def __rtruediv__(self, other):
        return self._division(other, OP_DIVIDE, True)

    def __rfloordiv__(self, other):
        return self._division(other, OP_DIVIDE, True)

    def __rmod__(self, other):
        return self._division(other, OP_MOD, True)

    def __rdivmod__(self, other):
        return self._division(other, OP_DIVMOD, True)

    def _division(self, other, op, reflected):
        '''Truncating division.  The quotient's sign is the XOR of the operand signs and the
        remainder takes the dividend's sign.

        A zero divisor signals DivideByZero.  Its default result is zero for a quotient and
        the dividend for a remainder.
        '''
        context = get_context()
        operand = convert_for_arith(other, context)
        if operand is None:
            return NotImplemented

        if reflected:
            dividend, divisor = as_storage(operand), self._storage
            lhs, rhs = other, self
        else:
            dividend, divisor = self._storage, operand
            lhs, rhs = self, other

        if as_storage(divisor).is_zero():
            quotient = BigInt()
            remainder = BigInt._from_storage(dividend.copy())
            default = {OP_DIVIDE: quotient, OP_MOD: remainder,
                       OP_DIVMOD: (quotient, remainder)}[op]
            return DivideByZero((op, lhs, rhs), default).signal(context)

        quotient, remainder = divide_operands(dividend, divisor)
        if op == OP_DIVIDE:
            return BigInt._from_storage(quotient)
        if op == OP_MOD:
            return BigInt._from_storage(remainder)
        return BigInt._from_storage(quotient), BigInt._from_storage(remainder)

    ##
    ## Compound assignment.  These modify self.
    ##

    def _assign_result(self, result):
        if result is NotImplemented:
            return result
        return self.assign(result)

    def __iadd__(self, other):
        return self._assign_result(self.__add__(other))

    def __isub__(self, other):
        return self._assign_result(self.__sub__(other))

    def __imul__(self, other):
        return self._assign_result(self.__mul__(other))

    def __itruediv__(self, other):
        return self._assign_result(self.__truediv__(other))

    def __ifloordiv__(self, other):
        return self._assign_result(self.__floordiv__(other))

    def __imod__(self, other):
        return self._assign_result(self.__mod__(other))

    def __ilshift__(self, other):
        return self._assign_result(self.__lshift__(other))

    def __irshift__(self, other):
        return self._assign_result(self.__rshift__(other))

    def __ior__(self, other):
        return self._assign_result(self.__or__(other))

    def __iand__(self, other):
        return self._assign_result(self.__and__(other))

    ##
    ## Shifts and bitwise operations
    ##

    def __lshift__(self, other):
        count = shift_count(other)
        if count is None:
            return NotImplemented
        return BigInt._from_storage(shift_left(self._storage, count))

    def __rshift__(self, other):
        count = shift_count(other)
        if count is None:
            return NotImplemented
        return BigInt._from_storage(shift_right(self._storage, count))

    def __or__(self, other):
        return self._bitwise(other, OP_OR, bitwise_or, False)

    def __and__(self, other):
        return self._bitwise(other, OP_AND, bitwise_and, False)

    def __ror__(self, other):
        return self._bitwise(other, OP_OR, bitwise_or, True)

    def __rand__(self, other):
        return self._bitwise(other, OP_AND, bitwise_and, True)

    def _bitwise(self, other, op, combine, reflected):
        '''Bitwise operations act on magnitudes.  A negative operand signals InvalidBitwise;
        the default result's sign is combined from the operand signs the same way.'''
        if isinstance(other, float) or (isinstance(other, Native)
                                        and not other.ctype.is_integral):
            return NotImplemented
        context = get_context()
        operand = convert_for_arith(other, context)
        if operand is None:
            return NotImplemented

        operand = as_storage(operand)
        result = BigInt._from_storage(combine(self._storage, operand))
        if self.is_negative() or operand.is_negative():
            lhs, rhs = (other, self) if reflected else (self, other)
            result = InvalidBitwise((op, lhs, rhs), result).signal(context)
        return result

    ##
    ## Comparisons
    ##

    def _compare_any(self, other):
        '''Return a Compare, or None if other is of an unsupported type.'''
        if isinstance(other, BigInt):
            return compare(self._storage, other._storage)
        operand = convert_for_arith(other)
        if operand is None:
            return None
        if isinstance(operand, NativeOperand):
            # Anything non-negative exceeds a negative native, and vice versa
            negative = self.is_negative() and not self.is_zero()
            if is_negative_native(*operand) != negative:
                return Compare.LESS_THAN if negative else Compare.GREATER_THAN
        return compare(self._storage, as_storage(operand))

    def __eq__(self, other):
        result = self._compare_any(other)
        if result is None:
            return NotImplemented
        return result == Compare.EQUAL

    def __lt__(self, other):
        result = self._compare_any(other)
        if result is None:
            return NotImplemented
        return result == Compare.LESS_THAN

    def __le__(self, other):
        result = self._compare_any(other)
        if result is None:
            return NotImplemented
        return result != Compare.GREATER_THAN

    def __gt__(self, other):
        result = self._compare_any(other)
        if result is None:
            return NotImplemented
        return result == Compare.GREATER_THAN

    def __ge__(self, other):
        result = self._compare_any(other)
        if result is None:
            return NotImplemented
        return result != Compare.LESS_THAN

    __hash__ = None
