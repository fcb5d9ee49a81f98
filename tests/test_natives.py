import math
from struct import pack

import pytest

from bigbigint import *


# Test functions with an explicit context and a None context
@pytest.fixture
def context():
    with local_context(DefaultContext) as context:
        yield context


@pytest.fixture
def quiet_context():
    with local_context(Context()) as context:
        yield context


class TestNativeType:

    @pytest.mark.parametrize('ctype, size', (
        (CHAR, 1), (UCHAR, 1), (SHORT, 2), (USHORT, 2), (INT, 4), (UINT, 4),
        (LONG, 8), (ULONG, 8), (FLOAT, 4), (DOUBLE, 8),
    ))
    def test_size(self, ctype, size):
        assert ctype.size == size

    @pytest.mark.parametrize('ctype', INTEGRAL_TYPES)
    def test_range(self, ctype):
        bits = ctype.size * 8
        if ctype.is_signed:
            assert ctype.min_value == -(1 << (bits - 1))
            assert ctype.max_value == (1 << (bits - 1)) - 1
        else:
            assert ctype.min_value == 0
            assert ctype.max_value == (1 << bits) - 1
        assert ctype.is_integral

    @pytest.mark.parametrize('ctype', (FLOAT, DOUBLE))
    def test_floating_has_no_range(self, ctype):
        assert not ctype.is_integral
        with pytest.raises(TypeError):
            ctype.min_value
        with pytest.raises(TypeError):
            ctype.wrap(1)

    @pytest.mark.parametrize('ctype, value, answer', (
        (CHAR, 200, -56),
        (CHAR, -129, 127),
        (UCHAR, -1, 255),
        (USHORT, 65536, 0),
        (INT, 2**31, -2**31),
        (ULONG, -1, 2**64 - 1),
        (LONG, 2**64 + 5, 5),
    ))
    def test_wrap(self, ctype, value, answer):
        assert ctype.wrap(value) == answer

    @pytest.mark.parametrize('ctype, value, answer', (
        (INT, 3.9, 3),
        (INT, -3.9, -3),
        (UCHAR, 256.5, 0),
        (LONG, math.nan, 0),
        (DOUBLE, 3, 3.0),
        (FLOAT, 1e300, math.inf),
        (FLOAT, -1e300, -math.inf),
    ))
    def test_convert(self, ctype, value, answer):
        assert ctype.convert(value) == answer

    def test_convert_single_precision(self):
        assert FLOAT.convert(0.1) != 0.1
        assert FLOAT.convert(0.1) == FLOAT.unpack(pack('=f', 0.1))

    @pytest.mark.parametrize('ctype, value', (
        (CHAR, -2), (UCHAR, 200), (SHORT, -300), (UINT, 2**32 - 1), (LONG, -2**63),
        (ULONG, 2**64 - 1),
    ))
    def test_operand(self, ctype, value):
        operand = ctype.operand(value)
        assert operand == NativeOperand(pack('=' + ctype.code, value), ctype.is_signed)

    def test_floating_operand(self, quiet_context):
        assert DOUBLE.operand(-2.5) == NativeOperand(pack('=q', -2), True)
        assert quiet_context.flags == Flags.INEXACT

    def test_call(self):
        assert INT(5) == Native(INT, 5)
        assert UCHAR(-1) == Native(UCHAR, 255)
        assert str(INT) == 'int'

    @pytest.mark.parametrize('value, ctype', (
        (0, LONG), (-2**63, LONG), (2**63 - 1, LONG), (2**63, ULONG), (2**64 - 1, ULONG),
        (True, LONG), (1.5, DOUBLE), (2**64, None), (-2**63 - 1, None), ('1', None),
    ))
    def test_native_type_of(self, value, ctype):
        assert native_type_of(value) is ctype


class TestTruncateFloat:

    @pytest.mark.parametrize('value, answer, flags', (
        (2.0, 2, 0),
        (-0.0, 0, 0),
        (2.5, 2, Flags.INEXACT),
        (-2.5, -2, Flags.INEXACT),
        (0.25, 0, Flags.INEXACT),
        (2.0 ** 63, -2**63, Flags.INEXACT),
        (2.0 ** 64, 0, Flags.INEXACT),
        (-2.0 ** 63, -2**63, 0),
        (math.inf, 0, Flags.INVALID),
        (-math.inf, 0, Flags.INVALID),
        (math.nan, 0, Flags.INVALID),
    ))
    def test_truncate(self, value, answer, flags, quiet_context):
        assert truncate_float(value) == answer
        assert quiet_context.flags == flags

    def test_record(self, quiet_context):
        quiet_context.set_handler(Inexact, HandlerKind.RECORD_EXCEPTION)
        truncate_float(1.5, quiet_context)
        exception, = quiet_context.exceptions
        assert isinstance(exception, Inexact)
        assert exception.op_tuple == (OP_FROM_FLOAT, 1.5)
        assert exception.default_result == 1

    def test_raise(self, quiet_context):
        quiet_context.set_handler(InvalidOperand, HandlerKind.RAISE)
        with pytest.raises(InvalidOperand) as e:
            truncate_float(math.nan)
        assert e.value.default_result == 0
        assert quiet_context.flags == Flags.INVALID


class TestNative:

    def test_value(self):
        value = SHORT(-300)
        assert value.raw() == pack('=h', -300)
        assert value.is_negative()
        assert int(value) == -300
        assert float(value) == -300.0
        assert [1, 2, 3][USHORT(1)] == 2
        assert repr(value) == 'short(-300)'

    def test_hashable(self):
        assert len({INT(5), INT(5), UINT(5)}) == 2

    def test_floating_index(self):
        with pytest.raises(TypeError):
            [1, 2][DOUBLE(1.0)]

    def test_mixed_arithmetic(self):
        assert BigInt(5) + INT(3) == 8
        assert INT(3) + BigInt(5) == 8
        assert INT(3) - BigInt(5) == -2
        assert CHAR(-3) * BigInt(5) == -15
        assert isinstance(INT(3) + BigInt(5), BigInt)

    @pytest.mark.parametrize('lhs, rhs, answer', (
        (INT(10), 5, INT(15)),
        (UCHAR(250), 10, UCHAR(4)),
        (CHAR(127), 1, CHAR(-128)),
        (DOUBLE(0.5), 2, DOUBLE(2.5)),
    ))
    def test_iadd(self, lhs, rhs, answer):
        lhs += BigInt(rhs)
        assert lhs == answer

    def test_isub(self):
        value = UINT(0)
        value -= BigInt(1)
        assert value == UINT(2**32 - 1)

    def test_imul(self):
        value = SHORT(300)
        value *= BigInt(300)
        assert value == SHORT(SHORT.wrap(90000))
        assert int(value) == 24464
        assert value.ctype is SHORT

    @pytest.mark.parametrize('lhs, rhs, answer', (
        (INT(7), -2, INT(-3)),
        (INT(-7), 2, INT(-3)),
        (INT(-7), -2, INT(3)),
        (DOUBLE(1.0), 4, DOUBLE(0.25)),
    ))
    def test_itruediv(self, lhs, rhs, answer):
        lhs /= BigInt(rhs)
        assert lhs == answer

    def test_itruediv_by_zero(self, context):
        value = INT(1)
        with pytest.raises(DivideByZero):
            value /= BigInt(0)

    def test_itruediv_by_zero_quietly(self, quiet_context):
        value = INT(1)
        value /= BigInt(0)
        assert value == INT(0)
        value = DOUBLE(-1.0)
        value /= BigInt(0)
        assert value == DOUBLE(-math.inf)
        assert quiet_context.flags == Flags.DIV_BY_ZERO

    def test_iadd_unsupported(self):
        value = INT(1)
        with pytest.raises(TypeError):
            value += 1
