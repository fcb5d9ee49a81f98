'''Property-based tests of the BigInt arithmetic laws.'''

from hypothesis import assume, given, settings
from hypothesis import strategies as st

from bigbigint import BigInt, INTEGRAL_TYPES


# Wide enough to cross several limbs, narrow enough to keep bitwise division quick
big_st = st.integers(min_value=-2**96, max_value=2**96)
non_negative_st = st.integers(min_value=0, max_value=2**96)
shift_st = st.integers(min_value=0, max_value=80)
ctype_st = st.sampled_from(INTEGRAL_TYPES)


class TestConversionProperties:

    @given(data=st.data(), ctype=ctype_st)
    def test_native_round_trip(self, data, ctype):
        value = data.draw(st.integers(min_value=ctype.min_value, max_value=ctype.max_value))
        assert BigInt(ctype(value)).to_native(ctype) == value

    @given(value=big_st)
    def test_int_round_trip(self, value):
        assert int(BigInt(value)) == value


class TestAdditionProperties:

    @given(a=big_st, b=big_st)
    def test_commutative(self, a, b):
        assert BigInt(a) + BigInt(b) == BigInt(b) + BigInt(a)

    @given(a=big_st, b=big_st, c=big_st)
    def test_associative(self, a, b, c):
        lhs = (BigInt(a) + BigInt(b)) + BigInt(c)
        rhs = BigInt(a) + (BigInt(b) + BigInt(c))
        assert lhs == rhs
        assert lhs == a + b + c

    @given(a=big_st)
    def test_additive_inverse(self, a):
        result = BigInt(a) + (-BigInt(a))
        assert result == 0
        assert not result.is_negative()

    @given(a=big_st, b=big_st)
    def test_subtraction_law(self, a, b):
        assert BigInt(a) - BigInt(b) == BigInt(a) + (-BigInt(b))
        assert BigInt(a) - BigInt(b) == a - b


class TestMultiplicationProperties:

    @given(a=big_st, b=big_st, c=big_st)
    def test_distributive(self, a, b, c):
        lhs = BigInt(a) * (BigInt(b) + BigInt(c))
        assert lhs == BigInt(a) * BigInt(b) + BigInt(a) * BigInt(c)
        assert lhs == a * (b + c)

    @given(a=big_st, b=st.integers(min_value=-2**63, max_value=2**64 - 1))
    def test_native_operand(self, a, b):
        assert BigInt(a) * b == a * b
        assert b * BigInt(a) == a * b


class TestDivisionProperties:

    @given(dividend=non_negative_st, divisor=non_negative_st)
    @settings(max_examples=50)
    def test_division_identity(self, dividend, divisor):
        assume(0 < divisor <= dividend)
        quotient, remainder = divmod(BigInt(dividend), BigInt(divisor))
        assert quotient * divisor + remainder == dividend
        assert 0 <= remainder < divisor

    @given(dividend=big_st, divisor=big_st)
    @settings(max_examples=50)
    def test_truncating_division(self, dividend, divisor):
        assume(divisor != 0)
        quotient, remainder = divmod(BigInt(dividend), BigInt(divisor))
        assert quotient * divisor + remainder == dividend
        assert abs(remainder) < abs(divisor)
        assert remainder == 0 or (remainder < 0) == (dividend < 0)


class TestShiftProperties:

    @given(x=non_negative_st, s=shift_st)
    def test_shift_left_multiplies(self, x, s):
        assert BigInt(x) << s == BigInt(x) * (1 << s)

    @given(x=non_negative_st, s=shift_st)
    def test_shift_right_divides(self, x, s):
        assert BigInt(x) >> s == BigInt(x) / (1 << s)


class TestComparisonProperties:

    @given(a=big_st, b=big_st)
    def test_anti_symmetry(self, a, b):
        assert (BigInt(a) < BigInt(b)) == (BigInt(b) > BigInt(a))
        assert (BigInt(a) <= BigInt(b)) == (BigInt(b) >= BigInt(a))

    @given(a=big_st, b=big_st)
    def test_matches_int_order(self, a, b):
        assert (BigInt(a) < BigInt(b)) == (a < b)
        assert (BigInt(a) == BigInt(b)) == (a == b)

    @given(a=big_st, b=big_st, c=big_st)
    def test_transitive(self, a, b, c):
        x, y, z = sorted((BigInt(a), BigInt(b), BigInt(c)))
        assert x <= y <= z
        assert x <= z
