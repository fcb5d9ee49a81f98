#
# Comparison of sign-magnitude storage
#
# (c) The bigbigint authors 2026.  All rights reserved.
#

from .context import Compare


__all__ = ('compare_magnitude', 'compare')


def compare_magnitude(lhs, rhs):
    '''Compare the magnitudes of two storages of any widths, ignoring their signs.'''
    # Widening right-aligns the narrower magnitude so a byte comparison orders them
    length = max(lhs.length, rhs.length)
    lhs = lhs.widened(length).data
    rhs = rhs.widened(length).data
    if lhs == rhs:
        return Compare.EQUAL
    return Compare.LESS_THAN if lhs < rhs else Compare.GREATER_THAN


def compare(lhs, rhs):
    '''Signed comparison.  Zero compares equal to zero whatever its sign.'''
    lhs_negative = lhs.is_negative() and not lhs.is_zero()
    rhs_negative = rhs.is_negative() and not rhs.is_zero()
    if lhs_negative != rhs_negative:
        return Compare.LESS_THAN if lhs_negative else Compare.GREATER_THAN
    result = compare_magnitude(lhs, rhs)
    if lhs_negative and result != Compare.EQUAL:
        result = Compare.GREATER_THAN if result == Compare.LESS_THAN else Compare.LESS_THAN
    return result
