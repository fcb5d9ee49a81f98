#
# Status flags, signals and the arithmetic context of the bigbigint package
#
# (c) The bigbigint authors 2026.  All rights reserved.
#

import copy
import threading
from enum import IntFlag, IntEnum


__all__ = ('Context', 'DefaultContext', 'get_context', 'set_context', 'local_context',
           'Flags', 'Compare', 'HandlerKind',
           'BigIntError', 'DivisionByZero', 'DivideByZero', 'Invalid', 'InvalidBitwise',
           'InvalidOperand', 'Inexact', 'Truncated', 'AllocationError',
           'OP_DIVIDE', 'OP_MOD', 'OP_DIVMOD',
           'OP_OR', 'OP_AND', 'OP_FROM_FLOAT', 'OP_TO_NATIVE', 'OP_ALLOCATE')


# Operation names
OP_DIVIDE = 'divide'
OP_MOD = 'mod'
OP_DIVMOD = 'divmod'
OP_OR = 'or'
OP_AND = 'and'
OP_FROM_FLOAT = 'from_float'
OP_TO_NATIVE = 'to_native'
OP_ALLOCATE = 'allocate'


# Three-way result of a comparison.
class Compare(IntEnum):
    LESS_THAN = 0
    EQUAL = 1
    GREATER_THAN = 2


# Operation status flags.
class Flags(IntFlag):
    INVALID     = 0x01
    DIV_BY_ZERO = 0x02
    TRUNCATED   = 0x04
    INEXACT     = 0x08


#
# Signals
#

class BigIntError(ArithmeticError):
    '''All arithmetic exceptions signalled by this package subclass from this.

    BigIntError expects two arguments:

         def __init__(self, op_tuple, result):

    op_tuple is a tuple of the operation name and operands causing the signal.  result is
    the value that default exception handling should deliver.

    Exceptions derived from BigIntError must have a linear inheritance from it and
    through the first base class if an exception has multiple base classes.  See, for
    example, DivisionByZero.
    '''

    flag_to_raise = 0

    @property
    def op_tuple(self):
        return self.args[0]

    @property
    def default_result(self):
        return self.args[1]

    def is_divide(self):
        return self.op_tuple[0] == OP_DIVIDE

    def signal(self, context=None):
        '''Call to signal an exception.  This routine handles the exception according to
        default or alternative exception handling as specified in the context.'''
        context = context or get_context()
        kind, handler = context.handler(self.__class__)
        result = self.default_result

        if kind != HandlerKind.NO_FLAG:
            context.flags |= self.flag_to_raise
            if kind == HandlerKind.RECORD_EXCEPTION:
                context.exceptions.append(self)

        if kind == HandlerKind.RAISE:
            raise self
        if kind == HandlerKind.SUBSTITUTE_VALUE:
            result = handler(self, context)
        elif kind == HandlerKind.SUBSTITUTE_VALUE_XOR and self.is_divide():
            result = handler(self, context)
            sign = operand_sign(self.op_tuple[1]) ^ operand_sign(self.op_tuple[2])
            result = result.with_sign(sign)

        return result


#
# DivisionByZero - the only sub-exception is DivideByZero
#

class DivisionByZero(BigIntError, ZeroDivisionError):
    '''Base class of division by zero errors.'''

    flag_to_raise = Flags.DIV_BY_ZERO


class DivideByZero(DivisionByZero):
    '''A divide, modulo or divmod operation with a zero divisor.'''


#
# Invalid - sub-exceptions are InvalidBitwise and InvalidOperand
#

class Invalid(BigIntError):
    '''Invalid operation base class.  Signalled when an operation has no well-defined
    result for its operands.'''

    flag_to_raise = Flags.INVALID


class InvalidBitwise(Invalid):
    '''Signalled when a bitwise operation has a negative operand.  The default result
    combines the magnitudes and the signs separately.'''


class InvalidOperand(Invalid):
    '''Signalled when a float operand is a NaN or an infinity.  The default result is
    zero.'''


#
# Inexact.  Not subclassed.
#

class Inexact(BigIntError):
    '''Signalled when a float operand loses its fractional part, or wraps, on conversion to
    a 64-bit integer.'''

    flag_to_raise = Flags.INEXACT


#
# Truncated.  Not subclassed.
#

class Truncated(BigIntError):
    '''Signalled when a conversion to a native type cannot represent the value.  The default
    result is the value truncated to the native type.'''

    flag_to_raise = Flags.TRUNCATED


class AllocationError(BigIntError, MemoryError):
    '''Raised when storage for a value cannot be allocated.  This is never routed through
    a context handler; it is always raised.'''


# Alternate exception handling

class HandlerKind(IntEnum):
    '''Indicates how a signalled exception should be handled.'''
    # Default exception handling.  This returns the default result and raises the flag.
    DEFAULT = 0

    # Default exception handling without raising the associated flag
    NO_FLAG = 1

    # Default exception handling but also record the exception in the context
    RECORD_EXCEPTION = 2

    # Default exception handling but substitute a value for the default result.  A handler
    # must be provided with signature
    #
    #    def handler(exception, context):
    #
    # The value returned by the handler will become the operation's result.
    SUBSTITUTE_VALUE = 3

    # For exceptions arising from divide operations: default exception
    # handling but substitute a value for the default result, giving it the sign the XOR
    # of the signs of the operands.  A handler must be provided as described for
    # SUBSTITUTE_VALUE and must return a BigInt.
    SUBSTITUTE_VALUE_XOR = 4

    # Raise the exception immediately
    RAISE = 5

    def requires_handler(self):
        return self in {HandlerKind.SUBSTITUTE_VALUE, HandlerKind.SUBSTITUTE_VALUE_XOR}


class Context:
    '''The execution context for operations.  Carries the status flags, the exception
    handlers and the largest permitted allocation.'''

    __slots__ = ('flags', 'handlers', 'exceptions', 'max_length')

    def __init__(self, *, flags=0, max_length=None):
        '''flags represents the initially raised flags.  max_length is the largest number of
        limbs any value may allocate; None means no limit.
        '''
        if max_length is not None and max_length < 1:
            raise ValueError(f'max_length must be positive: {max_length}')
        self.flags = flags
        self.handlers = {}
        self.exceptions = []
        self.max_length = max_length

    def copy(self):
        '''Return a (deep) copy of the context.'''
        # A deep copy is needed because handlers and exceptions are mutable containers
        return copy.deepcopy(self)

    def set_handler(self, exc_classes, kind, handler=None):
        classes = (exc_classes, ) if not isinstance(exc_classes, (tuple, list)) else exc_classes
        if not all(isinstance(exc_class, type) and issubclass(exc_class, BigIntError)
                   for exc_class in classes):
            raise TypeError('all exception classes must be subclasses of BigIntError')
        if any(issubclass(exc_class, AllocationError) for exc_class in classes):
            raise TypeError('AllocationError cannot be handled')
        if not isinstance(kind, HandlerKind):
            raise TypeError('kind must be a HandlerKind instance')
        if (handler is not None) ^ kind.requires_handler():
            if handler is None:
                raise ValueError(f'handler not given for kind {kind!r}')
            else:
                raise ValueError(f'handler given for kind {kind!r}')
        pair = (kind, handler)
        for exc_class in classes:
            self.handlers[exc_class] = pair

    def handler(self, exc_class):
        '''Return a (handler_kind, callback) pair for a signal class.'''
        if not issubclass(exc_class, BigIntError):
            raise TypeError('exc_class must be a subclass of BigIntError')

        for cls in exc_class.mro():
            handler = self.handlers.get(cls)
            if handler:
                return handler

        return HandlerKind.DEFAULT, None

    def __repr__(self):
        return f'<Context flags={self.flags!r} max_length={self.max_length}>'


def operand_sign(value):
    '''Return True if an operand of a signalling operation is negative.'''
    is_negative = getattr(value, 'is_negative', None)
    if is_negative is not None:
        return is_negative()
    return value < 0


#
# Exported functions
#

DefaultContext = Context()
DefaultContext.set_handler((DivisionByZero, InvalidOperand), HandlerKind.RAISE)
tls = threading.local()


def get_context():
    try:
        return tls.context
    except AttributeError:
        tls.context = DefaultContext.copy()
        return tls.context


def set_context(context):
    '''Sets the current thread's context to context (not a copy of it).'''
    tls.context = context


class LocalContext:
    '''A context manager that will set the current context for the active thread to a copy of
    context on entry to the with-statement and restore the previous context on exit.  If
    no context is specified a copy of the current context is taken instead.
    '''

    def __init__(self, context=None):
        self.saved_context = None
        self.context_to_set = context

    def __enter__(self):
        self.saved_context = get_context()
        context = (self.context_to_set or self.saved_context).copy()
        set_context(context)
        return context

    def __exit__(self, etype, value, traceback):
        set_context(self.saved_context)


local_context = LocalContext
