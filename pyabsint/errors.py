#!/usr/bin/env python
# -*- coding: utf-8 -*-

'''
Exceptions raised by bounded integer types. Everything derives from
BoundedIntError so a caller can catch the whole family at once.
'''

# Python refuses int <-> decimal str conversions past a few thousand digits
_DECIMAL_BITS = 4096


def format_magnitude(n):
    '''
    Text for an integer of any size: decimal while it is short, hexadecimal
    once decimal conversion could hit the interpreter's digit limit.
    '''
    n = int(n)
    if n.bit_length() < _DECIMAL_BITS:
        return str(n)
    return f"{n:#x}"


class BoundedIntError(ArithmeticError):
    '''
    Base class for every bounded integer error.
    '''


class ConfigurationError(BoundedIntError, ValueError):
    '''
    A bounded integer type was defined with an impossible byte width or
    upper bound. Raised when the type is defined, never when it is used.
    '''


class OutOfRangeError(BoundedIntError, ValueError):
    '''
    A literal or decoded value falls outside [0, upper_bound).
    '''

    def __init__(self, value, descriptor, exponent=None):
        '''
        :param value: The rejected int(), or None when it was never built
        :param exponent: Set when the rejected value is 2 ** exponent
        '''
        self.value = value
        self.descriptor = descriptor
        self.exponent = exponent
        text = f"2 ** {format_magnitude(exponent)}" if value is None else format_magnitude(value)
        super().__init__(f"Value {text} out-of-range for {descriptor}")


class FormatError(BoundedIntError, ValueError):
    '''
    Malformed literal text or a byte buffer of the wrong shape.
    '''


class ArithmeticBoundsError(BoundedIntError):
    '''
    A checked operation produced an exact result outside [0, upper_bound).
    :param operation: Name of the operation, e.g. "add"
    :param bound: Which side was crossed, "upper" (overflow) or "lower" (underflow)
    :param operands: Magnitudes of the two operands
    :param result: The exact, unbounded result that was rejected
    :param descriptor: Descriptor of the operands' type
    '''

    def __init__(self, operation, bound, operands, result, descriptor):
        self.operation = operation
        self.bound = bound
        self.operands = tuple(operands)
        self.result = result
        self.descriptor = descriptor
        kind = 'overflow' if bound == 'upper' else 'underflow'
        a, b = self.operands
        super().__init__(
            f"Bounded {operation} {kind} for {descriptor}: "
            f"{format_magnitude(a)} and {format_magnitude(b)} give {format_magnitude(result)}"
        )


class DivisionByZeroError(BoundedIntError, ZeroDivisionError):
    pass


class TypeMismatchError(BoundedIntError, TypeError):
    '''
    Operands belong to bounded integer types with different descriptors.
    '''
