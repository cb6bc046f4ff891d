#!/usr/bin/env python
# -*- coding: utf-8 -*-

import enum
import logging

import numpy as np

from pyabsint.errors import (
    ArithmeticBoundsError,
    DivisionByZeroError,
    FormatError,
    OutOfRangeError,
    TypeMismatchError,
    format_magnitude,
)
from pyabsint.literal import parse_hex_literal, parse_literal
from pyabsint.value import BoundedValue

'''
Stateless arithmetic on bounded integers. Every function takes the
descriptor and/or values it works on and returns a new BoundedValue, or
raises. Nothing here keeps state between calls.
'''


class Mode(enum.Enum):
    '''
    How add, subtract and multiply treat a result outside [0, upper_bound).
    CHECKED raises ArithmeticBoundsError, MODULAR reduces modulo the bound.
    '''
    CHECKED = 'checked'
    MODULAR = 'modular'


def as_mode(mode):
    '''
    Accept a Mode or its string value, "checked" or "modular".
    '''
    if isinstance(mode, Mode):
        return mode
    try:
        return Mode(mode)
    except ValueError:
        raise ValueError(f"Unknown arithmetic mode {mode!r}, expected 'checked' or 'modular'") from None


def _in_range(descriptor, value, cls=BoundedValue):
    if not 0 <= value < descriptor.upper_bound:
        logging.debug(f"Rejecting {format_magnitude(value)} for {descriptor}.")
        raise OutOfRangeError(value, descriptor)
    return cls(value, descriptor)


def from_literal(descriptor, literal, cls=BoundedValue):
    '''
    Value of a type from an integer literal. Always checked: a literal that
    does not fit raises OutOfRangeError, whatever mode later arithmetic uses.
    :param descriptor: TypeDescriptor of the type
    :param literal: Python int(), numpy integer, or string of decimal digits
    :param cls: BoundedValue class to build, for generated types
    '''
    return _in_range(descriptor, parse_literal(literal), cls)


def from_hex(descriptor, text, cls=BoundedValue):
    '''
    Value of a type from a string of hexadecimal digits, range-checked like
    from_literal().
    '''
    return _in_range(descriptor, parse_hex_literal(text), cls)


def pow2(descriptor, exponent, cls=BoundedValue):
    '''
    Value 2 ** exponent, which must be inside the type's range.
    '''
    exponent = parse_literal(exponent)
    if exponent >= descriptor.upper_bound.bit_length():
        # 2 ** exponent >= upper_bound; skip building a huge power
        logging.debug(f"Rejecting 2 ** {format_magnitude(exponent)} for {descriptor}.")
        raise OutOfRangeError(None, descriptor, exponent=exponent)
    return _in_range(descriptor, 1 << exponent, cls)


'''
Byte buffers: big-endian, exactly byte_width long, zero-padded on the left.
The length is the only framing.
'''

def to_bytes(value):
    '''
    Canonical byte_width-long, big-endian encoding of a value.
    '''
    return value.magnitude.to_bytes(value.descriptor.byte_width, 'big')


def to_array(value):
    '''
    Canonical encoding as a numpy uint8 array, one element per byte.
    '''
    return np.frombuffer(to_bytes(value), dtype=np.uint8).copy()


def _as_buffer(buffer):
    if isinstance(buffer, (bytes, bytearray, memoryview)):
        return bytes(buffer)
    arr = np.asarray(buffer)
    if arr.ndim != 1 or (arr.size and not np.issubdtype(arr.dtype, np.integer)):
        raise FormatError(f"Byte buffer must be a flat sequence of integers, got {buffer!r}")
    if arr.size and (arr.min() < 0 or arr.max() > 255):
        raise FormatError(f"Byte buffer has elements outside 0..255: {buffer!r}")
    return arr.astype(np.uint8).tobytes()


def from_bytes(descriptor, buffer, cls=BoundedValue):
    '''
    Decode a canonical encoding. The buffer must be exactly byte_width long
    (FormatError otherwise), and the number it holds must be below the upper
    bound (OutOfRangeError otherwise), which can fail even for a well-formed
    buffer when the bound is not a power of 256.
    :param buffer: bytes, bytearray, memoryview, list of ints or 1-D numpy array
    '''
    raw = _as_buffer(buffer)
    if len(raw) != descriptor.byte_width:
        raise FormatError(
            f"Expected {descriptor.byte_width:,d} bytes for {descriptor}, got {len(raw):,d}"
        )
    return _in_range(descriptor, int.from_bytes(raw, 'big'), cls)


'''
Arithmetic. Both operands must share a descriptor; results take the class
of the left operand.
'''

def _operands(a, b):
    if not isinstance(a, BoundedValue) or not isinstance(b, BoundedValue):
        raise TypeError(
            f"Bounded arithmetic needs two bounded values, got "
            f"{type(a).__name__} and {type(b).__name__}"
        )
    if a.descriptor != b.descriptor:
        raise TypeMismatchError(
            f"{type(a).__name__} over {a.descriptor} and "
            f"{type(b).__name__} over {b.descriptor} do not mix"
        )
    return a.magnitude, b.magnitude


def _bounded_result(operation, a, b, result, mode):
    descriptor = a.descriptor
    if as_mode(mode) is Mode.MODULAR:
        return a.__class__(result % descriptor.upper_bound, descriptor)
    if result < 0 or result >= descriptor.upper_bound:
        bound = 'lower' if result < 0 else 'upper'
        logging.debug(
            f"Checked {operation} left {descriptor}: {format_magnitude(a.magnitude)}, "
            f"{format_magnitude(b.magnitude)} -> {format_magnitude(result)}."
        )
        raise ArithmeticBoundsError(operation, bound, (a.magnitude, b.magnitude), result, descriptor)
    return a.__class__(result, descriptor)


def add(a, b, mode=Mode.CHECKED):
    x, y = _operands(a, b)
    return _bounded_result('add', a, b, x + y, mode)


def subtract(a, b, mode=Mode.CHECKED):
    '''
    a - b. In modular mode the result is the non-negative residue, so
    1 - 2 is upper_bound - 1.
    '''
    x, y = _operands(a, b)
    return _bounded_result('subtract', a, b, x - y, mode)


def multiply(a, b, mode=Mode.CHECKED):
    x, y = _operands(a, b)
    return _bounded_result('multiply', a, b, x * y, mode)


def divide(a, b, mode=Mode.CHECKED):
    '''
    Floor division. The same in both modes, since a quotient of in-range
    operands is never larger than the dividend.
    '''
    as_mode(mode)
    x, y = _operands(a, b)
    if y == 0:
        raise DivisionByZeroError(f"Dividing {format_magnitude(x)} by zero in {a.descriptor}")
    return _bounded_result('divide', a, b, x // y, Mode.CHECKED)


def remainder(a, b, mode=Mode.CHECKED):
    '''
    a mod b, the same in both modes.
    '''
    as_mode(mode)
    x, y = _operands(a, b)
    if y == 0:
        raise DivisionByZeroError(f"Remainder of {format_magnitude(x)} by zero in {a.descriptor}")
    return _bounded_result('remainder', a, b, x % y, Mode.CHECKED)


def checked_add(a, b): return add(a, b, Mode.CHECKED)
def checked_subtract(a, b): return subtract(a, b, Mode.CHECKED)
def checked_multiply(a, b): return multiply(a, b, Mode.CHECKED)
def modular_add(a, b): return add(a, b, Mode.MODULAR)
def modular_subtract(a, b): return subtract(a, b, Mode.MODULAR)
def modular_multiply(a, b): return multiply(a, b, Mode.MODULAR)


def compare(a, b):
    '''
    -1, 0 or 1 as a is below, equal to or above b.
    '''
    x, y = _operands(a, b)
    return (x > y) - (x < y)


def equal(a, b):
    x, y = _operands(a, b)
    return x == y
