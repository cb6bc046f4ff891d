#!/usr/bin/env python
# -*- coding: utf-8 -*-

import logging
import sys

import pyabsint.engine as engine
from pyabsint.descriptor import TypeDescriptor
from pyabsint.engine import Mode
from pyabsint.errors import ConfigurationError
from pyabsint.value import BoundedValue


class BoundedInt(BoundedValue):
    '''
    Named bounded natural integer type, with Python operators. Abstract class
    that is sub-typed by define_bounded_integer(), one sub-type per type
    definition, each holding its own TypeDescriptor.

    The operators use the type's DEFAULT_MODE. The checked_* and modular_*
    methods pick a mode explicitly, whatever the default.
    '''

    __slots__ = ()

    DEFAULT_MODE = Mode.CHECKED

    @classmethod
    def from_literal(cls, literal):
        return engine.from_literal(cls.DESCRIPTOR, literal, cls)

    @classmethod
    def from_hex(cls, text):
        return engine.from_hex(cls.DESCRIPTOR, text, cls)

    @classmethod
    def from_bytes(cls, buffer):
        return engine.from_bytes(cls.DESCRIPTOR, buffer, cls)

    @classmethod
    def pow2(cls, exponent):
        '''
        Returns 2 to the power of the argument.
        '''
        return engine.pow2(cls.DESCRIPTOR, exponent, cls)

    @classmethod
    def zero(cls):
        return cls(0)

    @classmethod
    def max(cls):
        '''
        Largest value of the type, upper_bound - 1.
        '''
        return cls(cls.DESCRIPTOR.max_value)

    def to_bytes(self):
        return engine.to_bytes(self)

    def to_array(self):
        return engine.to_array(self)

    def checked_add(self, o): return engine.add(self, o, Mode.CHECKED)
    def checked_subtract(self, o): return engine.subtract(self, o, Mode.CHECKED)
    def checked_multiply(self, o): return engine.multiply(self, o, Mode.CHECKED)
    def modular_add(self, o): return engine.add(self, o, Mode.MODULAR)
    def modular_subtract(self, o): return engine.subtract(self, o, Mode.MODULAR)
    def modular_multiply(self, o): return engine.multiply(self, o, Mode.MODULAR)
    def divide(self, o): return engine.divide(self, o)
    def remainder(self, o): return engine.remainder(self, o)

    def __add__(self, o):
        if not isinstance(o, BoundedValue):
            return NotImplemented
        return engine.add(self, o, self.DEFAULT_MODE)

    def __sub__(self, o):
        if not isinstance(o, BoundedValue):
            return NotImplemented
        return engine.subtract(self, o, self.DEFAULT_MODE)

    def __mul__(self, o):
        if not isinstance(o, BoundedValue):
            return NotImplemented
        return engine.multiply(self, o, self.DEFAULT_MODE)

    def __floordiv__(self, o):
        if not isinstance(o, BoundedValue):
            return NotImplemented
        return engine.divide(self, o)

    # Integer division, there is nothing else a bounded natural could mean by /
    __truediv__ = __floordiv__

    def __mod__(self, o):
        if not isinstance(o, BoundedValue):
            return NotImplemented
        return engine.remainder(self, o)


def _caller_module(depth=2):
    '''
    Name of the module that called the public define_*() function, so values of
    generated types pickle by reference to where the type is bound, as
    collections.namedtuple() does.
    '''
    try:
        return sys._getframe(depth).f_globals.get('__name__', '__main__')
    except (AttributeError, ValueError):
        return __name__


def define_bounded_integer(name, byte_width, upper_bound=None, default_mode=Mode.CHECKED, module=None):
    '''
    Create a new bounded natural integer type.
    :param name: Name of the new type, e.g. "SizeNat"
    :param byte_width: Length in bytes of the canonical representation
    :param upper_bound: Exclusive upper bound of the values. Defaults to None,
    every value byte_width bytes can hold.
    :param default_mode: Arithmetic mode of the +, - and * operators
    :param module: Module the new type is found in, for pickling. Defaults to
    None, the module of the caller.
    '''
    if not isinstance(name, str) or not name.isidentifier():
        raise ConfigurationError(f"Type name must be an identifier, got {name!r}")
    try:
        default_mode = engine.as_mode(default_mode)
    except ValueError as e:
        raise ConfigurationError(str(e)) from None
    descriptor = TypeDescriptor.get(byte_width, upper_bound)
    new_type = type(name, (BoundedInt,), {
        '__slots__': (),
        '__module__': module or _caller_module(),
        'DESCRIPTOR': descriptor,
        'DEFAULT_MODE': default_mode,
    })
    logging.debug(f"Defined {default_mode.value} bounded integer type {name} over {descriptor}.")
    return new_type


def define_checked(name, byte_width, upper_bound=None, module=None):
    '''
    Bounded natural integer type whose operators raise on overflow and underflow.
    '''
    return define_bounded_integer(name, byte_width, upper_bound, Mode.CHECKED, module or _caller_module())


def define_modular(name, byte_width, upper_bound=None, module=None):
    '''
    Bounded natural integer type whose operators wrap modulo the upper bound.
    '''
    return define_bounded_integer(name, byte_width, upper_bound, Mode.MODULAR, module or _caller_module())


def define_refined(name, base, modulus, default_mode=Mode.MODULAR, module=None):
    '''
    Type stored like base, but bounded by one of base's own values, e.g. a
    prime field over a 32-byte integer with modulus base.pow2(255) - 19.
    :param base: Type created by define_bounded_integer()
    :param modulus: Value of type base, the new exclusive upper bound
    '''
    if not (isinstance(base, type) and issubclass(base, BoundedInt) and base.DESCRIPTOR is not None):
        raise ConfigurationError(f"Cannot refine {base!r}, it is not a defined bounded integer type")
    if not isinstance(modulus, base):
        raise ConfigurationError(f"Modulus of {name} must be a {base.__name__}, got {modulus!r}")
    return define_bounded_integer(
        name, base.DESCRIPTOR.byte_width, modulus.magnitude, default_mode, module or _caller_module()
    )


class SizeNat(BoundedInt):
    """
    Class for a common 64-bit size type, checked, in [0, 2 ** 64).
    """

    __slots__ = ()

    DESCRIPTOR = TypeDescriptor.get(8)
