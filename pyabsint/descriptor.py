#!/usr/bin/env python
# -*- coding: utf-8 -*-

import logging
import threading

import numpy as np

from pyabsint.errors import ConfigurationError, format_magnitude


def _as_param(name, x):
    if isinstance(x, bool) or not isinstance(x, (int, np.integer)):
        raise ConfigurationError(f"{name} must be an integer, got {x!r}")
    return int(x)


class TypeDescriptor:
    '''
    The (byte width, upper bound) pair that identifies one bounded integer
    type. Values of the type are the naturals in [0, upper_bound), stored in
    byte_width big-endian bytes.

    Descriptors never change after construction, and two descriptors with
    the same pair are equal and hash alike. Use TypeDescriptor.get() to share
    a single instance per pair.
    '''

    __slots__ = ('byte_width', 'upper_bound', 'capacity')

    _table = {}
    _table_lock = threading.Lock()

    def __init__(self, byte_width, upper_bound=None):
        '''
        :param byte_width: Number of bytes in the canonical representation
        :param upper_bound: Exclusive upper bound of the range. Defaults to
        None, meaning every value the byte width can hold, 256 ** byte_width.
        '''
        byte_width = _as_param('byte_width', byte_width)
        if byte_width <= 0:
            raise ConfigurationError(f"byte_width must be positive, got {format_magnitude(byte_width)}")
        capacity = 256 ** byte_width
        if upper_bound is None:
            upper_bound = capacity
        upper_bound = _as_param('upper_bound', upper_bound)
        if upper_bound <= 0:
            raise ConfigurationError(f"upper_bound must be positive, got {format_magnitude(upper_bound)}")
        if upper_bound > capacity:
            raise ConfigurationError(
                f"upper_bound {format_magnitude(upper_bound)} does not fit in {byte_width:,d} bytes"
            )
        object.__setattr__(self, 'byte_width', byte_width)
        object.__setattr__(self, 'upper_bound', upper_bound)
        object.__setattr__(self, 'capacity', capacity)

    @classmethod
    def get(cls, byte_width, upper_bound=None):
        '''
        Return the shared descriptor for a (byte width, upper bound) pair,
        creating and remembering it the first time the pair is seen.
        '''
        descriptor = cls(byte_width, upper_bound)
        key = (descriptor.byte_width, descriptor.upper_bound)
        with cls._table_lock:
            shared = cls._table.setdefault(key, descriptor)
        if shared is descriptor:
            logging.debug(f"Registered bounded integer descriptor {descriptor}.")
        return shared

    def __setattr__(self, name, value):
        raise AttributeError(f"{self.__class__.__name__} is immutable")

    def __delattr__(self, name):
        raise AttributeError(f"{self.__class__.__name__} is immutable")

    def __reduce__(self):
        return (TypeDescriptor.get, (self.byte_width, self.upper_bound))

    @property
    def max_value(self):
        return self.upper_bound - 1

    @property
    def bit_length(self):
        return self.max_value.bit_length()

    def __eq__(self, o):
        if not isinstance(o, TypeDescriptor):
            return NotImplemented
        return self is o or (
            self.byte_width == o.byte_width and self.upper_bound == o.upper_bound
        )

    def __hash__(self):
        return hash((self.byte_width, self.upper_bound))

    def __repr__(self):
        return f"TypeDescriptor(byte_width={self.byte_width}, upper_bound={format_magnitude(self.upper_bound)})"

    def __str__(self):
        return f"[0, {format_magnitude(self.upper_bound)}) in {self.byte_width:,d} bytes"
