#!/usr/bin/env python
# -*- coding: utf-8 -*-

import numpy as np

from pyabsint.errors import FormatError, OutOfRangeError, TypeMismatchError, format_magnitude


class BoundedValue:
    '''
    One natural number in [0, upper_bound) for a particular bounded integer
    type, identified by its TypeDescriptor. Values never change once built;
    arithmetic lives in pyabsint.engine and always returns new values.
    '''

    __slots__ = ('_magnitude', '_descriptor')

    # Set on generated types, so their values can be built without
    # repeating the descriptor.
    DESCRIPTOR = None

    def __init__(self, magnitude, descriptor=None):
        '''
        :param magnitude: Python int() (or numpy integer) value of the number
        :param descriptor: TypeDescriptor of the type. Optional on generated
        types, where it defaults to the type's own descriptor.
        '''
        cls_descriptor = self.__class__.DESCRIPTOR
        if descriptor is None:
            descriptor = cls_descriptor
            if descriptor is None:
                raise TypeError(f"{self.__class__.__name__} needs a descriptor")
        elif cls_descriptor is not None and descriptor != cls_descriptor:
            raise TypeMismatchError(f"{descriptor} is not the descriptor of {self.__class__.__name__}")
        if isinstance(magnitude, bool) or not isinstance(magnitude, (int, np.integer)):
            raise FormatError(f"Magnitude must be an integer, got {type(magnitude).__name__}")
        magnitude = int(magnitude)
        if not 0 <= magnitude < descriptor.upper_bound:
            raise OutOfRangeError(magnitude, descriptor)
        object.__setattr__(self, '_magnitude', magnitude)
        object.__setattr__(self, '_descriptor', descriptor)

    @property
    def magnitude(self):
        return self._magnitude

    @property
    def descriptor(self):
        return self._descriptor

    def __setattr__(self, name, value):
        raise AttributeError(f"{self.__class__.__name__} values are immutable")

    def __delattr__(self, name):
        raise AttributeError(f"{self.__class__.__name__} values are immutable")

    def __reduce__(self):
        return (self.__class__, (self._magnitude, self._descriptor))

    def __int__(self):
        return self._magnitude

    def __index__(self):
        return self._magnitude

    def __format__(self, *fmt_args):
        '''
        Just use the underlying Python int()'s formatting.
        '''
        return self._magnitude.__format__(*fmt_args)

    def __str__(self):
        return format_magnitude(self._magnitude)

    def __repr__(self):
        return f"{self.__class__.__name__}({format_magnitude(self._magnitude)})"

    def __hash__(self):
        return hash((self._magnitude, self._descriptor))

    def _other_magnitude(self, o):
        if self._descriptor != o._descriptor:
            raise TypeMismatchError(
                f"Cannot compare {self.__class__.__name__} over {self._descriptor} "
                f"with {o.__class__.__name__} over {o._descriptor}"
            )
        return o._magnitude

    '''
    Comparisons cannot leave the range, so they are plain Python int()
    comparisons once the types are known to match.
    '''
    def __eq__(self, o):
        if not isinstance(o, BoundedValue):
            return NotImplemented
        return self._magnitude == self._other_magnitude(o)

    def __ne__(self, o):
        if not isinstance(o, BoundedValue):
            return NotImplemented
        return self._magnitude != self._other_magnitude(o)

    def __lt__(self, o):
        if not isinstance(o, BoundedValue):
            return NotImplemented
        return self._magnitude < self._other_magnitude(o)

    def __le__(self, o):
        if not isinstance(o, BoundedValue):
            return NotImplemented
        return self._magnitude <= self._other_magnitude(o)

    def __gt__(self, o):
        if not isinstance(o, BoundedValue):
            return NotImplemented
        return self._magnitude > self._other_magnitude(o)

    def __ge__(self, o):
        if not isinstance(o, BoundedValue):
            return NotImplemented
        return self._magnitude >= self._other_magnitude(o)
