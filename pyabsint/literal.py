#!/usr/bin/env python
# -*- coding: utf-8 -*-

import re

import numpy as np

from pyabsint.errors import FormatError, format_magnitude

'''
Turning user-supplied literals into plain, non-negative Python int()'s.
Range checks against a particular type happen in the engine, not here.
'''

_DECIMAL = re.compile(r'[0-9]+')
_HEX = re.compile(r'(?:0[xX])?([0-9a-fA-F]+)')
# Stays under the interpreter's limit on int() of long decimal strings
_DECIMAL_CHUNK = 4000


def _parse_decimal(digits):
    value = 0
    for start in range(0, len(digits), _DECIMAL_CHUNK):
        chunk = digits[start:start + _DECIMAL_CHUNK]
        value = value * 10 ** len(chunk) + int(chunk, 10)
    return value


def parse_literal(literal):
    '''
    Non-negative integer denoted by a literal: a Python int, a numpy integer
    scalar, or a string of ASCII decimal digits.
    '''
    if isinstance(literal, str):
        if not _DECIMAL.fullmatch(literal):
            raise FormatError(f"Literal {literal!r} is not a string of decimal digits")
        return _parse_decimal(literal)
    # bool is an int subclass, but True is not a literal anyone means
    if isinstance(literal, bool) or not isinstance(literal, (int, np.integer)):
        raise FormatError(f"Cannot use {type(literal).__name__} {literal!r} as an integer literal")
    value = int(literal)
    if value < 0:
        raise FormatError(f"Negative literal {format_magnitude(value)}")
    return value


def parse_hex_literal(text):
    '''
    Non-negative integer denoted by a hexadecimal string, with or without a
    leading 0x.
    '''
    if not isinstance(text, str):
        raise FormatError(f"Hex literal must be a string, got {type(text).__name__}")
    match = _HEX.fullmatch(text)
    if match is None:
        raise FormatError(f"Literal {text!r} is not a string of hexadecimal digits")
    return int(match.group(1), 16)
