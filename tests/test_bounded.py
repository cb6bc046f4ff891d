#!/usr/bin/env python
# -*- coding: utf-8 -*-

import copy
import pickle
import unittest

import pytest

from pyabsint.bounded import (
    BoundedInt,
    SizeNat,
    define_bounded_integer,
    define_checked,
    define_modular,
    define_refined,
)
from pyabsint.descriptor import TypeDescriptor
from pyabsint.engine import Mode
from pyabsint.errors import (
    ArithmeticBoundsError,
    ConfigurationError,
    DivisionByZeroError,
    OutOfRangeError,
    TypeMismatchError,
)

BigBounded = define_checked('BigBounded', 32)
Byte200 = define_checked('Byte200', 1, 200)
Wrap200 = define_modular('Wrap200', 1, 200)
Poly1305Field = define_modular('Poly1305Field', 17, 0x3fffffffffffffffffffffffffffffffb)
Felem = define_refined('Felem', BigBounded, BigBounded.pow2(255) - BigBounded.from_literal(19))
SmallModular = define_refined('SmallModular', BigBounded, BigBounded.from_literal(255))
BiggerBounded = define_checked('BiggerBounded', 2048)


class DefineTestCase(unittest.TestCase):

    def test_types(self):
        self.assertTrue(issubclass(Byte200, BoundedInt))
        self.assertEqual(Byte200.__name__, 'Byte200')
        self.assertIs(Byte200.DESCRIPTOR, TypeDescriptor.get(1, 200))
        self.assertIs(Byte200.DEFAULT_MODE, Mode.CHECKED)
        self.assertIs(Wrap200.DEFAULT_MODE, Mode.MODULAR)
        self.assertIs(Byte200.DESCRIPTOR, Wrap200.DESCRIPTOR)
        self.assertEqual(BigBounded.DESCRIPTOR.upper_bound, 2 ** 256)
        self.assertEqual(Felem.DESCRIPTOR, TypeDescriptor(32, 2 ** 255 - 19))
        self.assertIs(Felem.DEFAULT_MODE, Mode.MODULAR)
        self.assertIs(define_bounded_integer('Other', 1, 200, 'modular').DEFAULT_MODE, Mode.MODULAR)

    def test_bad_definitions(self):
        for args in [('Bad', 0, 1), ('Bad', 1, 0), ('Bad', 1, 257), ('Bad', 2, 2 ** 16 + 1),
                     ('not a name', 1, 10), (None, 1, 10)]:
            with self.assertRaises(ConfigurationError, msg=repr(args)):
                define_checked(*args)
        with self.assertRaises(ConfigurationError):
            define_bounded_integer('Bad', 1, 10, 'saturating')
        with self.assertRaises(ConfigurationError):
            define_refined('Bad', int, 10)
        with self.assertRaises(ConfigurationError):
            define_refined('Bad', BigBounded, Byte200.from_literal(7))
        with self.assertRaises(ConfigurationError):
            define_refined('Bad', BigBounded, BigBounded.zero())


class BoundedIntTestCase(unittest.TestCase):

    def test_literals(self):
        self.assertEqual(Byte200.from_literal(199).magnitude, 199)
        self.assertEqual(Byte200(42), Byte200.from_literal('42'))
        with self.assertRaises(OutOfRangeError):
            Byte200.from_literal(200)
        with self.assertRaises(OutOfRangeError):
            Wrap200.from_literal(200)
        self.assertEqual(Byte200.zero().magnitude, 0)
        self.assertEqual(Byte200.max().magnitude, 199)
        self.assertEqual(repr(Byte200(7)), 'Byte200(7)')
        with self.assertRaises(TypeMismatchError):
            Byte200(7, TypeDescriptor.get(1, 100))

    def test_bytes(self):
        self.assertEqual(Byte200.from_literal(199).to_bytes(), b'\xc7')
        self.assertEqual(list(Byte200(199).to_array()), [0xC7])
        self.assertEqual(Byte200.from_bytes([0xC7]), Byte200(199))
        with self.assertRaises(OutOfRangeError):
            Byte200.from_bytes([0xC9])
        self.assertEqual(len(Felem.from_literal(1).to_bytes()), 32)

    def test_checked_operators(self):
        self.assertEqual(Byte200(150) + Byte200(49), Byte200(199))
        with self.assertRaises(ArithmeticBoundsError):
            Byte200(150) + Byte200(60)
        with self.assertRaises(ArithmeticBoundsError):
            Byte200(1) - Byte200(2)
        with self.assertRaises(ArithmeticBoundsError):
            Byte200(100) * Byte200(2)
        self.assertEqual(Byte200(199) // Byte200(10), Byte200(19))
        self.assertEqual(Byte200(199) / Byte200(10), Byte200(19))
        self.assertEqual(Byte200(199) % Byte200(10), Byte200(9))
        with self.assertRaises(DivisionByZeroError):
            Byte200(1) / Byte200(0)
        with self.assertRaises(DivisionByZeroError):
            Byte200(1) % Byte200(0)

    def test_modular_operators(self):
        self.assertEqual(Wrap200(150) + Wrap200(60), Wrap200(10))
        self.assertEqual(Wrap200(1) - Wrap200(2), Wrap200(199))
        self.assertEqual(Wrap200(100) * Wrap200(3), Wrap200(100))
        with self.assertRaises(DivisionByZeroError):
            Wrap200(1) // Wrap200(0)

    def test_explicit_mode_methods(self):
        self.assertEqual(Byte200(150).modular_add(Byte200(60)), Byte200(10))
        self.assertEqual(Byte200(1).modular_subtract(Byte200(2)), Byte200(199))
        self.assertEqual(Byte200(100).modular_multiply(Byte200(3)), Byte200(100))
        with self.assertRaises(ArithmeticBoundsError):
            Wrap200(150).checked_add(Wrap200(60))
        with self.assertRaises(ArithmeticBoundsError):
            Wrap200(1).checked_subtract(Wrap200(2))
        with self.assertRaises(ArithmeticBoundsError):
            Wrap200(100).checked_multiply(Wrap200(2))
        self.assertEqual(Wrap200(9).divide(Wrap200(2)), Wrap200(4))
        self.assertEqual(Wrap200(9).remainder(Wrap200(2)), Wrap200(1))

    def test_results_keep_left_type(self):
        self.assertIs(type(Byte200(1) + Byte200(2)), Byte200)
        self.assertIs(type(Byte200(1).modular_add(Wrap200(2))), Byte200)
        self.assertIs(type(Wrap200(1) + Byte200(2)), Wrap200)

    def test_mismatch(self):
        with self.assertRaises(TypeMismatchError):
            Byte200(1) + SizeNat(1)
        with self.assertRaises(TypeMismatchError):
            Byte200(1) < SmallModular(1)
        with self.assertRaises(TypeError):
            Byte200(1) + 1
        with pytest.raises(TypeError):
            1 * Byte200(1)

    def test_cmp(self):
        self.assertTrue(Byte200(0) == Byte200(0))
        self.assertTrue(Byte200(1) > Byte200(0))
        self.assertTrue(Byte200(0) < Byte200(1))
        self.assertTrue(Byte200(2) >= Byte200(2))
        self.assertTrue(Byte200(1) <= Byte200(2))
        self.assertTrue(Byte200(5) == Wrap200(5), 'same descriptor')
        for x in range(0, 200, 7):
            for y in range(0, 200, 11):
                self.assertEqual(Byte200.from_literal(x) == Byte200.from_literal(y), x == y)
                self.assertEqual(Byte200.from_literal(x) < Byte200.from_literal(y), x < y)

    def test_copy_and_pickle(self):
        self.assertEqual(copy.copy(SizeNat(5)), SizeNat(5))
        self.assertEqual(copy.deepcopy(Byte200(5)), Byte200(5))
        restored = pickle.loads(pickle.dumps(SizeNat(2 ** 64 - 1)))
        self.assertIs(type(restored), SizeNat)
        self.assertEqual(restored, SizeNat(2 ** 64 - 1))

    def test_pickle_defined_types(self):
        self.assertEqual(Byte200.__module__, __name__)
        for v in [Byte200(5), Wrap200(199), Felem.from_literal(2 ** 255 - 20), BiggerBounded.max()]:
            restored = pickle.loads(pickle.dumps(v))
            self.assertIs(type(restored), type(v))
            self.assertEqual(restored, v)
        self.assertEqual(define_checked('Elsewhere', 1, 10, module='some.module').__module__, 'some.module')


class SizeNatTestCase(unittest.TestCase):

    def test_arith(self):
        x1 = SizeNat.from_literal(687165654266415)
        x2 = SizeNat.from_literal(4298832000156)
        x3 = x1 + x2
        self.assertEqual(SizeNat.from_literal(691464486266571), x3)
        x4 = SizeNat.from_literal(8151084996540)
        x5 = x3 - x4
        self.assertEqual(SizeNat.from_literal(683313401270031), x5)
        x6 = x5 / SizeNat.from_literal(1541654268)
        self.assertEqual(SizeNat.from_literal(443233), x6)

    def test_range(self):
        self.assertEqual(SizeNat.DESCRIPTOR, TypeDescriptor(8, 2 ** 64))
        top = SizeNat.from_bytes(b'\xff' * 8)
        self.assertEqual(top, SizeNat.max())
        self.assertEqual(top.magnitude, 2 ** 64 - 1)
        with self.assertRaises(ArithmeticBoundsError):
            top + SizeNat(1)
        with self.assertRaises(OutOfRangeError):
            SizeNat.from_literal(2 ** 64)


class BigIntegerTestCase(unittest.TestCase):

    def test_bounded(self):
        y1 = (BigBounded.pow2(255) - BigBounded.from_literal(1)) * BigBounded.from_literal(2)
        y2 = BigBounded.from_literal(4)
        with self.assertRaises(ArithmeticBoundsError):
            y1 + y2
        with self.assertRaises(OutOfRangeError):
            BigBounded.pow2(256)

    def test_arith(self):
        x1 = BigBounded.from_literal(24875808327634644)
        x2 = BigBounded.from_literal(91987276365379830)
        self.assertEqual(BigBounded.from_literal(116863084693014474), x1 + x2)

        x1 = Poly1305Field.from_hex('10498385709182435134')
        x2 = Poly1305Field.from_hex('9871425437538592414723')
        self.assertEqual(Poly1305Field.from_hex('98818bd7bcc41714849857'), x1 + x2)

        x1 = Felem.from_literal(24875808327634644)
        x2 = Felem.from_literal(91987276365379830)
        self.assertEqual(Felem.from_literal(116863084693014474), x1 + x2)

    def test_field_wraps(self):
        p = 2 ** 255 - 19
        minus_one = Felem.from_literal(p - 1)
        self.assertEqual(minus_one + Felem.from_literal(20), Felem.from_literal(19))
        self.assertEqual(minus_one * minus_one, Felem.from_literal(1))
        self.assertEqual(Felem.zero() - Felem.from_literal(1), minus_one)

    def test_bigger_bounded(self):
        x1 = BiggerBounded.from_hex('10498385709182435134')
        x2 = BiggerBounded.from_hex('09871425437538592414723')
        self.assertEqual(BiggerBounded.from_hex('98818bd7bcc41714849857'), x1 + x2)
        self.assertEqual(BiggerBounded.DESCRIPTOR.upper_bound, 2 ** 16384)
        self.assertTrue(str(BiggerBounded.DESCRIPTOR).startswith('[0, 0x1'))

        top = BiggerBounded.max()
        with self.assertRaises(ArithmeticBoundsError) as cm:
            top + BiggerBounded.from_literal(1)
        self.assertEqual(cm.exception.bound, 'upper')
        self.assertTrue(cm.exception.result == 2 ** 16384)
        with self.assertRaises(ArithmeticBoundsError):
            top * top
        with self.assertRaises(ArithmeticBoundsError):
            BiggerBounded.zero() - top
        self.assertTrue(repr(top).startswith('BiggerBounded(0xff'))
        self.assertEqual(str(top), f"{2 ** 16384 - 1:#x}")

    def test_wrapping(self):
        x1 = SmallModular.from_literal(254)
        x2 = SmallModular.from_literal(3)
        x3 = x1 + x2
        self.assertEqual(SmallModular.from_literal(2), x3)
        x4 = SmallModular.from_literal(5)
        x5 = x3 - x4
        self.assertEqual(SmallModular.from_literal(252), x5)
        x6 = x5 / SmallModular.from_literal(4)
        self.assertEqual(SmallModular.from_literal(63), x6)


if __name__ == '__main__':
    unittest.main()
