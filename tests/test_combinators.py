"""Unit tests for combinators and lazy generators."""

import itertools
import unittest

from typemaths_pkg.combinators import (
    compose,
    constant,
    curry2,
    curry3,
    curry6,
    flip,
    identity,
    uncurry2,
    uncurry3,
    uncurry6,
)
from typemaths_pkg.generators import enum_from, gfilter, gmap, iterate, take


def succ(x):
    return x + 1


def double(x):
    return x * 2


class TestCombinators(unittest.TestCase):
    """Test function combinators."""

    def test_identity_and_constant(self):
        self.assertEqual(identity(5), 5)
        self.assertEqual(constant(3)("ignored"), 3)

    def test_compose(self):
        self.assertEqual(compose(double, succ)(3), 8)
        self.assertEqual(compose(succ, double)(3), 7)
        self.assertEqual(compose(identity, succ)(3), compose(succ, identity)(3))

    def test_flip(self):
        self.assertEqual(flip(lambda a, b: a - b)(1, 10), 9)

    def test_curry(self):
        self.assertEqual(curry2(lambda a, b: a - b)(10)(1), 9)
        self.assertEqual(curry3(lambda a, b, c: a + b * c)(1)(2)(3), 7)
        self.assertEqual(curry6(lambda *xs: "".join(xs))("a")("b")("c")("d")("e")("f"), "abcdef")

    def test_uncurry_inverts_curry(self):
        sub = lambda a, b: a - b
        self.assertEqual(uncurry2(curry2(sub))(10, 1), sub(10, 1))
        add3 = lambda a, b, c: a + b + c
        self.assertEqual(uncurry3(curry3(add3))(1, 2, 3), 6)
        join6 = lambda *xs: "".join(xs)
        self.assertEqual(uncurry6(curry6(join6))(*"abcdef"), "abcdef")


class TestGenerators(unittest.TestCase):
    """Test lazy sequence helpers."""

    def test_first_ten_even_squares(self):
        squares = gmap(lambda x: x * x, enum_from(1))
        evens = gfilter(lambda x: x % 2 == 0, squares)
        self.assertEqual(take(10, evens), [4, 16, 36, 64, 100, 144, 196, 256, 324, 400])

    def test_gmap_functor_laws(self):
        xs = [1, 2, 3]
        self.assertEqual(list(gmap(identity, xs)), xs)
        self.assertEqual(
            list(gmap(compose(double, succ), xs)),
            list(gmap(double, gmap(succ, xs))),
        )

    def test_take(self):
        self.assertEqual(take(0, enum_from(0)), [])
        self.assertEqual(take(5, [1, 2]), [1, 2])
        with self.assertRaises(ValueError):
            take(-1, [1])

    def test_enum_from_step(self):
        self.assertEqual(take(4, enum_from(10, -2)), [10, 8, 6, 4])

    def test_iterate(self):
        self.assertEqual(take(5, iterate(double, 1)), [1, 2, 4, 8, 16])

    def test_laziness(self):
        calls = []

        def spy(x):
            calls.append(x)
            return x

        gen = gmap(spy, itertools.count())
        self.assertEqual(calls, [])
        take(3, gen)
        self.assertEqual(calls, [0, 1, 2])


if __name__ == "__main__":
    unittest.main()
