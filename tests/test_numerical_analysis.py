"""Unit tests for root finding and limits."""

import math
import unittest
from unittest import mock

from typemaths_pkg import numerical_analysis
from typemaths_pkg.differential import read
from typemaths_pkg.generators import take
from typemaths_pkg.numerical_analysis import (
    bisection,
    find_root,
    iterate,
    limit,
    newton_raphson,
    newton_raphson_step,
    secant,
)
from typemaths_pkg.types import ConvergenceError


def ln(x):
    return math.log(x)


def d_ln(x):
    return 1 / x


class TestRootFinding(unittest.TestCase):
    """Each method finds the root of ln at 1."""

    def test_newton_raphson(self):
        root = limit(1e-6, newton_raphson(ln, d_ln)(2))
        self.assertAlmostEqual(root, 1.0, places=6)

    def test_newton_raphson_sequence(self):
        xs = take(3, newton_raphson(ln, d_ln)(2))
        self.assertEqual(xs[0], 2)
        self.assertAlmostEqual(xs[1], 2 - 2 * math.log(2))

    def test_newton_step(self):
        step = newton_raphson_step(lambda x: x * x - 2, lambda x: 2 * x)
        self.assertEqual(step(1.0), 1.5)

    def test_secant(self):
        root = limit(1e-6, secant(ln)((0.5, 2)))
        self.assertAlmostEqual(root, 1.0, places=5)

    def test_secant_starts_with_both_points(self):
        self.assertEqual(take(2, secant(ln)((0.5, 2))), [0.5, 2])

    def test_secant_flat_line_is_an_error(self):
        with self.assertRaises(ConvergenceError) as ctx:
            limit(1e-6, secant(lambda x: x * x - 4)((-1, 1)))
        self.assertEqual(ctx.exception.code, "FLAT_SECANT")

    def test_secant_flat_at_zero_stays_put(self):
        self.assertEqual(limit(1e-6, secant(lambda x: 0.0)((0.0, 1.0))), 1.0)

    def test_bisection(self):
        root = limit(1e-6, bisection(ln)((0.5, 2)))
        self.assertAlmostEqual(root, 1.0, places=5)

    def test_bisection_yields_midpoints(self):
        self.assertEqual(take(2, bisection(ln)((0.5, 2))), [1.25, 0.875])

    def test_bisection_exact_root(self):
        self.assertEqual(limit(1e-9, bisection(lambda x: x)((-1, 1))), 0.0)

    def test_bisection_root_at_endpoint(self):
        self.assertEqual(limit(1e-6, bisection(lambda x: x - 2)((2, 3))), 2)
        self.assertEqual(limit(1e-6, bisection(lambda x: x - 3)((2, 3))), 3)
        self.assertEqual(take(3, bisection(lambda x: x - 2)((2, 3))), [2, 2, 2])

    def test_bisection_bad_bracket(self):
        gen = bisection(ln)((2, 3))
        with self.assertRaises(ConvergenceError) as ctx:
            next(gen)
        self.assertEqual(ctx.exception.code, "BAD_BRACKET")

    def test_iterate(self):
        self.assertEqual(take(4, iterate(lambda x: x / 2)(8)), [8, 4, 2, 1])


class TestLimit(unittest.TestCase):
    """Test convergence detection."""

    def test_converging_sequence(self):
        gen = iterate(lambda x: x / 2)(1.0)
        self.assertLess(limit(1e-3, gen), 1e-3)

    def test_returns_first_close_value(self):
        self.assertEqual(limit(0.5, iter([10, 5, 3, 2.8, 2.7])), 2.8)

    def test_max_iterations(self):
        with self.assertRaises(ConvergenceError) as ctx:
            limit(1e-6, iterate(lambda x: x + 1)(0), max_iterations=50)
        self.assertEqual(ctx.exception.code, "NO_CONVERGENCE")
        self.assertIn("50", str(ctx.exception))

    def test_module_default_cap(self):
        with mock.patch.object(numerical_analysis, "MAX_ITERATIONS", 10):
            with self.assertRaises(ConvergenceError):
                limit(1e-6, iterate(lambda x: -x)(1))

    def test_finite_sequences(self):
        with self.assertRaises(ConvergenceError):
            limit(1e-6, iter([]))
        with self.assertRaises(ConvergenceError):
            limit(1e-6, iter([1, 2, 3]))

    def test_nan(self):
        with self.assertRaises(ConvergenceError):
            limit(1e-6, iter([1.0, float("nan"), 1.0]))


class TestFindRoot(unittest.TestCase):
    """Test the dispatching helper."""

    def test_methods(self):
        f = read("x^2 - 2")
        df = f.derivative()
        self.assertAlmostEqual(find_root(f, "newton", [1], df=df), math.sqrt(2), places=6)
        self.assertAlmostEqual(find_root(f, "secant", [1, 2]), math.sqrt(2), places=5)
        self.assertAlmostEqual(find_root(f, "bisection", [0, 2]), math.sqrt(2), places=5)

    def test_argument_errors(self):
        f = read("x")
        with self.assertRaises(ValueError):
            find_root(f, "newton", [1])
        with self.assertRaises(ValueError):
            find_root(f, "newton", [1, 2], df=f.derivative())
        with self.assertRaises(ValueError):
            find_root(f, "secant", [1])
        with self.assertRaises(ValueError):
            find_root(f, "bisection", [1, 2, 3])
        with self.assertRaises(ValueError):
            find_root(f, "regula-falsi", [1, 2])


if __name__ == "__main__":
    unittest.main()
