import logging
import unittest
from fractions import Fraction

import numpy as np

from crystalgroups.util.num import isclose_mod1, rationalize, reduce_translation

LOG = logging.getLogger(__name__)


class RationalizeTestCase(unittest.TestCase):
    def test_exact(self):
        for value in (Fraction(1, 12), Fraction(1, 6), Fraction(3, 4), Fraction(-1, 3)):
            self.assertEqual(rationalize(float(value)), value)
        self.assertEqual(rationalize(0), Fraction(0))

    def test_simplest_within_tolerance(self):
        self.assertEqual(rationalize(0.33), Fraction(1, 3))
        self.assertEqual(rationalize(0.17), Fraction(1, 6))
        self.assertEqual(rationalize(0.3333333), Fraction(1, 3))
        self.assertEqual(rationalize(0.6666667), Fraction(2, 3))

    def test_no_fraction_within_tolerance(self):
        with self.assertRaises(ValueError):
            rationalize(np.pi / 10, tol=1e-6, max_denominator=8)


class ReduceTranslationTestCase(unittest.TestCase):
    def test_reduce(self):
        np.testing.assert_allclose(
            reduce_translation([1.5, -0.25, 1.0 - 1e-12]), [0.5, 0.75, 0.0], atol=1e-14
        )
        self.assertTrue(isclose_mod1([0.0, 0.5], [1.0, -0.5]))
