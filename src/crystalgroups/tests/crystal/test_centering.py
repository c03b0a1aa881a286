import logging
import unittest

import numpy as np

from crystalgroups.crystal import (
    build_multiplication_table,
    centering,
    conventionalize,
    parse_operation,
    primitive_basis_matrix,
    primitivize,
)
from crystalgroups.crystal.centering import (
    is_reciprocal_lattice_vector,
    normalize_centering,
)
from crystalgroups.tests import PLANE_GROUP9_OPERATIONS, SG80_OPERATIONS

LOG = logging.getLogger(__name__)


class CenteringTestCase(unittest.TestCase):
    def test_centering_lookup(self):
        expected = {
            1: "P",
            5: "C",
            38: "A",
            80: "I",
            123: "P",
            146: "R",
            168: "P",
            225: "F",
            230: "I",
        }
        for number, symbol in expected.items():
            self.assertEqual(centering(number), symbol, number)
        self.assertEqual(centering(5, dim=2), "c")
        self.assertEqual(centering(9, dim=2), "c")
        self.assertEqual(centering(1, dim=2), "p")
        self.assertEqual(centering(2, dim=1), "p")

    def test_centering_invalid(self):
        for number, dim in ((0, 3), (231, 3), (18, 2), (3, 1), (1, 4)):
            with self.assertRaises(ValueError, msg=(number, dim)):
                centering(number, dim=dim)

    def test_normalize(self):
        self.assertEqual(normalize_centering("i"), "I")
        self.assertEqual(normalize_centering("C", dim=2), "c")
        with self.assertRaises(ValueError):
            normalize_centering("Q")
        with self.assertRaises(ValueError):
            normalize_centering("I", dim=2)

    def test_primitive_basis_volume(self):
        expected = {"P": 1, "I": 1 / 2, "F": 1 / 4, "R": 1 / 3, "A": 1 / 2, "B": 1 / 2, "C": 1 / 2}
        for symbol, volume in expected.items():
            self.assertAlmostEqual(
                abs(np.linalg.det(primitive_basis_matrix(symbol))), volume
            )
        self.assertAlmostEqual(np.linalg.det(primitive_basis_matrix("c", dim=2)), 1 / 2)
        # returned matrices are copies
        P = primitive_basis_matrix("I")
        P[0, 0] = 10.0
        self.assertEqual(primitive_basis_matrix("I")[0, 0], -0.5)

    def test_reciprocal_lattice_vector(self):
        self.assertTrue(is_reciprocal_lattice_vector([1, 0, 0], "P"))
        self.assertFalse(is_reciprocal_lattice_vector([1, 0, 0], "I"))
        self.assertTrue(is_reciprocal_lattice_vector([1, 1, 0], "I"))
        self.assertTrue(is_reciprocal_lattice_vector([2, 0, 0], "I"))
        self.assertFalse(is_reciprocal_lattice_vector([1, 0, 0], "F"))
        self.assertTrue(is_reciprocal_lattice_vector([1, 1, 1], "F"))
        self.assertFalse(is_reciprocal_lattice_vector([0.5, 0, 0], "P"))
        self.assertTrue(is_reciprocal_lattice_vector([1, 1], "c"))
        self.assertFalse(is_reciprocal_lattice_vector([1, 0], "c"))

    def test_primitivize_body_centered(self):
        ops = [parse_operation(s) for s in SG80_OPERATIONS]
        primitive = [primitivize(op, "I") for op in ops]
        for op in primitive:
            np.testing.assert_equal(op.rotation, np.round(op.rotation))
        self.assertTrue(build_multiplication_table(primitive).is_group)
        for prim in primitive:
            self.assertEqual(primitivize(conventionalize(prim, "I"), "I"), prim)
        # (1/2, 1/2, 1/2) is a lattice translation of the I lattice
        self.assertTrue(primitive[1].is_symmorphic())

    def test_primitivize_primitive(self):
        op = parse_operation("-x,y+1/2,-z")
        self.assertIs(primitivize(op, "P"), op)
        self.assertIs(conventionalize(op, "p"), op)

    def test_primitivize_plane_group(self):
        ops = [parse_operation(s) for s in PLANE_GROUP9_OPERATIONS]
        primitive = [primitivize(op, "c") for op in ops]
        self.assertTrue(build_multiplication_table(primitive).is_group)
        # the mirror swaps the primitive basis vectors
        np.testing.assert_equal(primitive[2].rotation, [[0, -1], [-1, 0]])
