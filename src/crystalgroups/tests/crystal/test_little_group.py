import logging
import unittest

import numpy as np

from crystalgroups.crystal import (
    KVec,
    LittleGroup,
    SpaceGroup,
    little_group,
    parse_operation,
    star_of_k,
)
from crystalgroups.tests import SG80_OPERATIONS, SG123_OPERATIONS, SG168_OPERATIONS

LOG = logging.getLogger(__name__)


def _ops(strings):
    return [parse_operation(s) for s in strings]


class LittleGroupTestCase(unittest.TestCase):
    ops = _ops(SG123_OPERATIONS)

    def test_gamma(self):
        indices, ops = little_group(self.ops, [0, 0, 0])
        self.assertEqual(indices, list(range(16)))
        self.assertEqual(ops, self.ops)

    def test_x_point(self):
        indices, ops = little_group(self.ops, [0.5, 0, 0])
        self.assertEqual(indices, [0, 1, 4, 5, 8, 9, 12, 13])
        self.assertEqual([str(op) for op in ops], [SG123_OPERATIONS[i] for i in indices])

    def test_m_point(self):
        indices, _ = little_group(self.ops, KVec.from_string("1/2,1/2,0"))
        self.assertEqual(indices, list(range(16)))

    def test_line(self):
        # along Δ the free part must be left exactly invariant
        indices, _ = little_group(self.ops, [0, 0, 0], [1, 0, 0])
        self.assertEqual(indices, [0, 5, 9, 12])
        indices, _ = little_group(self.ops, KVec.from_string("u,1/2,0"))
        self.assertEqual(indices, [0, 5, 9, 12])

    def test_identity_always_included(self):
        indices, _ = little_group(self.ops, KVec.from_string("u,v,w"))
        self.assertEqual(indices, [0])
        with self.assertRaises(ValueError):
            little_group([], [0, 0, 0])

    def test_hexagonal(self):
        ops = _ops(SG168_OPERATIONS)
        indices, _ = little_group(ops, [1 / 3, 1 / 3, 0])
        self.assertEqual(indices, [0, 1, 2])
        indices, _ = little_group(ops, [0.5, 0, 0])
        self.assertEqual(indices, [0, 3])

    def test_centering(self):
        ops = _ops(SG80_OPERATIONS)
        indices, _ = little_group(ops, [0.5, 0, 0], centering="P")
        self.assertEqual(indices, [0, 1])
        indices, _ = little_group(ops, [0.5, 0, 0], centering="I")
        self.assertEqual(indices, [0])
        # (1, 0, 0) and (0, 1, 0) differ by a reciprocal lattice vector of I
        indices, _ = little_group(ops, [1, 0, 0], centering="I")
        self.assertEqual(indices, [0, 1, 2, 3])


class StarOfKTestCase(unittest.TestCase):
    ops = _ops(SG123_OPERATIONS)

    def test_gamma(self):
        star = star_of_k(self.ops, [0, 0, 0])
        self.assertEqual(len(star), 1)

    def test_x_point(self):
        star = star_of_k(self.ops, [0.5, 0, 0])
        self.assertEqual([str(k) for k in star], ["[1/2, 0, 0]", "[0, 1/2, 0]"])

    def test_line(self):
        star = star_of_k(self.ops, [0, 0, 0], [1, 0, 0])
        self.assertEqual(len(star), 4)
        np.testing.assert_allclose(
            [k.kabc[:, 0] for k in star],
            [[1, 0, 0], [-1, 0, 0], [0, 1, 0], [0, -1, 0]],
        )
        self.assertEqual([str(k) for k in star], ["[u, 0, 0]", "[-u, 0, 0]", "[0, u, 0]", "[0, -u, 0]"])

    def test_general_position(self):
        star = star_of_k(self.ops, KVec.from_string("u,v,w"))
        self.assertEqual(len(star), 16)

    def test_orbit_stabilizer(self):
        for k in ("0,0,0", "1/2,0,0", "1/2,1/2,0", "1/2,1/2,1/2", "u,0,0", "u,u,0", "u,v,1/2"):
            kvec = KVec.from_string(k)
            indices, _ = little_group(self.ops, kvec)
            star = star_of_k(self.ops, kvec)
            self.assertEqual(len(indices) * len(star), len(self.ops), k)

    def test_centering(self):
        ops = _ops(SG80_OPERATIONS)
        self.assertEqual(len(star_of_k(ops, [0.5, 0, 0], centering="I")), 4)
        self.assertEqual(len(star_of_k(ops, [0.5, 0, 0], centering="P")), 2)


class LittleGroupClassTestCase(unittest.TestCase):
    sg = SpaceGroup(123, SG123_OPERATIONS)

    def test_from_operations(self):
        lg = LittleGroup.from_operations(123, self.sg.symmetry_operations, KVec([0.5, 0, 0]), "X")
        self.assertEqual(len(lg), 8)
        self.assertEqual(lg.indices, (0, 1, 4, 5, 8, 9, 12, 13))
        self.assertEqual(lg.dim, 3)
        self.assertEqual(lg[1], parse_operation("-x,-y,z"))
        self.assertEqual(list(lg), list(lg.operations))
        self.assertEqual(repr(lg), "<LittleGroup 123 at X [1/2, 0, 0]: 8 operations>")

    def test_multiplication_table(self):
        lg = self.sg.little_group("1/2,0,0", "X")
        table = lg.multiplication_table()
        self.assertTrue(table.is_group)
        self.assertEqual(len(table), 8)

    def test_space_group_methods(self):
        lg = self.sg.little_group(KVec.from_string("u,0,0"), "Δ")
        self.assertEqual(lg.indices, (0, 5, 9, 12))
        self.assertEqual(lg.label, "Δ")
        self.assertEqual(len(self.sg.star("1/2,0,0")), 2)

    def test_centered_space_group(self):
        sg = SpaceGroup(80, SG80_OPERATIONS)
        lg = sg.little_group("1/2,0,0")
        self.assertEqual(lg.indices, (0,))
        lg = sg.little_group("0,0,1")
        self.assertEqual(len(lg), 4)
        self.assertTrue(lg.multiplication_table("I").is_group)
        self.assertEqual(len(sg.star("1/2,0,0")), 4)

    def test_table_uses_group_centering(self):
        lg = SpaceGroup(80, SG80_OPERATIONS).little_group("0,0,1")
        # (1/2,1/2,1/2) is a lattice translation of the body-centred lattice
        self.assertTrue(lg.multiplication_table().operations[1].is_symmorphic())
        self.assertFalse(lg.multiplication_table("P").operations[1].is_symmorphic())
        np.testing.assert_array_equal(
            lg.multiplication_table().indices, lg.multiplication_table("I").indices
        )
