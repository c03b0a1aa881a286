import logging
import unittest

import numpy as np

from crystalgroups.crystal import SpaceGroup, SymmetryOperation, parse_operation
from crystalgroups.tests import (
    PLANE_GROUP9_OPERATIONS,
    SG2_OPERATIONS,
    SG4_OPERATIONS,
    SG14_OPERATIONS,
    SG80_OPERATIONS,
    SG123_OPERATIONS,
)

LOG = logging.getLogger(__name__)


class SpaceGroupTestCase(unittest.TestCase):
    sg_2 = SpaceGroup(2, SG2_OPERATIONS)
    sg_14 = SpaceGroup.from_xyzt(14, SG14_OPERATIONS)
    sg_80 = SpaceGroup(80, SG80_OPERATIONS)
    sg_123 = SpaceGroup(123, SG123_OPERATIONS)

    def test_construction(self):
        for invalid_num in (-1, 0, 231, 1000):
            with self.assertRaises(ValueError):
                SpaceGroup(invalid_num, SG2_OPERATIONS)
        with self.assertRaises(ValueError):
            SpaceGroup(18, PLANE_GROUP9_OPERATIONS, dim=2)
        with self.assertRaises(ValueError):
            SpaceGroup(3, ("x",), dim=1)
        with self.assertRaises(ValueError):
            SpaceGroup(1, ("x,y,z",), dim=4)
        # operations must match the dimension
        with self.assertRaises(ValueError):
            SpaceGroup(9, SG2_OPERATIONS, dim=2)
        sg = SpaceGroup(9, PLANE_GROUP9_OPERATIONS, dim=2)
        self.assertEqual(sg.centering, "c")
        self.assertEqual(len(sg), 4)

    def test_operations(self):
        self.assertEqual(len(self.sg_14), 4)
        self.assertEqual(self.sg_14[1], parse_operation("-x,y+1/2,-z+1/2"))
        self.assertEqual(list(self.sg_14), self.sg_14.symmetry_operations)
        self.assertEqual(self.sg_14.symops, self.sg_14.symmetry_operations)
        # the returned list is a copy
        self.sg_14.symmetry_operations.pop()
        self.assertEqual(len(self.sg_14), 4)

    def test_centering(self):
        self.assertEqual(self.sg_14.centering, "P")
        self.assertEqual(self.sg_80.centering, "I")

    def test_symmorphic(self):
        self.assertTrue(self.sg_2.is_symmorphic())
        self.assertTrue(self.sg_123.is_symmorphic())
        self.assertFalse(self.sg_14.is_symmorphic())
        self.assertFalse(SpaceGroup(4, SG4_OPERATIONS).is_symmorphic())

    def test_ordered_symmetry_operations(self):
        shuffled = SpaceGroup(14, SG14_OPERATIONS[2:] + SG14_OPERATIONS[:2])
        ordered = shuffled.ordered_symmetry_operations()
        self.assertEqual(ordered[0], SymmetryOperation.identity())
        self.assertEqual(
            [str(s) for s in ordered],
            ["x,y,z", "-x,-y,-z", "x,-y+1/2,z+1/2", "-x,y+1/2,-z+1/2"],
        )

        # no identity operation
        sg = SpaceGroup(2, ("-x,-y,-z",))
        with self.assertRaises(ValueError):
            sg.ordered_symmetry_operations()

    def test_identity_first_required(self):
        sg = SpaceGroup(2, ("-x,-y,-z", "x,y,z"))
        with self.assertRaises(ValueError):
            sg.little_group("0.1,0.2,0.3")
        with self.assertRaises(ValueError):
            sg.star("0.1,0.2,0.3")
        ordered = SpaceGroup(2, sg.ordered_symmetry_operations())
        self.assertEqual(ordered.little_group("0.1,0.2,0.3").indices, (0,))
        self.assertEqual(len(ordered.star("0.1,0.2,0.3")), 2)

    def test_multiplication_table(self):
        table = self.sg_14.multiplication_table()
        self.assertTrue(table.is_group)
        np.testing.assert_equal(
            table.indices, [[0, 1, 2, 3], [1, 0, 3, 2], [2, 3, 0, 1], [3, 2, 1, 0]]
        )

    def test_centered_multiplication_table(self):
        # the conventional operations of I4_1 are closed modulo the centering
        self.assertTrue(self.sg_80.multiplication_table().is_group)
        for op in self.sg_80.primitive_symmetry_operations():
            np.testing.assert_equal(op.rotation, np.round(op.rotation))
        # products are compared modulo the primitive lattice
        incomplete = SpaceGroup(80, SG80_OPERATIONS[:1] + SG80_OPERATIONS[2:])
        self.assertFalse(incomplete.multiplication_table().is_group)

    def test_repr(self):
        self.assertEqual(repr(self.sg_123), "<SpaceGroup 123 (3D): 16 operations>")
        self.assertEqual(
            repr(SpaceGroup(2, ("x", "-x"), dim=1)), "<SpaceGroup 2 (1D): 2 operations>"
        )
