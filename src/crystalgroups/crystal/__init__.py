"""
This module implements the group theory of crystallographic symmetry
operations: composition and notation of symmetry operations
(`SymmetryOperation`), line, plane and space groups (`SpaceGroup`), their
multiplication tables (`MultiplicationTable`), wavevectors (`KVec`),
little groups and stars of k (`LittleGroup`), and the consistency of
irreducible representations with the group multiplication (`Irrep`).
"""

from .centering import centering, conventionalize, primitive_basis_matrix, primitivize
from .irrep import (
    Irrep,
    Reality,
    RepresentationCheck,
    check_irreps,
    check_representation,
    representation_check,
)
from .kvec import KVec
from .little_group import LittleGroup, little_group, star_of_k
from .multiplication_table import (
    NOT_FOUND,
    MultiplicationTable,
    build_multiplication_table,
)
from .space_group import SpaceGroup
from .symmetry_operation import (
    SymmetryOperation,
    compose,
    format_seitz,
    format_xyzt,
    is_symmorphic,
    parse_operation,
)

__all__ = [
    "Irrep",
    "KVec",
    "LittleGroup",
    "MultiplicationTable",
    "NOT_FOUND",
    "Reality",
    "RepresentationCheck",
    "SpaceGroup",
    "SymmetryOperation",
    "build_multiplication_table",
    "centering",
    "check_irreps",
    "check_representation",
    "compose",
    "conventionalize",
    "format_seitz",
    "format_xyzt",
    "is_symmorphic",
    "little_group",
    "parse_operation",
    "primitive_basis_matrix",
    "primitivize",
    "representation_check",
    "star_of_k",
]
