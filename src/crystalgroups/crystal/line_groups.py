"""
Little groups and irreps of the two line groups (1D space groups):
line group 1 contains only the identity 'x', line group 2 also the
inversion '-x'. The high-symmetry points are Γ (k = 0) and X (k = 1/2),
and Ω (k = u) is the generic point.
"""
import logging
from typing import Dict, List, Sequence

from crystalgroups.util.text import subscript, superscript
from .centering import check_space_group_number
from .irrep import Irrep, Reality
from .kvec import KVec
from .little_group import LittleGroup
from .symmetry_operation import SymmetryOperation

LOG = logging.getLogger(__name__)

LINE_GROUP_OPERATIONS = {
    1: ("x",),
    2: ("x", "-x"),
}

LINE_GROUP_KVECS = {
    "Γ": "0",
    "X": "1/2",
    "Ω": "u",
}


def line_group_operations(number: int) -> List[SymmetryOperation]:
    "The symmetry operations of a line group, identity first"
    check_space_group_number(number, dim=1)
    return [SymmetryOperation.from_xyzt(s) for s in LINE_GROUP_OPERATIONS[number]]


def _irrep(lg: LittleGroup, suffix: str, characters: Sequence[float]) -> Irrep:
    # one-dimensional irreps: the matrices are their characters
    matrices = [[[c]] for c in characters]
    return Irrep(lg.label + suffix, lg, matrices, reality=Reality.REAL)


def line_group_irreps(number: int) -> Dict[str, List[Irrep]]:
    """
    The irreps of the little groups of a line group at Γ, X and Ω.

    In line group 2 the little groups at Γ and X contain the inversion, and
    have an even (characters 1, 1) and an odd (characters 1, -1) irrep; at Ω
    only the identity remains.

    Args:
        number (int): the line group number, 1 or 2

    Returns:
        Dict[str, List[Irrep]]: the irreps keyed by wavevector label
    """
    ops = line_group_operations(number)
    result = {}
    for label, kstr in LINE_GROUP_KVECS.items():
        lg = LittleGroup.from_operations(number, ops, KVec.from_string(kstr), label)
        if len(lg) == 1:
            result[label] = [_irrep(lg, subscript("1"), (1.0,))]
        else:
            result[label] = [
                _irrep(lg, subscript("1") + superscript("+"), (1.0, 1.0)),
                _irrep(lg, subscript("1") + superscript("-"), (1.0, -1.0)),
            ]
        LOG.debug("Line group %d at %s: %d irreps", number, label, len(result[label]))
    return result
