"""
The little group of a wavevector k (the operations leaving k invariant
modulo a reciprocal lattice vector) and the star of k (the orbit of k
under all operations).

A symmetry operation g acts on a function as gf(r) = f(g^-1 r), so a
plane wave exp(ik·r) is taken to exp(ik·g^-1 r), i.e. k^T -> k^T W^-1.
With k in the reciprocal basis and W in the direct basis this is
k' = (W^T)^-1 k, see `SymmetryOperation.act_on_reciprocal`.
"""
import logging
from dataclasses import dataclass
from typing import List, Sequence, Tuple

import numpy as np

from crystalgroups.util.num import KVEC_ATOL, OPERATION_ATOL
from .centering import centering as centering_of
from .centering import is_reciprocal_lattice_vector, primitivize
from .kvec import KVec, as_kvec
from .multiplication_table import MultiplicationTable, build_multiplication_table
from .symmetry_operation import SymmetryOperation

LOG = logging.getLogger(__name__)


def little_group(
    operations: Sequence[SymmetryOperation],
    k0,
    kabc=None,
    centering: str = "P",
    atol: float = KVEC_ATOL,
) -> Tuple[List[int], List[SymmetryOperation]]:
    """
    Find the operations g of a group that leave a wavevector invariant:
    g·k0 must equal k0 up to a primitive reciprocal lattice vector and, if
    the wavevector has a free part, g·kabc must equal kabc exactly.

    The first operation is assumed to be the identity and is always
    included. The returned operations are in the order they appear in
    `operations`.

    Args:
        operations (Sequence[SymmetryOperation]): the group, identity first
        k0 (array_like or KVec): fixed part of the wavevector, or a KVec
        kabc (array_like, optional): free part of the wavevector
        centering (str, optional): centering symbol of the lattice
        atol (float, optional): tolerance for the reciprocal lattice test

    Returns:
        Tuple[List[int], List[SymmetryOperation]]: indices into `operations` and
            the corresponding operations of the little group
    """
    kvec = as_kvec(k0, kabc)
    operations = list(operations)
    if not operations:
        raise ValueError("Cannot find the little group of an empty set of operations")
    check_abc = kvec.is_parametrized(atol=atol)
    indices = [0]
    for idx, op in enumerate(operations[1:], start=1):
        image = kvec.transformed(op)
        if not is_reciprocal_lattice_vector(image.k0 - kvec.k0, centering, atol=atol):
            continue
        if check_abc and not np.allclose(image.kabc, kvec.kabc, rtol=0, atol=atol):
            continue
        indices.append(idx)
    LOG.debug(
        "Little group of %s has %d of %d operations", kvec, len(indices), len(operations)
    )
    return indices, [operations[i] for i in indices]


def star_of_k(
    operations: Sequence[SymmetryOperation],
    k0,
    kabc=None,
    centering: str = "P",
    atol: float = KVEC_ATOL,
) -> List[KVec]:
    """
    The star of a wavevector: its distinct images under all operations of a
    group, where images differing by a primitive reciprocal lattice vector
    are the same.

    Args:
        operations (Sequence[SymmetryOperation]): the group, identity first
        k0 (array_like or KVec): fixed part of the wavevector, or a KVec
        kabc (array_like, optional): free part of the wavevector
        centering (str, optional): centering symbol of the lattice
        atol (float, optional): tolerance for the reciprocal lattice test

    Returns:
        List[KVec]: the star, starting with the given wavevector, in order of
            first appearance
    """
    kvec = as_kvec(k0, kabc)
    star = [kvec]
    for op in list(operations)[1:]:
        image = kvec.transformed(op)
        if not any(image.equivalent(k, centering, atol=atol) for k in star):
            star.append(image)
    return star


@dataclass(frozen=True, eq=False)
class LittleGroup:
    """
    The little group of a wavevector in a space group.

    Attributes:
        number (int): the space group number
        kvec (KVec): the wavevector
        label (str): the label of the wavevector e.g. 'Γ', 'X'
        operations (Tuple[SymmetryOperation, ...]): the operations of the
            little group, in the order of the parent group
        indices (Tuple[int, ...]): the positions of `operations` in the parent group
    """

    number: int
    kvec: KVec
    label: str
    operations: Tuple[SymmetryOperation, ...]
    indices: Tuple[int, ...] = ()

    @property
    def dim(self) -> int:
        return self.kvec.dim

    def __len__(self):
        return len(self.operations)

    def __iter__(self):
        return iter(self.operations)

    def __getitem__(self, key):
        return self.operations[key]

    def multiplication_table(
        self, centering: str = None, atol: float = OPERATION_ATOL
    ) -> MultiplicationTable:
        """
        The multiplication table of this little group. For centered lattices
        the operations are first transformed to the primitive basis, where
        products are compared modulo the primitive lattice.

        Args:
            centering (str, optional): centering symbol of the lattice,
                by default that of space group `number`
            atol (float, optional): tolerance for matching products

        Returns:
            MultiplicationTable: the table, in the order of `operations`
        """
        if centering is None:
            centering = centering_of(self.number, self.dim)
        ops = [primitivize(op, centering) for op in self.operations]
        return build_multiplication_table(ops, atol=atol)

    def __repr__(self):
        return "<{} {} at {} {}: {} operations>".format(
            self.__class__.__name__, self.number, self.label, self.kvec, len(self)
        )

    @classmethod
    def from_operations(
        cls,
        number: int,
        operations: Sequence[SymmetryOperation],
        kvec: KVec,
        label: str = "",
        centering: str = "P",
    ):
        """
        Alternative constructor, finding the little group of `kvec` in the
        full list of operations of a group (identity first).
        """
        indices, ops = little_group(operations, kvec, centering=centering)
        return cls(number, kvec, label, tuple(ops), tuple(indices))
