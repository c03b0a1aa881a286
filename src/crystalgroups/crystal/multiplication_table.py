import logging
from dataclasses import dataclass
from typing import Sequence, Tuple

import numpy as np

from crystalgroups.util.num import OPERATION_ATOL
from .symmetry_operation import SymmetryOperation, compose

LOG = logging.getLogger(__name__)

#: index recorded for a product that is not in the operation list
NOT_FOUND = -1


def find_operation(
    op: SymmetryOperation,
    operations: Sequence[SymmetryOperation],
    atol: float = OPERATION_ATOL,
) -> int:
    """
    Locate a symmetry operation in a list by approximate equality,
    comparing translations modulo 1.

    Args:
        op (SymmetryOperation): the operation to look for
        operations (Sequence[SymmetryOperation]): the list to search
        atol (float, optional): absolute tolerance

    Returns:
        int: the index of the first match in `operations`, or `NOT_FOUND`
    """
    for i, candidate in enumerate(operations):
        if op.isapprox(candidate, atol=atol):
            return i
    return NOT_FOUND


@dataclass(frozen=True, eq=False)
class MultiplicationTable:
    """
    The multiplication table of an ordered list of symmetry operations.

    Attributes:
        operations (Tuple[SymmetryOperation, ...]): the operations, in the order
            of the rows and columns of the table
        indices (np.ndarray): (N, N) array, `indices[row, col]` is the index in
            `operations` of `operations[row] ∘ operations[col]`, or `NOT_FOUND`
        is_group (bool): whether every product was found, i.e. the operations
            are closed under composition
        failures (Tuple[Tuple[int, int], ...]): the (row, col) cells whose
            product was not found
    """

    operations: Tuple[SymmetryOperation, ...]
    indices: np.ndarray
    is_group: bool
    failures: Tuple[Tuple[int, int], ...] = ()

    def __len__(self):
        return len(self.operations)

    def __getitem__(self, key):
        return self.indices[key]

    def identity_index(self) -> int:
        "The index of the identity operation, or `NOT_FOUND`"
        for i, op in enumerate(self.operations):
            if op.is_identity():
                return i
        return NOT_FOUND

    def inverse_indices(self) -> np.ndarray:
        """
        For each operation, the index of its inverse in the table.

        Returns:
            np.ndarray: (N) array of indices, `NOT_FOUND` where no inverse
                is present (or there is no identity)
        """
        identity = self.identity_index()
        result = np.full(len(self), NOT_FOUND, dtype=np.int64)
        if identity == NOT_FOUND:
            return result
        for row in range(len(self)):
            cols = np.nonzero(self.indices[row] == identity)[0]
            if len(cols) > 0:
                result[row] = cols[0]
        return result

    def __repr__(self):
        return "<{}: {} operations, is_group={}>".format(
            self.__class__.__name__, len(self), self.is_group
        )


def build_multiplication_table(
    operations: Sequence[SymmetryOperation], atol: float = OPERATION_ATOL
) -> MultiplicationTable:
    """
    Compute the multiplication table of a set of symmetry operations,
    i.e. the index of `row ∘ col` relative to the ordering of
    `operations`, for every pair of operations.

    Products which are not in `operations` are recorded as `NOT_FOUND` and
    the table is flagged as not being a group; a single warning is logged
    rather than one per missing product.

    Args:
        operations (Sequence[SymmetryOperation]): the ordered operations
        atol (float, optional): tolerance for matching products

    Returns:
        MultiplicationTable: the table of indices, its group flag and the
            failing cells
    """
    operations = tuple(operations)
    N = len(operations)
    indices = np.empty((N, N), dtype=np.int64)
    failures = []
    for row, oprow in enumerate(operations):
        for col, opcol in enumerate(operations):
            match = find_operation(compose(oprow, opcol), operations, atol=atol)
            if match == NOT_FOUND:
                failures.append((row, col))
            indices[row, col] = match
    if failures:
        row, col = failures[0]
        LOG.warning(
            "The given operations do not form a group: %d of %d products missing, "
            "first at (row, col) = (%d, %d)",
            len(failures),
            N * N,
            row,
            col,
        )
    indices.setflags(write=False)
    LOG.debug("Built %dx%d multiplication table", N, N)
    return MultiplicationTable(operations, indices, not failures, tuple(failures))
