"""
Irreducible representations of little groups, and the check that a set of
representation matrices obeys the multiplication table of its little group.

If k is on the Brillouin zone boundary and the little group is
nonsymmorphic, the representation may be a ray representation (Inui et
al., p. 89): D_i D_j = α_ij D_k with phase factor α_ij = exp(2πi k·t0),
where t0 = τ_i + W_i τ_j - τ_k is a lattice vector for the operations
{W_i|τ_i} (Inui et al., Eq. (5.29)).
"""
import logging
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Callable, Dict, List, Optional, Sequence, Tuple

import numpy as np

from crystalgroups.util.num import MATRIX_ATOL
from .kvec import KVec
from .little_group import LittleGroup
from .multiplication_table import NOT_FOUND, MultiplicationTable

LOG = logging.getLogger(__name__)

#: the generic, small but non-zero, free parameters used by `check_irreps`
GENERIC_FREE_PARAMETERS = (0.1, 0.1, 0.1)


class Reality(IntEnum):
    "Reality type of an irrep: real (a), pseudoreal (b) or complex (c)"

    UNDETERMINED = 0
    REAL = 1
    PSEUDOREAL = 2
    COMPLEX = 3


def _as_matrix(m) -> np.ndarray:
    return np.array(m, dtype=np.complex128, ndmin=2)


class ConstantMatrices:
    "Representation matrices that do not depend on free parameters"

    is_parametrized = False

    def __init__(self, matrices):
        self._matrices = tuple(_as_matrix(m) for m in matrices)
        if not self._matrices:
            raise ValueError("An irrep needs at least one matrix")
        shape = self._matrices[0].shape
        if shape[0] != shape[1] or any(m.shape != shape for m in self._matrices):
            raise ValueError("Representation matrices must all be square with equal size")

    def __len__(self):
        return len(self._matrices)

    def __call__(self, abc=None) -> List[np.ndarray]:
        return [m.copy() for m in self._matrices]


class ParametrizedMatrices:
    """
    Representation matrices as a function of the free parameters (α, β, γ)
    of the wavevector. The function receives a (d) array and returns the
    list of matrices.
    """

    is_parametrized = True

    def __init__(self, function: Callable[[np.ndarray], Sequence]):
        self.function = function

    def __call__(self, abc) -> List[np.ndarray]:
        return [_as_matrix(m) for m in self.function(abc)]


class Irrep:
    """
    An irreducible (possibly projective) representation of a little group.

    Attributes:
        label (str): the label of the irrep e.g. 'Γ₁⁺'
        little_group (LittleGroup): the little group this irrep represents
        translations (Optional[Tuple[np.ndarray, ...]]): the translation associated
            with each matrix, or `None` if they are all zero
        reality (Reality): the reality type of this irrep
        paired (bool): whether this irrep is paired with its complex conjugate
    """

    def __init__(
        self,
        label: str,
        little_group: LittleGroup,
        matrices,
        translations=None,
        reality: Reality = Reality.UNDETERMINED,
        paired: bool = False,
    ):
        """
        Args:
            label (str): the label of the irrep
            little_group (LittleGroup): the little group
            matrices: a list of matrices (one per operation of the little group),
                a function of the free parameters returning such a list, or a
                `ConstantMatrices`/`ParametrizedMatrices` instance
            translations (optional): a translation per operation; each matrix is
                multiplied by exp(2πi k·τ) when evaluated
            reality (Reality, optional): the reality type
            paired (bool, optional): complex-conjugate pairing flag

        Raises:
            ValueError: if the number of matrices or translations does not match
                the little group
        """
        if isinstance(matrices, (ConstantMatrices, ParametrizedMatrices)):
            representation = matrices
        elif callable(matrices):
            representation = ParametrizedMatrices(matrices)
        else:
            representation = ConstantMatrices(matrices)
        if not representation.is_parametrized and len(representation) != len(
            little_group
        ):
            raise ValueError(
                "Expected {} matrices for irrep {}, got {}".format(
                    len(little_group), label, len(representation)
                )
            )
        if translations is not None:
            translations = tuple(
                np.array(t, dtype=np.float64, ndmin=1) for t in translations
            )
            if len(translations) != len(little_group):
                raise ValueError(
                    "Expected {} translations for irrep {}, got {}".format(
                        len(little_group), label, len(translations)
                    )
                )
            if all(not np.any(t) for t in translations):
                translations = None
        self.label = label
        self.little_group = little_group
        self.translations = translations
        self.reality = Reality(reality)
        self.paired = paired
        self._representation = representation

    @property
    def kvec(self) -> KVec:
        "The wavevector of the little group"
        return self.little_group.kvec

    @property
    def operations(self):
        "The operations of the little group"
        return self.little_group.operations

    @property
    def is_parametrized(self) -> bool:
        "True if the matrices or the wavevector depend on free parameters"
        return self._representation.is_parametrized or self.kvec.is_parametrized()

    @property
    def dim(self) -> int:
        "The dimension of this irrep i.e. the size of its matrices"
        return self.matrices()[0].shape[0]

    def matrices(self, abc=None) -> List[np.ndarray]:
        """
        Evaluate the representation matrices at the free parameters `abc`.

        Args:
            abc (array_like, optional): free parameters (α, β, γ), zero if omitted

        Returns:
            List[np.ndarray]: one complex matrix per operation of the little group
        """
        result = self._representation(self.kvec.free_parameters(abc))
        if len(result) != len(self.little_group):
            raise ValueError(
                "Expected {} matrices for irrep {}, got {}".format(
                    len(self.little_group), self.label, len(result)
                )
            )
        if self.translations is not None:
            k = self.kvec(abc)
            for i, t in enumerate(self.translations):
                if np.any(t):
                    result[i] = result[i] * np.exp(2j * np.pi * np.dot(k, t))
        return result

    def characters(self, abc=None) -> np.ndarray:
        "The characters (traces of the matrices) of this irrep"
        return np.array([np.trace(m) for m in self.matrices(abc)])

    def __repr__(self):
        return "<{} {} (dim {}) at {} {}>".format(
            self.__class__.__name__,
            self.label,
            self.dim,
            self.little_group.label,
            self.kvec,
        )


@dataclass(eq=False)
class RepresentationCheck:
    """
    The result of checking an irrep against a multiplication table.

    Attributes:
        passed (np.ndarray): (N, N) boolean matrix, True where the product of
            the matrices matches the table (including the ray phase)
        unverified (np.ndarray): (N, N) boolean mask of cells which could not
            be checked because the table has no entry for them
        failures (List[Tuple[int, int]]): verified cells that did not match
    """

    passed: np.ndarray
    unverified: np.ndarray
    failures: List[Tuple[int, int]] = field(default_factory=list)

    @property
    def consistent(self) -> bool:
        "True if every cell was verified and matched"
        return bool(np.all(self.passed))


def representation_check(
    table: MultiplicationTable, irrep: Irrep, abc=None, atol: float = MATRIX_ATOL
) -> RepresentationCheck:
    """
    Check that the matrices of an irrep obey the multiplication table of its
    little group, D(row) D(col) = exp(2πi k·t0) D(row ∘ col), including the
    phase for ray representations of nonsymmorphic little groups.

    Cells for which the table has no entry are marked as unverified (and
    not passed), with a single warning for the whole check.

    Args:
        table (MultiplicationTable): the table of the little group operations,
            in the order of `irrep.operations` (possibly in a primitive basis)
        irrep (Irrep): the irrep to check
        abc (array_like, optional): free parameters to evaluate the matrices and
            the wavevector at
        atol (float, optional): absolute tolerance for the matrix comparison

    Returns:
        RepresentationCheck: per-cell results
    """
    ops = irrep.operations
    N = len(ops)
    if len(table) != N:
        raise ValueError(
            "Multiplication table has {} operations, irrep {} has {}".format(
                len(table), irrep.label, N
            )
        )
    matrices = irrep.matrices(abc)
    k = irrep.kvec(abc)
    passed = np.ones((N, N), dtype=bool)
    unverified = np.zeros((N, N), dtype=bool)
    failures = []
    for row, (oprow, mrow) in enumerate(zip(ops, matrices)):
        for col, (opcol, mcol) in enumerate(zip(ops, matrices)):
            idx = table.indices[row, col]
            if idx == NOT_FOUND:
                unverified[row, col] = True
                passed[row, col] = False
                continue
            product = mrow @ mcol
            t0 = (
                oprow.translation
                + oprow.rotation @ opcol.translation
                - ops[idx].translation
            )
            # factor of 2π as k and t0 are in normalized bases
            expected = np.exp(2j * np.pi * np.dot(k, t0)) * matrices[idx]
            if np.allclose(product, expected, rtol=0, atol=atol):
                continue
            passed[row, col] = False
            if not failures:
                LOG.debug(
                    "Irrep %s does not match the multiplication table: first failure "
                    "at (row, col) = (%d, %d); expected idx = %d, got idx = %s",
                    irrep.label,
                    row,
                    col,
                    idx,
                    [
                        i
                        for i, m in enumerate(matrices)
                        if np.allclose(m, product, rtol=0, atol=atol)
                    ],
                )
            failures.append((row, col))
    if unverified.any():
        LOG.warning(
            "Multiplication table is not a group; "
            "%d cells of irrep %s could not be verified",
            np.count_nonzero(unverified),
            irrep.label,
        )
    return RepresentationCheck(passed, unverified, failures)


def check_representation(
    table: MultiplicationTable, irrep: Irrep, abc=None, atol: float = MATRIX_ATOL
) -> np.ndarray:
    """
    Check an irrep against a multiplication table, see `representation_check`.

    Returns:
        np.ndarray: (N, N) boolean matrix, False for failing or unverifiable cells
    """
    return representation_check(table, irrep, abc=abc, atol=atol).passed


def check_irreps(
    table: MultiplicationTable,
    irreps: Sequence[Irrep],
    samples: Optional[Sequence] = None,
    atol: float = MATRIX_ATOL,
) -> Dict[Tuple[str, int], RepresentationCheck]:
    """
    Check several irreps of one little group against its multiplication table.
    By default each irrep is evaluated at zero free parameters and, if it
    depends on free parameters, at `GENERIC_FREE_PARAMETERS` as well, since
    some errors only show away from special points.

    Args:
        table (MultiplicationTable): the table of the little group operations
        irreps (Sequence[Irrep]): the irreps to check
        samples (Sequence, optional): free parameter values to evaluate at
        atol (float, optional): absolute tolerance for the matrix comparison

    Returns:
        Dict[Tuple[str, int], RepresentationCheck]: results keyed by
            (irrep label, sample index)

    Raises:
        ValueError: if two irreps share a label
    """
    labels = [irrep.label for irrep in irreps]
    duplicates = sorted({label for label in labels if labels.count(label) > 1})
    if duplicates:
        raise ValueError("Duplicate irrep labels: {}".format(", ".join(duplicates)))
    results = {}
    for irrep in irreps:
        irrep_samples = samples
        if irrep_samples is None:
            irrep_samples = [None]
            if irrep.is_parametrized:
                irrep_samples.append(GENERIC_FREE_PARAMETERS[: irrep.kvec.dim])
        for i, abc in enumerate(irrep_samples):
            results[(irrep.label, i)] = representation_check(
                table, irrep, abc=abc, atol=atol
            )
    failed = sorted({label for (label, _), r in results.items() if not r.consistent})
    if failed:
        LOG.info("Irreps not matching the multiplication table: %s", ", ".join(failed))
    return results


def operation_orderings_consistent(irreps: Sequence[Irrep]) -> bool:
    """
    Check that the irreps of a little group all list the same operations in
    the same order, which the multiplication table relies on.
    """
    if not irreps:
        return True
    reference = irreps[0].operations
    for irrep in irreps[1:]:
        ops = irrep.operations
        if len(ops) != len(reference) or not all(a == b for a, b in zip(ops, reference)):
            LOG.debug(
                "Operations of irrep %s differ from irrep %s", irrep.label, irreps[0].label
            )
            return False
    return True
