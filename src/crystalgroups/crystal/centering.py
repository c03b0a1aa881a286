"""
Lattice centering of space groups in their conventional setting, and
the transformations between the conventional and primitive bases.

The default settings follow the Bilbao Crystallographic Server: unique
axis b for monoclinic groups, the obverse triple hexagonal cell for R
groups and origin choice 2 where there are two origin choices.
"""
import logging

import numpy as np

from crystalgroups.util.num import OPERATION_ATOL, KVEC_ATOL, is_integer
from .symmetry_operation import SymmetryOperation

LOG = logging.getLogger(__name__)

#: largest space group number per dimension (line, plane/wallpaper, space groups)
MAX_SPACE_GROUP_NUMBER = {1: 2, 2: 17, 3: 230}

_CENTERED_SPACE_GROUPS = {
    3: {
        "A": (38, 39, 40, 41),
        "C": (5, 8, 9, 12, 15, 20, 21, 35, 36, 37, 63, 64, 65, 66, 67, 68),
        "F": (22, 42, 43, 69, 70, 196, 202, 203, 209, 210, 216, 219, 225, 226, 227, 228),
        "I": (
            23, 24, 44, 45, 46, 71, 72, 73, 74, 79, 80, 82, 87, 88, 97, 98,
            107, 108, 109, 110, 119, 120, 121, 122, 139, 140, 141, 142,
            197, 199, 204, 206, 211, 214, 217, 220, 229, 230,
        ),
        "R": (146, 148, 155, 160, 161, 166, 167),
    },
    2: {"c": (5, 9)},
    1: {},
}

# columns are the primitive direct basis vectors expressed in the conventional basis
PRIMITIVE_BASIS_MATRICES = {
    1: {"p": np.array([[1.0]])},
    2: {
        "p": np.eye(2),
        "c": np.array([[1.0, 1.0], [-1.0, 1.0]]) / 2,
    },
    3: {
        "P": np.eye(3),
        "I": np.array([[-1.0, 1.0, 1.0], [1.0, -1.0, 1.0], [1.0, 1.0, -1.0]]) / 2,
        "F": np.array([[0.0, 1.0, 1.0], [1.0, 0.0, 1.0], [1.0, 1.0, 0.0]]) / 2,
        "R": np.array([[2.0, -1.0, -1.0], [1.0, 1.0, -2.0], [1.0, 1.0, 1.0]]) / 3,
        "A": np.array([[2.0, 0.0, 0.0], [0.0, 1.0, -1.0], [0.0, 1.0, 1.0]]) / 2,
        "B": np.array([[1.0, 0.0, -1.0], [0.0, 2.0, 0.0], [1.0, 0.0, 1.0]]) / 2,
        "C": np.array([[1.0, 1.0, 0.0], [-1.0, 1.0, 0.0], [0.0, 0.0, 2.0]]) / 2,
    },
}


def check_dimension(dim: int, allowed=(1, 2, 3)) -> int:
    """
    Validate a dimension.

    Raises:
        ValueError: if `dim` is not one of `allowed`
    """
    if dim not in allowed:
        raise ValueError(
            "dim must be one of {}, got {}".format(", ".join(map(str, allowed)), dim)
        )
    return dim


def check_space_group_number(number: int, dim: int = 3) -> int:
    """
    Validate a space group number: 1-2 for line groups, 1-17
    for plane groups and 1-230 for space groups.

    Raises:
        ValueError: if `number` is out of range for `dim`
    """
    check_dimension(dim)
    upper = MAX_SPACE_GROUP_NUMBER[dim]
    if number < 1 or number > upper:
        raise ValueError(
            "Space group number must be between [1, {}] in {}D, got {}".format(
                upper, dim, number
            )
        )
    return number


def normalize_centering(centering: str, dim: int = 3) -> str:
    """
    Normalize a centering symbol to the case used in `dim` dimensions:
    upper case in 3D (P, A, B, C, I, F, R), lower case in 2D and 1D (p, c).

    Raises:
        ValueError: if the symbol is unknown in `dim` dimensions
    """
    check_dimension(dim)
    symbol = centering.upper() if dim == 3 else centering.lower()
    if symbol not in PRIMITIVE_BASIS_MATRICES[dim]:
        raise ValueError(
            "Unknown centering '{}' in {}D, expected one of {}".format(
                centering, dim, ", ".join(PRIMITIVE_BASIS_MATRICES[dim])
            )
        )
    return symbol


def centering(number: int, dim: int = 3) -> str:
    """
    The centering symbol of a space group in its conventional setting.

    >>> centering(80)
    'I'
    >>> centering(9, dim=2)
    'c'

    Args:
        number (int): the space group number
        dim (int, optional): the dimension

    Returns:
        str: the centering symbol, 'P' (3D) or 'p' (2D, 1D) for primitive groups
    """
    check_space_group_number(number, dim)
    for symbol, numbers in _CENTERED_SPACE_GROUPS[dim].items():
        if number in numbers:
            return symbol
    return "P" if dim == 3 else "p"


def primitive_basis_matrix(centering: str, dim: int = 3) -> np.ndarray:
    """
    The transformation matrix from the conventional to the primitive
    basis for a given centering: its columns are the primitive direct
    lattice vectors expressed in the conventional basis.

    Args:
        centering (str): centering symbol e.g. 'P', 'I', 'F', 'c'
        dim (int, optional): the dimension

    Returns:
        np.ndarray: (dim, dim) transformation matrix
    """
    return PRIMITIVE_BASIS_MATRICES[dim][normalize_centering(centering, dim)].copy()


def is_reciprocal_lattice_vector(
    k, centering: str = "P", atol: float = KVEC_ATOL
) -> bool:
    """
    Check if a vector in (conventional) reciprocal lattice coordinates is
    a primitive reciprocal lattice vector, i.e. has integer coordinates in
    the primitive reciprocal basis.

    Args:
        k (array_like): (d) vector in conventional reciprocal coordinates
        centering (str, optional): centering symbol of the lattice
        atol (float, optional): absolute tolerance for integrality

    Returns:
        bool: whether `k` is a primitive reciprocal lattice vector
    """
    k = np.atleast_1d(np.asarray(k, dtype=np.float64))
    basis = primitive_basis_matrix(centering, len(k))
    return is_integer(basis.T @ k, atol=atol)


def primitivize(op: SymmetryOperation, centering: str) -> SymmetryOperation:
    """
    Transform a symmetry operation from the conventional to the
    primitive basis: {P^-1 W P|P^-1 w}.

    Args:
        op (SymmetryOperation): operation in the conventional basis
        centering (str): centering symbol of the lattice

    Returns:
        SymmetryOperation: the operation in the primitive basis
    """
    centering = normalize_centering(centering, op.dim)
    if centering in ("P", "p"):
        return op
    P = primitive_basis_matrix(centering, op.dim)
    P_inv = np.linalg.inv(P)
    return SymmetryOperation(
        _snap_integer(P_inv @ op.rotation @ P), P_inv @ op.translation
    )


def conventionalize(op: SymmetryOperation, centering: str) -> SymmetryOperation:
    """
    Transform a symmetry operation from the primitive to the conventional
    basis: {P W P^-1|P w}, the inverse of `primitivize`.
    """
    centering = normalize_centering(centering, op.dim)
    if centering in ("P", "p"):
        return op
    P = primitive_basis_matrix(centering, op.dim)
    P_inv = np.linalg.inv(P)
    return SymmetryOperation(_snap_integer(P @ op.rotation @ P_inv), P @ op.translation)


def _snap_integer(matrix: np.ndarray) -> np.ndarray:
    if is_integer(matrix, atol=OPERATION_ATOL):
        return np.round(matrix)
    LOG.debug("Transformed rotation has non-integer entries:\n%s", matrix)
    return matrix
