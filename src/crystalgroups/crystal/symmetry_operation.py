import logging
import re
from typing import Optional, Tuple

import numpy as np
from scipy.linalg import null_space

from crystalgroups.util.num import (
    OPERATION_ATOL,
    is_integer,
    isclose_mod1,
    rationalize,
    reduce_translation,
)
from crystalgroups.util.text import (
    format_fraction,
    overline,
    split_linear_terms,
    subscript,
)

LOG = logging.getLogger(__name__)

AXIS_SYMBOLS = "xyz"

# leading operation number in ITA style listings e.g. '3 -x,y+1/2,-z'
_OPERATION_NUMBER_REGEX = re.compile(r"^\s*\d+\s+(?=[+-]?\s*[xyz])")

# ITA Vol. A, Table 11.2.1.1: (det W, tr W) -> Hermann-Mauguin symbol
#      _______________________________________________
#     |_detW_\_trW_|_-3_|_-2 |_-1 |__0_|__1_|__2_|__3_|
#     |    1       |    |    |  2 |  3 |  4 |  6 |  1 |
#     |___-1_______|_-1_|_-6_|_-4_|_-3_|__m_|____|____|
SEITZ_SYMBOLS = {
    3: {
        (1, -1): "2",
        (1, 0): "3",
        (1, 1): "4",
        (1, 2): "6",
        (1, 3): "1",
        (-1, -3): "-1",
        (-1, -2): "-6",
        (-1, -1): "-4",
        (-1, 0): "-3",
        (-1, 1): "m",
    },
    2: {
        (1, -2): "2",
        (1, -1): "3",
        (1, 0): "4",
        (1, 1): "6",
        (1, 2): "1",
        (-1, 0): "m",
    },
    1: {
        (1, 1): "1",
        (-1, -1): "-1",
    },
}


def encode_xyzt(rotation, translation=None) -> str:
    """
    Encode a rotation matrix (of -1, 0, 1s) and (rational) translation vector
    into the per-axis string form e.g. -x,y+1/2,-z+1/2

    >>> encode_xyzt(((-1, 0, 0), (0, 1, 0), (0, 0, -1)), (0, 0.5, 0.5))
    '-x,y+1/2,-z+1/2'
    >>> encode_xyzt(((1, -1, 0), (1, 0, 0), (0, 0, 1)))
    'x-y,x,z'

    Args:
        rotation (array_like): (d, d) matrix of integers encoding the rotation component
            of the symmetry operation
        translation (array_like, optional): (d) vector of rational numbers encoding the
            translation component of the symmetry operation

    Returns:
        str: the encoded symmetry operation

    Raises:
        ValueError: if the rotation has non-integer entries
    """
    rotation = np.asarray(rotation, dtype=np.float64)
    dim = rotation.shape[0]
    if translation is None:
        translation = np.zeros(dim)
    if not is_integer(rotation, atol=OPERATION_ATOL):
        raise ValueError(
            "Rotation must have integer entries to be encoded: {}".format(rotation)
        )
    res = []
    for i in range(dim):
        v = ""
        for j in range(dim):
            c = int(round(rotation[i, j]))
            if c == 0:
                continue
            if c < 0:
                v += "-"
            elif v:
                v += "+"
            if abs(c) != 1:
                v += str(abs(c))
            v += AXIS_SYMBOLS[j]
        t = rationalize(translation[i])
        if t != 0:
            if t < 0:
                v += "-"
            elif v:
                v += "+"
            v += str(abs(t))
        res.append(v if v else "0")
    return ",".join(res)


def decode_xyzt(s: str) -> Tuple[np.ndarray, np.ndarray]:
    """
    Decode a symmetry operation represented in the string
    form e.g. '-x,y+1/2,-z' or '1/2 - x, y, -z -0.25' into a
    rotation matrix and translation vector. The dimension is
    the number of comma separated entries.

    >>> encode_xyzt(*decode_xyzt("1/2-x, y, z"))
    '-x+1/2,y,z'
    >>> encode_xyzt(*decode_xyzt("3 -x,y+1/2,-z"))
    '-x,y+1/2,-z'

    Args:
        s (str): the encoded symmetry operation string, optionally
            prefixed by its number in a listing

    Returns:
        Tuple[np.ndarray, np.ndarray]: a (d, d) rotation matrix and a (d) translation vector

    Raises:
        ValueError: if the string is not a valid 1, 2 or 3 dimensional operation
    """
    s = _OPERATION_NUMBER_REGEX.sub("", s.lower())
    tokens = s.split(",")
    dim = len(tokens)
    if dim not in (1, 2, 3):
        raise ValueError("Operation '{}' must have 1, 2 or 3 components".format(s))
    symbols = AXIS_SYMBOLS[:dim]
    rotation = np.zeros((dim, dim), dtype=np.float64)
    translation = np.zeros((dim,), dtype=np.float64)
    for i, row in enumerate(tokens):
        terms = split_linear_terms(row, AXIS_SYMBOLS)
        if not terms:
            raise ValueError("Empty component {} in operation '{}'".format(i, s))
        for value, symbol in terms:
            if symbol is None:
                translation[i] += float(value)
            elif symbol not in symbols:
                raise ValueError(
                    "'{}' is not a valid axis in {} dimensions: '{}'".format(
                        symbol, dim, s
                    )
                )
            else:
                rotation[i, symbols.index(symbol)] += float(value)
    return rotation, translation


class SymmetryOperation:
    """
    Class to represent a crystallographic symmetry operation {W|w},
    composed of a rotation and a translation, in 1, 2 or 3 dimensions.
    Instances are immutable: the underlying arrays are read-only.

    Attributes:
        rotation (np.ndarray): (d, d) rotation matrix in fractional coordinates
        translation (np.ndarray): (d) translation vector in fractional coordinates,
            reduced into [0, 1)
    """

    rotation: np.ndarray
    translation: np.ndarray

    def __init__(self, rotation, translation=None):
        """
        Construct a new symmetry operation from a rotation matrix and
        a translation vector

        Arguments:
            rotation (array_like): (d, d) rotation matrix
            translation (array_like, optional): (d) translation vector, zero
                if not provided

        Returns:
            SymmetryOperation: a new SymmetryOperation

        Raises:
            ValueError: if the shapes are inconsistent or d is not 1, 2 or 3
        """
        rotation = np.array(rotation, dtype=np.float64, ndmin=2)
        dim = rotation.shape[0]
        if rotation.shape != (dim, dim) or dim not in (1, 2, 3):
            raise ValueError(
                "rotation must be a (d, d) matrix with d in 1, 2, 3, got shape {}".format(
                    rotation.shape
                )
            )
        if translation is None:
            translation = np.zeros(dim)
        translation = np.array(translation, dtype=np.float64, ndmin=1)
        if translation.shape != (dim,):
            raise ValueError(
                "translation must have shape ({},), got {}".format(
                    dim, translation.shape
                )
            )
        translation = reduce_translation(translation)
        rotation.setflags(write=False)
        translation.setflags(write=False)
        self.rotation = rotation
        self.translation = translation

    @property
    def dim(self) -> int:
        "The dimension of the space this operation acts on"
        return self.rotation.shape[0]

    @property
    def matrix(self) -> np.ndarray:
        "The (d, d + 1) matrix [W w] of this SymmetryOperation"
        return np.hstack((self.rotation, self.translation[:, np.newaxis]))

    @property
    def seitz_matrix(self) -> np.ndarray:
        "The homogeneous (Seitz) matrix form of this SymmetryOperation"
        d = self.dim
        s = np.eye(d + 1, dtype=np.float64)
        s[:d, :d] = self.rotation
        s[:d, d] = self.translation
        return s

    @property
    def xyzt(self) -> str:
        "Represent this SymmetryOperation in string form e.g. 'x,-y,z+1/2'"
        return str(self)

    @property
    def seitz_symbol(self) -> str:
        "The Seitz symbol of this SymmetryOperation e.g. '{2|0,1/2,0}'"
        return format_seitz(self)

    def rotation_axis(self) -> Optional[np.ndarray]:
        """
        The rotation axis (or mirror normal) of the point-group part of
        this operation, as the shortest integer direction in lattice
        coordinates with its first non-zero component positive.

        Returns:
            Optional[np.ndarray]: the (d) integer axis, or `None` for the identity,
                the inversion and 2D rotations which have no in-plane axis
        """
        if self.dim == 1:
            return None
        det = int(round(np.linalg.det(self.rotation)))
        basis = null_space(self.rotation - det * np.eye(self.dim), rcond=1e-8)
        if basis.shape[1] != 1:
            return None
        axis = basis[:, 0]
        axis = axis / np.abs(axis[np.abs(axis) > 1e-8]).min()
        axis = np.round(axis).astype(int)
        axis //= np.gcd.reduce(axis)
        if axis[np.nonzero(axis)[0][0]] < 0:
            axis = -axis
        return axis

    def compose(self, other: "SymmetryOperation") -> "SymmetryOperation":
        """
        Compose this symmetry operation with another, using
        {W1|w1}{W2|w2} = {W1 W2|w1 + W1 w2}. The translation of the
        result is reduced into [0, 1).

        Args:
            other (SymmetryOperation): the operation applied first

        Returns:
            SymmetryOperation: the composition self ∘ other

        Raises:
            ValueError: if the operations have different dimensions
        """
        if self.dim != other.dim:
            raise ValueError(
                "Cannot compose operations of dimension {} and {}".format(
                    self.dim, other.dim
                )
            )
        return SymmetryOperation(
            self.rotation @ other.rotation,
            self.translation + self.rotation @ other.translation,
        )

    def inverse(self) -> "SymmetryOperation":
        """
        The inverse {W^-1|-W^-1 w} of this symmetry operation

        Returns:
            SymmetryOperation: the inverse, with translation reduced into [0, 1)
        """
        inv = np.linalg.inv(self.rotation)
        if is_integer(inv, atol=OPERATION_ATOL):
            inv = np.round(inv)
        return SymmetryOperation(inv, -inv @ self.translation)

    def apply(self, coordinates: np.ndarray) -> np.ndarray:
        """
        Apply this symmetry operation to a set of fractional coordinates.

        Args:
            coordinates (np.ndarray): (N, d) or (N, d + 1) array of fractional coordinates
                or homogeneous fractional coordinates.

        Returns:
            np.ndarray: (N, d) array of transformed coordinates
        """
        coordinates = np.atleast_2d(coordinates)
        if coordinates.shape[1] == self.dim + 1:
            return np.dot(coordinates, self.seitz_matrix.T)
        return np.dot(coordinates, self.rotation.T) + self.translation

    def act_on_reciprocal(self, k: np.ndarray) -> np.ndarray:
        """
        Transform a vector (or the columns of a matrix) given in the
        reciprocal basis by this operation, i.e. k' = (W^T)^-1 k. The
        translation part only contributes a phase and is ignored.

        Args:
            k (np.ndarray): (d) vector or (d, m) matrix in reciprocal lattice coordinates

        Returns:
            np.ndarray: the transformed vector or matrix
        """
        return np.linalg.solve(self.rotation.T, np.asarray(k, dtype=np.float64))

    def is_identity(self, atol: float = OPERATION_ATOL) -> bool:
        "Returns true if this is the identity symmetry operation e.g. 'x,y,z'"
        return self.is_symmorphic(atol=atol) and np.allclose(
            self.rotation, np.eye(self.dim), rtol=0, atol=atol
        )

    def is_symmorphic(self, atol: float = OPERATION_ATOL) -> bool:
        "Returns true if this operation has no (fractional) translation"
        return isclose_mod1(self.translation, 0.0, atol=atol)

    def isapprox(self, other: "SymmetryOperation", atol: float = OPERATION_ATOL) -> bool:
        """
        Check if this operation equals another within a tolerance, with
        translations compared modulo 1.

        Args:
            other (SymmetryOperation): the operation to compare against
            atol (float, optional): absolute tolerance

        Returns:
            bool: whether the two operations are the same
        """
        return (
            self.dim == other.dim
            and np.allclose(self.rotation, other.rotation, rtol=0, atol=atol)
            and isclose_mod1(self.translation, other.translation, atol=atol)
        )

    def __mul__(self, other):
        return self.compose(other)

    def __call__(self, coordinates):
        return self.apply(coordinates)

    def __str__(self):
        if not hasattr(self, "_string_code"):
            setattr(self, "_string_code", encode_xyzt(self.rotation, self.translation))
        return getattr(self, "_string_code")

    def __repr__(self):
        return "<{}: {}>".format(self.__class__.__name__, self)

    def __eq__(self, other):
        if not isinstance(other, SymmetryOperation):
            return NotImplemented
        return self.isapprox(other)

    def __hash__(self):
        # equality is approximate in the translation, so only the (integer)
        # rotation is hashed; operations with equal rotations share a bucket
        return hash(tuple(np.round(self.rotation).astype(int).ravel()))

    @classmethod
    def from_xyzt(cls, code: str):
        """
        Alternative constructor from a string encoded
        symmetry operation e.g. 'x,-y,z+1/2'.

        See also the `encode_xyzt`, `decode_xyzt` methods.

        Args:
            code (str): string-encoded symmetry operation

        Returns:
            SymmetryOperation: a new symmetry operation from the provided string code
        """
        rot, trans = decode_xyzt(code)
        return cls(rot, trans)

    @classmethod
    def identity(cls, dim: int = 3):
        "Alternative constructor for the the identity symop i.e. x,y,z"
        return cls(np.eye(dim))


def compose(op1: SymmetryOperation, op2: SymmetryOperation) -> SymmetryOperation:
    "The composition op1 ∘ op2, see `SymmetryOperation.compose`"
    return op1.compose(op2)


def parse_operation(text: str) -> SymmetryOperation:
    "Parse an operation such as 'x,-y,z+1/2', see `decode_xyzt`"
    return SymmetryOperation.from_xyzt(text)


def format_xyzt(op: SymmetryOperation) -> str:
    "Format an operation as e.g. 'x,-y,z+1/2', see `encode_xyzt`"
    return encode_xyzt(op.rotation, op.translation)


def format_seitz(op: SymmetryOperation, unicode: bool = False, axis: bool = False) -> str:
    """
    Classify a symmetry operation by its Seitz symbol, using the
    determinant and trace of its rotation part following
    ITA Vol. A, Table 11.2.1.1 (with the analogous tables in 2D and 1D).
    Operations with a translation are wrapped as {symbol|t1,t2,t3}.

    >>> format_seitz(SymmetryOperation(np.eye(3), (0.5, 0, 0)))
    '{1|1/2,0,0}'
    >>> format_seitz(parse_operation("-y,x,-z"), axis=True)
    '-4_001'

    Args:
        op (SymmetryOperation): the operation to classify
        unicode (bool, optional): use overlines for rotoinversions and
            subscripts for the axis instead of '-' and '_'
        axis (bool, optional): append the rotation axis (or mirror normal)
            in lattice coordinates

    Returns:
        str: the Seitz symbol

    Raises:
        ValueError: if det W or tr W is not an integer, or the pair does not
            correspond to a crystallographic operation
    """
    W = op.rotation
    det_w, tr_w = np.linalg.det(W), np.trace(W)
    if not is_integer(det_w, atol=OPERATION_ATOL):
        raise ValueError(
            "det W must be an integer for a SymmetryOperation {{W|w}}, got {}".format(
                det_w
            )
        )
    if not is_integer(tr_w, atol=OPERATION_ATOL):
        raise ValueError(
            "tr W must be an integer for a SymmetryOperation {{W|w}}, got {}".format(
                tr_w
            )
        )
    det_w, tr_w = int(round(det_w)), int(round(tr_w))
    symbol = SEITZ_SYMBOLS[op.dim].get((det_w, tr_w))
    if symbol is None:
        raise ValueError(
            "trW = {} for detW = {} is not a valid symmetry operation in {}D; "
            "see ITA Vol A, Table 11.2.1.1".format(tr_w, det_w, op.dim)
        )
    if unicode and symbol.startswith("-"):
        symbol = overline(symbol[1:])
    if axis:
        direction = op.rotation_axis()
        if direction is not None and unicode:
            symbol += "".join(
                overline(subscript(str(-x))) if x < 0 else subscript(str(x))
                for x in direction
            )
        elif direction is not None:
            symbol += "_" + "".join(str(x) for x in direction)
    if op.is_symmorphic():
        return symbol
    return "{" + symbol + "|" + ",".join(format_fraction(t) for t in op.translation) + "}"


def is_symmorphic(op: SymmetryOperation) -> bool:
    "True if `op` has zero translation, see `SymmetryOperation.is_symmorphic`"
    return op.is_symmorphic()
