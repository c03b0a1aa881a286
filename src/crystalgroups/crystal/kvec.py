import logging

import numpy as np

from crystalgroups.util.num import KVEC_ATOL
from crystalgroups.util.text import format_fraction, split_linear_terms
from .centering import is_reciprocal_lattice_vector
from .symmetry_operation import SymmetryOperation

LOG = logging.getLogger(__name__)

#: symbols for the free parameters (alpha, beta, gamma) of a wavevector
FREE_PARAMETER_SYMBOLS = "uvw"
_FREE_PARAMETER_ALIASES = {
    "u": 0,
    "v": 1,
    "w": 2,
    "α": 0,
    "β": 1,
    "γ": 2,
    "x": 0,
    "y": 1,
    "z": 2,
}


class KVec:
    """
    A wavevector k = k0 + kabc·(α, β, γ) in reciprocal lattice coordinates:
    a fixed part `k0` plus a linear dependence on up to `dim` free parameters,
    describing lines and planes of wavevectors as well as fixed points.

    Attributes:
        k0 (np.ndarray): (d) fixed part
        kabc (np.ndarray): (d, d) free part, column j holds the coefficients of
            free parameter j
    """

    k0: np.ndarray
    kabc: np.ndarray

    def __init__(self, k0, kabc=None):
        """
        Construct a new wavevector.

        Arguments:
            k0 (array_like): (d) fixed part of the wavevector
            kabc (array_like, optional): (d, d) free part, or a (d) direction which
                is taken as the coefficients of the first free parameter α

        Returns:
            KVec: a new KVec
        """
        k0 = np.array(k0, dtype=np.float64, ndmin=1)
        dim = k0.shape[0]
        if k0.shape != (dim,) or dim not in (1, 2, 3):
            raise ValueError("k0 must be a vector of length 1, 2 or 3")
        if kabc is None:
            kabc = np.zeros((dim, dim))
        else:
            kabc = np.array(kabc, dtype=np.float64)
            if kabc.ndim <= 1:
                direction = np.atleast_1d(kabc)
                kabc = np.zeros((dim, dim))
                kabc[:, 0] = direction
            if kabc.shape != (dim, dim):
                raise ValueError(
                    "kabc must have shape ({0},) or ({0}, {0}), got {1}".format(
                        dim, kabc.shape
                    )
                )
        k0.setflags(write=False)
        kabc.setflags(write=False)
        self.k0 = k0
        self.kabc = kabc

    @property
    def dim(self) -> int:
        "The dimension of this wavevector"
        return self.k0.shape[0]

    def is_parametrized(self, atol: float = KVEC_ATOL) -> bool:
        "True if this wavevector depends on free parameters"
        return not np.allclose(self.kabc, 0.0, rtol=0, atol=atol)

    def free_parameters(self, abc=None) -> np.ndarray:
        """
        Normalize a free parameter vector for this wavevector: `None` becomes
        zeros, a scalar is broadcast to all `dim` parameters.

        Raises:
            ValueError: if abc has the wrong length
        """
        if abc is None:
            return np.zeros(self.dim)
        abc = np.atleast_1d(np.asarray(abc, dtype=np.float64))
        if abc.size == 1:
            return np.full(self.dim, abc[0])
        if abc.shape != (self.dim,):
            raise ValueError(
                "Expected {} free parameters, got {}".format(self.dim, abc.shape)
            )
        return abc

    def __call__(self, abc=None) -> np.ndarray:
        """
        Evaluate this wavevector at the free parameters `abc`; with no
        parameters the fixed part `k0` is returned.

        Args:
            abc (array_like, optional): (d) values of α, β, γ or a scalar

        Returns:
            np.ndarray: (d) wavevector
        """
        if abc is None:
            return self.k0.copy()
        return self.k0 + self.kabc @ self.free_parameters(abc)

    def transformed(self, op: SymmetryOperation) -> "KVec":
        """
        The image of this wavevector under the point-group part of a
        symmetry operation, k' = (W^T)^-1 k.

        Args:
            op (SymmetryOperation): the operation acting on this wavevector

        Returns:
            KVec: the transformed wavevector
        """
        if op.dim != self.dim:
            raise ValueError(
                "Operation of dimension {} cannot act on a {}D wavevector".format(
                    op.dim, self.dim
                )
            )
        return KVec(op.act_on_reciprocal(self.k0), op.act_on_reciprocal(self.kabc))

    def equivalent(
        self, other: "KVec", centering: str = "P", atol: float = KVEC_ATOL
    ) -> bool:
        """
        Check if two wavevectors are equivalent, i.e. their fixed parts
        differ by a primitive reciprocal lattice vector of a lattice with the
        given centering, and their free parts are equal. Free parts lie in the
        interior of the Brillouin zone and are not compared modulo a
        reciprocal lattice vector.

        Args:
            other (KVec): the wavevector to compare against
            centering (str, optional): centering symbol of the lattice
            atol (float, optional): absolute tolerance

        Returns:
            bool: whether the wavevectors are equivalent
        """
        if self.dim != other.dim:
            return False
        return is_reciprocal_lattice_vector(
            self.k0 - other.k0, centering, atol=atol
        ) and np.allclose(self.kabc, other.kabc, rtol=0, atol=atol)

    def __eq__(self, other):
        if not isinstance(other, KVec):
            return NotImplemented
        return self.equivalent(other)

    # equality is approximate and modulo the reciprocal lattice
    __hash__ = None

    def __str__(self):
        components = []
        for i in range(self.dim):
            terms = ""
            for j, c in enumerate(self.kabc[i]):
                if abs(c) < KVEC_ATOL:
                    continue
                if c < 0:
                    terms += "-"
                elif terms:
                    terms += "+"
                if abs(abs(c) - 1) > KVEC_ATOL:
                    terms += format_fraction(abs(c))
                terms += FREE_PARAMETER_SYMBOLS[j]
            value = self.k0[i]
            if abs(value) >= KVEC_ATOL or not terms:
                fraction = format_fraction(value)
                if terms and not fraction.startswith("-"):
                    fraction = "+" + fraction
                terms += fraction
            components.append(terms)
        return "[" + ", ".join(components) + "]"

    def __repr__(self):
        return "<{}: {}>".format(self.__class__.__name__, self)

    @classmethod
    def from_string(cls, s: str) -> "KVec":
        """
        Alternative constructor from a string such as '[u, 0, 1/2]',
        '0.5', 'u,u,w' or '1/2-u,0,0'. The free parameters are written
        u, v, w (or α, β, γ, or x, y, z) for the first, second and third
        parameter.

        Args:
            s (str): the wavevector string, optionally wrapped in brackets

        Returns:
            KVec: a new KVec

        Raises:
            ValueError: if the string cannot be parsed
        """
        s = s.strip().strip("[]()").lower()
        tokens = s.split(",")
        dim = len(tokens)
        if dim not in (1, 2, 3):
            raise ValueError("KVec '{}' must have 1, 2 or 3 components".format(s))
        k0 = np.zeros(dim)
        kabc = np.zeros((dim, dim))
        symbols = "".join(_FREE_PARAMETER_ALIASES)
        for i, token in enumerate(tokens):
            terms = split_linear_terms(token, symbols)
            if not terms:
                raise ValueError("Empty component {} in KVec '{}'".format(i, s))
            for value, symbol in terms:
                if symbol is None:
                    k0[i] += float(value)
                    continue
                j = _FREE_PARAMETER_ALIASES[symbol]
                if j >= dim:
                    raise ValueError(
                        "Free parameter '{}' is not valid in {} dimensions".format(
                            symbol, dim
                        )
                    )
                kabc[i, j] += float(value)
        return cls(k0, kabc)


def as_kvec(k0, kabc=None) -> KVec:
    """
    Helper accepting either a `KVec` or the (k0, kabc) parts of one.

    Raises:
        ValueError: if both a KVec and a separate kabc are provided
    """
    if isinstance(k0, KVec):
        if kabc is not None:
            raise ValueError("kabc must not be given together with a KVec")
        return k0
    return KVec(k0, kabc)
