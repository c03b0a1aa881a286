"""
Shared numerical tolerances and helpers for comparing lattice points,
translations and symmetry operations.

The same tolerances are used by every component that asks "are these
the same operation" or "are these the same lattice point", so the
multiplication table, little group and star of k agree with each other.
"""
from fractions import Fraction
from numbers import Number

import numpy as np

#: matching a composed operation against a list of operations
OPERATION_ATOL = 1e-10
#: wavevectors differing by a primitive reciprocal lattice vector
KVEC_ATOL = 1e-11
#: complex matrix equality of representation matrices
MATRIX_ATOL = 1e-8
#: recovering fractions from floating point translations
RATIONALIZE_TOL = 1e-2
#: largest denominator considered when recovering fractions
MAX_DENOMINATOR = 64


def is_integer(x, atol: float = KVEC_ATOL) -> bool:
    """
    Check if all values in `x` are integers within a tolerance.

    Args:
        x (array_like): value(s) to check
        atol (float, optional): absolute tolerance

    Returns:
        bool: `True` if every element of x is within `atol` of an integer
    """
    x = np.asarray(x, dtype=np.float64)
    return bool(np.all(np.abs(x - np.round(x)) <= atol))


def reduce_translation(translation, atol: float = OPERATION_ATOL) -> np.ndarray:
    """
    Reduce a translation vector component-wise into [0, 1). Components
    within `atol` of an integer are snapped to exactly zero, so that
    e.g. 1/3 + 2/3 reduces to 0 rather than 0.9999999999999999.

    Args:
        translation (array_like): (d,) translation vector
        atol (float, optional): absolute tolerance for the snap to zero

    Returns:
        np.ndarray: (d,) reduced translation vector
    """
    t = np.mod(np.asarray(translation, dtype=np.float64), 1.0)
    t[np.abs(t - np.round(t)) <= atol] = 0.0
    return t


def isclose_mod1(a, b, atol: float = OPERATION_ATOL) -> bool:
    "True if `a` and `b` agree component-wise modulo 1 within `atol`"
    diff = np.asarray(a, dtype=np.float64) - np.asarray(b, dtype=np.float64)
    return is_integer(diff, atol=atol)


def rationalize(
    x: Number, tol: float = RATIONALIZE_TOL, max_denominator: int = MAX_DENOMINATOR
) -> Fraction:
    """
    Recover a fraction from a floating point value, e.g. the fractional
    translation of a symmetry operation. A value that is exactly (within
    `OPERATION_ATOL`) a fraction with denominator up to `max_denominator`
    gives that fraction; otherwise the simplest fraction, i.e. the one with
    the smallest denominator, within `tol` of x is returned.

    >>> rationalize(0.3333333)
    Fraction(1, 3)
    >>> rationalize(-0.25)
    Fraction(-1, 4)
    >>> rationalize(0.17)
    Fraction(1, 6)

    Args:
        x (Number): the value to rationalize
        tol (float, optional): accepted distance between x and its
            rational approximation
        max_denominator (int, optional): largest denominator to consider

    Returns:
        Fraction: the rational approximation of x

    Raises:
        ValueError: if no fraction with a denominator up to `max_denominator`
            lies within `tol` of x
    """
    x = float(x)
    closest = Fraction(x).limit_denominator(max_denominator)
    if abs(float(closest) - x) <= OPERATION_ATOL:
        return closest
    for q in range(1, max_denominator + 1):
        p = round(x * q)
        if abs(p / q - x) <= tol:
            return Fraction(p, q)
    raise ValueError(
        "Could not rationalize {} within {} (closest: {})".format(x, tol, closest)
    )
