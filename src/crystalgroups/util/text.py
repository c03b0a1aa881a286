import re
from fractions import Fraction
from typing import List, Optional, Tuple

from .num import rationalize

SUBSCRIPT_MAP = {
    "0": "₀",
    "1": "₁",
    "2": "₂",
    "3": "₃",
    "4": "₄",
    "5": "₅",
    "6": "₆",
    "7": "₇",
    "8": "₈",
    "9": "₉",
    "+": "₊",
    "-": "₋",
}

SUPERSCRIPT_MAP = {
    "0": "⁰",
    "1": "¹",
    "2": "²",
    "3": "³",
    "4": "⁴",
    "5": "⁵",
    "6": "⁶",
    "7": "⁷",
    "8": "⁸",
    "9": "⁹",
    "+": "⁺",
    "-": "⁻",
}

_NUMBER = r"\d+(?:\.\d*)?(?:/\d+)?|\.\d+"


def subscript(x: str) -> str:
    """
    Convert the provided string to its subscript
    equivalent in unicode, character by character.

    >>> subscript("001")
    '₀₀₁'

    Args:
        x (str): the string to be converted

    Returns:
        str: the converted string
    """
    return "".join(SUBSCRIPT_MAP.get(c, c) for c in x)


def superscript(x: str) -> str:
    "Convert the provided string to its superscript equivalent in unicode"
    return "".join(SUPERSCRIPT_MAP.get(c, c) for c in x)


def overline(x: str) -> str:
    """
    Add a unicode combining overline to the provided
    string, e.g. for rotoinversions.

    Args:
        x (str): the string to be overlined

    Returns:
        str: the overlined string
    """
    return "".join(c + "̅" for c in x)


def format_fraction(x) -> str:
    """
    Format a (floating point) number as its rationalized fraction,
    e.g. '1/2', '-1/3' or '0'.
    """
    return str(rationalize(x))


def split_linear_terms(expr: str, symbols: str) -> List[Tuple[Fraction, Optional[str]]]:
    """
    Split a linear expression like '-x+1/2', '1/2-x', 'x-y' or '2u'
    into its terms.

    >>> split_linear_terms("1/2-x", "xyz")
    [(Fraction(1, 2), None), (Fraction(-1, 1), 'x')]

    Args:
        expr (str): the expression, whitespace is ignored
        symbols (str): the characters accepted as variables

    Returns:
        List[Tuple[Fraction, Optional[str]]]: list of (coefficient, symbol)
            pairs, where symbol is `None` for constant terms

    Raises:
        ValueError: if the expression contains anything other than signed
            numbers and the allowed symbols
    """
    expr = re.sub(r"\s+", "", expr)
    pattern = re.compile(
        r"([+-]?)(" + _NUMBER + r")?\*?([" + re.escape(symbols) + r"])?"
    )
    terms = []
    pos = 0
    while pos < len(expr):
        m = pattern.match(expr, pos)
        if m.end() == pos or not (m.group(2) or m.group(3)):
            raise ValueError(
                "Could not parse '{}' at position {}: expected a number or one of "
                "'{}'".format(expr, pos, symbols)
            )
        sign, number, symbol = m.groups()
        value = Fraction(number) if number else Fraction(1)
        if sign == "-":
            value = -value
        terms.append((value, symbol))
        pos = m.end()
    return terms
