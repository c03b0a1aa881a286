from .crystal import (
    Irrep,
    KVec,
    LittleGroup,
    MultiplicationTable,
    SpaceGroup,
    SymmetryOperation,
    build_multiplication_table,
    check_representation,
    compose,
    format_seitz,
    little_group,
    parse_operation,
    star_of_k,
)

__all__ = [
    "Irrep",
    "KVec",
    "LittleGroup",
    "MultiplicationTable",
    "SpaceGroup",
    "SymmetryOperation",
    "build_multiplication_table",
    "check_representation",
    "compose",
    "format_seitz",
    "little_group",
    "parse_operation",
    "star_of_k",
]
