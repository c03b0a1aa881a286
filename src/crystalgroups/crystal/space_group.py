import logging
from typing import List, Sequence, Union

from crystalgroups.util.num import KVEC_ATOL, OPERATION_ATOL
from .centering import (
    centering as centering_of,
    check_dimension,
    check_space_group_number,
    primitivize,
)
from .kvec import KVec
from .little_group import LittleGroup, star_of_k
from .multiplication_table import MultiplicationTable, build_multiplication_table
from .symmetry_operation import SymmetryOperation

LOG = logging.getLogger(__name__)


class SpaceGroup:
    """
    Represent a crystallographic line, plane or space group as its number
    and an ordered list of symmetry operations in the conventional basis.
    The order of the operations is fixed and is used as the indexing
    scheme of multiplication tables and little groups.

    Attributes:
        number (int): the group number, 1-2 in 1D, 1-17 in 2D and 1-230 in 3D
        dim (int): the dimension
        symmetry_operations (List[SymmetryOperation]): the operations of this group
    """

    def __init__(
        self,
        number: int,
        operations: Sequence[Union[SymmetryOperation, str]],
        dim: int = 3,
    ):
        """
        Args:
            number (int): the group number
            operations (Sequence[Union[SymmetryOperation, str]]): the operations,
                as SymmetryOperation instances or strings like 'x,-y,z+1/2'
            dim (int, optional): the dimension

        Raises:
            ValueError: if the dimension or number are out of range, or an
                operation does not have dimension `dim`
        """
        check_dimension(dim)
        check_space_group_number(number, dim)
        symops = [
            x if isinstance(x, SymmetryOperation) else SymmetryOperation.from_xyzt(x)
            for x in operations
        ]
        for s in symops:
            if s.dim != dim:
                raise ValueError(
                    "Operation {} has dimension {}, expected {}".format(s, s.dim, dim)
                )
        self.number = number
        self.dim = dim
        self._symmetry_operations = tuple(symops)

    @property
    def symmetry_operations(self) -> List[SymmetryOperation]:
        "The ordered symmetry operations of this group"
        return list(self._symmetry_operations)

    @property
    def symops(self):
        "alias for `self.symmetry_operations`"
        return self.symmetry_operations

    @property
    def centering(self) -> str:
        "The centering symbol of this group in its conventional setting e.g. 'P', 'I', 'c'"
        return centering_of(self.number, self.dim)

    def __len__(self):
        return len(self._symmetry_operations)

    def __iter__(self):
        return iter(self._symmetry_operations)

    def __getitem__(self, key):
        return self._symmetry_operations[key]

    def __repr__(self):
        return "<{} {} ({}D): {} operations>".format(
            self.__class__.__name__, self.number, self.dim, len(self)
        )

    def is_symmorphic(self) -> bool:
        "True if none of the operations of this group have a translation"
        return all(s.is_symmorphic() for s in self._symmetry_operations)

    def ordered_symmetry_operations(self) -> List[SymmetryOperation]:
        "The symmetry operations of this group in order (with identity first)"
        for unity, s in enumerate(self._symmetry_operations):
            if s.is_identity():
                break
        else:
            raise ValueError(
                "Could not find identity symmetry operation -- invalid space group"
            )
        other_symops = (
            self._symmetry_operations[:unity] + self._symmetry_operations[unity + 1 :]
        )
        return [self._symmetry_operations[unity]] + list(other_symops)

    def primitive_symmetry_operations(self) -> List[SymmetryOperation]:
        "The symmetry operations of this group transformed to the primitive basis"
        return [primitivize(s, self.centering) for s in self._symmetry_operations]

    def multiplication_table(self, atol: float = OPERATION_ATOL) -> MultiplicationTable:
        """
        The multiplication table of this group, computed in the primitive basis
        so that centered groups listed without their centering translations
        are closed.

        Args:
            atol (float, optional): tolerance for matching products

        Returns:
            MultiplicationTable: the table of this group, in the order of
                `symmetry_operations`
        """
        return build_multiplication_table(
            self.primitive_symmetry_operations(), atol=atol
        )

    def _check_identity_first(self):
        # the little group and star are built relative to the first operation
        if not self._symmetry_operations or not self._symmetry_operations[0].is_identity():
            raise ValueError(
                "The first symmetry operation of space group {} is not the identity, "
                "use ordered_symmetry_operations()".format(self.number)
            )

    def little_group(self, kvec: Union[KVec, str], label: str = "") -> LittleGroup:
        """
        The little group of a wavevector in this group.

        Args:
            kvec (Union[KVec, str]): the wavevector, or a string like '1/2,0,u'
            label (str, optional): a label for the wavevector e.g. 'X'

        Returns:
            LittleGroup: the little group of `kvec`
        """
        self._check_identity_first()
        if isinstance(kvec, str):
            kvec = KVec.from_string(kvec)
        return LittleGroup.from_operations(
            self.number, self._symmetry_operations, kvec, label, self.centering
        )

    def star(self, kvec: Union[KVec, str], atol: float = KVEC_ATOL) -> List[KVec]:
        """
        The star of a wavevector in this group.

        Args:
            kvec (Union[KVec, str]): the wavevector, or a string like '1/2,0,u'
            atol (float, optional): tolerance for the reciprocal lattice test

        Returns:
            List[KVec]: the distinct images of `kvec`, starting with `kvec`
        """
        self._check_identity_first()
        if isinstance(kvec, str):
            kvec = KVec.from_string(kvec)
        return star_of_k(self._symmetry_operations, kvec, centering=self.centering, atol=atol)

    @classmethod
    def from_xyzt(cls, number: int, operations: Sequence[str], dim: int = 3):
        """
        Alternative constructor from string encoded operations
        e.g. ('x,y,z', '-x,y+1/2,-z')
        """
        return cls(number, [SymmetryOperation.from_xyzt(s) for s in operations], dim=dim)
