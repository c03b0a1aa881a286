import logging
import sys

from crystalgroups.crystal import KVec, SpaceGroup, format_seitz, star_of_k
from crystalgroups.crystal.centering import primitivize
from crystalgroups.crystal.little_group import little_group
from crystalgroups.crystal.multiplication_table import build_multiplication_table
from crystalgroups.crystal.symmetry_operation import SymmetryOperation

LOG = logging.getLogger("crystalgroups-check")


def main(argv=None):
    import argparse

    parser = argparse.ArgumentParser(
        description="Check that symmetry operations form a group, and find the "
        "little group and star of a wavevector. Separate operations starting "
        "with '-' from the options with '--', e.g. "
        "crystalgroups-check --k 1/2,0,0 -- x,y,z -x,-y,-z",
    )
    parser.add_argument("operations", nargs="+", help="operations e.g. 'x,-y,z+1/2'")
    parser.add_argument("--number", type=int, default=None, help="space group number")
    parser.add_argument("--k", default=None, help="wavevector e.g. '1/2,0,u'")
    parser.add_argument("--centering", default=None)
    parser.add_argument("--log-level", default="INFO")
    args = parser.parse_args(argv)
    logging.basicConfig(level=args.log_level)

    try:
        ops = [SymmetryOperation.from_xyzt(s) for s in args.operations]
    except ValueError as e:
        LOG.error("Could not parse operations: %s", e)
        return 1
    dim = ops[0].dim
    centering = args.centering
    if args.number is not None:
        try:
            sg = SpaceGroup(args.number, ops, dim=dim)
            ops = sg.ordered_symmetry_operations()
        except ValueError as e:
            LOG.error("Invalid space group: %s", e)
            return 1
        if centering is None:
            centering = sg.centering
    if centering is None:
        centering = "P" if dim == 3 else "p"
    LOG.debug("Loaded %d operations in %dD, centering %s", len(ops), dim, centering)

    table = build_multiplication_table([primitivize(op, centering) for op in ops])
    for i, op in enumerate(ops):
        print("{:>3d} {:<24s} {}".format(i, str(op), format_seitz(op)))
    print("is group: {}".format(table.is_group))
    for row in table.indices:
        print(" ".join("{:>3d}".format(x) for x in row))
    if not table.is_group:
        return 1

    if args.k is not None:
        try:
            kvec = KVec.from_string(args.k)
            indices, lg_ops = little_group(ops, kvec, centering=centering)
        except ValueError as e:
            LOG.error("Invalid wavevector '%s': %s", args.k, e)
            return 1
        print("little group of {}: {}".format(kvec, indices))
        print("  " + " ".join(format_seitz(op) for op in lg_ops))
        star = star_of_k(ops, kvec, centering=centering)
        print("star of {} ({} arms):".format(kvec, len(star)))
        for k in star:
            print("  {}".format(k))
    return 0


if __name__ == "__main__":
    sys.exit(main())
