"""Command line computation of the order parameters of a cluster geometry"""
#
#    Copyright 2011 Mathieu Leocmach
#
#    This file is part of steinhardt.
#
#    steinhardt is free software: you can redistribute it and/or modify
#    it under the terms of the GNU General Public License as published by
#    the Free Software Foundation, either version 3 of the License, or
#    (at your option) any later version.
#
#    steinhardt is distributed in the hope that it will be useful,
#    but WITHOUT ANY WARRANTY; without even the implied warranty of
#    MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
#    GNU General Public License for more details.
#
#    You should have received a copy of the GNU General Public License
#    along with steinhardt.  If not, see <http://www.gnu.org/licenses/>.
#
import argparse
import logging
import sys

import numpy as np

from .steinhardt import DomainError, order_parameters

logger = logging.getLogger(__name__)


def load_geometry(path, natoms=None):
    """
Read positions from a text file whose first three columns are x, y and z,
as in the Cambridge Cluster Database.

Parameters
----------
path : str
natoms : int or None
    Number of rows to read. All rows if None.

Returns
----------
(N, 3) array of floats
"""
    pos = np.loadtxt(path, usecols=(0, 1, 2), ndmin=2, max_rows=natoms)
    if natoms is not None and len(pos) < natoms:
        raise ValueError("%s contains only %d positions, %d expected" % (
            path, len(pos), natoms))
    return pos


def positive_int(value):
    """argparse type for a strictly positive integer"""
    n = int(value)
    if n < 1:
        raise argparse.ArgumentTypeError("%r is not a positive integer" % value)
    return n


def format_results(natoms, results, counts=False):
    """Tab separated: number of atoms, [bond counts,] all Ql then all Wl"""
    fields = ["%d" % natoms]
    if counts:
        fields += ["%d" % r.count for r in results]
    fields += ["%.4f" % r.Ql for r in results]
    fields += ["%.4f" % r.Wl for r in results]
    return "\t".join(fields)


def build_parser():
    parser = argparse.ArgumentParser(
        prog="steinhardt",
        description="Global Ql and Wl bond orientational order parameters of a cluster.")
    parser.add_argument("geometry", help="text file with x y z in the first three columns")
    parser.add_argument("rc", type=float, help="cutoff radius, only shorter bonds are considered")
    parser.add_argument("ls", type=int, nargs="+", metavar="L", help="orders of symmetry")
    parser.add_argument("-n", "--natoms", type=positive_int, default=None,
                        help="number of atoms to read (default: all rows)")
    parser.add_argument("-c", "--counts", action="store_true",
                        help="also output the number of bonds for each L")
    guard = parser.add_mutually_exclusive_group()
    guard.add_argument("--tolerance", type=float, default=1e-3,
                       help="report 0 when qsum is not above this value (default: %(default)g)")
    guard.add_argument("--no-guard", action="store_true",
                       help="fail instead of reporting 0 for clusters without bonds")
    parser.add_argument("-v", "--verbose", action="count", default=0)
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=[logging.WARNING, logging.INFO, logging.DEBUG][min(args.verbose, 2)],
        format="%(levelname)s:%(name)s:%(message)s")
    try:
        pos = load_geometry(args.geometry, args.natoms)
    except (OSError, ValueError) as err:
        logger.error("could not read geometry: %s", err)
        return 1
    logger.info("%d positions read from %s", len(pos), args.geometry)
    tolerance = None if args.no_guard else args.tolerance
    try:
        results = order_parameters(pos, args.rc, args.ls, tolerance=tolerance)
    except DomainError as err:
        logger.error("%s", err)
        return 1
    except ZeroDivisionError:
        logger.error("vanishing qsum (no bond shorter than %g?), order parameters are undefined", args.rc)
        return 1
    print(format_results(len(pos), results, counts=args.counts))
    return 0


if __name__ == "__main__":
    sys.exit(main())
