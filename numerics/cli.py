"""Command-line access to the Cholesky tools.

Matrices are read from whitespace- (or --delimiter-) separated text files, one
row per line, e.g.:

    chol-tool factor data/spd_4x4.txt
    chol-tool check data/indefinite_2x2.txt
    chol-tool solve data/spd_4x4.txt --rhs data/rhs_4.txt
"""
import argparse
import logging
import sys

import numpy as np

from numerics.cholesky import CholeskyDecompositor, NotApplicableError, \
    POSITIVE_DEFINITE_MATRIX
from numerics.factory import FACTORIES, get_factory
from numerics.predicates import SQUARE_MATRIX, SYMMETRIC_MATRIX
from numerics.solve import cholesky_solve

EXIT_OK = 0
EXIT_NOT_APPLICABLE = 1
EXIT_BAD_INPUT = 2

logger = logging.getLogger(__name__)


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description=globals()['__doc__'],
                                     formatter_class=argparse.RawDescriptionHelpFormatter)
    parser.add_argument('command', choices=['factor', 'check', 'solve'],
                        help="What to do with the matrix.")
    parser.add_argument('matrix_fpath', type=str,
                        help="Text file holding a square matrix.")
    parser.add_argument('--rhs', type=str, default=None,
                        help="Text file holding the right-hand side b (solve "
                             "only).")
    parser.add_argument('--factory', '-f', type=str, default='2d',
                        choices=sorted(FACTORIES),
                        help="Matrix representation to compute with.")
    parser.add_argument('--delimiter', '-d', type=str, default=None,
                        help="Column delimiter. Defaults to any whitespace.")
    parser.add_argument('--precision', '-p', type=int, default=8,
                        help="Digits to print after the decimal point.")
    parser.add_argument('--log-level', type=str, default='WARNING',
                        help="Python logging level, e.g., INFO or DEBUG.")

    return parser.parse_args(argv)


def load_matrix(fpath, factory, delimiter=None):
    array = np.loadtxt(fpath, delimiter=delimiter, ndmin=2)
    return factory.create_matrix_from_array(array)


def load_vector(fpath, factory, delimiter=None):
    array = np.loadtxt(fpath, delimiter=delimiter, ndmin=1)
    if array.ndim != 1:
        raise ValueError("Expected a single column or row of values in [{}], "
                         "got shape {}.".format(fpath, array.shape))
    return factory.create_vector_from_array(array)


def format_array(array, precision):
    return np.array2string(np.asarray(array), precision=precision,
                           suppress_small=True, max_line_width=120)


def factor(matrix, factory, precision):
    decompositor = CholeskyDecompositor(matrix)
    if not decompositor.applicable_to(matrix):
        print("Matrix is not symmetric positive-definite; cannot factor it.")
        return EXIT_NOT_APPLICABLE

    l, = decompositor.decompose(factory)
    print(format_array(l.to_array(), precision))
    return EXIT_OK


def check(matrix):
    verdicts = [
        ('square', SQUARE_MATRIX),
        ('symmetric', SYMMETRIC_MATRIX),
        ('positive-definite', POSITIVE_DEFINITE_MATRIX),
    ]
    applicable = True
    for name, predicate in verdicts:
        result = matrix.satisfies(predicate)
        applicable = applicable and result
        print("{:<18} {}".format(name + ":", "yes" if result else "no"))

    print("{:<18} {}".format("applicable:", "yes" if applicable else "no"))
    return EXIT_OK if applicable else EXIT_NOT_APPLICABLE


def solve(matrix, rhs, factory, precision):
    try:
        x = cholesky_solve(matrix, rhs, factory)
    except NotApplicableError as err:
        print(err)
        return EXIT_NOT_APPLICABLE

    print(format_array(x.to_array(), precision))
    return EXIT_OK


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level.upper(),
                                      logging.WARNING))
    factory = get_factory(args.factory)

    try:
        matrix = load_matrix(args.matrix_fpath, factory, args.delimiter)
        logger.info("Loaded a %dx%d matrix from [%s].", matrix.rows(),
                    matrix.columns(), args.matrix_fpath)
        if args.command == 'solve':
            if args.rhs is None:
                print("The solve command needs --rhs.", file=sys.stderr)
                return EXIT_BAD_INPUT
            rhs = load_vector(args.rhs, factory, args.delimiter)
    except (OSError, ValueError) as err:
        print("Could not read input: {}".format(err), file=sys.stderr)
        return EXIT_BAD_INPUT

    if args.command == 'factor':
        return factor(matrix, factory, args.precision)
    elif args.command == 'check':
        return check(matrix)
    else:
        try:
            return solve(matrix, rhs, factory, args.precision)
        except ValueError as err:
            print("Invalid system: {}".format(err), file=sys.stderr)
            return EXIT_BAD_INPUT


if __name__ == '__main__':
    sys.exit(main())
