"""Cholesky Benchmark

Compares the hand-written Cholesky factorization (with both dense matrix
representations) to NumPy's and SciPy's LAPACK-backed ones on random symmetric
positive-definite matrices of increasing size.
"""
import argparse
import logging
import time

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd
import scipy.linalg as sp_la

from numerics.cholesky import CholeskyDecompositor
from numerics.factory import FACTORIES

RANDOM_SEED = 1984

logger = logging.getLogger(__name__)


def custom_solver(factory):
    def solve(A):
        L, = CholeskyDecompositor(factory.create_matrix_from_array(A)) \
            .decompose(factory)
        return L.to_array()
    return solve


SOLVERS = {
    "Custom (2D)": custom_solver(FACTORIES['2d']),
    "Custom (1D)": custom_solver(FACTORIES['1d']),
    "NumPy": np.linalg.cholesky,
    "SciPy": lambda A: sp_la.cholesky(A, lower=True),
}


def run(sizes, repeats, rng):
    results = []
    for n in sizes:
        for repeat in range(repeats):
            B = rng.standard_normal((n, n))
            A = np.dot(B, B.T) + n * np.eye(n)
            for solver_name, solver in SOLVERS.items():
                t0 = time.perf_counter()
                L = solver(A)
                t1 = time.perf_counter()
                error = np.max(np.abs(np.dot(L, L.T) - A))
                results.append((n, solver_name, t1 - t0, error))

        logger.info("Finished size %d.", n)

    return pd.DataFrame(data=results,
                        columns=['N', 'Solver', 'Time (s)', 'Max error'])


def plot(summary):
    fig, axes = plt.subplots(1, 2)
    for solver_name, group in summary.groupby('Solver'):
        axes[0].plot(group['N'], group['Time (s)'], marker='*', label=solver_name)
        axes[1].plot(group['N'], group['Max error'], marker='x', label=solver_name)

    axes[0].set_xlabel("Matrix size (n)")
    axes[0].set_ylabel("Mean time (s)")
    axes[0].set_yscale('log')
    axes[1].set_xlabel("Matrix size (n)")
    axes[1].set_ylabel("Max |L L' - A|")
    axes[1].set_yscale('log')
    axes[0].legend()
    fig.tight_layout()
    plt.show()


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description=globals()['__doc__'])
    parser.add_argument('--sizes', type=int, nargs='+', default=[2, 5, 10, 20, 40],
                        help="Matrix sizes to benchmark.")
    parser.add_argument('--repeats', type=int, default=3,
                        help="Random matrices per size.")
    parser.add_argument('--plot', action='store_true',
                        help="Show timing and error plots.")

    return parser.parse_args(argv)


def main(argv=None):
    logging.basicConfig(level=logging.INFO)
    args = parse_args(argv)
    rng = np.random.default_rng(RANDOM_SEED)

    results = run(args.sizes, args.repeats, rng)
    summary = results.groupby(['N', 'Solver'], as_index=False).agg(
        {'Time (s)': 'mean', 'Max error': 'max'})
    print(summary.to_string(index=False, float_format=lambda f: '{:.4e}'.format(f)))

    if args.plot:
        plot(summary)


if __name__ == '__main__':
    main()
