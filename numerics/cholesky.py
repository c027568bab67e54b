"""Cholesky factorization of dense, real, symmetric positive-definite matrices.

Given A, computes the lower-triangular L with A = L L'. The recurrence for
row j of L is

    L[j][k] = (A[j][k] - sum_{i<k} L[k][i] L[j][i]) / L[k][k],   k < j
    L[j][j] = sqrt(max(A[j][j] - sum_{k<j} L[j][k]^2, 0))

The same recurrence doubles as a positive-definiteness test: A is positive
definite iff every diagonal residual is strictly positive.

Neither the factorization nor the test raise on bad numbers. The clamp
above turns slightly negative residuals (round-off on matrices at the
semidefinite boundary) into a zero pivot, and a zero pivot used as a divisor
later on produces inf/nan entries in the factor instead of an exception.
Callers who need strict guarantees should use ``cholesky``, which runs the
applicability check first, or inspect the factor with ``np.isfinite``.

See also: Appendix A of Nocedal & Wright, and the handcoded version in the
Numerical Recipes chapter on linear systems (Section 2.9).
"""
import logging
from abc import ABCMeta, abstractmethod

import numpy as np

from numerics.factory import DEFAULT_FACTORY
from numerics.matrix import Matrix, Vector
from numerics.predicates import MatrixPredicate, SQUARE_MATRIX, \
    SYMMETRIC_MATRIX, all_of

logger = logging.getLogger(__name__)


class NotApplicableError(ValueError):
    """Raised by the checked entry points when a matrix cannot be factored."""
    pass


def cholesky_step(a: Matrix, l: Matrix, j, row: Vector):
    """Computes the strictly-lower part of row j of the Cholesky factor.

    Args:
        a: The matrix being factored. Only read.
        l: Holds the finished rows 0..j-1 of the factor. Only read.
        j: The index of the row to compute.
        row: Receives L[j][0..j-1]. Entries from j onwards are left untouched.

    Returns:
        The updated row, and the diagonal residual
        d = A[j][j] - sum_{k<j} L[j][k]^2.
    """
    d = 0.0
    # Row j only depends on its own prefix and on the rows above it.
    with np.errstate(divide='ignore', invalid='ignore', over='ignore'):
        for k in range(j):
            s = 0.0
            for i in range(k):
                s += l.get(k, i) * row.get(i)

            s = np.divide(a.get(j, k) - s, l.get(k, k))
            row.set(k, s)
            d = d + s * s

        d = a.get(j, j) - d

    return row, d


def _pivot(d):
    # Clamp round-off residuals instead of failing on sqrt of a negative.
    return np.sqrt(max(d, 0.0))


class Decompositor(metaclass=ABCMeta):
    """A decomposition bound to a single input matrix."""

    def __init__(self, matrix: Matrix):
        self.matrix = matrix

    @abstractmethod
    def decompose(self, factory=None):
        """Returns the list of factors of the bound matrix."""
        pass

    @abstractmethod
    def applicable_to(self, matrix: Matrix) -> bool:
        pass


class CholeskyDecompositor(Decompositor):
    """Cholesky decomposition, A = L L'.

    More details: http://mathworld.wolfram.com/CholeskyDecomposition.html
    """

    def decompose(self, factory=None):
        """Returns [L] for the bound matrix.

        The input is not validated. Call ``applicable_to`` first: for a
        matrix which is not symmetric positive-definite the result is
        meaningless and may contain non-finite entries.
        """
        if factory is None:
            factory = DEFAULT_FACTORY

        n = self.matrix.rows()
        l = factory.create_matrix(n, n)

        for j in range(n):
            row, d = cholesky_step(self.matrix, l, j, l.get_row(j))
            row.set(j, _pivot(d))
            for k in range(j + 1, n):
                row.set(k, 0.0)
            l.set_row(j, row)

        return [l]

    def applicable_to(self, matrix):
        applicable = APPLICABLE_TO_CHOLESKY.test(matrix)
        logger.debug("Cholesky %s to a %dx%d matrix.",
                     "applicable" if applicable else "not applicable",
                     matrix.rows(), matrix.columns())
        return applicable


class PositiveDefinitePredicate(MatrixPredicate):
    """Checks if a matrix is positive definite by attempting the Cholesky
    recurrence and stopping at the first non-positive pivot.

    The factor is built one buffered row at a time in a private scratch
    matrix, so the matrix under test is never written. Rows after the first
    failing one are never read.

    Non-finite residuals are rejected too: a nan (from nan entries) as well as
    an inf (from an infinite diagonal entry), since neither yields a usable
    pivot.

    More details: http://mathworld.wolfram.com/PositiveDefiniteMatrix.html
    """

    def test(self, matrix):
        if matrix.rows() != matrix.columns():
            return False

        n = matrix.rows()
        l = matrix.blank()

        for j in range(n):
            row, d = cholesky_step(matrix, l, j, l.get_row(j))

            if not (d > 0.0 and np.isfinite(d)):
                logger.debug("Non-positive pivot %s in row %d of %d.", d, j, n)
                return False

            row.set(j, _pivot(d))
            for k in range(j + 1, n):
                row.set(k, 0.0)
            l.set_row(j, row)

        return True


POSITIVE_DEFINITE_MATRIX = PositiveDefinitePredicate()

# Cheapest checks first; the positive-definite test is O(n^3).
APPLICABLE_TO_CHOLESKY = all_of(SQUARE_MATRIX, SYMMETRIC_MATRIX,
                                POSITIVE_DEFINITE_MATRIX)


def is_positive_definite(matrix: Matrix) -> bool:
    return POSITIVE_DEFINITE_MATRIX.test(matrix)


def cholesky(matrix: Matrix, factory=None) -> Matrix:
    """Checked Cholesky factorization. Returns L such that A = L L'.

    Raises:
        NotApplicableError: If the matrix is not square, symmetric and
                            positive-definite.
    """
    decompositor = CholeskyDecompositor(matrix)
    if not decompositor.applicable_to(matrix):
        raise NotApplicableError(
            "Cannot compute the Cholesky factor of a {}x{} matrix which is not "
            "symmetric positive-definite.".format(matrix.rows(),
                                                  matrix.columns()))

    l, = decompositor.decompose(factory)
    return l


DECOMPOSITORS = {
    'cholesky': CholeskyDecompositor,
}
