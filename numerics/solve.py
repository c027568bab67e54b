"""Solving symmetric positive-definite systems via their Cholesky factor.

A x = b is solved as L y = b (forward substitution) followed by L' x = y
(backward substitution). See Section 2.9 in Numerical Recipes in C.
"""
import logging

from numerics.cholesky import CholeskyDecompositor, NotApplicableError
from numerics.factory import DEFAULT_FACTORY
from numerics.matrix import Matrix, Vector

logger = logging.getLogger(__name__)


def _check_system(A: Matrix, b: Vector):
    if A.rows() != A.columns():
        raise ValueError("The coefficient matrix must be square, got {}x{}."
                         .format(A.rows(), A.columns()))
    if b.length() != A.rows():
        raise ValueError("Right-hand side has length {}, expected {}.".format(
            b.length(), A.rows()))


def forward_substitution(L: Matrix, b: Vector, factory=None) -> Vector:
    """Solves L x = b for a lower-triangular L."""
    factory = factory or DEFAULT_FACTORY
    _check_system(L, b)
    rows = L.rows()
    x = factory.create_vector(rows)
    for row in range(rows):
        pivot = L.get(row, row)
        if pivot == 0.0:
            raise ValueError("Singular triangular matrix: zero pivot in row "
                             "{}.".format(row))
        delta = b.get(row) - sum(L.get(row, k) * x.get(k) for k in range(row))
        x.set(row, delta / pivot)

    return x


def back_substitution(U: Matrix, b: Vector, factory=None) -> Vector:
    """Solves U x = b for an upper-triangular U."""
    factory = factory or DEFAULT_FACTORY
    _check_system(U, b)
    rows = U.rows()
    x = factory.create_vector(rows)
    for row in reversed(range(rows)):
        pivot = U.get(row, row)
        if pivot == 0.0:
            raise ValueError("Singular triangular matrix: zero pivot in row "
                             "{}.".format(row))
        delta = b.get(row) - sum(U.get(row, k) * x.get(k)
                                 for k in range(row + 1, rows))
        x.set(row, delta / pivot)

    return x


def cholesky_solve(A: Matrix, b: Vector, factory=None) -> Vector:
    """Solves A x = b for a symmetric positive-definite A.

    Raises:
        NotApplicableError: If A is not symmetric positive-definite.
        ValueError: If b does not match the shape of A.
    """
    _check_system(A, b)
    decompositor = CholeskyDecompositor(A)
    if not decompositor.applicable_to(A):
        raise NotApplicableError("cholesky_solve() needs a symmetric "
                                 "positive-definite coefficient matrix.")

    L, = decompositor.decompose(factory)
    y = forward_substitution(L, b, factory)
    x = back_substitution(L.transpose(), y, factory)
    logger.debug("Solved a %dx%d SPD system.", A.rows(), A.columns())
    return x
