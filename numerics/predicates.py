"""Capability predicates which can be tested against a matrix.

A predicate is any object with a ``test(matrix) -> bool`` method. They are
usually applied as ``matrix.satisfies(SYMMETRIC_MATRIX)``.
"""
from abc import ABCMeta, abstractmethod

# Absolute tolerance used when comparing mirrored entries.
EPS = 1e-12


class MatrixPredicate(metaclass=ABCMeta):

    @abstractmethod
    def test(self, matrix) -> bool:
        pass

    def __call__(self, matrix):
        return self.test(matrix)


class SquareMatrixPredicate(MatrixPredicate):

    def test(self, matrix):
        return matrix.rows() == matrix.columns()


class SymmetricMatrixPredicate(MatrixPredicate):
    """Holds for square matrices whose mirrored entries differ by less than
    eps."""

    def __init__(self, eps=EPS):
        self.eps = eps

    def test(self, matrix):
        if matrix.rows() != matrix.columns():
            return False

        for i in range(matrix.rows()):
            for j in range(i + 1, matrix.columns()):
                if not abs(matrix.get(i, j) - matrix.get(j, i)) < self.eps:
                    return False

        return True


class _AllOf(MatrixPredicate):

    def __init__(self, predicates):
        self.predicates = predicates

    def test(self, matrix):
        return all(matrix.satisfies(predicate) for predicate in self.predicates)


def all_of(*predicates):
    """Composes predicates; evaluation stops at the first one which fails."""
    if len(predicates) == 0:
        raise ValueError("all_of() needs at least one predicate.")
    return _AllOf(predicates)


SQUARE_MATRIX = SquareMatrixPredicate()
SYMMETRIC_MATRIX = SymmetricMatrixPredicate()
