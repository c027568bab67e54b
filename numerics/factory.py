"""Factories choose the concrete matrix representation an algorithm allocates.

Algorithms which produce new matrices (e.g., the Cholesky factor) take an
optional factory argument and fall back to ``DEFAULT_FACTORY``.
"""
from abc import ABCMeta, abstractmethod

import numpy as np

from numerics.matrix import Basic1DMatrix, Basic2DMatrix, BasicVector


class Factory(metaclass=ABCMeta):

    @abstractmethod
    def create_matrix(self, rows, columns):
        """Returns a new zero-filled rows x columns matrix."""
        pass

    @abstractmethod
    def create_matrix_from_array(self, array):
        pass

    def create_identity_matrix(self, n):
        return self.create_matrix_from_array(np.eye(n))

    def create_vector(self, length):
        return BasicVector.zeros(length)

    def create_vector_from_array(self, array):
        return BasicVector(array)

    def __repr__(self):
        return "{}()".format(type(self).__name__)


class Basic2DFactory(Factory):

    def create_matrix(self, rows, columns):
        return Basic2DMatrix.zeros(rows, columns)

    def create_matrix_from_array(self, array):
        return Basic2DMatrix(array)


class Basic1DFactory(Factory):

    def create_matrix(self, rows, columns):
        return Basic1DMatrix.zeros(rows, columns)

    def create_matrix_from_array(self, array):
        return Basic1DMatrix.from_array(array)


DEFAULT_FACTORY = Basic2DFactory()

FACTORIES = {
    '2d': DEFAULT_FACTORY,
    '1d': Basic1DFactory(),
}


def get_factory(name):
    """Looks up a factory by its short name ('2d' or '1d')."""
    if name not in FACTORIES:
        raise ValueError("Unknown matrix factory [{}]. Available: {}.".format(
            name, ", ".join(sorted(FACTORIES))))
    return FACTORIES[name]
