"""Dense matrix and vector types used by the decompositions.

Everything in the package reads and writes matrices through the small
accessor surface defined here (``rows``, ``columns``, ``get``, ``set``,
``get_row``, ``set_row``, ``blank``), so the algorithms never depend on how a
matrix is stored. Two dense, numpy-backed representations are provided:

    Basic2DMatrix: an (n, m) float64 array.
    Basic1DMatrix: a flat, row-major float64 buffer of length n * m.
"""
from abc import ABCMeta, abstractmethod

import numpy as np


def _check_index(index, bound, what):
    # Numpy would silently accept negative indices, so check explicitly.
    if not 0 <= index < bound:
        raise IndexError("{} index {} out of range [0, {}).".format(
            what, index, bound))


class Vector(metaclass=ABCMeta):
    """A real-valued vector with 0-indexed element access."""

    @abstractmethod
    def length(self):
        pass

    @abstractmethod
    def get(self, i):
        pass

    @abstractmethod
    def set(self, i, value):
        pass

    @abstractmethod
    def blank(self):
        """Returns a zero vector of the same length and representation."""
        pass

    @abstractmethod
    def to_array(self):
        pass

    def __len__(self):
        return self.length()

    def __iter__(self):
        for i in range(self.length()):
            yield self.get(i)

    def __eq__(self, other):
        if not isinstance(other, Vector):
            return NotImplemented
        return np.array_equal(self.to_array(), other.to_array())

    def __repr__(self):
        return "{}({})".format(type(self).__name__, self.to_array().tolist())


class BasicVector(Vector):
    """Dense vector backed by a 1D float64 array."""

    def __init__(self, data):
        self._data = np.array(data, dtype=np.float64).reshape(-1)

    @classmethod
    def zeros(cls, length):
        if length < 0:
            raise ValueError("Vector length must be non-negative, got {}."
                             .format(length))
        return cls(np.zeros(length))

    def length(self):
        return self._data.shape[0]

    def get(self, i):
        _check_index(i, self.length(), "Vector")
        return float(self._data[i])

    def set(self, i, value):
        _check_index(i, self.length(), "Vector")
        self._data[i] = value

    def blank(self):
        return BasicVector.zeros(self.length())

    def to_array(self):
        return self._data.copy()


class Matrix(metaclass=ABCMeta):
    """A real-valued, dense, 0-indexed matrix.

    Subclasses only need to provide storage; the row operations, products and
    conversions below are written against the element accessors.
    """

    @abstractmethod
    def rows(self):
        pass

    @abstractmethod
    def columns(self):
        pass

    @abstractmethod
    def get(self, i, j):
        pass

    @abstractmethod
    def set(self, i, j, value):
        pass

    @abstractmethod
    def blank(self):
        """Returns a zero matrix with the same shape and representation."""
        pass

    @abstractmethod
    def to_array(self):
        """Returns a (rows, columns) numpy copy of the elements."""
        pass

    @property
    def shape(self):
        return self.rows(), self.columns()

    def get_row(self, i) -> Vector:
        """Returns a detached copy of row i."""
        _check_index(i, self.rows(), "Row")
        return BasicVector([self.get(i, j) for j in range(self.columns())])

    def set_row(self, i, row: Vector):
        _check_index(i, self.rows(), "Row")
        if row.length() != self.columns():
            raise ValueError("Cannot assign a row of length {} to a matrix "
                             "with {} columns.".format(row.length(),
                                                       self.columns()))
        for j in range(self.columns()):
            self.set(i, j, row.get(j))

    def copy(self):
        result = self.blank()
        for i in range(self.rows()):
            for j in range(self.columns()):
                result.set(i, j, self.get(i, j))
        return result

    def transpose(self):
        result = self._like(self.columns(), self.rows())
        for i in range(self.rows()):
            for j in range(self.columns()):
                result.set(j, i, self.get(i, j))
        return result

    def multiply(self, other: 'Matrix') -> 'Matrix':
        if self.columns() != other.rows():
            raise ValueError("Cannot multiply a {}x{} matrix by a {}x{} one."
                             .format(self.rows(), self.columns(),
                                     other.rows(), other.columns()))
        product = np.dot(self.to_array(), other.to_array())
        result = self._like(product.shape[0], product.shape[1])
        for i in range(result.rows()):
            for j in range(result.columns()):
                result.set(i, j, product[i, j])
        return result

    def satisfies(self, predicate) -> bool:
        """Tests this matrix against a capability predicate, e.g.,
        ``a.satisfies(SYMMETRIC_MATRIX)``."""
        return predicate.test(self)

    def with_decompositor(self, kind):
        """Returns a decompositor of the given kind bound to this matrix."""
        # Imported here since the decompositions depend on this module.
        from numerics.cholesky import DECOMPOSITORS
        try:
            decompositor_cls = DECOMPOSITORS[kind]
        except KeyError:
            raise ValueError("Unknown decompositor [{}]. Known: {}.".format(
                kind, sorted(DECOMPOSITORS)))
        return decompositor_cls(self)

    def _like(self, rows, columns):
        return type(self).zeros(rows, columns)

    def __eq__(self, other):
        if not isinstance(other, Matrix):
            return NotImplemented
        return np.array_equal(self.to_array(), other.to_array())

    def __repr__(self):
        return "{}({})".format(type(self).__name__, self.to_array().tolist())


class Basic2DMatrix(Matrix):
    """Dense matrix stored as a 2D float64 array."""

    def __init__(self, data):
        data = np.array(data, dtype=np.float64)
        if data.ndim != 2:
            raise ValueError("Expected a 2D array, got shape {}.".format(
                data.shape))
        self._data = data

    @classmethod
    def zeros(cls, rows, columns):
        if rows < 0 or columns < 0:
            raise ValueError("Matrix shape must be non-negative, got {}x{}."
                             .format(rows, columns))
        return cls(np.zeros((rows, columns)))

    def rows(self):
        return self._data.shape[0]

    def columns(self):
        return self._data.shape[1]

    def get(self, i, j):
        _check_index(i, self.rows(), "Row")
        _check_index(j, self.columns(), "Column")
        return float(self._data[i, j])

    def set(self, i, j, value):
        _check_index(i, self.rows(), "Row")
        _check_index(j, self.columns(), "Column")
        self._data[i, j] = value

    def get_row(self, i):
        _check_index(i, self.rows(), "Row")
        return BasicVector(self._data[i, :])

    def blank(self):
        return Basic2DMatrix.zeros(self.rows(), self.columns())

    def to_array(self):
        return self._data.copy()


class Basic1DMatrix(Matrix):
    """Dense matrix stored as a flat, row-major float64 buffer."""

    def __init__(self, rows, columns, data=None):
        if rows < 0 or columns < 0:
            raise ValueError("Matrix shape must be non-negative, got {}x{}."
                             .format(rows, columns))
        self._rows = rows
        self._columns = columns
        if data is None:
            self._data = np.zeros(rows * columns)
        else:
            self._data = np.array(data, dtype=np.float64).reshape(-1)
            if self._data.shape[0] != rows * columns:
                raise ValueError("Buffer of length {} does not fit a {}x{} "
                                 "matrix.".format(self._data.shape[0],
                                                  rows, columns))

    @classmethod
    def zeros(cls, rows, columns):
        return cls(rows, columns)

    @classmethod
    def from_array(cls, array):
        array = np.asarray(array, dtype=np.float64)
        if array.ndim != 2:
            raise ValueError("Expected a 2D array, got shape {}.".format(
                array.shape))
        return cls(array.shape[0], array.shape[1], array.ravel())

    def rows(self):
        return self._rows

    def columns(self):
        return self._columns

    def get(self, i, j):
        _check_index(i, self._rows, "Row")
        _check_index(j, self._columns, "Column")
        return float(self._data[i * self._columns + j])

    def set(self, i, j, value):
        _check_index(i, self._rows, "Row")
        _check_index(j, self._columns, "Column")
        self._data[i * self._columns + j] = value

    def get_row(self, i):
        _check_index(i, self._rows, "Row")
        start = i * self._columns
        return BasicVector(self._data[start:start + self._columns])

    def blank(self):
        return Basic1DMatrix(self._rows, self._columns)

    def to_array(self):
        return self._data.reshape(self._rows, self._columns).copy()
