import unittest

import numpy as np

from numerics.factory import FACTORIES, get_factory
from numerics.matrix import Basic1DMatrix, Basic2DMatrix
from numerics.predicates import SQUARE_MATRIX, SYMMETRIC_MATRIX, \
    SymmetricMatrixPredicate, all_of


class TestPredicates(unittest.TestCase):

    def test_square(self):
        self.assertTrue(Basic2DMatrix(np.zeros((3, 3))).satisfies(SQUARE_MATRIX))
        self.assertFalse(Basic2DMatrix(np.zeros((2, 3))).satisfies(SQUARE_MATRIX))

    def test_symmetric(self):
        self.assertTrue(SYMMETRIC_MATRIX.test(
            Basic2DMatrix([[1.0, 2.0], [2.0, 1.0]])))
        self.assertFalse(SYMMETRIC_MATRIX.test(
            Basic2DMatrix([[1.0, 2.0], [2.1, 1.0]])))
        self.assertFalse(SYMMETRIC_MATRIX.test(Basic2DMatrix(np.ones((2, 3)))))
        self.assertTrue(SYMMETRIC_MATRIX(Basic1DMatrix.from_array(np.eye(3))))

    def test_symmetric_tolerance(self):
        A = Basic2DMatrix([[1.0, 2.0], [2.0 + 1e-9, 1.0]])
        self.assertFalse(SYMMETRIC_MATRIX.test(A))
        self.assertTrue(SymmetricMatrixPredicate(eps=1e-6).test(A))

    def test_all_of_short_circuits(self):
        calls = []

        class Recording(SymmetricMatrixPredicate):
            def test(self, matrix):
                calls.append(matrix)
                return super().test(matrix)

        predicate = all_of(SQUARE_MATRIX, Recording())
        self.assertFalse(predicate.test(Basic2DMatrix(np.ones((2, 3)))))
        self.assertEqual([], calls)
        self.assertTrue(predicate.test(Basic2DMatrix(np.eye(2))))
        self.assertEqual(1, len(calls))

    def test_all_of_needs_predicates(self):
        with self.assertRaises(ValueError):
            all_of()


class TestFactories(unittest.TestCase):

    def test_lookup(self):
        self.assertIs(FACTORIES['1d'], get_factory('1d'))
        self.assertIsInstance(get_factory('1d').create_matrix(2, 2),
                              Basic1DMatrix)
        self.assertIsInstance(get_factory('2d').create_matrix(2, 2),
                              Basic2DMatrix)
        with self.assertRaises(ValueError):
            get_factory('crs')

    def test_created_matrices_are_zero(self):
        for name, factory in FACTORIES.items():
            m = factory.create_matrix(3, 4)
            self.assertEqual((3, 4), m.shape, name)
            self.assertTrue(np.array_equal(np.zeros((3, 4)), m.to_array()), name)
            self.assertTrue(np.array_equal(np.eye(3), factory.create_identity_matrix(3).to_array()), name)
            self.assertEqual(5, factory.create_vector(5).length())
            with self.assertRaises(ValueError):
                factory.create_matrix(-1, 2)


if __name__ == '__main__':
    unittest.main()
