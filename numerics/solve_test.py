import unittest

import numpy as np
import scipy.linalg as sp_la

from numerics.cholesky import NotApplicableError
from numerics.factory import Basic1DFactory, Basic2DFactory
from numerics.matrix import Basic2DMatrix, BasicVector
from numerics.numpy_test import NumpyTestCase, random_spd
from numerics.solve import back_substitution, cholesky_solve, \
    forward_substitution


class TestTriangularSolves(NumpyTestCase):

    def test_backward(self):
        # Some random upper-triangular matrix.
        A = np.array([
            [1.0, 1.0, 1.0, 1.5, 2.4],
            [0.0, -1.3, 1.0, 1.2, -5.1],
            [0.0, 0.0, 1.5, 2.7, 5.22],
            [0.0, 0.0, 0.0, 2.0, 3.16],
            [0.0, 0.0, 0.0, 0.0, 0.16]
        ])
        x_gt = np.array([24, 11, 5, 4, -3], dtype=np.float64)
        b = np.dot(A, x_gt)
        x = back_substitution(Basic2DMatrix(A), BasicVector(b))
        self.assertArrayEqual(x, x_gt, rtol=1e-9, atol=1e-9)
        self.assertArrayEqual(x, sp_la.solve_triangular(A, b), rtol=1e-9,
                              atol=1e-9)

    def test_forward(self):
        L = np.array([[2.0, 0.0, 0.0],
                      [1.0, 3.0, 0.0],
                      [-1.0, 0.5, 4.0]])
        b = np.array([2.0, 7.0, 3.5])
        x = forward_substitution(Basic2DMatrix(L), BasicVector(b))
        self.assertArrayEqual(x, sp_la.solve_triangular(L, b, lower=True),
                              rtol=1e-12, atol=1e-12)

    def test_singular(self):
        L = Basic2DMatrix([[1.0, 0.0], [1.0, 0.0]])
        with self.assertRaises(ValueError):
            forward_substitution(L, BasicVector([1.0, 1.0]))
        with self.assertRaises(ValueError):
            back_substitution(L.transpose(), BasicVector([1.0, 1.0]))


class TestCholeskySolve(NumpyTestCase):

    def test_random_systems(self):
        rng = np.random.default_rng(2305)
        for iteration in range(20):
            n = int(rng.integers(1, 10))
            A_np = random_spd(n, rng, jitter=1.0)
            x_gt = rng.uniform(-1.0, 1.0, n)
            b = np.dot(A_np, x_gt)
            for factory in [Basic2DFactory(), Basic1DFactory()]:
                x = cholesky_solve(factory.create_matrix_from_array(A_np),
                                   BasicVector(b), factory)
                self.assertArrayEqual(x, x_gt, "system-{:02d}".format(iteration),
                                      rtol=1e-8, atol=1e-8)

    def test_rejects_indefinite(self):
        with self.assertRaises(NotApplicableError):
            cholesky_solve(Basic2DMatrix([[1.0, 2.0], [2.0, 1.0]]),
                           BasicVector([1.0, 1.0]))

    def test_rejects_bad_rhs(self):
        with self.assertRaises(ValueError):
            cholesky_solve(Basic2DMatrix(np.eye(3)), BasicVector([1.0, 1.0]))


if __name__ == '__main__':
    unittest.main()
