"""Dense Cholesky factorization written from scratch, for learning purposes."""

from numerics.cholesky import APPLICABLE_TO_CHOLESKY, CholeskyDecompositor, \
    NotApplicableError, POSITIVE_DEFINITE_MATRIX, PositiveDefinitePredicate, \
    cholesky, cholesky_step, is_positive_definite
from numerics.factory import Basic1DFactory, Basic2DFactory, DEFAULT_FACTORY, \
    get_factory
from numerics.matrix import Basic1DMatrix, Basic2DMatrix, BasicVector, \
    Matrix, Vector
from numerics.predicates import SQUARE_MATRIX, SYMMETRIC_MATRIX, all_of
from numerics.solve import back_substitution, cholesky_solve, \
    forward_substitution
