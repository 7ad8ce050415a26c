"""Tests for the seven-point and eight-point fundamental matrix solvers."""

import numpy as np

from estimator import EstimatorFundamental
from solver import SolverFundamentalMatrixEightPoint, SolverFundamentalMatrixSevenPoint


def algebraic_errors(points, F):
    x1 = np.c_[points[:, 0:2], np.ones(len(points))]
    x2 = np.c_[points[:, 2:4], np.ones(len(points))]
    return np.abs(np.einsum('ij,jk,ik->i', x1, F, x2))


def normalized(matches):
    return EstimatorFundamental(matches, 640, 480, 640, 480).normalized_points


class TestSevenPoint:

    def test_sample_size(self):
        solver = SolverFundamentalMatrixSevenPoint()
        assert solver.sampleSize() == 7
        assert solver.maximumSolutions() == 3
        assert solver.returnMultipleModels()

    def test_true_model_among_solutions(self, exact_scene):
        points = normalized(exact_scene[0])
        models = SolverFundamentalMatrixSevenPoint().estimateModel(points, [0, 1, 2, 3, 4, 5, 6], 7)

        assert 1 <= len(models) <= 3
        # 每个解都满足样本点的约束
        for model in models:
            assert np.all(algebraic_errors(points[:7], model.descriptor) < 1e-9)
            assert abs(np.linalg.det(model.descriptor)) < 1e-9
        # 真实模型也满足样本之外的点
        assert any(np.all(algebraic_errors(points, model.descriptor) < 1e-9) for model in models)

    def test_sample_defaults_to_leading_points(self, exact_scene):
        points = normalized(exact_scene[0])
        models = SolverFundamentalMatrixSevenPoint().estimateModel(points, None, 7)
        assert len(models) >= 1

    def test_too_few_points(self, exact_scene):
        points = normalized(exact_scene[0])
        assert SolverFundamentalMatrixSevenPoint().estimateModel(points, [0, 1, 2], 3) == []

    def test_degenerate_configuration(self):
        # 七个匹配重合，零空间维数大于 2
        points = np.tile([0.1, 0.2, 0.3, 0.4], (7, 1))
        assert SolverFundamentalMatrixSevenPoint().estimateModel(points, None, 7) == []


class TestEightPoint:

    def test_least_squares_fit(self, exact_scene):
        points = normalized(exact_scene[0])
        models = SolverFundamentalMatrixEightPoint().estimateModel(points, list(range(10)), 10)

        assert len(models) == 1
        F = models[0].descriptor
        assert abs(np.linalg.norm(F) - 1.0) < 1e-12
        assert np.all(algebraic_errors(points, F) < 1e-9)
        # 秩为 2
        assert np.linalg.svd(F, compute_uv=False)[2] < 1e-12

    def test_weights(self, exact_scene):
        points = normalized(exact_scene[0])
        weights = [1.0] * 5 + [0.5] * 5
        models = SolverFundamentalMatrixEightPoint().estimateModel(points, None, 10, weights=weights)
        assert np.all(algebraic_errors(points, models[0].descriptor) < 1e-9)

    def test_degenerate_configuration(self):
        # 所有匹配重合，零空间维数大于 1
        points = np.tile([0.1, 0.2, 0.3, 0.4], (10, 1))
        assert SolverFundamentalMatrixEightPoint().estimateModel(points, None, 10) == []

    def test_too_few_points(self, exact_scene):
        points = normalized(exact_scene[0])
        assert SolverFundamentalMatrixEightPoint().estimateModel(points, list(range(7)), 7) == []
