"""Tests for the safety-gated refinement step."""

import math

import numpy as np
import pytest

from estimator import EstimatorFundamental
from model import Match
from orsa import RefinementStatus, refine

MATCHES = [Match(0.0, 0.0, 0.0, 1.0), Match(5.0, 1.0, 2.0, 3.0), Match(1.0, 1.0, 9.0, 4.0)]
INLIERS = [0, 1, 2]


def shifted(s):
    """x1' * F * x2 = y2 - y1 - s"""
    return np.array([[0.0, 0.0, 0.0],
                     [0.0, 0.0, -1.0],
                     [0.0, 1.0, -s]])


# 内点的残差为 1, 4, 9：平均误差 sqrt(14/3)，最大误差 3
BASELINE = shifted(0.0)


class StubEstimator:

    def __init__(self, candidate):
        self.candidate = candidate
        self.calls = []

    def computeModel(self, indices):
        self.calls.append(list(indices))
        return self.candidate is not None, self.candidate


class TestRefine:

    def test_better_candidate_is_accepted(self):
        candidate = shifted(2.0)
        result = refine(StubEstimator(candidate), MATCHES, INLIERS, BASELINE)

        assert result.status is RefinementStatus.ACCEPTED
        assert result.model is candidate
        assert result.before == (pytest.approx(math.sqrt(14.0 / 3.0)), pytest.approx(3.0))
        assert result.after[0] == pytest.approx(math.sqrt(2.0 / 3.0))

    def test_average_above_baseline_max_is_rejected(self):
        candidate = shifted(-5.0)
        result = refine(StubEstimator(candidate), MATCHES, INLIERS, BASELINE)

        assert result.status is RefinementStatus.REJECTED
        assert result.model is BASELINE
        assert result.after[0] > result.before[1]

    def test_worse_average_within_baseline_max_is_accepted(self):
        # 平均误差比原模型差，但不超过原模型的最大误差
        candidate = shifted(-0.8)
        result = refine(StubEstimator(candidate), MATCHES, INLIERS, BASELINE)

        assert result.before[0] < result.after[0] <= result.before[1]
        assert result.status is RefinementStatus.ACCEPTED
        assert result.model is candidate

    def test_failed_fit_keeps_model(self):
        result = refine(StubEstimator(None), MATCHES, INLIERS, BASELINE)

        assert result.status is RefinementStatus.FAILED
        assert result.model is BASELINE
        assert result.after is None

    def test_degenerate_minimal_inlier_set_fails(self):
        matches = np.tile([100.0, 200.0, 300.0, 400.0], (7, 1))
        estimator = EstimatorFundamental(matches, 640, 480, 640, 480)
        result = refine(estimator, matches, list(range(7)), BASELINE)

        assert result.status is RefinementStatus.FAILED
        assert result.model is BASELINE

    def test_empty_inlier_set(self):
        estimator = StubEstimator(shifted(1.0))
        result = refine(estimator, MATCHES, [], BASELINE)

        assert result.status is RefinementStatus.FAILED
        assert result.model is BASELINE
        assert estimator.calls == []

    def test_missing_model(self):
        result = refine(StubEstimator(shifted(1.0)), MATCHES, INLIERS, None)
        assert result.status is RefinementStatus.FAILED
        assert result.model is None

    def test_fits_all_inliers_without_changing_them(self):
        inliers = [2, 0]
        estimator = StubEstimator(shifted(2.0))
        refine(estimator, MATCHES, inliers, BASELINE)

        assert estimator.calls == [[2, 0]]
        assert inliers == [2, 0]

    def test_reports_errors_through_logging(self, caplog):
        with caplog.at_level("INFO", logger="orsa.orsa_fundamental"):
            refine(StubEstimator(shifted(-5.0)), MATCHES, INLIERS, BASELINE)

        assert "Before refinement" in caplog.text
        assert "After  refinement" in caplog.text
        assert "too large, thus ignored" in caplog.text
