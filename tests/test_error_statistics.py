"""Tests for epipolar residuals and inlier error statistics."""

import math

import numpy as np
import pytest

from model import Match
from orsa import aggregate, residual, residuals

# x1' * F * x2 = y2 - y1: horizontal epipolar lines
RECTIFIED = np.array([[0.0, 0.0, 0.0],
                      [0.0, 0.0, -1.0],
                      [0.0, 1.0, 0.0]])


class TestResidual:

    def test_rectified_pair(self):
        assert residual(Match(10.0, 20.0, 30.0, 23.0), RECTIFIED) == pytest.approx(9.0)

    def test_accepts_plain_sequence(self):
        assert residual((10.0, 20.0, 30.0, 20.0), RECTIFIED) == 0.0

    @pytest.mark.parametrize("scale", [2.5, -3.0, 1e-3, 1e4])
    def test_scale_invariance(self, scene_with_outliers, scale):
        matches, F = scene_with_outliers
        for match in matches:
            assert residual(match, scale * F) == pytest.approx(residual(match, F), rel=1e-9, abs=1e-12)

    def test_degenerate_line_is_infinite(self):
        F = np.zeros((3, 3))
        F[2, 2] = 1.0
        assert residual(Match(1.0, 2.0, 3.0, 4.0), F) == math.inf

    def test_exact_matches_have_zero_residual(self, exact_scene):
        matches, F = exact_scene
        assert np.all(residuals(matches, F) < 1e-12)


class TestAggregate:

    def test_matches_definition(self, scene_with_outliers):
        matches, F = scene_with_outliers
        inliers = [0, 2, 5, 11, 14]
        values = [residual(matches[i], F) for i in inliers]

        rms, max_error = aggregate(matches, inliers, F)

        assert rms == pytest.approx(math.sqrt(sum(values) / len(values)))
        assert max_error == pytest.approx(math.sqrt(max(values)))

    def test_known_values(self):
        matches = [Match(0.0, 0.0, 0.0, 1.0), Match(5.0, 1.0, 2.0, 3.0), Match(1.0, 1.0, 9.0, 4.0)]

        rms, max_error = aggregate(matches, [0, 1, 2], RECTIFIED)

        assert rms == pytest.approx(math.sqrt(14.0 / 3.0))
        assert max_error == pytest.approx(3.0)

    def test_only_inliers_are_counted(self):
        matches = [Match(0.0, 0.0, 0.0, 1.0), Match(0.0, 0.0, 0.0, 100.0)]
        assert aggregate(matches, [0], RECTIFIED) == (pytest.approx(1.0), pytest.approx(1.0))

    def test_empty_inlier_set(self, exact_scene):
        matches, F = exact_scene
        assert aggregate(matches, [], F) == (0.0, 0.0)
