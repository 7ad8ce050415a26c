"""Tests for the cv2-style findFundamentalMat API."""

import numpy as np
import pytest

from orsa import FM_ORSA, FM_RANSAC, findFundamentalMat


class TestFindFundamentalMat:

    @pytest.mark.parametrize("method", [FM_ORSA, FM_RANSAC])
    def test_mask_marks_inliers(self, scene_with_outliers, method):
        matches, _ = scene_with_outliers
        F, mask = findFundamentalMat(matches[:, 0:2], matches[:, 2:4], 480, 640, 480, 640,
                                     method=method, threshold=1.0, max_iters=2000, seed=0)

        assert np.shape(F) == (3, 3)
        assert mask.tolist() == [1] * 10 + [0] * 5

    def test_too_few_points(self, exact_scene):
        matches, _ = exact_scene
        F, mask = findFundamentalMat(matches[:5, 0:2], matches[:5, 2:4], 480, 640, 480, 640)
        assert F is None
        assert mask is None

    def test_unknown_method(self, exact_scene):
        matches, _ = exact_scene
        with pytest.raises(ValueError, match="unknown method"):
            findFundamentalMat(matches[:, 0:2], matches[:, 2:4], 480, 640, 480, 640, method="lmeds")
