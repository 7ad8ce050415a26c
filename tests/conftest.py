"""Shared fixtures: synthetic two-view correspondences."""

import numpy as np
import pytest

from utils_helper import makeTwoViewScene


@pytest.fixture
def exact_scene():
    """10 个与真实基础矩阵严格一致的匹配。"""
    return makeTwoViewScene(10, seed=0)


@pytest.fixture
def scene_with_outliers():
    """10 个严格内点加 5 个偏离极线 60-120 像素的外点。"""
    return makeTwoViewScene(10, 5, seed=0)


@pytest.fixture
def random_matches():
    """30 个完全随机、没有几何关系的匹配。"""
    rng = np.random.default_rng(7)
    return np.c_[rng.uniform(0, 640, 30), rng.uniform(0, 480, 30),
                 rng.uniform(0, 640, 30), rng.uniform(0, 480, 30)]
