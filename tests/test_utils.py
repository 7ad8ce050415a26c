"""Tests for match file I/O, sampling and scoring helpers."""

import numpy as np
import pytest

from model import Match
from sampler import UniformSampler
from utils import Score, loadMatches, saveMatches


class TestMatchIO:

    def test_round_trip(self, tmp_path):
        matches = [Match(1.5, 2.0, 3.25, 4.0), Match(640.0, 480.0, 0.125, 7.0)]
        path = tmp_path / "matches.txt"

        saveMatches(str(path), matches)

        assert loadMatches(str(path)) == matches

    def test_single_match(self, tmp_path):
        path = tmp_path / "one.txt"
        path.write_text("1 2 3 4\n")
        assert loadMatches(str(path)) == [Match(1.0, 2.0, 3.0, 4.0)]

    def test_wrong_column_count(self, tmp_path):
        path = tmp_path / "bad.txt"
        path.write_text("1 2 3\n4 5 6\n")
        with pytest.raises(ValueError, match="4 columns"):
            loadMatches(str(path))


class TestUniformSampler:

    def test_samples_are_unique_pool_members(self):
        sampler = UniformSampler(np.zeros((20, 4)), seed=1)
        pool = [3, 5, 7, 11, 13, 17, 19]
        for _ in range(20):
            sample = sampler.sample(pool, 5)
            assert len(set(sample)) == 5
            assert set(sample) <= set(pool)

    def test_pool_too_small(self):
        sampler = UniformSampler(np.zeros((20, 4)), seed=1)
        assert sampler.sample([1, 2, 3], 7) == []

    def test_seed_makes_sampling_reproducible(self):
        pool = list(range(20))
        first = UniformSampler(np.zeros((20, 4)), seed=9)
        second = UniformSampler(np.zeros((20, 4)), seed=9)
        assert [first.sample(pool, 7) for _ in range(5)] == [second.sample(pool, 7) for _ in range(5)]

    def test_empty_container(self):
        assert not UniformSampler(np.zeros((0, 4))).initialized


class TestScore:

    def test_more_inliers_wins(self):
        few, many = Score(), Score()
        few.inlier_number, few.value = 5, 4.9
        many.inlier_number, many.value = 6, 1.0
        assert few < many
        assert many > few

    def test_value_breaks_ties(self):
        worse, better = Score(), Score()
        worse.inlier_number = better.inlier_number = 8
        worse.value, better.value = 3.0, 7.5
        assert worse < better
        assert not better < worse
