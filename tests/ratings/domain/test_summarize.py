"""Tests for the pure rating summary computation."""

import pytest
from ratings.summary.rating_summary import empty_histogram, serialize_histogram, summarize


class TestSummarize:
    def test_empty(self):
        assert summarize([]) == {
            "average_rating": 0.0,
            "visible_review_count": 0,
            "star_histogram": {1: 0, 2: 0, 3: 0, 4: 0, 5: 0},
        }

    def test_single(self):
        summary = summarize([5])
        assert summary["average_rating"] == 5.0
        assert summary["star_histogram"][5] == 1

    def test_rounds_to_two_places(self):
        assert summarize([5, 4, 4])["average_rating"] == 4.33
        assert summarize([1, 2, 2])["average_rating"] == 1.67

    @pytest.mark.parametrize("scores", [[1], [2, 3], [5, 5, 1, 4], [3] * 17])
    def test_histogram_sums_to_count(self, scores):
        summary = summarize(scores)
        assert sum(summary["star_histogram"].values()) == summary["visible_review_count"] == len(scores)

    def test_accepts_generators(self):
        assert summarize(score for score in [2, 4])["average_rating"] == 3.0

    def test_rejects_scores_outside_scale(self):
        with pytest.raises(KeyError):
            summarize([0])


class TestHistogramSerialization:
    def test_serialized_keys_cover_all_stars(self):
        assert serialize_histogram({5: 2}) == '{"1": 0, "2": 0, "3": 0, "4": 0, "5": 2}'

    def test_empty_histogram(self):
        assert empty_histogram() == {1: 0, 2: 0, 3: 0, 4: 0, 5: 0}
