"""Tests for the Rating value object."""

import pytest
from protean.exceptions import ValidationError
from ratings.review.review import Rating


class TestRatingConstruction:
    def test_element_type(self):
        from protean.utils import DomainObjects

        assert Rating.element_type == DomainObjects.VALUE_OBJECT

    @pytest.mark.parametrize("score", [1, 2, 3, 4, 5])
    def test_valid_scores(self, score):
        assert Rating(score=score).score == score

    def test_equal_by_value(self):
        assert Rating(score=4) == Rating(score=4)


class TestRatingBoundaries:
    @pytest.mark.parametrize("score", [0, -1, 6, 100])
    def test_out_of_range_rejected(self, score):
        with pytest.raises(ValidationError) as exc:
            Rating(score=score)
        assert "Rating must be between 1 and 5" in str(exc.value)

    def test_score_is_required(self):
        with pytest.raises(ValidationError):
            Rating()
