"""Tests for the scoring engine."""

import pytest
from decimal import Decimal

from bigtwo.cards import Rank
from bigtwo.evaluator import EvalType
from bigtwo.scoring import base_points, card_multiplier_for, score_play


class TestBasePoints:
    """Tests for level-adjusted base points."""

    @pytest.mark.parametrize(
        "eval_type, points",
        [
            (EvalType.SINGLE, "1"),
            (EvalType.PAIR, "2"),
            (EvalType.STRAIGHT, "5"),
            (EvalType.FLUSH, "6"),
            (EvalType.FULL_HOUSE, "8"),
            (EvalType.FOUR_OF_A_KIND, "10"),
            (EvalType.STRAIGHT_FLUSH, "12"),
            (EvalType.INVALID, "0"),
        ],
    )
    def test_level_one(self, eval_type, points):
        assert base_points(eval_type, 1) == Decimal(points)

    def test_level_two_overrides(self):
        assert base_points(EvalType.SINGLE, 2) == Decimal("0.5")
        assert base_points(EvalType.PAIR, 2) == Decimal("4")
        assert base_points(EvalType.FLUSH, 2) == Decimal("6")

    def test_level_three_overrides(self):
        assert base_points(EvalType.SINGLE, 3) == Decimal("0")
        assert base_points(EvalType.PAIR, 3) == Decimal("2")
        assert base_points(EvalType.STRAIGHT_FLUSH, 3) == Decimal("12")


class TestScorePlay:
    """Tests for score_play()."""

    def test_level_two_single(self, make_cards, modifiers):
        """Test that a level 2 single scores exactly half a point."""
        result = score_play(EvalType.SINGLE, make_cards("KD"), 2, modifiers)
        assert result.points == Decimal("0.5")
        assert result.gold == Decimal("0.25")

    def test_level_three_single(self, make_cards, modifiers):
        result = score_play(EvalType.SINGLE, make_cards("KD"), 3, modifiers)
        assert result.points == Decimal("0")
        assert result.gold == Decimal("0")

    def test_gold_is_half_the_points(self, make_cards, modifiers):
        result = score_play(
            EvalType.FULL_HOUSE, make_cards("KC", "KD", "KH", "4S", "4C"), 1, modifiers
        )
        assert result.points == Decimal("8")
        assert result.gold == Decimal("4")

    def test_bonus_added_before_chain(self, make_cards, modifiers):
        """Test that the chain multiplies the bonus as well as the base."""
        modifiers.add_bonus(EvalType.PAIR, 5)
        result = score_play(
            EvalType.PAIR, make_cards("9C", "9D"), 1, modifiers, Decimal("1.5")
        )
        assert result.points == Decimal("10.5")
        assert result.bonus == 5

    def test_card_multiplier_with_ace(self, make_cards, modifiers):
        """Test that a hand containing the chosen rank doubles."""
        modifiers.set_card_multiplier(Rank.ACE, 2)
        played = make_cards("10H", "JD", "QC", "KS", "AH")
        result = score_play(EvalType.STRAIGHT, played, 1, modifiers, Decimal("1.25"))
        assert result.points == Decimal("12.5")
        assert result.card_multiplier == 2

    def test_card_multiplier_without_ace(self, make_cards, modifiers):
        modifiers.set_card_multiplier(Rank.ACE, 2)
        played = make_cards("9H", "10D", "JC", "QS", "KH")
        result = score_play(EvalType.STRAIGHT, played, 1, modifiers, Decimal("1.25"))
        assert result.points == Decimal("6.25")
        assert result.card_multiplier == 1

    def test_card_multiplier_applies_once(self, make_cards, modifiers):
        """Test that two matching cards still only double once."""
        modifiers.set_card_multiplier(Rank.ACE, 2)
        result = score_play(EvalType.PAIR, make_cards("AC", "AD"), 1, modifiers)
        assert result.points == Decimal("4")

    def test_invalid_rejected(self, make_cards, modifiers):
        with pytest.raises(ValueError):
            score_play(EvalType.INVALID, make_cards("2C", "9D"), 1, modifiers)

    def test_details_describe_steps(self, make_cards, modifiers):
        modifiers.add_bonus(EvalType.PAIR, 3)
        result = score_play(
            EvalType.PAIR, make_cards("9C", "9D"), 1, modifiers, Decimal("1.25")
        )
        assert len(result.details) == 3


class TestCardMultiplier:
    """Tests for card_multiplier_for()."""

    def test_unset_multiplier(self, make_cards, modifiers):
        assert card_multiplier_for(make_cards("AS"), modifiers) == 1

    def test_matching_rank(self, make_cards, modifiers):
        modifiers.set_card_multiplier(Rank.SEVEN, 2)
        assert card_multiplier_for(make_cards("7S"), modifiers) == 2
        assert card_multiplier_for(make_cards("8S"), modifiers) == 1
