"""Tests for RuleSet and ModifierSet."""

import pytest
from decimal import Decimal
from types import MappingProxyType

from bigtwo.cards import Rank
from bigtwo.evaluator import EvalType
from bigtwo.magic import MagicChoice, ModifierSet
from bigtwo.rules import RuleSet


class TestRuleSet:
    """Tests for RuleSet defaults and validation."""

    def test_defaults(self, rules):
        assert rules.hand_size == 7
        assert rules.max_level == 3
        assert rules.gold_per_point == Decimal("0.5")
        assert rules.chain_step == Decimal("0.25")
        assert rules.log_size == 8
        assert rules.history_size == 256

    def test_targets(self, rules):
        assert rules.target_for(1) == Decimal("55")
        assert rules.target_for(2) == Decimal("60")
        assert rules.target_for(3) == Decimal("65")

    def test_target_past_last_level(self, rules):
        assert rules.target_for(4) == Decimal("65")

    def test_quick_rules(self):
        rules = RuleSet.quick()
        assert rules.target_for(1) == Decimal("5")
        assert rules.max_level == 3

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"hand_size": 0},
            {"chain_step": Decimal("-0.25")},
            {"gold_per_point": Decimal("-1")},
            {"card_multiplier_factor": 0},
            {"log_size": 0},
            {"log_size": 8, "history_size": 4},
            {"level_targets": MappingProxyType({})},
            {"level_targets": MappingProxyType({1: Decimal("5"), 3: Decimal("9")})},
        ],
    )
    def test_validation(self, kwargs):
        with pytest.raises(ValueError):
            RuleSet(**kwargs)


class TestModifierSet:
    """Tests for ModifierSet."""

    def test_defaults(self, modifiers):
        assert all(modifiers.bonus_for(t) == 0 for t in EvalType)
        assert modifiers.card_multiplier_rank == 0
        assert not modifiers.has_card_multiplier
        assert not modifiers.draw_boost_available
        assert not modifiers.discard_redraw_available

    def test_add_bonus_stacks(self, modifiers):
        modifiers.add_bonus(EvalType.PAIR, 5)
        modifiers.add_bonus(EvalType.PAIR, 3)
        assert modifiers.bonus_for(EvalType.PAIR) == 8

    def test_invalid_bonus_rejected(self, modifiers):
        with pytest.raises(ValueError):
            modifiers.add_bonus(EvalType.INVALID, 1)

    def test_card_multiplier_overwrites(self, modifiers):
        modifiers.set_card_multiplier(Rank.ACE, 2)
        modifiers.set_card_multiplier(Rank.NINE, 2)
        assert modifiers.card_multiplier_rank == 9
        assert modifiers.has_card_multiplier

    def test_one_shot_flags_consumed(self, modifiers):
        modifiers.draw_boost_available = True
        assert modifiers.consume_draw_boost() is True
        assert modifiers.consume_draw_boost() is False

        modifiers.discard_redraw_available = True
        assert modifiers.consume_discard_redraw() is True
        assert modifiers.consume_discard_redraw() is False

    def test_reset(self, modifiers):
        modifiers.add_bonus(EvalType.FLUSH, 8)
        modifiers.set_card_multiplier(Rank.KING, 2)
        modifiers.draw_boost_available = True
        modifiers.reset()
        assert modifiers == ModifierSet()

    def test_to_dict(self, modifiers):
        modifiers.add_bonus(EvalType.PAIR, 3)
        data = modifiers.to_dict()
        assert data["bonuses"]["PAIR"] == 3
        assert "INVALID" not in data["bonuses"]


class TestMagicChoice:
    def test_targeted_choices(self):
        assert MagicChoice.SUIT_CHANGE.needs_target_card
        assert MagicChoice.CARD_MULTIPLIER.needs_target_card
        assert not MagicChoice.DRAW_BOOST.needs_target_card

    def test_lookup_by_id(self):
        assert MagicChoice("discard_redraw") == MagicChoice.DISCARD_REDRAW
