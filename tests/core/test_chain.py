"""Tests for chain tracking."""

import pytest
from decimal import Decimal

from bigtwo.chain import ChainTracker, is_chain_compatible
from bigtwo.evaluator import LADDER, EvalType


class TestCompatibility:
    """Tests for is_chain_compatible()."""

    @pytest.mark.parametrize("eval_type", LADDER)
    def test_repeat_is_compatible(self, eval_type):
        assert is_chain_compatible(eval_type, eval_type)

    @pytest.mark.parametrize("last, incoming", list(zip(LADDER, LADDER[1:])))
    def test_one_step_up_is_compatible(self, last, incoming):
        assert is_chain_compatible(last, incoming)

    @pytest.mark.parametrize("last, incoming", list(zip(LADDER[1:], LADDER)))
    def test_step_down_is_not(self, last, incoming):
        assert not is_chain_compatible(last, incoming)

    def test_skipping_is_not(self):
        assert not is_chain_compatible(EvalType.SINGLE, EvalType.STRAIGHT)
        assert not is_chain_compatible(EvalType.FLUSH, EvalType.STRAIGHT_FLUSH)

    @pytest.mark.parametrize("eval_type", LADDER)
    def test_nothing_follows_invalid(self, eval_type):
        assert not is_chain_compatible(EvalType.INVALID, eval_type)


class TestChainTracker:
    """Tests for the ChainTracker state machine."""

    def test_initial_state(self, chain):
        assert chain.last_type == EvalType.INVALID
        assert chain.chain_count == 0
        assert chain.chain_multiplier == Decimal("1")

    def test_ladder_sequence(self, chain):
        """Test Single, Pair, Straight, Flush counting up by one."""
        plays = [EvalType.SINGLE, EvalType.PAIR, EvalType.STRAIGHT, EvalType.FLUSH]

        results = [(chain.record(t), chain.chain_count) for t in plays]

        assert [count for _, count in results] == [1, 2, 3, 4]
        assert [mult for mult, _ in results] == [
            Decimal("1.0"),
            Decimal("1.25"),
            Decimal("1.5"),
            Decimal("1.75"),
        ]

    def test_skip_resets(self, chain):
        """Test that Single then Straight restarts the chain."""
        chain.record(EvalType.SINGLE)
        mult = chain.record(EvalType.STRAIGHT)

        assert chain.chain_count == 1
        assert mult == Decimal("1")
        assert chain.last_type == EvalType.STRAIGHT

    def test_repeats_extend(self, chain):
        for _ in range(5):
            chain.record(EvalType.PAIR)
        assert chain.chain_count == 5
        assert chain.chain_multiplier == Decimal("2")

    def test_backwards_resets(self, chain):
        chain.record(EvalType.FLUSH)
        chain.record(EvalType.FLUSH)
        chain.record(EvalType.PAIR)
        assert chain.chain_count == 1
        assert chain.chain_multiplier == Decimal("1")

    def test_multiplier_formula_holds(self, chain):
        for t in LADDER:
            chain.record(t)
            assert chain.chain_multiplier == 1 + Decimal("0.25") * (chain.chain_count - 1)

    def test_invalid_cannot_be_recorded(self, chain):
        chain.record(EvalType.SINGLE)
        with pytest.raises(ValueError):
            chain.record(EvalType.INVALID)
        assert chain.chain_count == 1

    def test_reset(self, chain):
        chain.record(EvalType.SINGLE)
        chain.record(EvalType.PAIR)
        chain.reset()
        assert chain.last_type == EvalType.INVALID
        assert chain.chain_count == 0
        assert chain.chain_multiplier == Decimal("1")

    def test_custom_step(self):
        chain = ChainTracker(step=Decimal("0.5"))
        chain.record(EvalType.SINGLE)
        assert chain.record(EvalType.SINGLE) == Decimal("1.5")
