"""
Scoring engine.

points = (level base + permanent bonus) × chain multiplier × card multiplier
"""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Sequence

from bigtwo.cards import Card
from bigtwo.evaluator import EvalType
from bigtwo.magic import ModifierSet
from bigtwo.rules import RuleSet


@dataclass
class ScoreBreakdown:
    """Detailed breakdown of how a play was scored."""

    eval_type: EvalType
    base: Decimal
    bonus: int
    chain_multiplier: Decimal
    card_multiplier: int
    points: Decimal
    gold: Decimal
    details: list[str] = field(default_factory=list)

    def add_detail(self, msg: str) -> None:
        self.details.append(msg)


def card_multiplier_for(cards: Sequence[Card], modifiers: ModifierSet) -> int:
    """
    Factor from the rank multiplier magic.

    Applies once when any played card matches, no matter how many do.
    """
    if not modifiers.has_card_multiplier:
        return 1
    if any(c.rank.value == modifiers.card_multiplier_rank for c in cards):
        return modifiers.card_multiplier_factor
    return 1


def base_points(eval_type: EvalType, level: int, rules: RuleSet | None = None) -> Decimal:
    """Level-adjusted base points for a combination."""
    rules = rules or RuleSet()
    return rules.base_for(eval_type, level)


def score_play(
    eval_type: EvalType,
    cards: Sequence[Card],
    level: int,
    modifiers: ModifierSet,
    chain_multiplier: Decimal = Decimal("1"),
    rules: RuleSet | None = None,
) -> ScoreBreakdown:
    """
    Score a classified play.

    Args:
        eval_type: Classification of the played cards
        cards: The played cards (for the rank multiplier)
        level: Current level
        modifiers: Permanent bonuses and rank multiplier
        chain_multiplier: Multiplier returned by the chain tracker for this play
        rules: Scoring constants (defaults if not provided)

    Returns:
        Breakdown including points and the gold they earn
    """
    rules = rules or RuleSet()

    if not eval_type.is_valid:
        raise ValueError("Invalid plays are rejected before scoring")

    base = rules.base_for(eval_type, level)
    bonus = modifiers.bonus_for(eval_type)
    card_mult = card_multiplier_for(cards, modifiers)

    points = (base + bonus) * chain_multiplier * card_mult
    gold = points * rules.gold_per_point

    breakdown = ScoreBreakdown(
        eval_type=eval_type,
        base=base,
        bonus=bonus,
        chain_multiplier=chain_multiplier,
        card_multiplier=card_mult,
        points=points,
        gold=gold,
    )
    breakdown.add_detail(f"{eval_type}: {base} base")
    if bonus:
        breakdown.add_detail(f"+{bonus} bonus")
    if chain_multiplier != 1:
        breakdown.add_detail(f"x{chain_multiplier} chain")
    if card_mult != 1:
        breakdown.add_detail(f"x{card_mult} card multiplier")
    return breakdown
