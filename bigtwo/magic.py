"""Persistent scoring modifiers and the level-up magic choices."""

from dataclasses import dataclass, field
from enum import Enum

from bigtwo.cards import Rank
from bigtwo.evaluator import LADDER, EvalType


class MagicChoice(Enum):
    """Upgrades offered after each level clear."""

    HAND_SCORE_UPGRADE = "hand_score_upgrade"
    SUIT_CHANGE = "suit_change"
    CARD_MULTIPLIER = "card_multiplier"
    DISCARD_REDRAW = "discard_redraw"
    DRAW_BOOST = "draw_boost"

    def __str__(self) -> str:
        return self.value.replace("_", " ").title()

    @property
    def needs_target_card(self) -> bool:
        """Check if the choice acts on a card picked from the hand."""
        return self in (MagicChoice.SUIT_CHANGE, MagicChoice.CARD_MULTIPLIER)


# Pair bonus granted by the hand score upgrade
HAND_SCORE_UPGRADE_BONUS = 3


def _empty_bonuses() -> dict[EvalType, int]:
    return {eval_type: 0 for eval_type in LADDER}


@dataclass
class ModifierSet:
    """Bonuses bought in the shop or granted by magic."""

    bonuses: dict[EvalType, int] = field(default_factory=_empty_bonuses)
    card_multiplier_rank: int = 0  # 0 = unset
    card_multiplier_factor: int = 1
    draw_boost_available: bool = False
    discard_redraw_available: bool = False

    def bonus_for(self, eval_type: EvalType) -> int:
        """Permanent additive bonus for a combination type."""
        return self.bonuses.get(eval_type, 0)

    def add_bonus(self, eval_type: EvalType, amount: int) -> None:
        """Stack a permanent bonus onto a combination type."""
        if not eval_type.is_valid:
            raise ValueError("Cannot add a bonus to invalid plays")
        self.bonuses[eval_type] = self.bonus_for(eval_type) + amount

    def set_card_multiplier(self, rank: Rank, factor: int) -> None:
        """Replace any previous rank multiplier."""
        self.card_multiplier_rank = rank.value
        self.card_multiplier_factor = factor

    @property
    def has_card_multiplier(self) -> bool:
        """Check if a rank multiplier is active."""
        return self.card_multiplier_rank >= 2 and self.card_multiplier_factor > 1

    def consume_draw_boost(self) -> bool:
        """Use the draw boost if armed. Returns whether it was armed."""
        armed = self.draw_boost_available
        self.draw_boost_available = False
        return armed

    def consume_discard_redraw(self) -> bool:
        """Use the redraw if armed. Returns whether it was armed."""
        armed = self.discard_redraw_available
        self.discard_redraw_available = False
        return armed

    def reset(self) -> None:
        """Restore defaults for a new run."""
        self.bonuses = _empty_bonuses()
        self.card_multiplier_rank = 0
        self.card_multiplier_factor = 1
        self.draw_boost_available = False
        self.discard_redraw_available = False

    def to_dict(self) -> dict:
        """Plain representation for snapshots."""
        return {
            "bonuses": {t.name: v for t, v in self.bonuses.items()},
            "card_multiplier_rank": self.card_multiplier_rank,
            "card_multiplier_factor": self.card_multiplier_factor,
            "draw_boost_available": self.draw_boost_available,
            "discard_redraw_available": self.discard_redraw_available,
        }
