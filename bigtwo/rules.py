"""Game constants for a run."""

from dataclasses import dataclass, field
from decimal import Decimal
from types import MappingProxyType
from typing import Mapping

from bigtwo.evaluator import EvalType


def _default_base_points() -> Mapping[EvalType, Decimal]:
    return MappingProxyType({
        EvalType.INVALID: Decimal("0"),
        EvalType.SINGLE: Decimal("1"),
        EvalType.PAIR: Decimal("2"),
        EvalType.STRAIGHT: Decimal("5"),
        EvalType.FLUSH: Decimal("6"),
        EvalType.FULL_HOUSE: Decimal("8"),
        EvalType.FOUR_OF_A_KIND: Decimal("10"),
        EvalType.STRAIGHT_FLUSH: Decimal("12"),
    })


def _default_level_overrides() -> Mapping[int, Mapping[EvalType, Decimal]]:
    # Singles lose value as levels rise; pairs are worth more on level 2
    return MappingProxyType({
        2: MappingProxyType({EvalType.SINGLE: Decimal("0.5"), EvalType.PAIR: Decimal("4")}),
        3: MappingProxyType({EvalType.SINGLE: Decimal("0")}),
    })


def _default_level_targets() -> Mapping[int, Decimal]:
    return MappingProxyType({
        1: Decimal("55"),
        2: Decimal("60"),
        3: Decimal("65"),
    })


@dataclass(frozen=True)
class RuleSet:
    """
    Scoring, economy, and progression constants.

    Level targets are cumulative: score carries over between levels.
    """

    # Hand configuration
    hand_size: int = 7

    # Scoring
    base_points: Mapping[EvalType, Decimal] = field(default_factory=_default_base_points)
    level_overrides: Mapping[int, Mapping[EvalType, Decimal]] = field(
        default_factory=_default_level_overrides
    )
    chain_step: Decimal = Decimal("0.25")
    card_multiplier_factor: int = 2

    # Economy
    gold_per_point: Decimal = Decimal("0.5")

    # Progression
    level_targets: Mapping[int, Decimal] = field(default_factory=_default_level_targets)

    # Narrative log length kept for display
    log_size: int = 8

    # Events retained per session; older ones are dropped
    history_size: int = 256

    def __post_init__(self) -> None:
        """Validate rule combinations."""
        if self.hand_size < 1:
            raise ValueError("hand_size must be at least 1")
        if self.chain_step < 0:
            raise ValueError("chain_step must not be negative")
        if self.gold_per_point < 0:
            raise ValueError("gold_per_point must not be negative")
        if self.card_multiplier_factor < 1:
            raise ValueError("card_multiplier_factor must be at least 1")
        if not self.level_targets:
            raise ValueError("level_targets must define at least one level")
        if sorted(self.level_targets) != list(range(1, len(self.level_targets) + 1)):
            raise ValueError("level_targets must be keyed 1..N without gaps")
        if self.log_size < 1:
            raise ValueError("log_size must be at least 1")
        if self.history_size < self.log_size:
            raise ValueError("history_size must be at least log_size")

    @property
    def max_level(self) -> int:
        """The last playable level; clearing it completes the run."""
        return len(self.level_targets)

    def target_for(self, level: int) -> Decimal:
        """Cumulative score needed to clear `level`."""
        return self.level_targets[min(level, self.max_level)]

    def base_for(self, eval_type: EvalType, level: int) -> Decimal:
        """Base points for a combination at the given level."""
        overrides = self.level_overrides.get(level, {})
        if eval_type in overrides:
            return overrides[eval_type]
        return self.base_points[eval_type]

    @classmethod
    def quick(cls) -> "RuleSet":
        """Short run with low targets, for demos and smoke tests."""
        return cls(
            level_targets=MappingProxyType({
                1: Decimal("5"),
                2: Decimal("10"),
                3: Decimal("15"),
            }),
        )
