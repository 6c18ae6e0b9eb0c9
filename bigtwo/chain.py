"""Chain tracking: consecutive compatible plays earn a growing multiplier."""

from dataclasses import dataclass
from decimal import Decimal

from bigtwo.evaluator import LADDER, EvalType


def is_chain_compatible(last: EvalType, incoming: EvalType) -> bool:
    """
    Check whether `incoming` continues a chain ending in `last`.

    A repeat of the same type continues the chain, as does exactly one step up
    the ladder. Nothing continues a chain from INVALID.
    """
    if last is EvalType.INVALID or incoming is EvalType.INVALID:
        return False
    if incoming is last:
        return True
    return LADDER.index(incoming) == LADDER.index(last) + 1


@dataclass
class ChainTracker:
    """
    Tracks the current chain across plays and levels.

    Only a run restart resets the tracker.
    """

    last_type: EvalType = EvalType.INVALID
    chain_count: int = 0
    chain_multiplier: Decimal = Decimal("1")
    step: Decimal = Decimal("0.25")

    def is_compatible(self, incoming: EvalType) -> bool:
        """Check whether a play of `incoming` would extend the chain."""
        return is_chain_compatible(self.last_type, incoming)

    def record(self, incoming: EvalType) -> Decimal:
        """
        Register a successfully evaluated play.

        Args:
            incoming: The play's combination type

        Returns:
            The multiplier that applies to this play
        """
        if not incoming.is_valid:
            raise ValueError("Invalid plays cannot be chained")

        if self.is_compatible(incoming):
            self.chain_count += 1
        else:
            self.chain_count = 1
        self.chain_multiplier = Decimal("1") + self.step * (self.chain_count - 1)
        self.last_type = incoming
        return self.chain_multiplier

    def reset(self) -> None:
        """Return to the initial (INVALID, 0, 1.0) state."""
        self.last_type = EvalType.INVALID
        self.chain_count = 0
        self.chain_multiplier = Decimal("1")
