"""Run state enumeration."""

from enum import Enum, auto


class RunState(Enum):
    """
    Run progression states.

    Flow: IN_PROGRESS → AWAITING_SHOP → AWAITING_MAGIC_CHOICE → IN_PROGRESS (next level) … → COMPLETED
    """

    # Playing the current level
    IN_PROGRESS = auto()

    # Level target reached, shop open
    AWAITING_SHOP = auto()

    # Shop closed, one magic choice pending
    AWAITING_MAGIC_CHOICE = auto()

    # Deck and hand exhausted below target
    FAILED = auto()

    # Final level cleared
    COMPLETED = auto()

    def __str__(self) -> str:
        return self.name.replace("_", " ").title()

    @property
    def is_terminal(self) -> bool:
        """Check if no further play is possible without a restart."""
        return self in (RunState.FAILED, RunState.COMPLETED)


# Valid state transitions (restart is allowed from every state)
VALID_TRANSITIONS: dict[RunState, list[RunState]] = {
    RunState.IN_PROGRESS: [RunState.AWAITING_SHOP, RunState.FAILED, RunState.IN_PROGRESS],
    RunState.AWAITING_SHOP: [RunState.AWAITING_MAGIC_CHOICE, RunState.IN_PROGRESS],
    RunState.AWAITING_MAGIC_CHOICE: [RunState.IN_PROGRESS, RunState.COMPLETED],
    RunState.FAILED: [RunState.IN_PROGRESS],
    RunState.COMPLETED: [RunState.IN_PROGRESS],
}


def is_valid_transition(from_state: RunState, to_state: RunState) -> bool:
    """
    Check if a state transition is valid.

    Args:
        from_state: Current state
        to_state: Desired state

    Returns:
        True if the transition is allowed
    """
    return to_state in VALID_TRANSITIONS.get(from_state, [])
