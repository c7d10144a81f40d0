"""Round state enumeration."""

from enum import Enum, auto


class RoundState(Enum):
    """
    Round state machine states.

    Flow: WAITING → IN_PROGRESS → COMPLETE, and back to IN_PROGRESS on reset
    """

    # Table seated, nothing dealt yet
    WAITING = auto()

    # Some hand is still being played
    IN_PROGRESS = auto()

    # Every hand is finished and settled
    COMPLETE = auto()

    def __str__(self) -> str:
        return self.name.replace("_", " ").title()


# Valid state transitions
VALID_TRANSITIONS: dict[RoundState, list[RoundState]] = {
    RoundState.WAITING: [RoundState.IN_PROGRESS],
    RoundState.IN_PROGRESS: [RoundState.IN_PROGRESS, RoundState.COMPLETE],  # reset mid-round
    RoundState.COMPLETE: [RoundState.IN_PROGRESS],
}


def is_valid_transition(from_state: RoundState, to_state: RoundState) -> bool:
    """
    Check if a state transition is valid.

    Args:
        from_state: Current state
        to_state: Desired state

    Returns:
        True if the transition is allowed
    """
    return to_state in VALID_TRANSITIONS.get(from_state, [])
