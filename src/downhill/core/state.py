"""
State machine for the DOWNHILL game flow.

States:
    PLAYING: Frames are simulated and drawn
    PAUSED: Nothing moves; the pause icon is shown
"""

from enum import Enum, auto
from typing import Callable
import logging

logger = logging.getLogger(__name__)


class GameMode(Enum):
    """Game flow states."""
    PLAYING = auto()
    PAUSED = auto()


StateListener = Callable[[GameMode, GameMode], None]


class StateMachine:
    """
    Manages the game mode and its transitions.

    Only the transitions listed in VALID_TRANSITIONS are allowed;
    listeners are notified after every successful change.
    """

    VALID_TRANSITIONS: list[tuple[GameMode, GameMode]] = [
        (GameMode.PLAYING, GameMode.PAUSED),
        (GameMode.PAUSED, GameMode.PLAYING),
    ]

    def __init__(self, initial_state: GameMode = GameMode.PLAYING) -> None:
        self._initial_state = initial_state
        self._state = initial_state
        self._listeners: list[StateListener] = []
        self._valid_transitions = set(self.VALID_TRANSITIONS)
        logger.info(f"StateMachine initialized with state: {initial_state.name}")

    @property
    def state(self) -> GameMode:
        """Get current state."""
        return self._state

    def can_transition(self, to_state: GameMode) -> bool:
        """Check if transition to given state is valid."""
        return (self._state, to_state) in self._valid_transitions

    def transition(self, to_state: GameMode) -> bool:
        """
        Attempt to transition to a new state.

        Args:
            to_state: Target state

        Returns:
            True if transition successful, False otherwise
        """
        if not self.can_transition(to_state):
            logger.warning(
                f"Invalid transition: {self._state.name} -> {to_state.name}"
            )
            return False

        old_state = self._state
        self._state = to_state

        logger.info(f"State transition: {old_state.name} -> {to_state.name}")
        self._notify(old_state, to_state)
        return True

    def add_listener(self, callback: StateListener) -> None:
        """Add a state change listener."""
        self._listeners.append(callback)

    def reset(self, notify: bool = True) -> None:
        """
        Reset state machine to its initial state.

        Args:
            notify: Tell listeners about the change, if there is one
        """
        old_state = self._state
        self._state = self._initial_state

        if notify and old_state != self._state:
            self._notify(old_state, self._state)

        logger.info(f"StateMachine reset to {self._state.name}")

    def _notify(self, old_state: GameMode, new_state: GameMode) -> None:
        for listener in self._listeners:
            try:
                listener(old_state, new_state)
            except Exception as e:
                logger.error(f"Error in state listener: {e}")
