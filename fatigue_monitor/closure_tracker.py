"""
Closure State Tracker Module
Counts consecutive closed-eye frames and raises the drowsiness alert

A single open frame resets the count and clears the alert immediately.
"""

import math
from numbers import Real
from typing import NamedTuple, Tuple

from .config import CLOSURE_THRESHOLD_FRAMES, EAR_CLOSED_THRESHOLD


class AlertState(NamedTuple):
    active: bool


class ClosureState(NamedTuple):
    consecutive_closed_frames: int = 0
    alert_active: bool = False


INITIAL_STATE = ClosureState()


def is_closed(ear, closed_threshold=EAR_CLOSED_THRESHOLD):
    """
    Classify one frame EAR.

    None, NaN, negative and non-numeric values count as open.
    """
    if isinstance(ear, bool) or not isinstance(ear, Real):
        return False
    if math.isnan(ear) or ear < 0:
        return False
    return ear < closed_threshold


def step(
    state: ClosureState,
    ear,
    closed_threshold: float = EAR_CLOSED_THRESHOLD,
    closure_threshold_frames: int = CLOSURE_THRESHOLD_FRAMES,
) -> Tuple[ClosureState, AlertState]:
    """
    Pure state transition for one frame.

    Args:
        state: Current closure state
        ear: Frame EAR
        closed_threshold: EAR strictly below this counts as closed
        closure_threshold_frames: Closed frames needed before alerting

    Returns:
        (new_state, alert_state)
    """
    if is_closed(ear, closed_threshold):
        count = state.consecutive_closed_frames + 1
    else:
        count = 0

    active = count >= closure_threshold_frames
    return ClosureState(count, active), AlertState(active)


def validate_thresholds(closed_threshold, closure_threshold_frames):
    if isinstance(closed_threshold, bool) or not isinstance(closed_threshold, Real):
        raise ValueError(f"closed_threshold must be a number, got {closed_threshold!r}")
    if not math.isfinite(closed_threshold) or closed_threshold <= 0:
        raise ValueError(f"closed_threshold must be a positive finite number, got {closed_threshold!r}")
    if isinstance(closure_threshold_frames, bool) or not isinstance(closure_threshold_frames, int):
        raise ValueError(f"closure_threshold_frames must be an integer, got {closure_threshold_frames!r}")
    if closure_threshold_frames < 1:
        raise ValueError(f"closure_threshold_frames must be >= 1, got {closure_threshold_frames}")


class ClosureTracker:
    """
    Holds the closure state between frames.

    update() is a state transition only: no sound, no drawing. Callers
    decide what to do with the returned AlertState.
    """

    def __init__(
        self,
        closed_threshold: float = EAR_CLOSED_THRESHOLD,
        closure_threshold_frames: int = CLOSURE_THRESHOLD_FRAMES,
    ):
        validate_thresholds(closed_threshold, closure_threshold_frames)
        self.closed_threshold = float(closed_threshold)
        self.closure_threshold_frames = closure_threshold_frames
        self._state = INITIAL_STATE

    def update(self, ear) -> AlertState:
        """
        Update tracking with a new frame EAR.

        Args:
            ear: Current frame EAR

        Returns:
            AlertState for this frame
        """
        self._state, alert = step(
            self._state, ear, self.closed_threshold, self.closure_threshold_frames
        )
        return alert

    def reset(self):
        """Start over, e.g. when the input stream restarts."""
        self._state = INITIAL_STATE

    @property
    def state(self) -> ClosureState:
        return self._state

    @property
    def consecutive_closed_frames(self) -> int:
        return self._state.consecutive_closed_frames

    @property
    def alert_active(self) -> bool:
        return self._state.alert_active
