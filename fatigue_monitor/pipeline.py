"""
Drowsiness Pipeline Module
Runs EAR calculation and closure tracking once per landmark frame
"""

import threading
from typing import Iterable, Iterator, NamedTuple, Optional

from .closure_tracker import AlertState, ClosureTracker
from .config import CLOSURE_THRESHOLD_FRAMES, EAR_CLOSED_THRESHOLD
from .ear_detector import EYES, compute_frame_ear
from .errors import LandmarkError


class FrameResult(NamedTuple):
    ear: Optional[float]
    alert: AlertState
    consecutive_closed_frames: int
    skipped: Optional[str] = None  # anomaly name when the frame produced no EAR


class DrowsinessPipeline:
    """
    Landmarks in, alert level out.

    Frames with missing landmarks or degenerate eye geometry are skipped:
    the closed-frame count and alert stay as they were. Calls are
    serialized with a lock so a callback-driven frame source cannot
    interleave two updates.
    """

    def __init__(
        self,
        closed_threshold: float = EAR_CLOSED_THRESHOLD,
        closure_threshold_frames: int = CLOSURE_THRESHOLD_FRAMES,
        eyes=EYES,
    ):
        self.tracker = ClosureTracker(closed_threshold, closure_threshold_frames)
        self.eyes = eyes
        self.frames_processed = 0
        self.frames_skipped = 0
        self._lock = threading.Lock()

    def process(self, frame_landmarks) -> FrameResult:
        """
        Process one frame of landmarks.

        Args:
            frame_landmarks: Indexable landmark sequence for one face

        Returns:
            FrameResult with the frame EAR (None if skipped) and alert state
        """
        with self._lock:
            self.frames_processed += 1
            try:
                ear = compute_frame_ear(frame_landmarks, self.eyes)
            except LandmarkError as e:
                self.frames_skipped += 1
                state = self.tracker.state
                return FrameResult(
                    None,
                    AlertState(state.alert_active),
                    state.consecutive_closed_frames,
                    type(e).__name__,
                )

            alert = self.tracker.update(ear)
            return FrameResult(ear, alert, self.tracker.consecutive_closed_frames)

    # Bound-callback form for event-driven frame sources
    on_landmarks = process

    def process_stream(self, frames: Iterable) -> Iterator[FrameResult]:
        """Yield one FrameResult per landmark frame of an iterable source."""
        for frame_landmarks in frames:
            yield self.process(frame_landmarks)

    def reset(self):
        """Reset tracking and counters (e.g. on input stream restart)."""
        with self._lock:
            self.tracker.reset()
            self.frames_processed = 0
            self.frames_skipped = 0

    def reset_tracking(self):
        """Clear the closed-frame count and alert, keeping the frame counters."""
        with self._lock:
            self.tracker.reset()

    @property
    def alert_active(self) -> bool:
        return self.tracker.alert_active

    @property
    def closed_threshold(self) -> float:
        return self.tracker.closed_threshold

    @property
    def closure_threshold_frames(self) -> int:
        return self.tracker.closure_threshold_frames
