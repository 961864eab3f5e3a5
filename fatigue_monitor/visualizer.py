"""
Visualization Module
Draws EAR, closed-frame count and the drowsiness warning on the video frame
"""

import cv2

from .config import ALERT_MESSAGE

# State color mapping (BGR)
COLOR_MAP = {
    "OPEN": (0, 255, 0),         # Green
    "CLOSING": (0, 255, 255),    # Yellow
    "ALERT": (0, 0, 255),        # Red
    "NO_FACE": (255, 255, 255),  # White
}


def phase_of(result):
    """Label for a FrameResult (None means no face in the frame)."""
    if result is None:
        return "NO_FACE"
    if result.alert.active:
        return "ALERT"
    if result.consecutive_closed_frames > 0:
        return "CLOSING"
    return "OPEN"


def draw_overlay(frame, result, closed_threshold, closure_threshold_frames, message=ALERT_MESSAGE):
    """
    Draw the monitor state on the frame.

    Args:
        frame: BGR image frame
        result: FrameResult for this frame, or None if no face was found
        closed_threshold: EAR threshold (shown next to the EAR)
        closure_threshold_frames: Closed frames needed before alerting
        message: Warning text shown while the alert is active
    """
    phase = phase_of(result)
    color = COLOR_MAP.get(phase, (255, 255, 255))

    cv2.putText(frame, f"State: {phase}", (10, 30), cv2.FONT_HERSHEY_SIMPLEX, 0.7, color, 2)

    if result is not None:
        if result.ear is not None:
            ear_text = f"EAR: {result.ear:.3f} (closed < {closed_threshold:.2f})"
        else:
            ear_text = f"EAR: -- ({result.skipped})"
        cv2.putText(frame, ear_text, (10, 60), cv2.FONT_HERSHEY_SIMPLEX, 0.5, (0, 0, 0), 1)
        cv2.putText(
            frame,
            f"Closed frames: {result.consecutive_closed_frames}/{closure_threshold_frames}",
            (10, 80),
            cv2.FONT_HERSHEY_SIMPLEX,
            0.5,
            (0, 0, 0),
            1,
        )

    if phase == "ALERT":
        h, w = frame.shape[:2]
        text_size = cv2.getTextSize(message, cv2.FONT_HERSHEY_SIMPLEX, 0.8, 2)[0]
        x = max(10, (w - text_size[0]) // 2)
        y = h - 10
        cv2.rectangle(frame, (x - 5, y - text_size[1] - 5), (x + text_size[0] + 5, y + 5), (0, 0, 0), -1)
        cv2.putText(frame, message, (x, y), cv2.FONT_HERSHEY_SIMPLEX, 0.8, (0, 0, 255), 2)

    return frame
