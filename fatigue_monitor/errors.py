"""
Per-frame landmark anomalies

Both are recoverable: the pipeline skips the frame and keeps going.
"""


class LandmarkError(ValueError):
    """Base class for frames that cannot produce an EAR."""


class MissingLandmark(LandmarkError):
    """A required landmark index is absent from the frame."""

    def __init__(self, index, message=None):
        self.index = index
        super().__init__(message or f"landmark {index} missing from frame")


class DegenerateGeometry(LandmarkError):
    """Horizontal reference distance is zero (coincident points)."""
