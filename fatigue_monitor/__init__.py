"""
Driver Fatigue Monitor

Eye-closure drowsiness detection from facial landmarks:
- EAR calculation (ear_detector)
- Consecutive closed-frame tracking (closure_tracker)
- Per-frame pipeline joining both (pipeline)

The camera, face mesh, overlay, sound and cloud modules are only
needed by the desktop monitor (main.py).
"""

from .errors import DegenerateGeometry, LandmarkError, MissingLandmark
from .ear_detector import LandmarkPoint, compute_ear, compute_frame_ear
from .closure_tracker import AlertState, ClosureState, ClosureTracker, step
from .pipeline import DrowsinessPipeline, FrameResult

__version__ = "1.0.0"

__all__ = [
    "AlertState",
    "ClosureState",
    "ClosureTracker",
    "DegenerateGeometry",
    "DrowsinessPipeline",
    "FrameResult",
    "LandmarkError",
    "LandmarkPoint",
    "MissingLandmark",
    "compute_ear",
    "compute_frame_ear",
    "step",
]
