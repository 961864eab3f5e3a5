"""
EAR (Eye Aspect Ratio) Detection Module
Calculates EAR for a single eye from three landmarks and the frame EAR for both eyes
"""

from typing import NamedTuple

import numpy as np

from .errors import DegenerateGeometry, MissingLandmark


class LandmarkPoint(NamedTuple):
    """Normalized image-space coordinate (0.0-1.0, origin top-left)."""
    x: float
    y: float


class EyeLandmarkIndices(NamedTuple):
    """Face Mesh indices of the three points used per eye."""
    upper: int
    lower: int
    lateral: int


# MediaPipe Face Mesh landmark indices
LEFT_EYE = EyeLandmarkIndices(upper=159, lower=145, lateral=33)
RIGHT_EYE = EyeLandmarkIndices(upper=386, lower=374, lateral=263)
EYES = (LEFT_EYE, RIGHT_EYE)


def _as_array(point):
    # Accepts LandmarkPoint / mediapipe NormalizedLandmark (.x, .y) or an (x, y) pair
    if hasattr(point, "x") and hasattr(point, "y"):
        coords = (point.x, point.y)
    else:
        coords = (point[0], point[1])
    return np.array(coords, dtype=np.float64)


def compute_ear(upper, lower, lateral):
    """
    Calculate EAR for a single eye.

    EAR = |upper - lower| / |lateral - upper|

    The horizontal reference is the lateral corner to the upper lid, a
    single-pair approximation of the classic six-point formula.

    Args:
        upper: Upper lid point
        lower: Lower lid point
        lateral: Lateral eye corner point

    Returns:
        EAR value (float)

    Raises:
        DegenerateGeometry: If the horizontal distance is zero
    """
    upper, lower, lateral = _as_array(upper), _as_array(lower), _as_array(lateral)
    vertical = np.linalg.norm(upper - lower)
    horizontal = np.linalg.norm(lateral - upper)

    if horizontal == 0:
        raise DegenerateGeometry("lateral and upper eye landmarks coincide")

    return float(vertical / horizontal)


def _landmark(frame_landmarks, index):
    try:
        point = frame_landmarks[index]
    except (IndexError, KeyError, TypeError):
        raise MissingLandmark(index) from None
    if point is None:
        raise MissingLandmark(index)
    try:
        return _as_array(point)
    except (TypeError, ValueError, IndexError, KeyError):
        raise MissingLandmark(index, f"landmark {index} has no usable coordinates") from None


def compute_eye_ears(frame_landmarks, eyes=EYES):
    """
    Calculate EAR for each eye of a frame.

    Args:
        frame_landmarks: Indexable landmark sequence, or a mediapipe
            NormalizedLandmarkList
        eyes: Landmark indices per eye (defaults to LEFT_EYE, RIGHT_EYE)

    Returns:
        Tuple with one EAR per eye, in the order of `eyes`
    """
    # mediapipe NormalizedLandmarkList keeps the points under .landmark
    points = getattr(frame_landmarks, "landmark", frame_landmarks)

    ears = []
    for eye in eyes:
        upper = _landmark(points, eye.upper)
        lower = _landmark(points, eye.lower)
        lateral = _landmark(points, eye.lateral)
        ears.append(compute_ear(upper, lower, lateral))
    return tuple(ears)


def compute_frame_ear(frame_landmarks, eyes=EYES):
    """
    Calculate the average EAR of both eyes for one frame.

    Raises:
        MissingLandmark: If a required index is absent
        DegenerateGeometry: If either eye has a zero horizontal distance
    """
    ears = compute_eye_ears(frame_landmarks, eyes)
    return sum(ears) / len(ears)
