import math

import pytest

from conftest import CLOSED_EYE, OPEN_EYE, make_frame
from fatigue_monitor.ear_detector import (
    LEFT_EYE,
    RIGHT_EYE,
    EyeLandmarkIndices,
    LandmarkPoint,
    compute_ear,
    compute_eye_ears,
    compute_frame_ear,
)
from fatigue_monitor.errors import DegenerateGeometry, LandmarkError, MissingLandmark


def test_landmark_indices():
    assert LEFT_EYE == (159, 145, 33)
    assert RIGHT_EYE == (386, 374, 263)


def test_worked_example():
    ear = compute_ear(LandmarkPoint(0.5, 0.40), LandmarkPoint(0.5, 0.46), LandmarkPoint(0.42, 0.40))
    assert ear == pytest.approx(0.75)


def test_horizontal_reference_is_lateral_to_upper():
    # lower lid far to the side must not change the horizontal reference
    ear = compute_ear((0.0, 0.0), (0.3, 0.4), (0.1, 0.0))
    assert ear == pytest.approx(0.5 / 0.1)


def test_accepts_plain_tuples():
    assert compute_ear((0.5, 0.40), (0.5, 0.46), (0.42, 0.40)) == pytest.approx(0.75)


@pytest.mark.parametrize("dx,dy", [(0.1, 0.2), (-0.3, 0.05), (0.0, -0.25)])
def test_translation_invariant(dx, dy):
    upper, lower, lateral = (0.5, 0.40), (0.5, 0.46), (0.42, 0.40)
    moved = [(x + dx, y + dy) for x, y in (upper, lower, lateral)]
    assert compute_ear(*moved) == pytest.approx(compute_ear(upper, lower, lateral))


def test_result_is_non_negative_and_finite():
    ear = compute_ear((0.3, 0.3), (0.3, 0.3), (0.2, 0.3))
    assert ear == 0.0
    ear = compute_ear((0.61, 0.2), (0.35, 0.9), (0.6, 0.21))
    assert ear > 0 and math.isfinite(ear)


def test_coincident_points_raise_degenerate_geometry():
    with pytest.raises(DegenerateGeometry):
        compute_ear((0.5, 0.5), (0.5, 0.6), (0.5, 0.5))


def test_frame_ear_is_mean_of_both_eyes():
    frame = make_frame(OPEN_EYE, CLOSED_EYE)
    left, right = compute_eye_ears(frame)
    assert left == pytest.approx(0.75)
    assert right == pytest.approx(0.1)
    assert compute_frame_ear(frame) == pytest.approx((0.75 + 0.1) / 2)


def test_frame_ear_colocated_landmarks(open_frame):
    frame = [LandmarkPoint(0.4, 0.4)] * len(open_frame)
    with pytest.raises(DegenerateGeometry):
        compute_frame_ear(frame)


def test_frame_ear_is_repeatable(open_frame):
    assert compute_frame_ear(open_frame) == compute_frame_ear(open_frame)


def test_short_frame_raises_missing_landmark():
    frame = [LandmarkPoint(0.5, 0.5)] * 200
    for index, (x, y) in zip(LEFT_EYE, OPEN_EYE):
        frame[index] = LandmarkPoint(x, y)
    with pytest.raises(MissingLandmark) as excinfo:
        compute_frame_ear(frame)
    # left eye resolves, right eye upper lid does not
    assert excinfo.value.index == RIGHT_EYE.upper


def test_mapping_without_index_raises_missing_landmark():
    frame = {159: (0.5, 0.40), 145: (0.5, 0.46)}
    with pytest.raises(MissingLandmark) as excinfo:
        compute_frame_ear(frame)
    assert excinfo.value.index == 33


def test_none_entry_raises_missing_landmark(open_frame):
    open_frame[LEFT_EYE.lower] = None
    with pytest.raises(MissingLandmark):
        compute_frame_ear(open_frame)


def test_errors_share_a_base():
    assert issubclass(MissingLandmark, LandmarkError)
    assert issubclass(DegenerateGeometry, LandmarkError)


def test_unwraps_landmark_list(open_frame):
    class LandmarkList:
        def __init__(self, landmark):
            self.landmark = landmark

    assert compute_frame_ear(LandmarkList(open_frame)) == pytest.approx(0.75)


def test_custom_eye_indices():
    frame = [LandmarkPoint(0.5, 0.5)] * 10
    frame[0], frame[1], frame[2] = LandmarkPoint(0.5, 0.40), LandmarkPoint(0.5, 0.46), LandmarkPoint(0.42, 0.40)
    eye = EyeLandmarkIndices(upper=0, lower=1, lateral=2)
    assert compute_frame_ear(frame, eyes=(eye,)) == pytest.approx(0.75)


def test_none_frame_raises_missing_landmark():
    with pytest.raises(MissingLandmark) as excinfo:
        compute_frame_ear(None)
    assert excinfo.value.index == LEFT_EYE.upper
