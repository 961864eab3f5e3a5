import pytest

from fatigue_monitor.ear_detector import LEFT_EYE, RIGHT_EYE, LandmarkPoint

FACE_MESH_SIZE = 478

OPEN_EYE = ((0.5, 0.40), (0.5, 0.46), (0.42, 0.40))     # EAR 0.75
CLOSED_EYE = ((0.5, 0.40), (0.5, 0.408), (0.42, 0.40))  # EAR 0.1


def make_frame(left=OPEN_EYE, right=OPEN_EYE, size=FACE_MESH_SIZE):
    """Face Mesh sized landmark list with the given (upper, lower, lateral) per eye."""
    frame = [LandmarkPoint(0.5, 0.5)] * size
    for eye, points in ((LEFT_EYE, left), (RIGHT_EYE, right)):
        for index, (x, y) in zip(eye, points):
            frame[index] = LandmarkPoint(x, y)
    return frame


@pytest.fixture
def open_frame():
    return make_frame(OPEN_EYE, OPEN_EYE)


@pytest.fixture
def closed_frame():
    return make_frame(CLOSED_EYE, CLOSED_EYE)
