from types import SimpleNamespace

import numpy as np
import pytest

mp = pytest.importorskip("mediapipe")
if not hasattr(mp, "solutions"):
    pytest.skip("mediapipe build without the solutions API", allow_module_level=True)

from fatigue_monitor import face_detector  # noqa: E402
from fatigue_monitor.ear_detector import LandmarkPoint  # noqa: E402


class FakeFaceMesh:
    def __init__(self, **options):
        self.options = options
        self.faces = None
        self.frames = []
        self.closed = False

    def process(self, rgb):
        self.frames.append(rgb)
        return SimpleNamespace(multi_face_landmarks=self.faces)

    def close(self):
        self.closed = True


def landmark(x, y, z=0.0):
    return SimpleNamespace(x=x, y=y, z=z)


@pytest.fixture
def detector(monkeypatch):
    monkeypatch.setattr(face_detector.mp_face_mesh, "FaceMesh", FakeFaceMesh)
    return face_detector.FaceDetector(draw_face_mesh=False)


def frame(h=100, w=200):
    return np.zeros((h, w, 3), dtype=np.uint8)


def test_face_mesh_options(detector):
    options = detector.face_mesh.options
    assert options["max_num_faces"] == 1
    assert options["refine_landmarks"] is True
    assert options["min_detection_confidence"] == 0.5
    assert options["min_tracking_confidence"] == 0.5


def test_detect_returns_first_face_as_points(detector):
    first = SimpleNamespace(landmark=[landmark(0.1, 0.2), landmark(0.3, 0.4)])
    second = SimpleNamespace(landmark=[landmark(0.9, 0.9)])
    detector.face_mesh.faces = [first, second]

    image = frame()
    image[..., 0] = 255  # blue in BGR
    points = detector.detect(image)

    assert points == [LandmarkPoint(0.1, 0.2), LandmarkPoint(0.3, 0.4)]
    assert all(isinstance(p, LandmarkPoint) for p in points)
    # model gets RGB
    assert (detector.face_mesh.frames[0][..., 2] == 255).all()


def test_detect_without_face_returns_none(detector):
    detector.face_mesh.faces = []
    assert detector.detect(frame()) is None
    detector.face_mesh.faces = None
    assert detector.detect(frame()) is None


def test_draw_landmarks_scales_to_frame(detector):
    image = detector.draw_landmarks(frame(), [LandmarkPoint(0.5, 0.25)], color=(0, 0, 255), radius=2)
    assert tuple(image[25, 100]) == (0, 0, 255)
    assert tuple(image[0, 0]) == (0, 0, 0)
    assert tuple(image[90, 190]) == (0, 0, 0)


def test_mesh_drawing_is_off_unless_enabled(detector):
    points = [LandmarkPoint(x, y) for x, y in np.random.default_rng(0).random((478, 2))]
    image = detector.draw_face_mesh_landmarks(frame(), points)
    assert not image.any()


def test_mesh_drawing_skips_edges_past_the_landmark_list(detector):
    detector.draw_face_mesh = True
    image = detector.draw_face_mesh_landmarks(frame(), [LandmarkPoint(0.5, 0.5)])
    assert not image.any()


def test_mesh_drawing_draws_full_face(detector):
    detector.draw_face_mesh = True
    points = [LandmarkPoint(x, y) for x, y in np.random.default_rng(0).random((478, 2))]
    image = detector.draw_face_mesh_landmarks(frame(), points)
    assert image.any()


def test_close_releases_model(detector):
    detector.close()
    assert detector.face_mesh.closed
