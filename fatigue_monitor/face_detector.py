"""
Face Detection Module
MediaPipe Face Mesh detection and landmark drawing
"""

import cv2
import mediapipe as mp

from .config import (
    DRAW_FACE_MESH,
    LANDMARK_COLOR,
    LANDMARK_RADIUS,
    MAX_NUM_FACES,
    MIN_DETECTION_CONFIDENCE,
    MIN_TRACKING_CONFIDENCE,
    REFINE_LANDMARKS,
)
from .ear_detector import LandmarkPoint

mp_face_mesh = mp.solutions.face_mesh

MESH_COLOR = (255, 255, 255)  # White in BGR


class FaceDetector:
    """
    MediaPipe Face Mesh detector returning normalized landmarks for one face.
    """

    def __init__(self, draw_face_mesh=DRAW_FACE_MESH):
        """
        Initialize face detector.

        Args:
            draw_face_mesh: If True, draw the mesh tesselation instead of dots
        """
        self.face_mesh = mp_face_mesh.FaceMesh(
            static_image_mode=False,
            max_num_faces=MAX_NUM_FACES,
            refine_landmarks=REFINE_LANDMARKS,
            min_detection_confidence=MIN_DETECTION_CONFIDENCE,
            min_tracking_confidence=MIN_TRACKING_CONFIDENCE,
        )
        self.draw_face_mesh = draw_face_mesh

    def detect(self, frame):
        """
        Detect face landmarks from frame.

        Args:
            frame: BGR image frame

        Returns:
            List of LandmarkPoint (normalized) for the first face, or None
        """
        rgb = cv2.cvtColor(frame, cv2.COLOR_BGR2RGB)
        results = self.face_mesh.process(rgb)

        if not results.multi_face_landmarks:
            return None

        face = results.multi_face_landmarks[0]
        return [LandmarkPoint(lm.x, lm.y) for lm in face.landmark]

    def draw_landmarks(self, frame, landmarks, color=LANDMARK_COLOR, radius=LANDMARK_RADIUS):
        """
        Draw every landmark as a filled dot.

        Args:
            frame: BGR image frame
            landmarks: Normalized landmark points
            color: BGR color tuple
            radius: Dot radius in pixels
        """
        h, w = frame.shape[:2]
        for point in landmarks:
            center = (int(point.x * w), int(point.y * h))
            cv2.circle(frame, center, radius, color, -1)
        return frame

    def draw_face_mesh_landmarks(self, frame, landmarks):
        """
        Draw the Face Mesh tesselation on the frame (if enabled).

        Args:
            frame: BGR image frame
            landmarks: Normalized landmark points
        """
        if not landmarks or not self.draw_face_mesh:
            return frame

        h, w = frame.shape[:2]
        for start, end in mp_face_mesh.FACEMESH_TESSELATION:
            if start >= len(landmarks) or end >= len(landmarks):
                continue
            p1, p2 = landmarks[start], landmarks[end]
            cv2.line(
                frame,
                (int(p1.x * w), int(p1.y * h)),
                (int(p2.x * w), int(p2.y * h)),
                MESH_COLOR,
                1,
            )
        return frame

    def close(self):
        """Release the Face Mesh graph."""
        self.face_mesh.close()
