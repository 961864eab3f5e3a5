"""
Camera Utilities Module
Opens a working capture device, probing backends and indices
"""

import time

import cv2

from .config import (
    CAMERA_BACKEND,
    CAMERA_INDEX,
    CAMERA_PROBE_COUNT,
    FRAME_HEIGHT,
    FRAME_WIDTH,
    TARGET_FPS,
)


def backend_candidates(backend=CAMERA_BACKEND):
    """
    Get list of camera backends to try.

    Returns:
        List of backend constants, None meaning the OpenCV default
    """
    backend = str(backend).upper()
    if backend == "DSHOW" and hasattr(cv2, "CAP_DSHOW"):
        return [cv2.CAP_DSHOW]
    if backend == "MSMF" and hasattr(cv2, "CAP_MSMF"):
        return [cv2.CAP_MSMF]

    # AUTO: Windows backends first, then default
    candidates = [getattr(cv2, name) for name in ("CAP_DSHOW", "CAP_MSMF") if hasattr(cv2, name)]
    candidates.append(None)
    return candidates


def probe_indices(index=CAMERA_INDEX, probe_count=CAMERA_PROBE_COUNT):
    """Requested index first, then the rest of 0..probe_count-1."""
    return [index] + [i for i in range(probe_count) if i != index]


def _warm_up(cap, attempts=10):
    for _ in range(attempts):
        ret, _frame = cap.read()
        if ret:
            return True
        time.sleep(0.05)
    return False


def open_camera(index=CAMERA_INDEX, width=FRAME_WIDTH, height=FRAME_HEIGHT, fps=TARGET_FPS,
                backend=CAMERA_BACKEND):
    """
    Open a capture device that actually delivers frames.

    Returns:
        cv2.VideoCapture object

    Raises:
        RuntimeError: If no camera can be opened
    """
    indices = probe_indices(index)
    backends = backend_candidates(backend)

    last_error = None
    for api in backends:
        for idx in indices:
            try:
                cap = cv2.VideoCapture(idx, api) if api is not None else cv2.VideoCapture(idx)
                if not cap.isOpened():
                    cap.release()
                    continue

                # Some drivers ignore these
                cap.set(cv2.CAP_PROP_FRAME_WIDTH, width)
                cap.set(cv2.CAP_PROP_FRAME_HEIGHT, height)
                cap.set(cv2.CAP_PROP_FPS, fps)

                if _warm_up(cap):
                    print(f"Camera opened: index={idx}, backend={'DEFAULT' if api is None else api}")
                    return cap

                cap.release()
            except cv2.error as e:
                last_error = e

    msg = (
        f"Error: Could not read frames from any camera.\n"
        f"Tried indices: {indices}\n"
        f"Tried backends: {['DEFAULT' if b is None else b for b in backends]}\n"
        f"Tips:\n"
        f"- Close other apps using the camera.\n"
        f"- Pass --cam N or set CAMERA_INDEX.\n"
        f"- On Windows, set CAMERA_BACKEND to 'DSHOW' or 'MSMF'.\n"
    )
    if last_error:
        msg += f"Last error: {last_error}\n"
    raise RuntimeError(msg)
