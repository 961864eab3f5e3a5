"""
Main Entry Point for the Driver Fatigue Monitor

Reads the webcam, runs MediaPipe Face Mesh, feeds the landmarks to the
drowsiness pipeline and warns (overlay + beep) on sustained eye closure.

Run with: fatigue-monitor  (or python -m fatigue_monitor)
Keys: q = quit, r = reset closure tracking
"""

import argparse
import time

import cv2

from .alerter import AlertSound
from .camera_utils import open_camera
from .config import (
    ALERT_SOUND_ENABLED,
    CAMERA_INDEX,
    CLOSURE_THRESHOLD_FRAMES,
    DRAW_FACE_MESH,
    DRAW_LANDMARKS,
    EAR_CLOSED_THRESHOLD,
    STATUS_EVERY_FRAMES,
    SUPABASE_ENABLED,
)
from .face_detector import FaceDetector
from .pipeline import DrowsinessPipeline
from .supabase_logger import SupabaseLogger
from .visualizer import draw_overlay

WINDOW_NAME = "Driver Fatigue Monitor"


def build_parser():
    parser = argparse.ArgumentParser(description="Eye-closure drowsiness monitor")
    parser.add_argument("--cam", type=int, default=CAMERA_INDEX, help="Camera index (e.g. 0,1,2...)")
    parser.add_argument("--closed-threshold", type=float, default=EAR_CLOSED_THRESHOLD,
                        help="EAR below this counts as a closed-eye frame")
    parser.add_argument("--closure-frames", type=int, default=CLOSURE_THRESHOLD_FRAMES,
                        help="Consecutive closed frames before alerting")
    parser.add_argument("--no-sound", action="store_true", help="Disable the alert tone")
    parser.add_argument("--no-landmarks", action="store_true", help="Do not draw landmark dots")
    parser.add_argument("--mesh", action="store_true", default=DRAW_FACE_MESH,
                        help="Draw the face mesh tesselation")
    parser.add_argument("--cloud", dest="cloud", action="store_true", default=SUPABASE_ENABLED,
                        help="Log alerts to Supabase")
    parser.add_argument("--no-cloud", dest="cloud", action="store_false", help="Disable Supabase logging")
    return parser


def read_frame(cap, state, cam_index):
    """
    Read one frame, retrying transient failures and re-opening a stuck camera.

    Args:
        cap: cv2.VideoCapture
        state: Dict with 'failures' and 'last_warning' counters
        cam_index: Camera index used to re-open

    Returns:
        (cap, frame) where frame is None if this attempt failed;
        cap is None if the camera could not be re-opened
    """
    ret, frame = cap.read()
    if ret and frame is not None and frame.size > 0:
        state["failures"] = 0
        state["last_warning"] = 0.0
        return cap, frame

    state["failures"] += 1

    # Few transient failures: silently retry
    if state["failures"] <= 5:
        time.sleep(0.01)
        return cap, None

    # Moderate failures: warn occasionally
    if state["failures"] <= 20:
        now = time.time()
        if now - state["last_warning"] > 5.0:
            print(f"Warning: Camera glitch detected ({state['failures']} failures), retrying...")
            state["last_warning"] = now
        time.sleep(0.05)
        return cap, None

    print("Error: Camera appears stuck, attempting to re-open...")
    cap.release()
    time.sleep(0.5)
    try:
        cap = open_camera(cam_index)
    except RuntimeError as e:
        print(f"Failed to re-open camera: {e}")
        return None, None
    state["failures"] = 0
    state["last_warning"] = 0.0
    print("Camera successfully re-opened, resuming...")
    return cap, None


def run(args, pipeline):
    """Main detection loop."""

    print("Starting Driver Fatigue Monitor...")
    print(f"  EAR closed threshold: {pipeline.closed_threshold}")
    print(f"  Closed frames before alert: {pipeline.closure_threshold_frames}")

    cap = open_camera(args.cam)
    face_detector = FaceDetector(draw_face_mesh=args.mesh)
    sound = AlertSound(enabled=ALERT_SOUND_ENABLED and not args.no_sound)
    cloud = SupabaseLogger(enabled=args.cloud)
    cloud.start_session()

    read_state = {"failures": 0, "last_warning": 0.0}
    frame_count = 0
    start_time = time.time()
    last_result = None

    try:
        while True:
            next_cap, frame = read_frame(cap, read_state, args.cam)
            if next_cap is None:
                break
            cap = next_cap
            if frame is None:
                continue

            now = time.time()
            landmarks = face_detector.detect(frame)

            result = None
            if landmarks:
                if args.mesh:
                    face_detector.draw_face_mesh_landmarks(frame, landmarks)
                elif not args.no_landmarks and DRAW_LANDMARKS:
                    face_detector.draw_landmarks(frame, landmarks)

                result = pipeline.process(landmarks)
                was_active = sound.active
                sound.notify(result.alert.active, now)
                if result.alert.active != was_active:
                    cloud.log_alert(result.alert.active, result.ear, result.consecutive_closed_frames)

            draw_overlay(frame, result, pipeline.closed_threshold, pipeline.closure_threshold_frames)
            cv2.imshow(WINDOW_NAME, frame)
            last_result = result

            frame_count += 1
            if frame_count % STATUS_EVERY_FRAMES == 0:
                elapsed = time.time() - start_time
                fps = frame_count / elapsed if elapsed > 0 else 0
                if last_result is not None and last_result.ear is not None:
                    print(
                        f"FPS: {fps:.1f} | EAR: {last_result.ear:.3f} | "
                        f"Closed frames: {last_result.consecutive_closed_frames} | "
                        f"Alert: {'ON' if last_result.alert.active else 'off'} | "
                        f"Skipped: {pipeline.frames_skipped}"
                    )
                else:
                    print(f"FPS: {fps:.1f} | No face detected")

            key = cv2.waitKey(1) & 0xFF
            if key == ord("q"):
                break
            elif key == ord("r"):
                pipeline.reset_tracking()
                if sound.active:
                    cloud.log_alert(False, None, 0)
                sound.notify(False, time.time())
                print("Closure tracking manually reset")

    finally:
        cloud.end_session(pipeline.frames_processed, pipeline.frames_skipped, sound.rising_edges)
        sound.close()
        face_detector.close()
        cap.release()
        cv2.destroyAllWindows()
        print("Shutdown complete.")


def main(argv=None):
    args = build_parser().parse_args(argv)
    try:
        pipeline = DrowsinessPipeline(args.closed_threshold, args.closure_frames)
    except ValueError as e:
        raise SystemExit(f"Invalid threshold: {e}")
    run(args, pipeline)


if __name__ == "__main__":
    main()
