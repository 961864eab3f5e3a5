"""
Configuration file for eye-closure thresholds and monitor settings

Every value can be overridden with an environment variable of the same
name (a .env file in the working directory is loaded first).
"""

import os

from dotenv import load_dotenv

load_dotenv()


def _env_float(name, default):
    value = os.getenv(name)
    if value is None or value.strip() == "":
        return default
    try:
        return float(value)
    except ValueError:
        print(f"Warning: ignoring invalid {name}={value!r}, using {default}")
        return default


def _env_int(name, default):
    value = os.getenv(name)
    if value is None or value.strip() == "":
        return default
    try:
        return int(value)
    except ValueError:
        print(f"Warning: ignoring invalid {name}={value!r}, using {default}")
        return default


def _env_bool(name, default):
    value = os.getenv(name)
    if value is None or value.strip() == "":
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


# Eye Aspect Ratio (EAR) thresholds
EAR_CLOSED_THRESHOLD = _env_float("EAR_CLOSED_THRESHOLD", 0.2)   # EAR < threshold => eye closed this frame
CLOSURE_THRESHOLD_FRAMES = _env_int("CLOSURE_THRESHOLD_FRAMES", 10)  # consecutive closed frames => alert

# MediaPipe Face Mesh settings
MAX_NUM_FACES = 1
REFINE_LANDMARKS = True
MIN_DETECTION_CONFIDENCE = _env_float("MIN_DETECTION_CONFIDENCE", 0.5)
MIN_TRACKING_CONFIDENCE = _env_float("MIN_TRACKING_CONFIDENCE", 0.5)

# Camera settings
CAMERA_INDEX = _env_int("CAMERA_INDEX", 0)
FRAME_WIDTH = 640
FRAME_HEIGHT = 480
TARGET_FPS = 30

# Camera backend (mainly for Windows reliability)
# Options: "AUTO", "DSHOW", "MSMF"
CAMERA_BACKEND = os.getenv("CAMERA_BACKEND", "AUTO")

# How many camera indices to probe if CAMERA_INDEX fails (0..N-1)
CAMERA_PROBE_COUNT = 4

# Visualization settings
DRAW_LANDMARKS = _env_bool("DRAW_LANDMARKS", True)   # red dot per landmark
DRAW_FACE_MESH = _env_bool("DRAW_FACE_MESH", False)  # full tesselation instead of dots
LANDMARK_COLOR = (0, 0, 255)                         # Red in BGR
LANDMARK_RADIUS = 2
ALERT_MESSAGE = os.getenv("ALERT_MESSAGE", "Careful! You are drowsy.")

# Alert tone (C5, short note)
ALERT_SOUND_ENABLED = _env_bool("ALERT_SOUND_ENABLED", True)
ALERT_TONE_HZ = 523
ALERT_TONE_SECONDS = 0.25
ALERT_REPEAT_SECONDS = _env_float("ALERT_REPEAT_SECONDS", 1.0)  # min gap between tones while alerting

# Status line printed every N frames
STATUS_EVERY_FRAMES = 30

# Supabase Cloud Integration Configuration
# Set SUPABASE_URL and SUPABASE_KEY via environment variables or .env
SUPABASE_ENABLED = _env_bool("SUPABASE_ENABLED", True)
