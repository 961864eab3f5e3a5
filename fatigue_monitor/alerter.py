"""
Alert Sound Module
Turns the per-frame alert level into throttled warning beeps

The pipeline reports a level (alert on/off every frame); this module
decides when to actually beep so the tone does not restart on every frame.
"""

import sys
import threading
import time
from array import array

import pygame

from .config import (
    ALERT_REPEAT_SECONDS,
    ALERT_SOUND_ENABLED,
    ALERT_TONE_HZ,
    ALERT_TONE_SECONDS,
)

SAMPLE_RATE = 22050


def _square_wave(frequency_hz, duration_s, sample_rate=SAMPLE_RATE, amp=12000):
    """16-bit mono square wave samples."""
    n_samples = int(duration_s * sample_rate)
    period = max(1, int(sample_rate / max(1, frequency_hz)))
    buf = array("h")
    for i in range(n_samples):
        buf.append(amp if (i % period) < (period // 2) else -amp)
    return buf


def _beep(frequency_hz: int, duration_s: float):
    """
    Cross-platform beep:
    - Windows: winsound.Beep
    - Else: pygame mixer tone
    """
    if sys.platform.startswith("win"):
        import winsound
        winsound.Beep(int(frequency_hz), int(duration_s * 1000))
        return

    sound = pygame.mixer.Sound(buffer=_square_wave(frequency_hz, duration_s).tobytes())
    sound.play()


class AlertSound:
    """
    Plays the alert tone while the drowsiness alert is active.

    - Rising edge: beep immediately, print [DROWSINESS ALERT]
    - While active: beep again every repeat_seconds
    - Falling edge: print [ALERT CLEARED]
    """

    def __init__(
        self,
        enabled=ALERT_SOUND_ENABLED,
        frequency_hz=ALERT_TONE_HZ,
        duration_s=ALERT_TONE_SECONDS,
        repeat_seconds=ALERT_REPEAT_SECONDS,
        beep=_beep,
    ):
        self.frequency_hz = frequency_hz
        self.duration_s = duration_s
        self.repeat_seconds = repeat_seconds
        self._beep = beep

        self.active = False
        self.last_beep_ts = None
        self.rising_edges = 0
        self.alert_started_at = None

        self.audio_enabled = False
        if enabled:
            self.audio_enabled = self._init_audio()

    def _init_audio(self):
        if sys.platform.startswith("win"):
            return True
        try:
            pygame.mixer.init(frequency=SAMPLE_RATE, size=-16, channels=1)
            return True
        except pygame.error as e:
            print(f"Warning: Audio alerts disabled (pygame mixer not available: {e})")
            return False

    def notify(self, active, now=None):
        """
        Feed the alert level for the current frame.

        Args:
            active: True if the alert is active this frame
            now: Current timestamp (defaults to time.time())

        Returns:
            True if a beep was started for this frame
        """
        now = time.time() if now is None else now

        if active and not self.active:
            self.active = True
            self.rising_edges += 1
            self.alert_started_at = now
            print(f"[DROWSINESS ALERT] Sustained eye closure at {now:.2f}s")
        elif not active and self.active:
            duration = now - self.alert_started_at if self.alert_started_at is not None else 0.0
            self.active = False
            self.alert_started_at = None
            self.last_beep_ts = None
            print(f"[ALERT CLEARED] Eyes open again after {duration:.1f}s")
            return False

        if not active or not self.audio_enabled:
            return False

        if self.last_beep_ts is not None and (now - self.last_beep_ts) < self.repeat_seconds:
            return False

        self.last_beep_ts = now
        threading.Thread(target=self._play, daemon=True).start()
        return True

    def _play(self):
        try:
            self._beep(self.frequency_hz, self.duration_s)
        except Exception as e:
            print(f"Audio alert error: {e}")

    def close(self):
        if self.audio_enabled and not sys.platform.startswith("win"):
            pygame.mixer.quit()
