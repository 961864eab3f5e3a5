"""
Supabase Cloud Integration Module
Logs drowsiness alert events and session summaries to Supabase

Tables:
- alert_events: One row per alert raised / cleared
- driving_sessions: Session start and summary
"""

import os
import time
from datetime import datetime, timezone
from typing import Optional

from supabase import Client, create_client

from .config import SUPABASE_ENABLED


def _utc_now():
    return datetime.now(timezone.utc).isoformat()


class SupabaseLogger:
    """
    Logs alert edges to Supabase.

    Logging never interrupts the monitor: every client error is printed
    and dropped.
    """

    def __init__(
        self,
        supabase_url: Optional[str] = None,
        supabase_key: Optional[str] = None,
        enabled: bool = SUPABASE_ENABLED,
        client: Optional[Client] = None,
    ):
        """
        Initialize Supabase logger.

        Args:
            supabase_url: Supabase project URL (or from SUPABASE_URL env var)
            supabase_key: Supabase anon key (or from SUPABASE_KEY env var)
            enabled: Set False to turn cloud logging off
            client: Pre-built client (skips create_client)
        """
        self.initialized = False
        self.client: Optional[Client] = None
        self.current_session_id: Optional[str] = None
        self.session_start_time: Optional[float] = None

        if not enabled:
            return

        if client is not None:
            self.client = client
            self.initialized = True
            return

        url = supabase_url or os.getenv("SUPABASE_URL")
        key = supabase_key or os.getenv("SUPABASE_KEY")

        if not url or not key:
            print("Warning: Supabase credentials not provided. Cloud logging disabled.")
            print("Set SUPABASE_URL and SUPABASE_KEY in .env file or environment variables.")
            return

        try:
            self.client = create_client(url, key)
            self.initialized = True
            print("Supabase logger initialized")
        except Exception as e:
            print(f"Failed to initialize Supabase logger: {e}")

    def start_session(self) -> Optional[str]:
        """
        Start a new monitoring session.

        Returns:
            Session ID (str) or None if not initialized
        """
        if not self.initialized:
            return None

        self.session_start_time = time.time()
        session_id = f"session_{int(self.session_start_time * 1000)}"

        try:
            self.client.table("driving_sessions").insert({
                "session_id": session_id,
                "started_at": _utc_now(),
                "status": "active",
            }).execute()
        except Exception as e:
            print(f"Error starting session: {e}")
            self.session_start_time = None
            return None

        self.current_session_id = session_id
        print(f"Started monitoring session: {session_id}")
        return session_id

    def log_alert(self, active: bool, ear: Optional[float], closed_frames: int):
        """
        Log an alert edge.

        Args:
            active: True when the alert was raised, False when it cleared
            ear: Frame EAR at the edge
            closed_frames: Consecutive closed frames at the edge
        """
        if not self.initialized:
            return

        try:
            self.client.table("alert_events").insert({
                "session_id": self.current_session_id,
                "timestamp": _utc_now(),
                "alert_type": "EYE_CLOSURE" if active else "CLEARED",
                "alert_active": active,
                "ear": round(ear, 3) if ear is not None else None,
                "closed_frames": closed_frames,
            }).execute()
        except Exception as e:
            print(f"Error logging alert: {e}")

    def end_session(self, frames: int, skipped_frames: int, alert_count: int):
        """
        End current session and log summary.

        Args:
            frames: Frames with a face that went through the pipeline
            skipped_frames: Frames skipped for missing/degenerate landmarks
            alert_count: Number of alerts raised
        """
        if not self.initialized or not self.current_session_id:
            return

        duration = time.time() - self.session_start_time if self.session_start_time else 0.0

        try:
            self.client.table("driving_sessions").update({
                "ended_at": _utc_now(),
                "status": "completed",
                "duration_seconds": round(duration, 2),
                "frames_processed": frames,
                "frames_skipped": skipped_frames,
                "total_alerts": alert_count,
            }).eq("session_id", self.current_session_id).execute()
            print(f"Session ended: {self.current_session_id} (Duration: {duration:.1f}s)")
        except Exception as e:
            print(f"Error ending session: {e}")
        finally:
            self.current_session_id = None
            self.session_start_time = None

    def is_initialized(self) -> bool:
        """Check if logger is initialized and ready."""
        return self.initialized
