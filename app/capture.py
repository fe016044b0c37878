from __future__ import annotations
from typing import Optional
from PIL import Image

from core.screen_capture import capture_game_frame
from core.window_tracker import WindowTracker

from app.settings import AppSettings

def get_frame(tracker: WindowTracker, settings: AppSettings) -> Optional[Image.Image]:
    """
    게임 창이 앞에 떠 있을 때만 캐노니컬 프레임을 반환. 아니면 None.
    """
    window_rect = tracker.get_window_rect()
    if window_rect is None or not tracker.hwnd:
        return None

    if not tracker.is_foreground():
        return None

    _, _, w, h = window_rect
    return capture_game_frame(tracker.hwnd, (w, h), settings.game_area)
