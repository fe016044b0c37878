# core/window_tracker.py

import win32gui
import ctypes
from typing import Tuple, Optional


class WindowTracker:
    def __init__(self, window_title: str, own_title: Optional[str] = None):
        self.window_title = window_title
        self.own_title = own_title
        self.hwnd = None
        self._set_dpi_aware()

    def _set_dpi_aware(self):
        """
        DPI 스케일링으로 인한 좌표 어긋남 방지
        """
        try:
            ctypes.windll.shcore.SetProcessDpiAwareness(2)  # PER_MONITOR_AWARE
        except (AttributeError, OSError):
            try:
                ctypes.windll.user32.SetProcessDPIAware()
            except (AttributeError, OSError):
                pass

    def reset(self) -> None:
        self.hwnd = None

    def find_window(self) -> Optional[int]:
        """
        포그라운드 창의 제목에 window_title이 들어 있으면 그 창을 게임 창으로 잡는다.
        """
        hwnd = win32gui.GetForegroundWindow()
        if not hwnd:
            return None

        title = (win32gui.GetWindowText(hwnd) or "").strip()
        if self.window_title not in title or title == self.own_title:
            return None

        self.hwnd = hwnd
        return hwnd

    def is_window_valid(self) -> bool:
        if self.hwnd is None:
            return False
        return bool(win32gui.IsWindow(self.hwnd))

    def is_foreground(self) -> bool:
        return self.hwnd is not None and win32gui.GetForegroundWindow() == self.hwnd

    def get_window_rect(self) -> Optional[Tuple[int, int, int, int]]:
        """
        반환값: (x, y, width, height)
        """
        if not self.is_window_valid():
            if self.find_window() is None:
                return None

        # 창이 최소화된 경우 제외
        if win32gui.IsIconic(self.hwnd):
            return None

        rect = win32gui.GetWindowRect(self.hwnd)
        x1, y1, x2, y2 = rect

        width = x2 - x1
        height = y2 - y1

        # 비정상 크기 방어
        if width <= 0 or height <= 0:
            return None

        return x1, y1, width, height

    def set_window_rect(self, rect: Tuple[int, int, int, int]) -> bool:
        if not self.is_window_valid():
            return False
        x, y, w, h = rect
        win32gui.SetWindowPos(self.hwnd, 0, x, y, w, h, 0)
        return True
