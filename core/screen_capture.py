# core/screen_capture.py

import win32gui
import win32ui
import ctypes
import numpy as np
from PIL import Image
from typing import Optional, Tuple

from core.roi_manager import fit_game_area, to_canonical_frame


def capture_window(hwnd: int, width: int, height: int) -> Optional[Image.Image]:
    """
    hwnd: 게임 창 핸들
    """
    hwnd_dc = win32gui.GetWindowDC(hwnd)
    mfc_dc = win32ui.CreateDCFromHandle(hwnd_dc)
    save_dc = mfc_dc.CreateCompatibleDC()

    save_bitmap = win32ui.CreateBitmap()
    save_bitmap.CreateCompatibleBitmap(mfc_dc, width, height)
    save_dc.SelectObject(save_bitmap)

    try:
        # PrintWindow (DX 대응)
        result = ctypes.windll.user32.PrintWindow(hwnd, save_dc.GetSafeHdc(), 3)
        if result != 1:
            return None

        bmp_info = save_bitmap.GetInfo()
        bmp_str = save_bitmap.GetBitmapBits(True)
    finally:
        # 리소스 해제
        win32gui.DeleteObject(save_bitmap.GetHandle())
        save_dc.DeleteDC()
        mfc_dc.DeleteDC()
        win32gui.ReleaseDC(hwnd, hwnd_dc)

    img = np.frombuffer(bmp_str, dtype=np.uint8)
    img.shape = (bmp_info['bmHeight'], bmp_info['bmWidth'], 4)

    img = img[:, :, :3][:, :, ::-1]  # BGRA → RGB

    return Image.fromarray(np.ascontiguousarray(img))


def capture_game_frame(
    hwnd: int,
    window_size: Tuple[int, int],
    game_area: Tuple[int, int, int, int],
) -> Optional[Image.Image]:
    """
    창 전체를 캡처한 뒤 게임 화면 부분만 잘라 캐노니컬 크기로 맞춘다.
    """
    w, h = window_size
    window_img = capture_window(hwnd, w, h)
    if window_img is None:
        return None

    x, y, gw, gh = fit_game_area(window_size, game_area)
    game_img = window_img.crop((x, y, x + gw, y + gh))
    return to_canonical_frame(game_img)
