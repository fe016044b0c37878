from __future__ import annotations

from typing import Iterable, List, Optional

import numpy as np
import pytest
from PIL import Image

from config.roi import ROI

W, H = ROI.PROCESSING_SIZE

GRAY = (100, 100, 100)
DIM = (30, 30, 30)
WHITE = (255, 255, 255)
BUTTON = (120, 200, 60)

PROBE_X, PROBE_Y, _, PROBE_H = ROI.STORY_PROBE


def blank_pixels(color=GRAY) -> np.ndarray:
    arr = np.zeros((H, W, 3), dtype=np.uint8)
    arr[:, :] = color
    return arr


def to_image(arr: np.ndarray) -> Image.Image:
    return Image.fromarray(arr)


# ======================
# Story dialogue
# ======================
def paint_white_run(arr: np.ndarray, break_row: int, length: int = 80) -> None:
    # break_row: 흰 구간 바로 다음(흰색 아님) 탐침 기준 행
    arr[PROBE_Y + break_row - length : PROBE_Y + break_row, PROBE_X] = WHITE


def paint_landmark(arr: np.ndarray, btn_h: int) -> None:
    paint_white_run(arr, btn_h - 2)

    strip_w = ROI.STORY_BUTTON_STRIP_WIDTH
    x0 = W // 2 - strip_w // 2
    arr[PROBE_Y + btn_h, x0 : x0 + strip_w] = BUTTON

    top = PROBE_Y + btn_h - ROI.STORY_TOP_OFFSET
    arr[top, PROBE_X] = BUTTON
    arr[top + 1, PROBE_X] = BUTTON
    arr[top + 5, PROBE_X] = WHITE


def paint_story_frame(
    btn_h: int = 266,
    *,
    speaker: bool = True,
    icon: bool = False,
    layout_btn_h: Optional[int] = None,
) -> Image.Image:
    """
    btn_h: 탐침 기준 버튼 행 (검증에 쓰이는 실제 행)
    layout_btn_h: 스냅 후 행 (아이콘/이름표 위치). 기본은 btn_h
    """
    arr = blank_pixels()
    paint_landmark(arr, btn_h)

    row = btn_h if layout_btn_h is None else layout_btn_h
    top = PROBE_Y + row - ROI.STORY_TOP_OFFSET

    if not speaker:
        y = top + ROI.SPEAKER_CHECK_Y_OFFSET
        arr[y, ROI.SPEAKER_CHECK_X : ROI.SPEAKER_CHECK_X + ROI.SPEAKER_CHECK_WIDTH] = WHITE

    if icon:
        arr[PROBE_Y + row - 5, ROI.STORY_ICON_X] = WHITE

    # 대사 영역에 글자 비슷한 무늬
    arr[top + 100 : top + 110, 200:600] = (20, 20, 20)
    return to_image(arr)


# ======================
# Choices
# ======================
def slot_dy(i: int) -> int:
    return -ROI.CHOICE_SLOT_SHIFT * (ROI.CHOICE_SLOT_COUNT - 1 - i)


def slot_fill(i: int):
    return (180, 120 + i * 10, 90 + i * 20)


def paint_choice_slot(arr: np.ndarray, i: int) -> None:
    dy = slot_dy(i)
    x, y, w, h = ROI.CHOICE_BASE_AREA
    arr[y + dy : y + dy + h, x : x + w] = slot_fill(i)

    cx, cy, _, _ = ROI.CHOICE_BASE_CHARACTER_AREA
    arr[cy + dy + 6, cx + 5] = ROI.CHOICE_CHARACTER_COLOR


def paint_choice_frame(populated: Iterable[int] = (4,)) -> np.ndarray:
    arr = blank_pixels(DIM)

    ex, ey, ew, _ = ROI.CHOICE_EDGE_AREA
    arr[ey, ex + ew - 1] = WHITE

    for i in populated:
        paint_choice_slot(arr, i)
    return arr


def reject_icon(arr: np.ndarray, i: int) -> None:
    # 양 끝 색이 다르고 가운데가 흰색 -> 거부되는 아이콘 탐침
    x, y, w, _ = ROI.CHOICE_BASE_ICON_AREA
    y += slot_dy(i)
    arr[y, x] = (200, 0, 0)
    arr[y, x + w // 2] = WHITE


# ======================
# Fakes
# ======================
class FakeOcr:
    def __init__(self, responses: Optional[List[Optional[str]]] = None, default: Optional[str] = "text"):
        self.responses = list(responses or [])
        self.default = default
        self.calls: list = []

    def extract_text(self, img: Image.Image, combine_lines: bool) -> Optional[str]:
        self.calls.append((img.size, combine_lines))
        if self.responses:
            return self.responses.pop(0)
        return self.default


class FakeTranslator:
    def __init__(self):
        self.calls: list = []

    def translate_stream(self, text: str):
        self.calls.append(text)
        yield f"<{text}>"


@pytest.fixture
def blank_frame() -> Image.Image:
    return to_image(blank_pixels())


@pytest.fixture
def story_frame() -> Image.Image:
    return paint_story_frame()


@pytest.fixture
def choice_frame() -> Image.Image:
    return to_image(paint_choice_frame((1, 3, 4)))
