# pipeline/story_dialogue_detector.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import numpy as np
from PIL import Image

from config.roi import ROI
from core.roi_manager import Region, ensure_canonical_frame, frame_pixels, region_pixels
from pipeline.pixels import is_similar, is_white, similar_mask, white_mask


@dataclass(frozen=True)
class DialogueAreas:
    dialogue: Region
    speaker: Optional[Region] = None


PROBE = Region.of(ROI.STORY_PROBE)


# ======================
# Landmark checks
# ======================
def _button_row_valid(pixels: np.ndarray, btn_h: int) -> bool:
    """
    후보 행 검증:
    1) 버튼 띠: 가로 400px 이 모두 같은 색(첫 픽셀 기준)
    2) 대화창 위 테두리: 0 또는 1번째 픽셀이 버튼 색, 5번째 픽셀은 흰색
    """
    width, _ = ROI.PROCESSING_SIZE
    strip_w = ROI.STORY_BUTTON_STRIP_WIDTH
    btn_area = Region(width // 2 - strip_w // 2, PROBE.y + btn_h, strip_w, 1)
    btn_strip = region_pixels(pixels, btn_area)[0]
    btn_color = btn_strip[0]

    if not bool(np.all(similar_mask(btn_strip, btn_color))):
        return False

    top = PROBE.y + btn_h - ROI.STORY_TOP_OFFSET
    top_area = Region(PROBE.x, top, 1, ROI.STORY_TOP_STRIP_HEIGHT)
    top_strip = region_pixels(pixels, top_area)[:, 0]

    border_ok = is_similar(top_strip[0], btn_color) or is_similar(top_strip[1], btn_color)
    return border_ok and is_white(top_strip[5])


def find_button_row(pixels: np.ndarray) -> Optional[int]:
    """
    탐침 스트립을 위에서 아래로 훑으며 흰색 연속 구간을 센다.
    65px 넘는 구간이 끝나면 그 2px 아래가 버튼 후보 행.
    처음으로 검증을 통과한 행을 반환 (탐침 기준 상대 y). 없으면 None.
    """
    strip = region_pixels(pixels, PROBE)[:, 0]
    whites = white_mask(strip)

    white_count = 0
    for h in range(PROBE.height):
        if whites[h]:
            white_count += 1
            continue

        if white_count > ROI.STORY_MIN_WHITE_RUN:
            btn_h = h + 2
            if btn_h >= PROBE.height:
                return None
            if _button_row_valid(pixels, btn_h):
                return btn_h
        white_count = 0

    return None


def snap_button_row(btn_h: int) -> int:
    # 캡처 리사이즈 흔들림(±2px) 흡수
    if ROI.STORY_SNAP_LOW < btn_h < ROI.STORY_SNAP_HIGH:
        return ROI.STORY_SNAP_VALUE
    return btn_h


def _icon_visible(pixels: np.ndarray, btn_h: int) -> bool:
    # 오토/스킵 아이콘이 떠 있는 화면은 같은 패턴이 나와도 대화창이 아님
    icon_area = Region(ROI.STORY_ICON_X, PROBE.y + btn_h - ROI.STORY_ICON_HEIGHT, 1, ROI.STORY_ICON_HEIGHT)
    return bool(np.any(white_mask(region_pixels(pixels, icon_area))))


def _speaker_region(pixels: np.ndarray, btn_h: int) -> Optional[Region]:
    top = PROBE.y + btn_h - ROI.STORY_TOP_OFFSET
    check_area = Region(ROI.SPEAKER_CHECK_X, top + ROI.SPEAKER_CHECK_Y_OFFSET, ROI.SPEAKER_CHECK_WIDTH, 1)
    if np.any(white_mask(region_pixels(pixels, check_area))):
        # 이름표 없는 나레이션
        return None

    x, dy, w, h = ROI.SPEAKER_AREA
    return Region(x, PROBE.y + btn_h + dy, w, h)


# ======================
# Public API
# ======================
def detect_story_dialogue(frame: Image.Image) -> Optional[DialogueAreas]:
    """
    캐노니컬 프레임에서 스토리 대화창(+ 화자 이름표) 영역을 찾는다.
    대화창이 없으면 None (정상적인 결과).
    """
    ensure_canonical_frame(frame)
    pixels = frame_pixels(frame)

    btn_h = find_button_row(pixels)
    if btn_h is None:
        return None

    btn_h = snap_button_row(btn_h)

    if _icon_visible(pixels, btn_h):
        return None

    top = PROBE.y + btn_h - ROI.STORY_TOP_OFFSET
    dialogue = Region(
        ROI.STORY_DIALOGUE_X,
        top + ROI.STORY_DIALOGUE_Y_OFFSET,
        ROI.STORY_DIALOGUE_WIDTH,
        ROI.STORY_DIALOGUE_HEIGHT,
    )

    return DialogueAreas(dialogue=dialogue, speaker=_speaker_region(pixels, btn_h))
