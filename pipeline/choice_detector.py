# pipeline/choice_detector.py
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

import numpy as np
from PIL import Image

from config.roi import ROI
from core.roi_manager import Region, crop_region, ensure_canonical_frame, frame_pixels, region_pixels
from pipeline.pixels import WHITE, is_dark, is_similar, is_white, similar_mask


@dataclass(frozen=True)
class ChoiceSlot:
    area: Region
    icon_area: Region
    character_area: Region


@dataclass
class ChoiceComposite:
    image: Image.Image
    region: Region


def _shift(xywh: Tuple[int, int, int, int], dy: int) -> Region:
    x, y, w, h = xywh
    return Region(x, y + dy, w, h)


def build_choice_slots() -> Tuple[ChoiceSlot, ...]:
    """
    선택지 슬롯 5개. 마지막(index 4)이 기준 위치, 앞 슬롯일수록 180px씩 위.
    """
    n = ROI.CHOICE_SLOT_COUNT
    slots = []
    for i in range(n):
        dy = -ROI.CHOICE_SLOT_SHIFT * (n - 1 - i)
        slots.append(
            ChoiceSlot(
                area=_shift(ROI.CHOICE_BASE_AREA, dy),
                icon_area=_shift(ROI.CHOICE_BASE_ICON_AREA, dy),
                character_area=_shift(ROI.CHOICE_BASE_CHARACTER_AREA, dy),
            )
        )
    return tuple(slots)


CHOICE_SLOTS = build_choice_slots()
BASE_SLOT = CHOICE_SLOTS[-1]


def merge_images_vertical(images: Sequence[Image.Image], bg_color=(0, 0, 0)) -> Image.Image:
    new_width = max(img.width for img in images)
    new_height = sum(img.height for img in images)

    merged = Image.new("RGB", (new_width, new_height), bg_color)
    y = 0
    for img in images:
        merged.paste(img.convert("RGB"), (0, y))
        y += img.height
    return merged


# ======================
# Checks
# ======================
def icon_probe_rejects(pixels: np.ndarray, slot: ChoiceSlot) -> bool:
    # NOTE: 양 끝이 "다르고" 가운데가 흰색일 때만 거부한다.
    # 아이콘 존재 판정으로는 이상한 조건이지만 실측 튜닝 값이라 그대로 둔다.
    strip = region_pixels(pixels, slot.icon_area)[0]
    left, right, mid = strip[0], strip[-1], strip[len(strip) // 2]
    return (not is_similar(left, right)) and is_similar(mid, WHITE)


def has_character_color(pixels: np.ndarray, slot: ChoiceSlot) -> bool:
    area = region_pixels(pixels, slot.character_area)
    return bool(np.any(similar_mask(area, ROI.CHOICE_CHARACTER_COLOR, ROI.CHOICE_CHARACTER_THRESHOLD)))


def is_slot_populated(pixels: np.ndarray, slot: ChoiceSlot) -> bool:
    if icon_probe_rejects(pixels, slot):
        return False
    return has_character_color(pixels, slot)


def is_choice_overlay(pixels: np.ndarray) -> bool:
    """
    선택지가 뜨면 배경이 항상 어두워진다.
    어둠 탐침 3개 + 왼쪽 끝(어둠 -> 흰색) + 기준 슬롯 검사를 모두 통과해야 함.
    """
    for xywh in ROI.CHOICE_DARK_AREAS:
        area = region_pixels(pixels, Region.of(xywh))
        if np.any(area.sum(axis=-1) > ROI.CHOICE_DARK_MAX_SUM):
            return False

    edge = region_pixels(pixels, Region.of(ROI.CHOICE_EDGE_AREA))[0]
    if not is_dark(edge[0]) or not is_white(edge[-1]):
        return False

    return is_slot_populated(pixels, BASE_SLOT)


# ======================
# Public API
# ======================
def find_populated_slots(frame: Image.Image) -> List[int]:
    ensure_canonical_frame(frame)
    pixels = frame_pixels(frame)

    if not is_choice_overlay(pixels):
        return []
    return [i for i, slot in enumerate(CHOICE_SLOTS) if is_slot_populated(pixels, slot)]


def detect_choices(frame: Image.Image) -> Optional[ChoiceComposite]:
    """
    선택지 오버레이가 있으면 채워진 슬롯들을 세로로 이어붙인 이미지와 그 영역을 반환.
    없으면 None.
    """
    populated = find_populated_slots(frame)
    if not populated:
        return None

    crops = [crop_region(frame, CHOICE_SLOTS[i].area) for i in populated]
    composite = merge_images_vertical(crops)

    # 원점은 항상 기준 슬롯 위치 (채워진 슬롯과 무관)
    base = BASE_SLOT.area
    region = Region(base.x, base.y, composite.width, composite.height)
    return ChoiceComposite(image=composite, region=region)
