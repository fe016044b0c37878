# core/roi_manager.py
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Tuple

import numpy as np
from PIL import Image

from config.roi import ROI


class RegionKind(Enum):
    STORY_DIALOGUE = "StoryDialogue"
    CHOICES = "Choices"
    CENTER = "Center"
    FULLSCREEN = "Fullscreen"
    SPEAKER = "Speaker"


@dataclass(frozen=True)
class Region:
    x: int
    y: int
    width: int
    height: int

    @classmethod
    def of(cls, xywh: Tuple[int, int, int, int]) -> "Region":
        x, y, w, h = xywh
        return cls(int(x), int(y), int(w), int(h))

    @property
    def right(self) -> int:
        return self.x + self.width

    @property
    def bottom(self) -> int:
        return self.y + self.height

    @property
    def box(self) -> Tuple[int, int, int, int]:
        """PIL crop box (left, upper, right, lower)"""
        return (self.x, self.y, self.right, self.bottom)


class PreconditionViolation(ValueError):
    """캡처 쪽이 약속(캐노니컬 크기, 프레임 내부 영역)을 어겼을 때"""


class FrameSizeError(PreconditionViolation):
    pass


class RegionOutOfBoundsError(PreconditionViolation):
    pass


def ensure_canonical_frame(frame: Image.Image) -> None:
    if frame.size != ROI.PROCESSING_SIZE:
        raise FrameSizeError(
            f"frame size {frame.size} != canonical {ROI.PROCESSING_SIZE}"
        )


def ensure_within(region: Region, size: Tuple[int, int]) -> None:
    w, h = size
    if region.width <= 0 or region.height <= 0:
        raise RegionOutOfBoundsError(f"empty region: {region}")
    if region.x < 0 or region.y < 0 or region.right > w or region.bottom > h:
        raise RegionOutOfBoundsError(f"{region} outside frame {w}x{h}")


def crop_region(img: Image.Image, region: Region) -> Image.Image:
    """
    img: 캐노니컬 프레임
    region: 잘라낼 영역 (프레임 밖으로 나가면 RegionOutOfBoundsError)
    """
    ensure_within(region, img.size)
    return img.crop(region.box)


def region_pixels(pixels: np.ndarray, region: Region) -> np.ndarray:
    """
    pixels: (H, W, 3) 배열
    반환값: region 부분의 (h, w, 3) view
    """
    h, w = pixels.shape[:2]
    ensure_within(region, (w, h))
    return pixels[region.y : region.bottom, region.x : region.right]


def frame_pixels(frame: Image.Image) -> np.ndarray:
    # uint8 그대로 두면 R+G+B 합에서 overflow
    return np.asarray(frame.convert("RGB"), dtype=np.int32)


def to_canonical_frame(img: Image.Image) -> Image.Image:
    """
    캡처 이미지를 검출기가 기대하는 캐노니컬 크기로 맞춘다.
    (캡처 쪽 책임. 검출기는 절대 호출하지 않는다)
    """
    rgb = img.convert("RGB")
    if rgb.size == ROI.PROCESSING_SIZE:
        return rgb
    return rgb.resize(ROI.PROCESSING_SIZE, Image.BILINEAR)


def fit_game_area(
    window_size: Tuple[int, int],
    game_area: Tuple[int, int, int, int],
    processing_size: Tuple[int, int] = ROI.PROCESSING_SIZE,
) -> Tuple[int, int, int, int]:
    """
    window_size: 게임 창 크기 (w, h)
    game_area: 창 기준 게임 화면 영역 (x, y, w, h)

    설정된 게임 영역이 창보다 크면(창 크기가 바뀐 경우) 창에 맞춰 다시 계산.
    위 타이틀바 57px, 아래 여백 3px, 비율은 캐노니컬 프레임과 동일.
    """
    win_w, win_h = window_size
    x, y, w, h = game_area
    if w <= win_w and h <= win_h:
        return game_area

    ratio = processing_size[0] / processing_size[1]
    new_h = win_h - 60
    new_w = int(new_h * ratio)
    new_x = (win_w - new_w) // 2
    return (new_x, 57, new_w, new_h)
