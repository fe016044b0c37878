# pipeline/pixels.py
from __future__ import annotations

from typing import Sequence

import numpy as np
from PIL import Image

Color = Sequence[int]

WHITE = (255, 255, 255)

SIMILAR_THRESHOLD = 45
WHITE_THRESHOLD = 210 * 3
DARK_THRESHOLD = 128 * 3


# ======================
# Single pixel
# ======================
def is_similar(c1: Color, c2: Color, threshold: int = SIMILAR_THRESHOLD) -> bool:
    return all(abs(int(a) - int(b)) < threshold for a, b in zip(c1[:3], c2[:3]))


def is_white(c: Color, threshold: int = WHITE_THRESHOLD) -> bool:
    return int(c[0]) + int(c[1]) + int(c[2]) > threshold


def is_dark(c: Color, threshold: int = DARK_THRESHOLD) -> bool:
    return int(c[0]) + int(c[1]) + int(c[2]) < threshold


# ======================
# Vectorised (검출기용, 위 함수들과 동일한 판정)
# ======================
def _as_int(pixels: np.ndarray) -> np.ndarray:
    return np.asarray(pixels, dtype=np.int32)[..., :3]


def white_mask(pixels: np.ndarray, threshold: int = WHITE_THRESHOLD) -> np.ndarray:
    return _as_int(pixels).sum(axis=-1) > threshold


def dark_mask(pixels: np.ndarray, threshold: int = DARK_THRESHOLD) -> np.ndarray:
    return _as_int(pixels).sum(axis=-1) < threshold


def similar_mask(pixels: np.ndarray, color: Color, threshold: int = SIMILAR_THRESHOLD) -> np.ndarray:
    ref = np.asarray(color[:3], dtype=np.int32)
    return np.all(np.abs(_as_int(pixels) - ref) < threshold, axis=-1)


def similar_pairs_mask(a: np.ndarray, b: np.ndarray, threshold: int = SIMILAR_THRESHOLD) -> np.ndarray:
    return np.all(np.abs(_as_int(a) - _as_int(b)) < threshold, axis=-1)


# ======================
# Color remap
# ======================
def _complement(pixels: np.ndarray) -> np.ndarray:
    # 완전 반전이 아니라 0.9배로 살짝 어둡게 반전 (튜닝 값)
    return (255.0 - pixels * 0.9).astype(np.int32)


def reverse_and_normalize(img: Image.Image) -> Image.Image:
    """
    밝은 배경 위 흰 글자(이름표 등)를 OCR이 읽기 좋은
    '흰 배경 + 어두운 글자'로 바꾼다.

    - (0, 0) 픽셀을 배경으로 보고 반전
    - 모든 픽셀을 반전한 뒤, 반전된 배경이 흰색(255)이 되도록 채널별 스케일
      channel' = channel * 256 / (bg + 1) - 1  (255에서 clamp)
    """
    arr = np.asarray(img.convert("RGB"), dtype=np.float64)

    background = _complement(arr[0, 0])
    to_white = 256.0 / (background + 1)

    reversed_ = _complement(arr)
    scaled = (reversed_ * to_white - 1).astype(np.int32)
    scaled = np.clip(scaled, 0, 255).astype(np.uint8)

    return Image.fromarray(scaled)


# ======================
# Thumbnail 비교
# ======================
def count_dissimilar(a: np.ndarray, b: np.ndarray, threshold: int = SIMILAR_THRESHOLD) -> int:
    return int(np.count_nonzero(~similar_pairs_mask(a, b, threshold)))


def is_similar_thumbnail(a: np.ndarray | None, b: np.ndarray | None) -> bool:
    """
    캡처 노이즈/압축 잡음을 감안한 '대충 같은지' 판정.
    크기가 다르면 False, 다른 픽셀이 전체의 1/20 미만이면 True.
    """
    if a is None or b is None:
        return False
    if a.shape[:2] != b.shape[:2]:
        return False

    h, w = a.shape[:2]
    return count_dissimilar(a, b) < (w * h) // 20
