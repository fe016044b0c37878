# pipeline/region_cache.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional

import cv2
import numpy as np
from PIL import Image

from core.roi_manager import Region, RegionKind
from pipeline.pixels import is_similar_thumbnail
from pipeline.turn_tracker import TurnTracker

THUMBNAIL_SCALE = 12
CHOICES_THUMBNAIL_SCALE = 2  # 선택지는 글자가 빽빽해서 해상도를 더 남김


@dataclass
class CacheEntry:
    thumbnail: Optional[np.ndarray] = None
    region: Optional[Region] = None

    @property
    def is_empty(self) -> bool:
        return self.thumbnail is None


@dataclass(frozen=True)
class CacheCheck:
    kind: RegionKind
    region: Region
    thumbnail: np.ndarray
    changed: bool


def make_thumbnail(img: Image.Image, region: Region, kind: RegionKind) -> np.ndarray:
    scale = CHOICES_THUMBNAIL_SCALE if kind == RegionKind.CHOICES else THUMBNAIL_SCALE
    w = max(1, region.width // scale)
    h = max(1, region.height // scale)

    arr = np.asarray(img.convert("RGB"), dtype=np.uint8)
    return cv2.resize(arr, (w, h), interpolation=cv2.INTER_AREA)


class RegionChangeCache:
    """
    RegionKind 별로 마지막 썸네일과 영역을 기억해서
    '지난번과 같은 내용인지'를 판정한다.
    """

    def __init__(self, tracker: Optional[TurnTracker] = None):
        self.tracker = tracker if tracker is not None else TurnTracker()
        self.entries: Dict[RegionKind, CacheEntry] = {kind: CacheEntry() for kind in RegionKind}

    def reset(self) -> None:
        for kind in RegionKind:
            self.entries[kind] = CacheEntry()

    def check(self, kind: RegionKind, img: Image.Image, region: Region, force_save: bool = False) -> CacheCheck:
        """
        캐시는 건드리지 않고 판정만 한다. 변경이면 commit()으로 반영.
        """
        thumbnail = make_thumbnail(img, region, kind)

        if not force_save and self.tracker.allows_comparison(kind):
            entry = self.entries[kind]
            if entry.region == region and is_similar_thumbnail(thumbnail, entry.thumbnail):
                return CacheCheck(kind=kind, region=region, thumbnail=thumbnail, changed=False)

        return CacheCheck(kind=kind, region=region, thumbnail=thumbnail, changed=True)

    def commit(self, result: CacheCheck) -> None:
        # 변경 없음 판정은 반영하지 않음 (거의 같은 썸네일로 조금씩 밀려가는 것 방지)
        if not result.changed:
            return
        self.entries[result.kind] = CacheEntry(thumbnail=result.thumbnail, region=result.region)
        self.tracker.update(result.kind)

    def check_and_update(self, kind: RegionKind, img: Image.Image, region: Region, force_save: bool = False) -> bool:
        """
        반환값: True = 변경됨(다음 단계로 넘김), False = 지난번과 동일
        """
        result = self.check(kind, img, region, force_save)
        self.commit(result)
        return result.changed
