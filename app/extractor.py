from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from PIL import Image

from config.path import PATHS
from config.roi import ROI
from core.ocr_engine import OcrEngine
from core.roi_manager import Region, RegionKind, crop_region, ensure_canonical_frame
from pipeline.choice_detector import detect_choices
from pipeline.pixels import reverse_and_normalize
from pipeline.region_cache import RegionChangeCache
from pipeline.story_dialogue_detector import detect_story_dialogue
from pipeline.turn_tracker import TurnTracker

from app.frame_types import DialogueResult

CENTER_DIALOGUE_REGION = Region.of(ROI.CENTER_DIALOGUE_AREA)
FULL_GAME_REGION = Region.of(ROI.FULL_GAME_AREA)


@dataclass
class FrameTextExtractor:
    """
    검출 -> 변경 캐시 -> OCR -> 커밋.
    OCR이 실패하면 캐시/턴 상태를 그대로 둬서 다음 틱에 다시 시도된다.
    """

    ocr: OcrEngine
    tracker: TurnTracker = field(default_factory=TurnTracker)
    cache: Optional[RegionChangeCache] = None
    save_dir: Path = PATHS.CAPTURE_DIR

    def __post_init__(self):
        if self.cache is None:
            self.cache = RegionChangeCache(self.tracker)
        else:
            self.tracker = self.cache.tracker

    # ----------------------
    # 공통
    # ----------------------
    def ocr_image(self, img: Image.Image, region: Region, kind: RegionKind, save: bool = False) -> Optional[str]:
        check = self.cache.check(kind, img, region, force_save=save)
        if not check.changed:
            return None

        if save:
            self.save_dir.mkdir(parents=True, exist_ok=True)
            img.save(self.save_dir / f"{kind.value}.png")

        text = self.ocr.extract_text(img, combine_lines=kind == RegionKind.STORY_DIALOGUE)
        if text is None:
            return None

        self.cache.commit(check)
        return text

    def ocr_area(
        self,
        frame: Image.Image,
        region: Region,
        kind: RegionKind,
        save: bool = False,
        reverse_color: bool = False,
    ) -> Optional[str]:
        ensure_canonical_frame(frame)
        img = crop_region(frame, region)
        if reverse_color:
            img = reverse_and_normalize(img)
        return self.ocr_image(img, region, kind, save)

    # ----------------------
    # 화면 종류별
    # ----------------------
    def ocr_story_dialogue(self, frame: Image.Image, save: bool = False) -> Optional[DialogueResult]:
        areas = detect_story_dialogue(frame)
        if areas is None:
            return None

        dialogue = self.ocr_area(frame, areas.dialogue, RegionKind.STORY_DIALOGUE, save)
        if dialogue is None:
            return None

        speaker = None
        if areas.speaker is not None:
            # 이름표는 밝은 바탕 흰 글자라 반전해서 읽음
            speaker = self.ocr_area(frame, areas.speaker, RegionKind.SPEAKER, save, reverse_color=True)
            if speaker is not None:
                speaker = speaker.strip()

        return DialogueResult(dialogue=dialogue, speaker=speaker)

    def ocr_choices(self, frame: Image.Image, save: bool = False) -> Optional[str]:
        composite = detect_choices(frame)
        if composite is None:
            return None
        return self.ocr_image(composite.image, composite.region, RegionKind.CHOICES, save)

    def ocr_center(self, frame: Image.Image, save: bool = False) -> Optional[str]:
        return self.ocr_area(frame, CENTER_DIALOGUE_REGION, RegionKind.CENTER, save)

    def ocr_fullscreen(self, frame: Image.Image, save: bool = False) -> Optional[str]:
        return self.ocr_area(frame, FULL_GAME_REGION, RegionKind.FULLSCREEN, save)
