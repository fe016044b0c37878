from __future__ import annotations
import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Optional, Tuple

from dotenv import load_dotenv

from config.path import PATHS

AVAILABLE_LANGUAGES = ("zh-Hans", "en")
DEFAULT_LANGUAGE = "en"

@dataclass(frozen=True)
class AppSettings:
    sleep_sec: float = 0.3

    window_title: str = "umamusume"
    # 창 기준 게임 화면 영역 (x, y, w, h)
    game_area: Tuple[int, int, int, int] = (14, 57, 1077, 1921)
    # 창 위치 복원용 (x, y, w, h)
    window_area: Tuple[int, int, int, int] = (1200, 80, 1106, 1991)

    language: str = DEFAULT_LANGUAGE
    ocr_backend: str = "tesseract"
    tesseract_lang: str = "jpn"
    translator_backend: str = "gemini"
    gemini_model: str = "gemini-2.0-flash"

    debug_save: bool = False

    def __post_init__(self):
        if self.language not in AVAILABLE_LANGUAGES:
            object.__setattr__(self, "language", DEFAULT_LANGUAGE)


def _parse_rect(raw: str) -> Tuple[int, int, int, int]:
    parts = [int(p.strip()) for p in raw.split(",")]
    if len(parts) != 4:
        raise ValueError(f"x,y,w,h 4개가 필요합니다: {raw!r}")
    return parts[0], parts[1], parts[2], parts[3]


def _parse_bool(raw: str) -> bool:
    return raw.strip().lower() in ("1", "true", "yes", "on")


# env 이름 -> (필드, 변환)
_ENV_FIELDS = {
    "UMA_SLEEP_SEC": ("sleep_sec", float),
    "UMA_WINDOW_TITLE": ("window_title", str),
    "UMA_GAME_AREA": ("game_area", _parse_rect),
    "UMA_WINDOW_AREA": ("window_area", _parse_rect),
    "UMA_LANGUAGE": ("language", str),
    "UMA_OCR_BACKEND": ("ocr_backend", str),
    "UMA_TESSERACT_LANG": ("tesseract_lang", str),
    "UMA_TRANSLATOR": ("translator_backend", str),
    "UMA_GEMINI_MODEL": ("gemini_model", str),
    "UMA_DEBUG_SAVE": ("debug_save", _parse_bool),
}


def load_settings(env_file: Optional[Path] = PATHS.ENV_FILE, base: Optional[AppSettings] = None) -> AppSettings:
    """
    config/.env (있으면) -> 환경변수 순으로 읽어 기본값을 덮어쓴다.
    """
    if env_file is not None:
        load_dotenv(env_file)

    overrides = {}
    for env_name, (field_name, convert) in _ENV_FIELDS.items():
        raw = os.getenv(env_name)
        if raw is None or raw.strip() == "":
            continue
        try:
            overrides[field_name] = convert(raw)
        except ValueError as e:
            print(f"[WARN] {env_name} 무시: {e}")

    return replace(base or AppSettings(), **overrides)
