from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from app.settings import AppSettings
from app.extractor import FrameTextExtractor

from core.ocr_engine import build_ocr
from core.translator import Translator, build_translator
from handlers.translation import run_translation


@dataclass
class TextRelay:
    """
    마지막으로 넘긴 텍스트를 기억.
    빈 텍스트는 무시, 같은 텍스트는 다시 번역하지 않는다.
    """

    translator: Translator
    last_text: Optional[str] = None
    last_translated: Optional[str] = None

    def relay(self, text: Optional[str]) -> bool:
        # 반환값: 이번 틱에 보여줄 텍스트가 있었는지
        if text is None or not text.strip():
            return False
        if text == self.last_text:
            return True

        self.last_text = text
        print(f"\n[TEXT]\n{text}")
        self.last_translated = run_translation(text, translator=self.translator)
        return True


@dataclass
class AppDeps:
    extractor: FrameTextExtractor
    relay: TextRelay
    gemini_client: object = field(default=None, repr=False)


def build_deps(settings: AppSettings, *, no_api: bool = False) -> AppDeps:
    gemini_client = None
    if not no_api and "gemini" in (settings.ocr_backend.lower(), settings.translator_backend.lower()):
        from core.gemini_vision import get_client

        try:
            gemini_client = get_client()
        except RuntimeError as e:
            print("[WARN] Gemini client 생성 실패:", e)

    ocr = build_ocr(
        settings.ocr_backend,
        tesseract_lang=settings.tesseract_lang,
        gemini_client=gemini_client,
        gemini_model=settings.gemini_model,
    )
    translator = build_translator(
        "none" if no_api else settings.translator_backend,
        language=settings.language,
        gemini_client=gemini_client,
        gemini_model=settings.gemini_model,
    )

    return AppDeps(
        extractor=FrameTextExtractor(ocr=ocr),
        relay=TextRelay(translator=translator),
        gemini_client=gemini_client,
    )
