# core/ocr_engine.py
from __future__ import annotations

from typing import Optional, Protocol

import cv2
import numpy as np
import pytesseract
from PIL import Image

from config.prompts import OCR_PROMPT
from pipeline.normalizer import TextNormalizer


class OcrEngine(Protocol):
    def extract_text(self, img: Image.Image, combine_lines: bool) -> Optional[str]: ...


def preprocess_for_ocr(pil_img: Image.Image):
    """
    OCR 정확도 향상을 위한 전처리
    """
    img = np.array(pil_img.convert("RGB"))

    # RGB → GRAY
    gray = cv2.cvtColor(img, cv2.COLOR_RGB2GRAY)

    # 노이즈 제거
    gray = cv2.GaussianBlur(gray, (3, 3), 0)

    # 이진화
    _, binary = cv2.threshold(gray, 0, 255, cv2.THRESH_BINARY + cv2.THRESH_OTSU)

    return binary


class TesseractOcr:
    def __init__(self, lang: str = "jpn", normalizer: Optional[TextNormalizer] = None):
        self.lang = lang
        self.normalizer = normalizer or TextNormalizer()

    def extract_text(self, img: Image.Image, combine_lines: bool) -> Optional[str]:
        processed = preprocess_for_ocr(img)
        try:
            text = pytesseract.image_to_string(processed, lang=self.lang, config="--psm 6")
        except (pytesseract.TesseractError, pytesseract.TesseractNotFoundError) as e:
            print("[ERR] Tesseract OCR 실패:", repr(e))
            return None

        return self.normalizer.normalize(text.splitlines(), combine_lines=combine_lines)


class GeminiOcr:
    def __init__(self, client: object, model: str, normalizer: Optional[TextNormalizer] = None):
        self.client = client
        self.model = model
        self.normalizer = normalizer or TextNormalizer()

    def extract_text(self, img: Image.Image, combine_lines: bool) -> Optional[str]:
        from core.gemini_vision import analyze_image

        try:
            res = analyze_image(img, prompt=OCR_PROMPT, client=self.client, model=self.model)
        except Exception as e:
            print("[ERR] Gemini OCR 호출 실패:", repr(e))
            return None

        return self.normalizer.normalize(res.text.splitlines(), combine_lines=combine_lines)


def build_ocr(name: Optional[str], *, tesseract_lang: str = "jpn", gemini_client: object = None, gemini_model: str = "gemini-2.0-flash") -> OcrEngine:
    """
    설정 문자열로 OCR 백엔드 선택. 모르는 값/준비 안 된 백엔드는 tesseract.
    """
    key = (name or "").strip().lower()

    if key == "gemini":
        if gemini_client is None:
            print("[WARN] Gemini client 없음 -> tesseract 사용")
        else:
            return GeminiOcr(gemini_client, gemini_model)
    elif key not in ("", "tesseract"):
        print(f"[WARN] 알 수 없는 OCR 백엔드 '{name}' -> tesseract 사용")

    return TesseractOcr(lang=tesseract_lang)
