# core/translator.py
from __future__ import annotations

import json
from pathlib import Path
from typing import Dict, Iterator, Optional, Protocol

from config.path import PATHS
from config.prompts import build_translate_prompt


class Translator(Protocol):
    def translate_stream(self, text: str) -> Iterator[str]: ...


class PassthroughTranslator:
    """번역 없이 원문 그대로 (--no_api / 오프라인 확인용)"""

    def translate_stream(self, text: str) -> Iterator[str]:
        if text.strip():
            yield text


def load_glossary(language: str, glossary_dir: Path = PATHS.GLOSSARY_DIR) -> Dict[str, str]:
    """
    glossaries/<language>.json : {"원문 용어": "번역 용어"}
    파일이 없거나 깨졌으면 빈 dict.
    """
    path = glossary_dir / f"{language}.json"
    if not path.exists():
        return {}

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        print(f"[WARN] glossary 로드 실패: {path} | {e}")
        return {}

    if not isinstance(data, dict):
        print(f"[WARN] glossary 형식 오류(dict 아님): {path}")
        return {}
    return {str(k): str(v) for k, v in data.items()}


class GeminiTranslator:
    def __init__(self, client: object, model: str, language: str, glossary: Optional[Dict[str, str]] = None):
        self.client = client
        self.model = model
        self.language = language
        self.glossary = glossary if glossary is not None else load_glossary(language)

    def build_prompt(self, text: str) -> str:
        # 실제로 등장한 용어만 넣어서 프롬프트를 짧게 유지
        used = {k: v for k, v in self.glossary.items() if k in text}
        return build_translate_prompt(text, self.language, used)

    def translate_stream(self, text: str) -> Iterator[str]:
        if not text.strip():
            return

        from core.gemini_text import generate_text_stream

        yield from generate_text_stream(
            self.build_prompt(text),
            client=self.client,
            model=self.model,
        )


def build_translator(name: Optional[str], *, language: str, gemini_client: object = None, gemini_model: str = "gemini-2.0-flash") -> Translator:
    """
    설정 문자열로 번역기 선택. 모르는 값은 gemini, client가 없으면 passthrough.
    """
    key = (name or "").strip().lower()

    if key == "none":
        return PassthroughTranslator()
    if key not in ("", "gemini"):
        print(f"[WARN] 알 수 없는 번역기 '{name}' -> gemini 사용")

    if gemini_client is None:
        print("[WARN] Gemini client 없음 -> 번역 생략(passthrough)")
        return PassthroughTranslator()
    return GeminiTranslator(gemini_client, gemini_model, language)
