# config/prompts.py
from __future__ import annotations

import json

OCR_PROMPT = """
You are an OCR engine for a Japanese mobile game.
Transcribe ALL Japanese text visible in this image exactly as written.

Rules:
- Output one line of text per visual line, top to bottom.
- Do not translate, explain or add anything.
- If there is no text, output nothing.
""".strip()


TRANSLATE_PROMPT = """
Translate the following Japanese game text into {language}.
Keep the line breaks. The first line may be a speaker name.
Output ONLY the translation.
""".strip()


GLOSSARY_PROMPT = """
Always translate these terms exactly as given (JSON, source -> target):
{glossary_json}
""".strip()

LANGUAGE_NAMES = {
    "en": "English",
    "zh-Hans": "Simplified Chinese",
}


def build_translate_prompt(text: str, language: str, glossary: dict | None = None) -> str:
    prompt = TRANSLATE_PROMPT.format(language=LANGUAGE_NAMES.get(language, language))
    if glossary:
        glossary_json = json.dumps(glossary, ensure_ascii=False, indent=2)
        prompt += "\n\n" + GLOSSARY_PROMPT.format(glossary_json=glossary_json)
    return prompt + "\n\n" + text
