# core/gemini_text.py
from __future__ import annotations

from typing import Iterator, Optional

from google import genai
from google.genai import types

from core.gemini_vision import get_client


def generate_text_stream(
    prompt: str,
    *,
    client: Optional[genai.Client] = None,
    model: str = "gemini-2.0-flash",
    temperature: float = 0.2,
) -> Iterator[str]:
    """
    스트리밍 호출. yield 되는 문자열은 '추가로 생성된 텍스트 조각'.
    """
    if client is None:
        client = get_client()
    stream = client.models.generate_content_stream(
        model=model,
        contents=prompt,
        config=types.GenerateContentConfig(temperature=temperature),
    )

    for chunk in stream:
        t = chunk.text or ""
        if t:
            yield t
