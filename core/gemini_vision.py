# core/gemini_vision.py
from __future__ import annotations

import os
from dataclasses import dataclass
from io import BytesIO
from typing import Any, Optional

from dotenv import load_dotenv
from google import genai
from google.genai import types
from PIL import Image

from config.path import PATHS


@dataclass
class GeminiVisionResult:
    text: str
    raw: Any  # response 객체(디버그용)


# =========================
# Client 싱글턴 (매번 만들지 말고 재사용)
# =========================
_client_singleton: Optional[genai.Client] = None


def get_client(api_key_env: str = "GEMINI_API_KEY") -> genai.Client:
    global _client_singleton
    if _client_singleton is not None:
        return _client_singleton

    load_dotenv(PATHS.ENV_FILE)
    api_key = os.getenv(api_key_env)
    if not api_key:
        raise RuntimeError(f"환경변수 {api_key_env} 가 비어 있습니다. .env 또는 환경변수를 확인하세요.")

    _client_singleton = genai.Client(
        api_key=api_key,
        http_options=types.HttpOptions(
            timeout=20_000,
            retry_options=types.HttpRetryOptions(
                attempts=1,
                initial_delay=0.2,
                max_delay=0.5,
                http_status_codes=[408, 429, 500, 502, 503, 504],
            ),
        ),
    )
    return _client_singleton


def _pil_to_png_bytes(img: Image.Image) -> bytes:
    buf = BytesIO()
    img.convert("RGB").save(buf, format="PNG")
    return buf.getvalue()


def analyze_image(
    img: Image.Image,
    *,
    prompt: str,
    client: Optional[genai.Client] = None,
    model: str = "gemini-2.0-flash",
    mime_type: str = "image/png",
) -> GeminiVisionResult:
    """
    PIL Image 1장을 Gemini에 보내고 response.text를 반환.
    """
    if client is None:
        client = get_client()
    img_bytes = _pil_to_png_bytes(img)

    response = client.models.generate_content(
        model=model,
        contents=[
            prompt,
            types.Part.from_bytes(data=img_bytes, mime_type=mime_type),
        ],
        config=types.GenerateContentConfig(temperature=0.0),
    )

    return GeminiVisionResult(text=(response.text or "").strip(), raw=response)
