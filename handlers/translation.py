from __future__ import annotations

import time
from typing import Iterable, Optional

from core.translator import Translator


def run_streaming(label: str, stream_iter: Iterable[str]) -> str:
    chunks: list[str] = []
    start_t = time.perf_counter()
    first_token_time: Optional[float] = None

    for delta in stream_iter:
        if first_token_time is None:
            first_token_time = time.perf_counter()
            print(f"\n[{label}] ⏱ 첫 토큰: {first_token_time - start_t:.2f}s\n")
        print(delta, end="", flush=True)
        chunks.append(delta)

    end_t = time.perf_counter()
    print(f"\n\n[{label}] ⏱ 전체: {end_t - start_t:.2f}s")
    return "".join(chunks)


def run_translation(text: str, *, translator: Translator) -> Optional[str]:
    try:
        return run_streaming("TRANSLATE", translator.translate_stream(text))
    except Exception as e:
        print("[ERR] 번역 실패:", repr(e))
        return None
