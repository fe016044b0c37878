from __future__ import annotations

import time
from typing import Callable, Optional

from PIL import Image
from config.path import PATHS
from app.settings import AppSettings
from app.wiring import AppDeps
from app.frame_types import TickResult


def process_frame(deps: AppDeps, frame_img: Image.Image) -> TickResult:
    """
    한 프레임 처리: 선택지 먼저, 없으면 스토리 대사.
    """
    relay = deps.relay

    choices_text = deps.extractor.ocr_choices(frame_img)
    if relay.relay(choices_text):
        return TickResult(kind="Choices", text=relay.last_text, translated=relay.last_translated)

    dialogue = deps.extractor.ocr_story_dialogue(frame_img)
    if dialogue is not None and relay.relay(dialogue.as_text()):
        return TickResult(kind="Story", text=relay.last_text, translated=relay.last_translated)

    return TickResult(kind="Idle")


def _safe_tick(deps: AppDeps, frame_img: Image.Image) -> Optional[TickResult]:
    try:
        return process_frame(deps, frame_img)
    except Exception as e:
        # 한 틱 실패는 건너뛰고 다음 틱에서 다시 시도
        print("[ERR] 프레임 처리 실패:", repr(e))
        return None


GrabFrame = Callable[[], Optional[Image.Image]]
# 반환: 캐노니컬 프레임 / 이번 틱에 프레임 없으면 None


def run_loop(
    settings: AppSettings,
    deps: AppDeps,
    grab_frame: GrabFrame,
    stop_event: Optional[object] = None,  # threading.Event 같은 것
) -> None:
    was_missing = False

    while True:
        if stop_event is not None and getattr(stop_event, "is_set")():
            print("[INFO] stop_event set -> exit loop")
            return

        # 1) Frame capture
        frame_img = grab_frame()
        if frame_img is None:
            if not was_missing:
                print("[WARN] 게임 창을 찾을 수 없음 / 캡처 실패")
            was_missing = True
            time.sleep(settings.sleep_sec)
            continue

        if was_missing:
            print("[INFO] 게임 창 감지")
        was_missing = False

        if settings.debug_save:
            PATHS.CAPTURE_DIR.mkdir(parents=True, exist_ok=True)
            frame_img.save(PATHS.GAME_CAPTURE_PNG)

        # 2) Detect -> cache -> OCR -> translate
        res = _safe_tick(deps, frame_img)
        if res is not None and res.kind != "Idle":
            print(f"[{res.kind.upper()}]")

        time.sleep(settings.sleep_sec)


FrameProvider = Callable[[], Optional[Image.Image]]
# 반환: 캐노니컬 프레임 / 더 이상 프레임 없으면 None


def run_loop_with_provider(
    settings: AppSettings,
    deps: AppDeps,
    frame_provider: FrameProvider,
    sleep_sec: Optional[float] = None,
    stop_event: Optional[object] = None,
) -> list[TickResult]:
    sleep = settings.sleep_sec if sleep_sec is None else sleep_sec
    results: list[TickResult] = []

    while True:
        if stop_event is not None and getattr(stop_event, "is_set")():
            print("[INFO] stop_event set -> exit loop")
            return results

        frame_img = frame_provider()
        if frame_img is None:
            print("[INFO] no more frames -> exit loop")
            return results

        res = _safe_tick(deps, frame_img)
        if res is not None:
            results.append(res)

        if sleep > 0:
            time.sleep(sleep)
