from __future__ import annotations
from dataclasses import dataclass
from typing import Callable, Optional, Sequence

from PIL import Image

from app.wiring import AppDeps
from app.settings import AppSettings

from workflow.commands import Command


@dataclass
class CommandRunner:
    """
    수동 캡처 명령 실행. 캡처 명령은 항상 save=True(강제 변경)로 OCR하고
    잘라낸 이미지를 captured_images/<kind>.png 로 남긴다.
    """

    settings: AppSettings
    deps: AppDeps
    grab_frame: Callable[[], Optional[Image.Image]]
    tracker: Optional[object] = None  # core.window_tracker.WindowTracker

    def _capture(self, cmd: Command) -> Optional[str]:
        frame_img = self.grab_frame()
        if frame_img is None:
            print("[WARN] 캡처할 게임 화면이 없음")
            return None

        extractor = self.deps.extractor
        t = cmd.type

        if t == "CAPTURE_STORY":
            res = extractor.ocr_story_dialogue(frame_img, save=True)
            return res.as_text() if res is not None else None
        if t == "CAPTURE_CENTER":
            return extractor.ocr_center(frame_img, save=True)
        if t == "CAPTURE_CHOICES":
            return extractor.ocr_choices(frame_img, save=True)
        if t == "CAPTURE_FULLSCREEN":
            return extractor.ocr_fullscreen(frame_img, save=True)
        return None

    def execute(self, commands: Sequence[Command]) -> list[Optional[str]]:
        """
        return: 캡처 명령별 OCR 텍스트 (창 관련 명령은 None)
        """
        texts: list[Optional[str]] = []
        for cmd in commands:
            t = cmd.type
            if cmd.reason:
                print(f"[CMD] {t} | {cmd.reason}")

            if t == "RESET_WINDOW":
                # 잡아둔 창 핸들을 버리고 현재 포그라운드 창으로 다시 탐색
                if self.tracker is not None:
                    self.tracker.reset()
                    if self.tracker.get_window_rect() is None:
                        print("[WARN] 게임 창을 다시 찾지 못함")
                texts.append(None)

            elif t == "RESTORE_WINDOW":
                if self.tracker is not None and self.tracker.set_window_rect(self.settings.window_area):
                    print("[INFO] 게임 창 위치 복원")
                texts.append(None)

            else:
                text = self._capture(cmd)
                if text is None:
                    print(f"[{t}] 텍스트 없음")
                self.deps.relay.relay(text)
                texts.append(text)

        return texts
