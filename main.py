from __future__ import annotations

# ======================
# Standard library
# ======================
import argparse
from dataclasses import replace

# ======================
# Local modules
# ======================
from app.capture import get_frame
from app.command_runner import CommandRunner
from app.run import run_loop
from app.settings import load_settings
from app.wiring import build_deps
from core.window_tracker import WindowTracker
from workflow.commands import CAPTURE_COMMANDS, commands_from_cli

OWN_TITLE = "Umamusume OCR"


def main() -> None:
    parser = argparse.ArgumentParser(prog="umamusume-ocr")
    parser.add_argument("--capture", choices=sorted(CAPTURE_COMMANDS), default=None,
                        help="한 번만 수동 캡처(강제 OCR + 이미지 저장) 후 종료")
    parser.add_argument("--restore_window", action="store_true",
                        help="게임 창을 설정된 위치/크기로 되돌림")
    parser.add_argument("--reset_window", action="store_true",
                        help="잡아둔 창 핸들을 버리고 포그라운드 창에서 다시 찾음")
    parser.add_argument("--no_api", action="store_true", help="Gemini 호출 없이 원문만 출력")
    parser.add_argument("--sleep", type=float, default=None)
    args = parser.parse_args()

    settings = load_settings()
    if args.sleep is not None:
        settings = replace(settings, sleep_sec=args.sleep)

    # ----------------------
    # Init
    # ----------------------
    tracker = WindowTracker(settings.window_title, own_title=OWN_TITLE)
    deps = build_deps(settings, no_api=args.no_api)

    def grab_frame():
        return get_frame(tracker, settings)

    print(f"[INFO] window='{settings.window_title}' ocr={settings.ocr_backend} "
          f"translator={'none' if args.no_api else settings.translator_backend} lang={settings.language}")

    commands = commands_from_cli(args.capture, args.restore_window, args.reset_window)

    if commands:
        # 창 핸들 확보 (포그라운드 창이 게임이어야 함)
        tracker.get_window_rect()
        CommandRunner(settings=settings, deps=deps, grab_frame=grab_frame, tracker=tracker).execute(commands)
        return

    # ----------------------
    # Main loop
    # ----------------------
    try:
        run_loop(settings, deps, grab_frame)
    except KeyboardInterrupt:
        print("\n[INFO] 종료")


if __name__ == "__main__":
    main()
