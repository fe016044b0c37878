from __future__ import annotations

# ======================
# Standard library
# ======================
import argparse
from pathlib import Path
from typing import Iterator, Optional

# ======================
# Third-party
# ======================
from PIL import Image

# ======================
# Local modules
# ======================
from config.path import PATHS

from app.run import run_loop_with_provider
from app.settings import load_settings
from app.wiring import build_deps
from core.roi_manager import to_canonical_frame


# ======================
# Helpers
# ======================
def list_images(folder: Path) -> list[Path]:
    exts = {".png", ".jpg", ".jpeg", ".webp", ".bmp"}
    paths = [p for p in folder.iterdir() if p.is_file() and p.suffix.lower() in exts]
    return sorted(paths, key=lambda p: p.name)


def open_rgb(path: Path) -> Image.Image:
    img = Image.open(path)
    if img.mode != "RGB":
        img = img.convert("RGB")
    return img


def iter_frames(paths: list[Path], limit: int = 0) -> Iterator[Image.Image]:
    for idx, p in enumerate(paths, start=1):
        if limit and idx > limit:
            return
        print(f"\n#[{idx:04d}] {p.name}")
        # 저장된 스크린샷은 크기가 제각각이라 여기서 캐노니컬로 맞춘다
        yield to_canonical_frame(open_rgb(p))


# ======================
# Main
# ======================
def main() -> None:
    parser = argparse.ArgumentParser()
    parser.add_argument("--testset", required=True)
    parser.add_argument("--sleep", type=float, default=0.0)
    parser.add_argument("--limit", type=int, default=0)
    parser.add_argument("--no_api", action="store_true")
    args = parser.parse_args()

    settings = load_settings()

    test_dir = PATHS.TEST_FRAMES_DIR / args.testset
    if not test_dir.exists():
        raise FileNotFoundError(f"테스트셋 폴더 없음: {test_dir}")

    img_paths = list_images(test_dir)
    if not img_paths:
        raise FileNotFoundError(f"이미지 없음: {test_dir}")

    deps = build_deps(settings, no_api=args.no_api)

    print(f"📁 OFFLINE testset: {test_dir}")
    print(f"🖼 frames: {len(img_paths)} | no_api={args.no_api} | ocr={settings.ocr_backend}")
    print("====================================")

    frames = iter_frames(img_paths, args.limit)

    def provider() -> Optional[Image.Image]:
        return next(frames, None)

    results = run_loop_with_provider(settings, deps, provider, sleep_sec=args.sleep)

    counts: dict[str, int] = {}
    for r in results:
        counts[r.kind] = counts.get(r.kind, 0) + 1

    print("\n====================================")
    print(f"✅ OFFLINE DONE. processed={len(results)} / total={len(img_paths)} | {counts}")


if __name__ == "__main__":
    main()
