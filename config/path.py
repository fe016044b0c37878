# config/path.py
from dataclasses import dataclass
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]

@dataclass(frozen=True)
class Paths:
    ENV_FILE: Path = PROJECT_ROOT / "config" / ".env"
    GLOSSARY_DIR: Path = PROJECT_ROOT / "config" / "glossaries"

    CAPTURE_DIR: Path = PROJECT_ROOT / "captured_images"
    GAME_CAPTURE_PNG: Path = CAPTURE_DIR / "game_capture.png"

    TEST_IMAGES_DIR: Path = CAPTURE_DIR / "test_images"
    TEST_FRAMES_DIR: Path = TEST_IMAGES_DIR / "frames"

PATHS = Paths()
