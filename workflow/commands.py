from __future__ import annotations
from dataclasses import dataclass
from typing import List, Literal, Optional

CommandType = Literal[
    "CAPTURE_STORY",
    "CAPTURE_CENTER",
    "CAPTURE_CHOICES",
    "CAPTURE_FULLSCREEN",
    "RESET_WINDOW",
    "RESTORE_WINDOW",
]

# CLI --capture 값 -> 명령
CAPTURE_COMMANDS: dict[str, CommandType] = {
    "story": "CAPTURE_STORY",
    "center": "CAPTURE_CENTER",
    "choices": "CAPTURE_CHOICES",
    "fullscreen": "CAPTURE_FULLSCREEN",
}

@dataclass(frozen=True)
class Command:
    type: CommandType
    reason: str = ""


def commands_from_cli(
    capture: Optional[str] = None,
    restore_window: bool = False,
    reset_window: bool = False,
) -> List[Command]:
    """
    창 명령 먼저(reset -> restore), 캡처는 마지막.
    """
    commands: List[Command] = []
    if reset_window:
        commands.append(Command(type="RESET_WINDOW", reason="cli --reset_window"))
    if restore_window:
        commands.append(Command(type="RESTORE_WINDOW", reason="cli --restore_window"))
    if capture:
        commands.append(Command(type=CAPTURE_COMMANDS[capture], reason=f"cli --capture {capture}"))
    return commands
