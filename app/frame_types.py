from __future__ import annotations
from dataclasses import dataclass
from typing import Literal, Optional

TickKind = Literal["Choices", "Story", "Idle"]

@dataclass(frozen=True)
class DialogueResult:
    dialogue: str
    speaker: Optional[str] = None

    def as_text(self) -> str:
        if self.speaker:
            return f"{self.speaker}\n{self.dialogue}"
        return self.dialogue

@dataclass(frozen=True)
class TickResult:
    kind: TickKind
    text: Optional[str] = None
    translated: Optional[str] = None
