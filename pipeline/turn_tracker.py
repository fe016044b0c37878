from core.roi_manager import RegionKind

# 이 종류 직후의 스토리 대사는 같은 턴의 연속으로 본다
CONTINUES_INTO_STORY = frozenset({RegionKind.CHOICES, RegionKind.SPEAKER})


class TurnTracker:
    def __init__(self, initial_kind: RegionKind = RegionKind.FULLSCREEN):
        self.initial_kind = initial_kind
        self.last_kind = initial_kind

    def reset(self) -> None:
        self.last_kind = self.initial_kind

    def allows_comparison(self, kind: RegionKind) -> bool:
        # 같은 종류를 연속 처리하는 경우
        if kind == self.last_kind:
            return True

        # 선택지/화자 이름 직후의 스토리 대사
        return kind == RegionKind.STORY_DIALOGUE and self.last_kind in CONTINUES_INTO_STORY

    def update(self, kind: RegionKind) -> RegionKind:
        self.last_kind = kind
        return self.last_kind
