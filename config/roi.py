from dataclasses import dataclass
# x, y, w, h
# 캐노니컬 프레임(1165 x 2072) 기준 절대 좌표. 왼쪽 위 모서리의 x, y, 너비 w, 높이 h
@dataclass(frozen=True)
class ROISet:
    PROCESSING_SIZE = (1165, 2072)

    FULL_GAME_AREA = (0, 0, 1165, 2072)
    CENTER_DIALOGUE_AREA = (10, 615, 1050, 800)

    # 스토리 대화창: 버튼 흰 띠를 찾는 세로 1px 탐침
    STORY_PROBE = (1165 // 3 * 2, 2072 - 500, 1, 300)
    STORY_MIN_WHITE_RUN = 65
    STORY_BUTTON_STRIP_WIDTH = 400
    STORY_TOP_OFFSET = 332
    STORY_TOP_STRIP_HEIGHT = 6
    STORY_SNAP_LOW = 263   # exclusive
    STORY_SNAP_HIGH = 268  # exclusive
    STORY_SNAP_VALUE = 266
    STORY_ICON_X = 1165 - 155
    STORY_ICON_HEIGHT = 15

    STORY_DIALOGUE_X = 85
    STORY_DIALOGUE_Y_OFFSET = 55
    STORY_DIALOGUE_WIDTH = 965
    STORY_DIALOGUE_HEIGHT = 235

    SPEAKER_CHECK_X = 140
    SPEAKER_CHECK_Y_OFFSET = 40
    SPEAKER_CHECK_WIDTH = 15
    SPEAKER_AREA = (100, -353, 450, 60)  # y는 버튼 행 기준 상대값

    # 선택지: 배경이 어두워지는지 확인하는 탐침들
    CHOICE_DARK_AREAS = (
        (1100, 1900, 5, 1),
        (100, 1900, 5, 1),
        (600, 1700, 5, 1),
    )
    CHOICE_DARK_MAX_SUM = 127 * 3
    CHOICE_EDGE_AREA = (35, 1300, 12, 1)

    # 맨 아래 슬롯(index 4). 위 슬롯들은 180px씩 위로 이동
    CHOICE_SLOT_COUNT = 5
    CHOICE_SLOT_SHIFT = 180
    CHOICE_BASE_AREA = (115, 1300, 960, 80)
    CHOICE_BASE_ICON_AREA = (62, 1342, 40, 1)
    CHOICE_BASE_CHARACTER_AREA = (115 + 50 - 5, 1300 + 24, 10, 30)
    CHOICE_CHARACTER_COLOR = (121, 64, 22)
    CHOICE_CHARACTER_THRESHOLD = 5

ROI = ROISet()
