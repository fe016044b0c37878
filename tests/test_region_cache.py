from __future__ import annotations

import numpy as np
from PIL import Image

from core.roi_manager import Region, RegionKind
from pipeline.region_cache import RegionChangeCache, make_thumbnail
from pipeline.turn_tracker import TurnTracker

STORY = Region(85, 1561, 965, 235)


def solid(size, color) -> Image.Image:
    return Image.new("RGB", size, color)


def test_thumbnail_scale_depends_on_kind():
    img = solid((965, 235), (10, 20, 30))
    assert make_thumbnail(img, STORY, RegionKind.STORY_DIALOGUE).shape == (19, 80, 3)

    choices = Region(115, 1300, 960, 160)
    assert make_thumbnail(solid((960, 160), (0, 0, 0)), choices, RegionKind.CHOICES).shape == (80, 480, 3)


def test_tiny_region_keeps_one_pixel():
    thumb = make_thumbnail(solid((5, 5), (1, 2, 3)), Region(0, 0, 5, 5), RegionKind.CENTER)
    assert thumb.shape == (1, 1, 3)


def test_first_sighting_is_changed_then_stable():
    cache = RegionChangeCache()
    img = solid((965, 235), (40, 40, 40))

    assert cache.check_and_update(RegionKind.STORY_DIALOGUE, img, STORY) is True
    assert cache.tracker.last_kind == RegionKind.STORY_DIALOGUE
    assert cache.check_and_update(RegionKind.STORY_DIALOGUE, img, STORY) is False


def test_small_noise_is_ignored_but_new_text_is_not():
    cache = RegionChangeCache()
    base = solid((965, 235), (40, 40, 40))
    cache.check_and_update(RegionKind.STORY_DIALOGUE, base, STORY)

    noisy = solid((965, 235), (60, 25, 55))
    assert cache.check_and_update(RegionKind.STORY_DIALOGUE, noisy, STORY) is False

    other = solid((965, 235), (200, 200, 200))
    assert cache.check_and_update(RegionKind.STORY_DIALOGUE, other, STORY) is True


def test_moved_region_is_changed():
    cache = RegionChangeCache()
    img = solid((965, 235), (40, 40, 40))
    cache.check_and_update(RegionKind.STORY_DIALOGUE, img, STORY)

    moved = Region(STORY.x, STORY.y + 3, STORY.width, STORY.height)
    assert cache.check_and_update(RegionKind.STORY_DIALOGUE, img, moved) is True


def test_force_save_always_changes():
    cache = RegionChangeCache()
    img = solid((965, 235), (40, 40, 40))
    cache.check_and_update(RegionKind.STORY_DIALOGUE, img, STORY)

    assert cache.check_and_update(RegionKind.STORY_DIALOGUE, img, STORY, force_save=True) is True


def test_check_without_commit_leaves_state():
    tracker = TurnTracker()
    cache = RegionChangeCache(tracker)
    img = solid((965, 235), (40, 40, 40))

    result = cache.check(RegionKind.STORY_DIALOGUE, img, STORY)

    assert result.changed
    assert cache.entries[RegionKind.STORY_DIALOGUE].is_empty
    assert tracker.last_kind == RegionKind.FULLSCREEN

    cache.commit(result)
    assert not cache.entries[RegionKind.STORY_DIALOGUE].is_empty
    assert tracker.last_kind == RegionKind.STORY_DIALOGUE


def test_unchanged_result_does_not_overwrite_entry():
    cache = RegionChangeCache()
    base = solid((965, 235), (40, 40, 40))
    cache.check_and_update(RegionKind.STORY_DIALOGUE, base, STORY)
    stored = cache.entries[RegionKind.STORY_DIALOGUE].thumbnail

    cache.check_and_update(RegionKind.STORY_DIALOGUE, solid((965, 235), (50, 40, 40)), STORY)

    assert cache.entries[RegionKind.STORY_DIALOGUE].thumbnail is stored


def test_story_after_choices_is_compared():
    cache = RegionChangeCache()
    story = solid((965, 235), (40, 40, 40))
    choices = solid((960, 80), (90, 90, 90))

    cache.check_and_update(RegionKind.STORY_DIALOGUE, story, STORY)
    cache.check_and_update(RegionKind.CHOICES, choices, Region(115, 1300, 960, 80))

    assert cache.check_and_update(RegionKind.STORY_DIALOGUE, story, STORY) is False


def test_story_after_center_is_always_new():
    cache = RegionChangeCache()
    story = solid((965, 235), (40, 40, 40))

    cache.check_and_update(RegionKind.STORY_DIALOGUE, story, STORY)
    cache.check_and_update(RegionKind.CENTER, solid((1050, 800), (0, 0, 0)), Region(10, 615, 1050, 800))

    assert cache.check_and_update(RegionKind.STORY_DIALOGUE, story, STORY) is True


def thin_lines(size, every: int = 12) -> Image.Image:
    arr = np.zeros((size[1], size[0], 3), dtype=np.uint8)
    arr[:, ::every] = (255, 255, 255)
    return Image.fromarray(arr)


def test_choices_keep_thin_strokes():
    blank = solid((960, 84), (0, 0, 0))
    lines = thin_lines((960, 84))

    # 1/12 축소면 1px 획은 평균에 묻힘
    story = RegionChangeCache()
    story.check_and_update(RegionKind.STORY_DIALOGUE, blank, Region(0, 0, 960, 84))
    assert story.check_and_update(RegionKind.STORY_DIALOGUE, lines, Region(0, 0, 960, 84)) is False

    choices = RegionChangeCache()
    choices.check_and_update(RegionKind.CHOICES, blank, Region(0, 0, 960, 84))
    assert choices.check_and_update(RegionKind.CHOICES, lines, Region(0, 0, 960, 84)) is True


def test_reset_clears_entries():
    cache = RegionChangeCache()
    img = solid((965, 235), (40, 40, 40))
    cache.check_and_update(RegionKind.STORY_DIALOGUE, img, STORY)

    cache.reset()

    assert all(entry.is_empty for entry in cache.entries.values())
    assert cache.check_and_update(RegionKind.STORY_DIALOGUE, img, STORY) is True
