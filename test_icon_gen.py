import calendar
from datetime import date, datetime

from PIL import Image, ImageDraw

import icon_gen
from calendar_logic import CalendarConfig
from icon_gen import (
    BACKGROUND,
    DAY_BG,
    TODAY_BG,
    create_icon_image,
    grid_origin,
    render_blank,
    render_complication,
)
from timeline import CalendarTimelineProvider


def _entry():
    provider = CalendarTimelineProvider(
        CalendarConfig(first_weekday=calendar.SUNDAY),
        clock=lambda: datetime(2023, 9, 20, 9, 0),
    )
    return provider.snapshot()


def test_grid_origin_centres_horizontally() -> None:
    assert grid_origin(700, 100) == (0, 100)
    assert grid_origin(800, 100, title_rows=2) == (50, 200)


def test_render_highlights_today() -> None:
    # 700x600 with 5 rows + title gives 100px cells starting at (0, 100)
    img = render_complication(_entry(), (700, 600))
    assert img.size == (700, 600)

    # Sep 20 is grid index 24: row 3, column 3
    assert img.getpixel((350, 403)) == TODAY_BG
    # Sep 1 is grid index 5: row 0, column 5
    assert img.getpixel((550, 103)) == DAY_BG
    # Leading blank at index 0
    assert img.getpixel((50, 150)) == BACKGROUND


def test_render_too_small_is_blank() -> None:
    img = render_complication(_entry(), (7, 6))
    assert img.getcolors() == [(42, BACKGROUND)]


def test_render_blank() -> None:
    img = render_blank((40, 30))
    assert img.size == (40, 30)
    assert img.getpixel((20, 15)) == BACKGROUND


def test_icon_image() -> None:
    img = create_icon_image(date(2023, 9, 20))
    assert img.size == (64, 64)
    assert img.mode == "RGBA"
    assert img.getpixel((32, 2))[:3] == TODAY_BG


def test_default_font_fallback_honours_size(monkeypatch) -> None:
    monkeypatch.setattr(icon_gen, "_FONT_FILES", ("no-such-font.ttf",))
    draw = ImageDraw.Draw(Image.new("RGB", (200, 200)))

    small = draw.textbbox((0, 0), "20", font=icon_gen._load_font(10))
    large = draw.textbbox((0, 0), "20", font=icon_gen._load_font(40))
    assert large[3] - large[1] > small[3] - small[1]
