"""Draw complication entries and the tray icon as in-memory PIL images."""

from datetime import date

from PIL import Image, ImageDraw, ImageFont

from calendar_logic import DAYS_PER_WEEK, DayCell, compute_cell_size
from timeline import ComplicationEntry

# Colours
BACKGROUND = (0, 0, 0)
TEXT_FG = (255, 255, 255)
TODAY_BG = (255, 0, 0)
DAY_BG = (26, 26, 26)  # gray at 20% opacity over black

CORNER_RATIO = 0.2

_FONT_FILES = ("segoeuib.ttf", "DejaVuSans-Bold.ttf")


def _load_font(size: int) -> ImageFont.ImageFont | ImageFont.FreeTypeFont:
    for name in _FONT_FILES:
        try:
            return ImageFont.truetype(name, size)
        except OSError:
            continue
    return ImageFont.load_default(size)


def _draw_centered(draw: ImageDraw.ImageDraw, box: tuple[float, float, float, float],
                   text: str, font, fill) -> None:
    bbox = draw.textbbox((0, 0), text, font=font)
    x = box[0] + (box[2] - box[0] - (bbox[2] - bbox[0])) / 2 - bbox[0]
    y = box[1] + (box[3] - box[1] - (bbox[3] - bbox[1])) / 2 - bbox[1]
    draw.text((x, y), text, fill=fill, font=font)


def grid_origin(width: float, cell: float, title_rows: int = 1) -> tuple[float, float]:
    """Top-left corner of the first grid cell (grid centred horizontally)."""
    return (width - cell * DAYS_PER_WEEK) / 2, cell * title_rows


def render_complication(entry: ComplicationEntry, size: tuple[int, int],
                        font_size: int = 14, title_rows: int = 1) -> Image.Image:
    """Render *entry* as a title strip above a 7-column month grid.

    Empty cells are left blank, today's tile is red and every other day gets
    a dim gray tile.
    """
    width, height = size
    img = Image.new("RGB", (width, height), BACKGROUND)
    cell = compute_cell_size(width, height, entry.row_count, title_rows)
    if cell < 2:
        return img

    draw = ImageDraw.Draw(img)
    font = _load_font(font_size)
    x0, y0 = grid_origin(width, cell, title_rows)

    if title_rows:
        _draw_centered(draw, (0, 0, width, y0), entry.title, font, TEXT_FG)

    radius = int(cell * CORNER_RATIO)
    for i, c in enumerate(entry.grid):
        if not isinstance(c, DayCell):
            continue
        row, col = divmod(i, DAYS_PER_WEEK)
        left = round(x0 + col * cell)
        top = round(y0 + row * cell)
        box = (left, top, left + int(cell) - 1, top + int(cell) - 1)
        draw.rounded_rectangle(box, radius=radius,
                               fill=TODAY_BG if c.is_today else DAY_BG)
        _draw_centered(draw, box, str(c.day), font, TEXT_FG)
    return img


def render_blank(size: tuple[int, int]) -> Image.Image:
    """Fallback image when no grid could be computed."""
    return Image.new("RGB", size, BACKGROUND)


def create_icon_image(today: date | None = None) -> Image.Image:
    """Return a 64×64 RGBA image: today's day number on a red tile."""
    size = 64
    img = Image.new("RGBA", (size, size), (0, 0, 0, 0))
    draw = ImageDraw.Draw(img)
    draw.rounded_rectangle((0, 0, size - 1, size - 1),
                           radius=int(size * CORNER_RATIO), fill=TODAY_BG)

    label = str((today or date.today()).day)

    # Find the largest font size that fits the icon
    font_size = 120
    font = None
    while font_size > 10:
        font = _load_font(font_size)
        if not isinstance(font, ImageFont.FreeTypeFont):
            break
        bbox = draw.textbbox((0, 0), label, font=font)
        if bbox[2] - bbox[0] <= size - 8 and bbox[3] - bbox[1] <= size - 8:
            break
        font_size -= 1

    _draw_centered(draw, (0, 0, size, size), label, font, TEXT_FG)
    return img
