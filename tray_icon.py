"""System-tray icon setup via pystray."""

from datetime import date
from typing import Callable

import pystray
from PIL import Image
from pystray import MenuItem, Menu


def tray_title(today: date | None = None) -> str:
    return f"Calendar – {(today or date.today()).strftime('%a %d %b %Y')}"


def create_tray(
    icon_image: Image.Image,
    on_show: Callable[[], None],
    on_exit: Callable[[], None],
    today: date | None = None,
) -> pystray.Icon:
    """Build and return a pystray Icon (not yet started)."""
    menu = Menu(
        MenuItem("Show Calendar", lambda _icon, _item: on_show(), default=True),
        Menu.SEPARATOR,
        MenuItem("Exit", lambda _icon, _item: on_exit()),
    )
    return pystray.Icon("nanocal", icon_image, tray_title(today), menu)
