"""JSON-based settings persistence for the calendar complication."""

import json
import logging
import os

from calendar_logic import CalendarConfig

log = logging.getLogger(__name__)

_SETTINGS_PATH = os.environ.get(
    "NANOCAL_SETTINGS",
    os.path.join(os.path.expanduser("~"), ".nanocal-settings.json"),
)

_DEFAULTS = {
    "first_weekday": None,  # None = process default (calendar.firstweekday())
    "font_size": 14,
    "title_rows": 1,
    "window_width": None,
    "window_height": None,
}


def load_settings() -> dict:
    """Load settings from disk, returning defaults for missing keys."""
    settings = dict(_DEFAULTS)
    try:
        with open(_SETTINGS_PATH, "r", encoding="utf-8") as f:
            stored = json.load(f)
    except FileNotFoundError:
        return settings
    except (json.JSONDecodeError, OSError) as exc:
        log.warning("Ignoring unreadable settings file %s: %s", _SETTINGS_PATH, exc)
        return settings
    if not isinstance(stored, dict):
        log.warning("Ignoring settings file %s: not a JSON object", _SETTINGS_PATH)
        return settings

    fw = stored.get("first_weekday")
    if _is_int(fw) and 0 <= fw <= 6:
        settings["first_weekday"] = fw
    if _is_int(stored.get("font_size")) and stored["font_size"] > 0:
        settings["font_size"] = stored["font_size"]
    if _is_int(stored.get("title_rows")) and stored["title_rows"] >= 0:
        settings["title_rows"] = stored["title_rows"]
    for key in ("window_width", "window_height"):
        if _is_int(stored.get(key)) and stored[key] > 0:
            settings[key] = stored[key]
    return settings


def save_settings(settings: dict) -> None:
    """Persist settings to disk."""
    with open(_SETTINGS_PATH, "w", encoding="utf-8") as f:
        json.dump(settings, f, indent=2)


def calendar_config(settings: dict) -> CalendarConfig:
    """Build the calendar configuration described by *settings*."""
    fw = settings.get("first_weekday")
    if fw is None:
        return CalendarConfig.current()
    return CalendarConfig(first_weekday=fw)


def _is_int(value) -> bool:
    # bool is an int subclass; JSON true/false must not count
    return isinstance(value, int) and not isinstance(value, bool)
