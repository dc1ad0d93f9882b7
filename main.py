"""Entry point — glues pystray (daemon thread) with tkinter (main thread)."""

import logging
import threading

from calendar_window import CalendarWindow
from icon_gen import create_icon_image
from settings import calendar_config, load_settings
from timeline import CalendarTimelineProvider
from tray_icon import create_tray, tray_title

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s | %(levelname)s | %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
log = logging.getLogger(__name__)


def main() -> None:
    settings = load_settings()
    provider = CalendarTimelineProvider(calendar_config(settings))
    cal_win = CalendarWindow(provider, settings)

    # Callbacks marshalled onto the tkinter main thread
    def on_show() -> None:
        cal_win.root.after(0, cal_win.toggle)

    def on_exit() -> None:
        def _quit() -> None:
            tray.stop()
            cal_win.root.destroy()
        cal_win.root.after(0, _quit)

    tray = create_tray(create_icon_image(), on_show, on_exit)

    # New day: redraw the tray icon with the new day number
    def on_reload(entry) -> None:
        tray.icon = create_icon_image(entry.date.date())
        tray.title = tray_title(entry.date.date())

    cal_win.on_reload = on_reload

    # Run pystray in a daemon thread so it doesn't block tkinter
    tray_thread = threading.Thread(target=tray.run, daemon=True)
    tray_thread.start()
    log.info("Calendar complication started (first weekday %d)",
             provider.config.first_weekday)

    # tkinter main loop on the main thread
    cal_win.root.mainloop()


if __name__ == "__main__":
    main()
