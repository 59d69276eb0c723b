"""Desktop notifications when a schedule event arrives."""

import logging

from plyer import notification as plyer_notification

from mawaqit.i18n import prayer_label, ui_text

logger = logging.getLogger(__name__)

APP_NAME = "Mawaqit"
APP_ICON = ""  # Path to icon file; empty = default


def _send_plyer(title: str, message: str, timeout: int = 10) -> None:
    """Send a desktop notification via plyer (cross-platform)."""
    kwargs = dict(
        app_name=APP_NAME,
        title=title,
        message=message,
        timeout=timeout,
    )
    if APP_ICON:
        kwargs["app_icon"] = APP_ICON
    try:
        plyer_notification.notify(**kwargs)
    except Exception as exc:
        # no notification backend on this desktop
        logger.warning("Desktop notification failed: %s", exc)


def notify_event(event_name: str, lang: str, callback=None) -> None:
    """
    Announce that event_name (e.g. 'Maghrib', 'LastThird') has arrived.
    Optionally calls callback(title, message) in the caller's thread.
    """
    label = prayer_label(event_name, lang)
    title = f"🕌 {label}"
    message = ui_text("event_arrived", lang).format(name=label)
    logger.info("Event arrived: %s", event_name)
    _send_plyer(title, message, timeout=30)
    if callback:
        callback(title, message)


class ArrivalWatcher:
    """
    Detects event arrival from successive ticks: when the next event
    changes, the previous one has just started.
    """

    def __init__(self):
        self._pending = None

    def reset(self):
        self._pending = None

    def observe(self, next_name: str, next_dt, now) -> str | None:
        """
        Feed the tick's next event; return the name of an event that just
        arrived. A change only counts once the previous event's time has
        been reached, so a reload that moves an event is not an arrival.
        """
        pending = (next_name, next_dt)
        previous = self._pending
        self._pending = pending
        if previous is None or previous == pending:
            return None
        if previous[1] > now:
            return None
        return previous[0]
