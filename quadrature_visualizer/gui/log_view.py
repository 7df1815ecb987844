from __future__ import annotations

import html
from dataclasses import dataclass
from typing import List, Literal

import ipywidgets as w


Level = Literal["info", "warning", "error"]

_COLORS = {
    "error": "#ff5555",
    "warning": "#ffa500",
    "info": "#dddddd",
}


@dataclass
class _Entry:
    level: Level
    message: str
    count: int = 1


class HtmlLog:
    """
    Log panel rendered into a single HTML widget.

    A single widget renders identically in every notebook front-end, whereas
    ipywidgets.Output capture can be duplicated by some of them.

    Features:
      - severity colouring (warnings orange, errors red)
      - consecutive identical messages are coalesced and shown as xN
      - bounded history (oldest entries dropped beyond max_entries)
    """

    def __init__(self, *, title: str | None = None, height_px: int = 140, max_entries: int = 500) -> None:
        self._entries: List[_Entry] = []
        self._height_px = int(height_px)
        self._max_entries = int(max_entries)
        self.widget = w.HTML()
        if title:
            self.panel = w.VBox([w.HTML(f"<b>{html.escape(str(title))}</b>"), self.widget])
        else:
            self.panel = self.widget
        self.clear()

    @property
    def entries(self) -> List[tuple]:
        """``(level, message, count)`` for each rendered row."""
        return [(e.level, e.message, e.count) for e in self._entries]

    def clear(self) -> None:
        self._entries.clear()
        self._render()

    def info(self, message: str) -> None:
        self._add("info", message)

    def warning(self, message: str) -> None:
        self._add("warning", message)

    def error(self, message: str) -> None:
        self._add("error", message)

    def exception(self, exc: BaseException) -> None:
        self._add("error", f"ERROR: {type(exc).__name__}: {exc}")

    # -------------------------
    # Internals
    # -------------------------
    def _add(self, level: Level, message: str) -> None:
        msg = "" if message is None else str(message)

        last = self._entries[-1] if self._entries else None
        if last is not None and last.level == level and last.message == msg:
            last.count += 1
        else:
            self._entries.append(_Entry(level=level, message=msg))
            if len(self._entries) > self._max_entries:
                self._entries = self._entries[-self._max_entries :]
        self._render()

    def _render(self) -> None:
        rows = []
        for e in self._entries:
            suffix = f" (x{e.count})" if e.count > 1 else ""
            rows.append(
                f"<div style='color:{_COLORS[e.level]}; white-space:pre-wrap; font-family:monospace;'>"
                f"{html.escape(e.message + suffix)}</div>"
            )
        inner = "".join(rows) if rows else "<div style='color:#888;'>Log is empty.</div>"
        self.widget.value = (
            f"<div style='border:1px solid #333; padding:6px; height:{self._height_px}px; "
            f"overflow-y:auto; background:#0d0d0d;'>{inner}</div>"
        )
