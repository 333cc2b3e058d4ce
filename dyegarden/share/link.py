"""Share-link persistence — restore once from the URL, then keep it current.

The browser location is reached through the small ``Location`` protocol so
the ordering rule can be exercised without a browser: nothing is written
back until the one restore attempt has finished, otherwise the default
state would overwrite a shared link before it was read.
"""

from __future__ import annotations

import logging
from typing import Callable, Protocol

from .codec import (
    RestoreParseError, ShareState, decode, encode, fragment_for, token_from_fragment,
)


log = logging.getLogger("dyegarden.share")


class Location(Protocol):
    @property
    def fragment(self) -> str: ...

    def replace(self, fragment: str) -> None:
        """Swap the current history entry's fragment (no new entry)."""


class MemoryLocation:
    """In-process stand-in for the browser location bar."""

    def __init__(self, fragment: str = "") -> None:
        self.fragment = fragment.lstrip("#")
        self.writes = 0

    def replace(self, fragment: str) -> None:
        self.fragment = fragment
        self.writes += 1


class ShareLinkSync:
    def __init__(self, location: Location) -> None:
        self.location = location
        self.restored = False

    def restore(self, defaults: ShareState) -> ShareState:
        """Read the state from the location fragment, exactly once.

        An unreadable token is logged and ``defaults`` are returned; either
        way write-back is enabled afterwards.
        """
        if self.restored:
            raise RuntimeError("share state has already been restored")
        state = defaults
        token = token_from_fragment(self.location.fragment)
        try:
            if token is not None:
                state = decode(token, defaults)
                log.info("Restored shared garden %dx%d with %d placement(s)",
                         state.columns, state.rows, len(state.placements))
        except RestoreParseError as exc:
            log.warning("Failed to restore shared state: %s", exc.reason)
        finally:
            self.restored = True
        return state

    def state_changed(self, state: ShareState) -> bool:
        """Write ``state`` to the location. Returns False before restore."""
        if not self.restored:
            return False
        self.location.replace(fragment_for(encode(state)))
        return True


# ── Clipboard export ───────────────────────────────────────────────

class ClipboardError(Exception):
    """Raised by a clipboard port that could not take the text."""


def _write_clipboard(url: str, clipboard: Callable[[str], None]) -> None:
    """Call the clipboard port; any failure surfaces as ClipboardError."""
    try:
        clipboard(url)
    except ClipboardError:
        raise
    except Exception as exc:
        raise ClipboardError(f"{type(exc).__name__}: {exc}") from exc


def copy_share_url(url: str, clipboard: Callable[[str], None],
                   prompt: Callable[[str, str], None]) -> bool:
    """Put ``url`` on the clipboard; fall back to a manual-copy prompt.

    Returns True if the clipboard accepted it.
    """
    try:
        _write_clipboard(url, clipboard)
    except ClipboardError as exc:
        log.error("Clipboard write failed: %s", exc)
        prompt("Copy this URL:", url)
        return False
    return True
