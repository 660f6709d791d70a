"""File based cache of generated texts with per-entry lifetimes."""

from __future__ import annotations

import os
import re
import shutil
import threading
import time
from contextlib import suppress
from pathlib import Path

_INT_RE = re.compile(r"[+-]?[0-9]+")


class CacheNameError(ValueError):
    """Raised when a cache file name is not of the form ``<stamp>:<ttl>``."""


def _int64(text: str) -> int:
    if not _INT_RE.fullmatch(text) or not -(2**63) <= int(text) < 2**63:
        raise CacheNameError(f"cache error: invalid number {text!r}")
    return int(text)


def make_filename(ttl, now=None) -> str:
    """Return the base name for an entry written at *now* living *ttl* seconds."""
    return f"{int(time.time() if now is None else now)}:{int(ttl)}"


def parse_filename(name: str) -> tuple[int, int]:
    """Split a base name into its write time and lifetime."""
    parts = name.split(":")
    if len(parts) != 2:
        raise CacheNameError("cache error: invalid filename")
    return _int64(parts[0]), _int64(parts[1])


def _stem(filename: str) -> str:
    return filename.rpartition(".")[0] if "." in filename else filename


class TextCache:
    """Texts stored under ``<root>/<cid>/<stamp>:<ttl>.txt``."""

    def __init__(self, root="./cache"):
        self.root = Path(root)

    def add(self, cid: str, text: str, ttl: int) -> None:
        """Store *text* for *cid*, kept for *ttl* seconds."""
        if not cid or not text:
            return
        folder = self.root / cid
        with suppress(OSError):
            folder.mkdir(parents=True, exist_ok=True)
            (folder / f"{make_filename(ttl)}.txt").write_text(text, encoding="utf-8")

    def get(self, cid: str) -> str:
        """Return the cached text for *cid*, renewing its write time, or ''."""
        if not cid:
            return ""
        folder = self.root / cid
        try:
            entries = sorted(folder.iterdir())
        except OSError:
            return ""
        for entry in entries:
            if entry.is_dir():
                continue
            try:
                _, ttl = parse_filename(_stem(entry.name))
            except CacheNameError:
                continue
            try:
                content = entry.read_text(encoding="utf-8", errors="replace")
            except OSError:
                content = ""
            with suppress(OSError):
                entry.rename(folder / f"{make_filename(ttl)}.txt")
            return content
        return ""

    def remove(self, cid: str) -> None:
        """Drop every entry stored for *cid*."""
        if cid:
            shutil.rmtree(self.root / cid, ignore_errors=True)

    def remove_deprecated(self) -> None:
        """Delete the folders holding expired or malformed entries."""
        if not self.root.is_dir():
            return
        paths = [Path(d) / name for d, _, files in os.walk(self.root) for name in files]
        now = int(time.time())
        for path in paths:
            try:
                stamp, ttl = parse_filename(_stem(path.name))
                expired = stamp + ttl < now
            except CacheNameError:
                expired = True
            if expired:
                shutil.rmtree(path.parent, ignore_errors=True)


class Ticker:
    """Calls *callback* every *interval* seconds on a background thread."""

    def __init__(self, interval, callback):
        self.interval = interval
        self.callback = callback
        self._stopped = threading.Event()
        self._thread = None

    def start(self) -> "Ticker":
        if self._thread is None or not self._thread.is_alive():
            self._stopped.clear()
            self._thread = threading.Thread(target=self._run, daemon=True)
            self._thread.start()
        return self

    def _run(self) -> None:
        while not self._stopped.wait(self.interval):
            with suppress(Exception):
                self.callback()

    def stop(self) -> None:
        self._stopped.set()
        if self._thread is not None and self._thread is not threading.current_thread():
            self._thread.join()
        self._thread = None


def every_minute(callback) -> Ticker:
    """Start and return a ticker running *callback* once a minute."""
    return Ticker(60, callback).start()