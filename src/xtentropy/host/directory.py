"""Filesystem-backed host — evidence volumes are directories on disk.

Each subdirectory of the evidence root is one volume (the root itself when
it has no subdirectories). Every regular file below a volume is an item;
ids are assigned in sorted relative-path order and are unique across the
whole host.
"""

from __future__ import annotations

import os
import threading
from dataclasses import dataclass, field
from pathlib import Path
from typing import BinaryIO, Dict, List, Optional

from rich.console import Console
from rich.progress import BarColumn, Progress, TaskID, TextColumn

from xtentropy.config.loader import CONFIG_FILENAME
from xtentropy.scanner.models import Annotation


class HostError(Exception):
    """Raised when the evidence root cannot be opened."""


@dataclass
class DirectoryVolume:
    path: Path
    items: List[int] = field(default_factory=list)

    @property
    def name(self) -> str:
        return self.path.name


@dataclass(frozen=True)
class _Item:
    path: Path
    name: str  # relative to the volume
    volume: DirectoryVolume


class DirectoryHost:
    """Serve a directory tree through the host interface."""

    def __init__(
        self,
        root: Path,
        *,
        version: int = 2100,
        case_title: Optional[str] = None,
        console: Optional[Console] = None,
        show_progress: bool = True,
    ) -> None:
        root = Path(root)
        if not root.is_dir():
            raise HostError(f"Evidence directory not found: {root}")
        self.root = root.resolve()
        self.version = version
        self._case_title = case_title if case_title is not None else self.root.name
        self.console = console or Console(stderr=True)
        self._show_progress = show_progress
        self._stop = threading.Event()
        self._progress: Optional[Progress] = None
        self._task: Optional[TaskID] = None

        self.annotations: List[Annotation] = []
        self.messages: List[str] = []

        self._items: Dict[int, _Item] = {}
        self.volumes: List[DirectoryVolume] = self._discover()

    def _discover(self) -> List[DirectoryVolume]:
        subdirs = sorted(p for p in self.root.iterdir() if p.is_dir())
        volumes = [DirectoryVolume(p) for p in subdirs] or [DirectoryVolume(self.root)]
        # A config file in the evidence root is not evidence
        config_path = self.root / CONFIG_FILENAME
        next_id = 0
        for volume in volumes:
            files = sorted(
                (p for p in volume.path.rglob("*") if p.is_file() and p != config_path),
                key=lambda p: p.relative_to(volume.path).as_posix(),
            )
            for path in files:
                self._items[next_id] = _Item(
                    path=path,
                    name=path.relative_to(volume.path).as_posix(),
                    volume=volume,
                )
                volume.items.append(next_id)
                next_id += 1
        return volumes

    # ---- cancellation ----

    def request_stop(self) -> None:
        self._stop.set()

    def should_stop(self) -> bool:
        return self._stop.is_set()

    # ---- case / evidence ----

    def case_title(self) -> Optional[str]:
        return self._case_title

    def has_evidence(self) -> bool:
        return bool(self.volumes)

    # ---- volumes ----

    def volume_long_name(self, volume: DirectoryVolume) -> str:
        return str(volume.path)

    def volume_short_name(self, volume: DirectoryVolume) -> str:
        return volume.name

    def item_count(self, volume: DirectoryVolume) -> int:
        return len(volume.items)

    def enumerate_items(self, volume: DirectoryVolume) -> List[int]:
        return list(volume.items)

    # ---- items ----

    def open_item(self, volume: DirectoryVolume, item_id: int) -> Optional[BinaryIO]:
        item = self._items.get(item_id)
        if item is None or item.volume is not volume:
            return None
        try:
            return open(item.path, "rb")
        except OSError:
            return None

    def item_size(self, handle: BinaryIO) -> int:
        return os.fstat(handle.fileno()).st_size

    def read(self, handle: BinaryIO, offset: int, buffer: bytearray) -> int:
        handle.seek(offset)
        view = memoryview(buffer)
        total = 0
        while total < len(view):
            n = handle.readinto(view[total:])
            if not n:
                break
            total += n
        return total

    def close(self, handle: BinaryIO) -> None:
        handle.close()

    def item_name(self, item_id: int) -> str:
        item = self._items.get(item_id)
        return item.name if item is not None else str(item_id)

    def volume_of(self, item_id: int) -> Optional[DirectoryVolume]:
        item = self._items.get(item_id)
        return item.volume if item is not None else None

    # ---- progress / messages ----

    def show_progress(self, label: str) -> None:
        if not self._show_progress:
            return
        self.hide_progress()
        self._progress = Progress(
            TextColumn("[bold]{task.fields[label]}"),
            BarColumn(),
            TextColumn("{task.percentage:>3.0f}%"),
            TextColumn("[dim]{task.description}"),
            console=self.console,
            transient=True,
        )
        self._task = self._progress.add_task("", total=100, label=label)
        self._progress.start()

    def set_progress(self, percent: int) -> None:
        if self._progress is not None and self._task is not None:
            self._progress.update(self._task, completed=percent)

    def set_progress_description(self, text: str) -> None:
        if self._progress is not None and self._task is not None:
            self._progress.update(self._task, description=text)

    def hide_progress(self) -> None:
        if self._progress is not None:
            self._progress.stop()
        self._progress = None
        self._task = None

    def output_message(self, text: str) -> None:
        self.messages.append(text)
        self.console.print(text, markup=False, highlight=False)

    def add_annotation(self, item_id: int, text: str, category: str) -> None:
        volume = self.volume_of(item_id)
        self.annotations.append(
            Annotation(
                item_id=item_id,
                item_name=self.item_name(item_id),
                volume=volume.name if volume is not None else "",
                text=text,
                category=category,
            )
        )
