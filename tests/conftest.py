"""Shared test fixtures — scripted host, evidence trees."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Dict, List, Optional, Tuple

import pytest


@dataclass
class FakeVolume:
    long_name: str
    short_name: str
    item_ids: List[int] = field(default_factory=list)
    # Overrides the reported item count when set
    reported_count: Optional[int] = None


@dataclass
class FakeHandle:
    item_id: int
    closed: bool = False


class FakeHost:
    """Scripted host that records every call the coordinator makes."""

    def __init__(
        self,
        contents: Optional[Dict[int, bytes]] = None,
        *,
        case: Optional[str] = "Case 1",
        evidence: bool = True,
        unreadable: Tuple[int, ...] = (),
        stop_when: Optional[Callable[["FakeHost"], bool]] = None,
    ) -> None:
        self.contents: Dict[int, bytes] = dict(contents or {})
        self.case = case
        self.evidence = evidence
        self.unreadable = set(unreadable)
        self.stop_when = stop_when

        self.annotations: Dict[int, List[Tuple[str, str]]] = {}
        self.messages: List[str] = []
        self.progress: List[int] = []
        self.progress_shown = 0
        self.progress_hidden = 0
        self.handles: List[FakeHandle] = []

    def volume(self, short_name: str, item_ids: List[int], long_name: Optional[str] = None) -> FakeVolume:
        return FakeVolume(long_name or f"{short_name}, Partition 1", short_name, list(item_ids))

    # ---- Host interface ----

    def case_title(self):
        return self.case

    def has_evidence(self):
        return self.evidence

    def volume_long_name(self, volume):
        return volume.long_name

    def volume_short_name(self, volume):
        return volume.short_name

    def item_count(self, volume):
        if volume.reported_count is not None:
            return volume.reported_count
        return len(volume.item_ids)

    def open_item(self, volume, item_id):
        if item_id in self.unreadable or item_id not in self.contents:
            return None
        handle = FakeHandle(item_id)
        self.handles.append(handle)
        return handle

    def item_size(self, handle):
        return len(self.contents[handle.item_id])

    def read(self, handle, offset, buffer):
        data = self.contents[handle.item_id][offset:offset + len(buffer)]
        buffer[: len(data)] = data
        return len(data)

    def close(self, handle):
        handle.closed = True

    def item_name(self, item_id):
        return f"file{item_id}.bin"

    def should_stop(self):
        return bool(self.stop_when and self.stop_when(self))

    def show_progress(self, label):
        self.progress_shown += 1

    def set_progress(self, percent):
        self.progress.append(percent)

    def set_progress_description(self, text):
        pass

    def hide_progress(self):
        self.progress_hidden += 1

    def output_message(self, text):
        self.messages.append(text)

    def add_annotation(self, item_id, text, category):
        self.annotations.setdefault(item_id, []).append((text, category))


@pytest.fixture
def fake_host() -> FakeHost:
    """Five items with distinct content, ids 1..5."""
    return FakeHost({
        1: b"aaaa",
        2: b"abcd",
        3: bytes(range(256)),
        4: b"hello world",
        5: b"\x00\xff" * 8,
    })


@pytest.fixture
def evidence_tree(tmp_path: Path) -> Path:
    """Evidence root with two volumes and a mix of item contents."""
    root = tmp_path / "evidence"
    c_drive = root / "C"
    d_drive = root / "D"
    (c_drive / "Windows").mkdir(parents=True)
    d_drive.mkdir(parents=True)

    (c_drive / "uniform.bin").write_bytes(bytes(range(256)) * 4)
    (c_drive / "Windows" / "notes.txt").write_bytes(b"aaaaaaaa")
    (c_drive / "empty.dat").write_bytes(b"")
    (d_drive / "report.txt").write_bytes(b"abcd")
    return root


@pytest.fixture
def flat_evidence(tmp_path: Path) -> Path:
    """Evidence root with files only — treated as a single volume."""
    root = tmp_path / "flat"
    root.mkdir()
    (root / "a.bin").write_bytes(b"\x00" * 64)
    (root / "b.bin").write_bytes(b"ab" * 32)
    return root


@pytest.fixture
def make_host() -> Callable[..., FakeHost]:
    """Factory for hosts with custom contents or behaviour."""
    return FakeHost
