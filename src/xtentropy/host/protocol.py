"""The host interface the coordinator consumes.

Everything outside the registry and the entropy pass (case and evidence
enumeration, raw item I/O, progress UI, message display, annotation storage)
is reached through an object implementing :class:`Host`.
"""

from __future__ import annotations

from typing import Any, Optional, Protocol

# Volumes and item handles are opaque to the coordinator
VolumeHandle = Any
ItemHandle = Any


class Host(Protocol):
    # ---- case / evidence ----

    def case_title(self) -> Optional[str]: ...

    def has_evidence(self) -> bool: ...

    # ---- volumes ----

    def volume_long_name(self, volume: VolumeHandle) -> str: ...

    def volume_short_name(self, volume: VolumeHandle) -> str: ...

    def item_count(self, volume: VolumeHandle) -> int: ...

    # ---- items ----

    def open_item(self, volume: VolumeHandle, item_id: int) -> Optional[ItemHandle]: ...

    def item_size(self, handle: ItemHandle) -> int: ...

    def read(self, handle: ItemHandle, offset: int, buffer: bytearray) -> int:
        """Fill *buffer* from *offset*; return the number of bytes read."""
        ...

    def close(self, handle: ItemHandle) -> None: ...

    def item_name(self, item_id: int) -> str: ...

    # ---- control / UI ----

    def should_stop(self) -> bool: ...

    def show_progress(self, label: str) -> None: ...

    def set_progress(self, percent: int) -> None: ...

    def set_progress_description(self, text: str) -> None: ...

    def hide_progress(self) -> None: ...

    def output_message(self, text: str) -> None: ...

    def add_annotation(self, item_id: int, text: str, category: str) -> None: ...
