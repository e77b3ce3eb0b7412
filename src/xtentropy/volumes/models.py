"""Volume record — item-id buffer and per-run lifecycle state."""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, List, Optional


class ContractViolation(Exception):
    """Raised when the host breaks the collect/finalize protocol."""


class VolumeState(str, Enum):
    REGISTERED = "registered"
    COLLECTING = "collecting"
    FINALIZING = "finalizing"
    DRAINED = "drained"
    CANCELLED = "cancelled"


@dataclass
class Volume:
    """Item identifiers discovered for one volume.

    The buffer exists only between ``allocate`` and ``release``. Its capacity
    is the item count the host reported when the volume was prepared; the
    fill count grows from 0 up to that capacity while collecting.
    """

    key: str
    capacity: int = 0
    state: VolumeState = VolumeState.REGISTERED
    _item_ids: Optional[List[int]] = field(default=None, repr=False)

    @property
    def has_buffer(self) -> bool:
        return self._item_ids is not None

    @property
    def fill_count(self) -> int:
        return len(self._item_ids) if self._item_ids is not None else 0

    @property
    def item_ids(self) -> List[int]:
        """Snapshot of the buffered identifiers in discovery order."""
        return list(self._item_ids or [])

    def allocate(self, capacity: int) -> None:
        """Start a fresh buffer of *capacity* slots, dropping any previous one."""
        if capacity < 0:
            raise ValueError(f"negative item count: {capacity}")
        self.release()
        self.capacity = capacity
        self._item_ids = []
        self.state = VolumeState.COLLECTING

    def append(self, item_id: int) -> None:
        if self._item_ids is None or self.state != VolumeState.COLLECTING:
            raise ContractViolation(
                f"volume {self.key!r} is not collecting (state: {self.state.value})"
            )
        if len(self._item_ids) >= self.capacity:
            raise ContractViolation(
                f"volume {self.key!r} is full: host announced {self.capacity} items"
            )
        self._item_ids.append(item_id)

    def release(self) -> None:
        self._item_ids = None

    @contextmanager
    def draining(self) -> Iterator[List[int]]:
        """Freeze the buffer for the entropy pass and release it on exit.

        Yields the buffered ids. The volume ends ``DRAINED`` when the block
        completes and ``CANCELLED`` when it is left early by
        :meth:`cancel` or an exception.
        """
        ids = self.item_ids
        self.state = VolumeState.FINALIZING
        try:
            yield ids
        except BaseException:
            self.state = VolumeState.CANCELLED
            raise
        else:
            if self.state == VolumeState.FINALIZING:
                self.state = VolumeState.DRAINED
        finally:
            self.release()

    def cancel(self) -> None:
        """Mark an in-progress entropy pass as stopped by the host."""
        if self.state == VolumeState.FINALIZING:
            self.state = VolumeState.CANCELLED
