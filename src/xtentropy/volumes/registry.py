"""Volume registry — one record per normalized volume key."""

from __future__ import annotations

from typing import Dict, Iterator, Optional, Tuple

from xtentropy.volumes.models import Volume


class VolumeRegistry:
    """Insertion-ordered store of every volume seen during a session."""

    def __init__(self) -> None:
        self._volumes: Dict[str, Volume] = {}

    # ---- lookup ----

    def resolve(self, name: str) -> Tuple[Volume, bool]:
        """Return ``(volume, already_existed)`` for the normalized key *name*."""
        volume = self._volumes.get(name)
        if volume is not None:
            return volume, True
        volume = Volume(key=name)
        self._volumes[name] = volume
        return volume, False

    def get(self, name: str) -> Optional[Volume]:
        return self._volumes.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self._volumes

    def __iter__(self) -> Iterator[Volume]:
        return iter(self._volumes.values())

    def __len__(self) -> int:
        return len(self._volumes)

    # ---- teardown ----

    def has_buffers(self) -> bool:
        return any(v.has_buffer for v in self._volumes.values())

    def release_all(self) -> int:
        """Drop every item-id buffer. Returns how many were released."""
        released = 0
        for volume in self._volumes.values():
            if volume.has_buffer:
                volume.release()
                released += 1
        return released
