"""Volume records, registry, and key derivation."""

from xtentropy.volumes.keys import derive_volume_key, sanitize, truncate_short_name
from xtentropy.volumes.models import ContractViolation, Volume, VolumeState
from xtentropy.volumes.registry import VolumeRegistry

__all__ = [
    "ContractViolation",
    "Volume",
    "VolumeRegistry",
    "VolumeState",
    "derive_volume_key",
    "sanitize",
    "truncate_short_name",
]
