"""Host interface and lifecycle codes.

The filesystem host lives in :mod:`xtentropy.host.directory`.
"""

from xtentropy.host.codes import (
    DECLINE,
    STOP_SEARCH,
    CallerInfo,
    FinalizeStatus,
    InitFlag,
    OpType,
    PrepareFlag,
)
from xtentropy.host.protocol import Host

__all__ = [
    "DECLINE",
    "STOP_SEARCH",
    "CallerInfo",
    "FinalizeStatus",
    "Host",
    "InitFlag",
    "OpType",
    "PrepareFlag",
]
