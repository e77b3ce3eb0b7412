"""Numeric codes exchanged with the host at each lifecycle boundary."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum, IntFlag


class InitFlag(IntFlag):
    """Flags describing the calling application, passed to ``init``."""

    XWF = 0x01
    WHX = 0x02
    XWI = 0x04
    BETA = 0x08
    QUICK_CHECK = 0x20
    ABOUT_ONLY = 0x40


class OpType(IntEnum):
    """Kind of operation the host is running when it calls ``prepare``."""

    RUN = 0  # tools menu
    RVS = 1  # refine volume snapshot
    LSS = 2  # logical simultaneous search
    PSS = 3  # physical simultaneous search
    DBC = 4  # directory browser context menu
    SHC = 5  # search hit context menu


SEARCH_OPS = frozenset({OpType.LSS, OpType.PSS, OpType.SHC})


class PrepareFlag(IntFlag):
    NONE = 0
    CALL_PER_ITEM = 0x01
    CALL_PER_ITEM_LATE = 0x02


# Negative prepare results
DECLINE = -1
STOP_SEARCH = -3


class FinalizeStatus(IntEnum):
    SKIPPED = 0
    PROCESSED = 1
    STOPPED = 2


@dataclass(frozen=True)
class CallerInfo:
    """Host identity handed to ``init``."""

    version: int
    language: int = 0
    service_release: int = 0
