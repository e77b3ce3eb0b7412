"""Two-phase entropy coordinator — the extension lifecycle seen by the host.

The host drives every step:

  ``init`` once per run, then for each volume ``prepare`` (phase one starts),
  ``process_item`` once per discovered item, ``finalize`` (phase two: read and
  score every buffered item), and finally ``done`` once per run.

Fatal conditions set ``exit_requested``; every later entry point then
returns immediately.
"""

from __future__ import annotations

import logging
from typing import Callable, Optional

from xtentropy import __version__
from xtentropy.config.schema import EntropyToolConfig
from xtentropy.host.codes import (
    DECLINE,
    SEARCH_OPS,
    STOP_SEARCH,
    CallerInfo,
    FinalizeStatus,
    InitFlag,
    OpType,
    PrepareFlag,
)
from xtentropy.host.protocol import Host, VolumeHandle
from xtentropy.scanner.collector import ItemCollector
from xtentropy.scanner.entropy import compute_entropy, format_entropy
from xtentropy.volumes.keys import derive_volume_key
from xtentropy.volumes.models import Volume
from xtentropy.volumes.registry import VolumeRegistry

logger = logging.getLogger(__name__)

PREFIX = "XT_ENTROPY"
PROGRESS_LABEL = "Calculating Shannon Entropy..."

Allocator = Callable[[int], bytearray]


class ScanCoordinator:
    """Owns the session state shared by the lifecycle entry points."""

    def __init__(
        self,
        host: Host,
        registry: VolumeRegistry,
        config: Optional[EntropyToolConfig] = None,
        *,
        allocator: Allocator = bytearray,
    ) -> None:
        self.host = host
        self.registry = registry
        self.config = config or EntropyToolConfig()
        self.current_volume: Optional[Volume] = None
        self.exit_requested = False
        self._allocator = allocator
        self._collector = ItemCollector(host)

    def _fatal(self, text: str) -> None:
        self.host.output_message(f"{PREFIX}: {text}")
        self.exit_requested = True

    # ── init / done / about ──────────────────────────────────────────────────

    def init(self, info: CallerInfo, flags: InitFlag = InitFlag.XWF) -> int:
        """Check the host can run the extension. Returns the host init code."""
        if (
            not flags & InitFlag.XWF
            or flags & (InitFlag.WHX | InitFlag.XWI | InitFlag.BETA)
        ):
            return -1
        if flags & (InitFlag.ABOUT_ONLY | InitFlag.QUICK_CHECK):
            return 1

        min_version = self.config.scan.min_host_version
        if info.version < min_version:
            self._fatal(
                f"The Version of X-Ways Forensics must be v.{min_version} "
                "or Later. Exiting..."
            )
            return 1
        if not self.host.case_title():
            self._fatal("Active Case is Required. Exiting...")
            return 1
        if not self.host.has_evidence():
            self._fatal("No Evidence is Found. Exiting...")
            return 1
        return 0

    def done(self) -> int:
        """Release every item-id buffer still held by the registry."""
        if self.exit_requested and not self.registry.has_buffers():
            return 0
        released = self.registry.release_all()
        logger.debug("released %d volume buffer(s) at teardown", released)
        self.current_volume = None
        return 0

    @staticmethod
    def about() -> str:
        return f"{PREFIX} - v{__version__}"

    # ── phase one ────────────────────────────────────────────────────────────

    def prepare(self, volume: VolumeHandle, evidence: object, op_type: int) -> int:
        """Select *volume* and size its buffer. Returns prepare flags or a
        negative code when the operation is declined."""
        if self.exit_requested:
            return DECLINE

        if op_type == OpType.RUN:
            self.host.output_message(
                f"{PREFIX}: Not Supposed to be Executed from the Tools Menu. Exiting..."
            )
            return DECLINE
        if op_type in SEARCH_OPS:
            self.host.output_message(
                f"{PREFIX}: Not Supposed to be Executed during Searches. Exiting..."
            )
            return STOP_SEARCH
        if op_type == OpType.RVS:
            flags = PrepareFlag.CALL_PER_ITEM | PrepareFlag.CALL_PER_ITEM_LATE
        elif op_type == OpType.DBC:
            flags = PrepareFlag.NONE
        else:
            self.host.output_message(
                f"{PREFIX}: Does Not Support this Mode of Operation. Exiting..."
            )
            return DECLINE

        key = derive_volume_key(
            self.host.volume_long_name(volume),
            self.host.volume_short_name(volume),
        )
        current, existed = self.registry.resolve(key)
        self.current_volume = current

        item_count = self.host.item_count(volume)
        current.allocate(item_count)
        logger.debug(
            "prepared volume %r (%s) for %d item(s)",
            key, "known" if existed else "new", item_count,
        )

        if not existed:
            flags |= PrepareFlag.CALL_PER_ITEM
        return int(flags)

    def process_item(self, item_id: int) -> int:
        """Buffer one discovered item. Returns 0, or -1 to stop the run."""
        if self.exit_requested:
            return -1
        if not self._collector.collect(self.current_volume, item_id):
            self.exit_requested = True
            return -1
        return 0

    # ── phase two ────────────────────────────────────────────────────────────

    def finalize(self, volume: VolumeHandle, evidence: object, op_type: int) -> FinalizeStatus:
        """Compute and attach the entropy of every buffered item."""
        current = self.current_volume
        if self.exit_requested or current is None:
            return FinalizeStatus.SKIPPED
        if not current.has_buffer or current.fill_count == 0:
            return FinalizeStatus.SKIPPED

        host = self.host
        host.show_progress(PROGRESS_LABEL)
        host.set_progress(0)

        with current.draining() as item_ids:
            total = len(item_ids)
            for i, item_id in enumerate(item_ids):
                if host.should_stop():
                    current.cancel()
                    logger.debug("stopped after %d of %d item(s) in %r", i, total, current.key)
                    return FinalizeStatus.STOPPED
                self._score_item(volume, item_id)
                host.set_progress(i * 100 // total)

        host.hide_progress()
        return FinalizeStatus.PROCESSED

    def _score_item(self, volume: VolumeHandle, item_id: int) -> None:
        """One iteration step. Per-item failures are reported, never raised."""
        host = self.host
        handle = host.open_item(volume, item_id)
        if handle is None:
            return

        name = host.item_name(item_id)
        host.set_progress_description(name)
        try:
            try:
                expected = host.item_size(handle)
                scratch = self._allocator(max(expected, 0))
            except MemoryError:
                host.output_message(
                    f'{PREFIX}: Unable to Allocate Memory for "{name}". Skipping...'
                )
                return
            actual = host.read(handle, 0, scratch)
        except OSError as exc:
            logger.debug("reading item %d failed: %s", item_id, exc)
            host.output_message(f'{PREFIX}: Unable to Read "{name}". Skipping...')
            return
        finally:
            host.close(handle)

        if actual == 0:
            host.output_message(
                f'{PREFIX}: Unable to Calculate Entropy for 0-Byte File "{name}". Skipping...'
            )
            return

        entropy = compute_entropy(scratch, actual)
        host.add_annotation(item_id, format_entropy(entropy), self.config.annotation.category)
