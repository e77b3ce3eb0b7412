"""Session runner — plays the host's side of the protocol over a directory.

For every volume: prepare, enumerate items into the coordinator when asked
to, then finalize. ``done`` always runs, even when a volume raises.
"""

from __future__ import annotations

import time

from xtentropy.config.schema import EntropyToolConfig
from xtentropy.host.codes import CallerInfo, FinalizeStatus, InitFlag, PrepareFlag
from xtentropy.host.directory import DirectoryHost
from xtentropy.scanner.coordinator import Allocator, ScanCoordinator
from xtentropy.scanner.models import ScanReport, VolumeReport
from xtentropy.volumes.registry import VolumeRegistry


class SessionError(Exception):
    """Raised when the coordinator leaves the session in an impossible state."""


def limited_allocator(max_bytes: int) -> Allocator:
    """Scratch allocator that refuses items larger than *max_bytes* (0 = no limit)."""

    def allocate(size: int) -> bytearray:
        if max_bytes and size > max_bytes:
            raise MemoryError(f"{size} bytes exceeds the {max_bytes}-byte item limit")
        return bytearray(size)

    return allocate


def run_session(
    host: DirectoryHost,
    config: EntropyToolConfig,
    *,
    flags: InitFlag = InitFlag.XWF,
) -> ScanReport:
    """Run init → (prepare, collect, finalize)* → done. Returns a ScanReport."""
    start = time.perf_counter()
    report = ScanReport()
    op_type = config.scan.op_type

    coordinator = ScanCoordinator(
        host,
        VolumeRegistry(),
        config,
        allocator=limited_allocator(config.scan.max_item_bytes),
    )

    try:
        if coordinator.init(CallerInfo(version=host.version), flags) == 0:
            for volume in host.volumes:
                if coordinator.exit_requested:
                    break
                entry = VolumeReport(key=volume.name, item_count=host.item_count(volume))
                report.volumes.append(entry)

                code = coordinator.prepare(volume, None, op_type)
                entry.prepare_code = code
                if code < 0:
                    report.aborted = True
                    break
                current = coordinator.current_volume
                if current is None:
                    raise SessionError(f"prepare selected no volume for {volume.name!r}")
                entry.key = current.key

                if code & PrepareFlag.CALL_PER_ITEM:
                    for item_id in host.enumerate_items(volume):
                        if coordinator.process_item(item_id) < 0:
                            break
                entry.collected = current.fill_count

                status = coordinator.finalize(volume, None, op_type)
                entry.status = status.name.lower()
                if status == FinalizeStatus.STOPPED:
                    report.cancelled = True
                    break
    finally:
        coordinator.done()
        host.hide_progress()

    report.aborted = report.aborted or coordinator.exit_requested
    report.annotations = list(host.annotations)
    report.messages = list(host.messages)
    report.scan_duration_ms = round((time.perf_counter() - start) * 1000, 2)
    return report
