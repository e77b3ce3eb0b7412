"""JSON reporter for scripted runs."""

from __future__ import annotations

import json
from typing import Any, Dict

from xtentropy.scanner.models import ScanReport


def to_dict(report: ScanReport) -> Dict[str, Any]:
    """Convert ScanReport to a JSON-serialisable dict."""
    return {
        "version": "1.0",
        "volumes": [
            {
                "key": v.key,
                "item_count": v.item_count,
                "collected": v.collected,
                "prepare_code": v.prepare_code,
                "status": v.status,
            }
            for v in report.volumes
        ],
        "total_annotations": report.total_annotations,
        # Entropy stays a string so all 16 fractional digits survive
        "annotations": [
            {
                "item_id": a.item_id,
                "item": a.item_name,
                "volume": a.volume,
                "category": a.category,
                "entropy": a.text,
            }
            for a in report.annotations
        ],
        "messages": report.messages,
        "aborted": report.aborted,
        "cancelled": report.cancelled,
        "scan_duration_ms": report.scan_duration_ms,
    }


def render(report: ScanReport) -> str:
    """Return formatted JSON string."""
    return json.dumps(to_dict(report), indent=2)
