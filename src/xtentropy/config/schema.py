"""Configuration schema — dataclasses for every config section."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

from xtentropy.host.codes import OpType

Operation = Literal["rvs", "dbc"]

OPERATION_CODES: dict[str, OpType] = {
    "rvs": OpType.RVS,
    "dbc": OpType.DBC,
}


@dataclass
class ScanConfig:
    operation: Operation = "rvs"
    max_item_bytes: int = 0  # 0 = no limit; larger items fail allocation
    min_host_version: int = 1990
    show_progress: bool = True

    @property
    def op_type(self) -> OpType:
        return OPERATION_CODES.get(self.operation, OpType.RVS)


@dataclass
class OutputConfig:
    format: Literal["terminal", "json"] = "terminal"
    show_summary: bool = True


@dataclass
class AnnotationConfig:
    category: str = "entropy"


@dataclass
class EntropyToolConfig:
    version: str = "1.0"
    scan: ScanConfig = field(default_factory=ScanConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    annotation: AnnotationConfig = field(default_factory=AnnotationConfig)
