from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Iterator, Optional, Tuple, Union

import numpy as np
import pandas as pd


HeaderValue = Union[int, float, str]


class DecodedHeader(Mapping):
    """
    Read-only mapping of field name -> decoded value, in schema order.

    Produced once per block by the header decoder and never modified afterwards.
    """

    __slots__ = ("_values", "_schema_name")

    def __init__(self, values: Dict[str, HeaderValue], schema_name: str = ""):
        self._values = MappingProxyType(dict(values))
        self._schema_name = schema_name

    @property
    def schema_name(self) -> str:
        return self._schema_name

    def __getitem__(self, key: str) -> HeaderValue:
        return self._values[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"DecodedHeader({self._schema_name!r}, {dict(self._values)!r})"

    def to_dict(self) -> Dict[str, HeaderValue]:
        return dict(self._values)

    def to_series(self) -> pd.Series:
        return pd.Series(dict(self._values), name=self._schema_name or None, dtype=object)


class CursorState(Enum):
    READY = "ready"
    ACTIVE = "active"
    EXHAUSTED = "exhausted"
    FAILED = "failed"


@dataclass(frozen=True)
class SeismicTrace:
    """
    One decoded trace: its trace header and its samples.

    bytes_consumed:
      Cursor position (bytes read from the start of the trace region) right after
      this trace. Hosts use it as the progress value.
    """

    index: int
    header: DecodedHeader
    samples: np.ndarray
    bytes_consumed: int = 0

    @property
    def n_samples(self) -> int:
        return int(self.samples.size)

    @property
    def min(self) -> float:
        return float(np.min(self.samples)) if self.samples.size else 0.0

    @property
    def max(self) -> float:
        return float(np.max(self.samples)) if self.samples.size else 0.0


@dataclass(frozen=True)
class TraceSummary:
    """
    Streaming aggregate over a trace region.

    count:
      Number of traces decoded before iteration stopped.
    min / max:
      Extremes over every sample of every counted trace; None when no sample was seen.
    complete:
      False when iteration stopped on a truncated trace; ``error`` then holds the reason.
    """

    count: int
    min: Optional[float]
    max: Optional[float]
    complete: bool = True
    error: Optional[str] = None
    bytes_consumed: int = 0

    @classmethod
    def empty(cls) -> "TraceSummary":
        return cls(count=0, min=None, max=None)

    @property
    def diff(self) -> Optional[float]:
        if self.min is None or self.max is None:
            return None
        return float(self.max - self.min)

    def describe(self) -> str:
        parts = [f"Traces: {self.count}"]
        if self.min is not None and self.max is not None:
            parts.append(f"Max Value: {self.max:.6g} Min Value: {self.min:.6g} Diff: {self.diff:.6g}")
        if not self.complete:
            parts.append(f"(file is incomplete: {self.error})")
        return " ".join(parts)


@dataclass(frozen=True)
class ExtractedRecord:
    """
    Final output of one format adapter, handed to the host metadata container.

    fields:
      Decoded header values (SEG-Y binary header, LAS well section) for indexing.
    warnings:
      Non-fatal observations made during extraction.
    """

    mime_override: str
    dcmi_type: str
    content: str
    fields: Dict[str, Any] = field(default_factory=dict)
    summary: Optional[TraceSummary] = None
    warnings: Tuple[str, ...] = ()

    def to_metadata(self) -> Dict[str, str]:
        return {
            "stream_content_type": self.mime_override,
            "format": self.mime_override,
            "type": self.dcmi_type,
            "content": self.content,
        }
