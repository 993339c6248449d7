from __future__ import annotations

import logging
from typing import Iterable, List, Optional

import numpy as np
import pandas as pd

from geodata_extractor.errors import TruncatedTraceError
from geodata_extractor.models.records import SeismicTrace, TraceSummary

logger = logging.getLogger(__name__)


def summarize_traces(traces: Iterable[SeismicTrace]) -> TraceSummary:
    """
    Fold a trace sequence into (count, min, max).

    Only the running extremes are kept, so a cursor over an arbitrarily large file
    is consumed in constant memory. A TruncatedTraceError raised by the sequence
    ends the fold: the traces seen so far are reported and the summary is marked
    incomplete.
    """
    count = 0
    lo: Optional[float] = None
    hi: Optional[float] = None
    bytes_consumed = 0

    iterator = iter(traces)
    while True:
        try:
            trace = next(iterator)
        except StopIteration:
            break
        except TruncatedTraceError as exc:
            logger.warning("trace summary stopped early after %d traces: %s", count, exc)
            return TraceSummary(
                count=count,
                min=lo,
                max=hi,
                complete=False,
                error=str(exc),
                bytes_consumed=exc.bytes_consumed,
            )

        count += 1
        bytes_consumed = trace.bytes_consumed
        if trace.samples.size:
            t_lo = float(np.min(trace.samples))
            t_hi = float(np.max(trace.samples))
            lo = t_lo if lo is None else min(lo, t_lo)
            hi = t_hi if hi is None else max(hi, t_hi)

    logger.debug("trace summary: %d traces, min=%s max=%s", count, lo, hi)
    return TraceSummary(count=count, min=lo, max=hi, bytes_consumed=bytes_consumed)


def trace_header_table(traces: Iterable[SeismicTrace], limit: Optional[int] = None) -> pd.DataFrame:
    """
    Collect trace headers into a DataFrame, one row per trace (index = trace index).

    Columns are the trace schema fields followed by ``n_samples``, ``sample_min``
    and ``sample_max``. A truncated trace region yields the complete rows and sets
    ``df.attrs["incomplete"]`` to the error message.
    """
    rows: List[dict] = []
    index: List[int] = []
    incomplete: Optional[str] = None

    iterator = iter(traces)
    while limit is None or len(rows) < int(limit):
        try:
            trace = next(iterator)
        except StopIteration:
            break
        except TruncatedTraceError as exc:
            incomplete = str(exc)
            break
        row = trace.header.to_dict()
        row["n_samples"] = trace.n_samples
        row["sample_min"] = trace.min
        row["sample_max"] = trace.max
        rows.append(row)
        index.append(trace.index)

    df = pd.DataFrame(rows, index=pd.Index(index, name="trace"))
    if incomplete is not None:
        df.attrs["incomplete"] = incomplete
    return df
