from __future__ import annotations

import logging
from typing import BinaryIO, Callable, Dict, Iterator, Optional

import numpy as np

from geodata_extractor.errors import TruncatedTraceError, UnsupportedSampleFormatError
from geodata_extractor.ingest.header_decoder import HeaderDecoder
from geodata_extractor.ingest.ibm_float import ibm32_array_to_float64
from geodata_extractor.ingest.segy_formats import SEGY_TRACE_HEADER, DataSampleCode
from geodata_extractor.ingest.stream_io import read_up_to
from geodata_extractor.models.records import CursorState, DecodedHeader, SeismicTrace
from geodata_extractor.models.schema import FormatSchema

logger = logging.getLogger(__name__)


def _numpy_samples(dtype: str) -> Callable[[bytes], np.ndarray]:
    def _decode(raw: bytes) -> np.ndarray:
        return np.frombuffer(raw, dtype=dtype).astype(np.float64)

    return _decode


SAMPLE_DECODERS: Dict[DataSampleCode, Callable[[bytes], np.ndarray]] = {
    DataSampleCode.IBM_FLOAT: ibm32_array_to_float64,
    DataSampleCode.INTEGER_4_BYTE: _numpy_samples(">i4"),
    DataSampleCode.INTEGER_2_BYTE: _numpy_samples(">i2"),
    DataSampleCode.IEEE_FLOAT: _numpy_samples(">f4"),
    DataSampleCode.INTEGER_1_BYTE: _numpy_samples("i1"),
}


class TraceCursor:
    """
    Forward-only reader over the trace region of a stream.

    Each ``next()`` reads one trace header (``trace_schema.block_size`` bytes), takes
    the sample count from it, then reads and decodes the sample block.

    States:
      READY -> ACTIVE after the first trace;
      READY/ACTIVE -> EXHAUSTED on a clean end of stream (or ``max_traces`` reached);
      READY/ACTIVE -> FAILED when the stream ends inside a trace. TruncatedTraceError
      is raised once; traces returned earlier stay valid.
    Once EXHAUSTED or FAILED, ``next()`` keeps returning None.

    There is no seek or restart. A new walk needs a new cursor on a stream positioned
    at the start of the trace region.

    Sample count resolution:
      - fixed_sample_count, when given (SEG-Y fixed-length-trace flag set);
      - else the ``sample_count_field`` of the trace header;
      - a zero count there falls back to ``fallback_sample_count`` (binary header).
    """

    def __init__(
        self,
        stream: BinaryIO,
        trace_schema: FormatSchema = SEGY_TRACE_HEADER,
        *,
        sample_format: DataSampleCode = DataSampleCode.IBM_FLOAT,
        sample_count_field: str = "number_of_samples",
        fallback_sample_count: Optional[int] = None,
        fixed_sample_count: Optional[int] = None,
        charset: Optional[str] = None,
        owns_stream: bool = False,
        max_traces: Optional[int] = None,
    ):
        if sample_format not in SAMPLE_DECODERS:
            raise UnsupportedSampleFormatError(
                f"cannot decode trace samples stored as {sample_format.name} (code {sample_format.code})"
            )
        if fixed_sample_count is None and sample_count_field not in trace_schema:
            raise ValueError(f"trace schema '{trace_schema.name}' has no field '{sample_count_field}'")
        if max_traces is not None and int(max_traces) < 0:
            raise ValueError("max_traces must be >= 0")

        self._stream = stream
        self._decoder = HeaderDecoder(trace_schema, charset)
        self._decode_samples = SAMPLE_DECODERS[sample_format]
        self._sample_width = int(sample_format.sample_width)
        self._sample_count_field = sample_count_field
        self._fallback = None if fallback_sample_count is None else int(fallback_sample_count)
        self._fixed = None if fixed_sample_count is None else int(fixed_sample_count)
        self._owns_stream = bool(owns_stream)
        self._max_traces = None if max_traces is None else int(max_traces)

        self._state = CursorState.READY
        self._bytes_consumed = 0
        self._count = 0
        self._error: Optional[TruncatedTraceError] = None

    @property
    def state(self) -> CursorState:
        return self._state

    @property
    def bytes_consumed(self) -> int:
        return self._bytes_consumed

    @property
    def traces_read(self) -> int:
        return self._count

    @property
    def exhausted(self) -> bool:
        return self._state in (CursorState.EXHAUSTED, CursorState.FAILED)

    @property
    def error(self) -> Optional[TruncatedTraceError]:
        return self._error

    def next(self) -> Optional[SeismicTrace]:
        if self.exhausted:
            return None
        if self._max_traces is not None and self._count >= self._max_traces:
            self._finish()
            return None

        header_size = self._decoder.block_size
        raw = read_up_to(self._stream, header_size)
        if not raw:
            self._finish()
            return None
        self._bytes_consumed += len(raw)
        if len(raw) < header_size:
            self._fail(f"trace {self._count}: header cut after {len(raw)} of {header_size} bytes",
                       missing=header_size - len(raw))

        header = self._decoder.decode(raw)
        n_samples = self._sample_count(header)
        block_size = n_samples * self._sample_width
        data = read_up_to(self._stream, block_size)
        self._bytes_consumed += len(data)
        if len(data) < block_size:
            self._fail(f"trace {self._count}: sample block cut after {len(data)} of {block_size} bytes",
                       missing=block_size - len(data))

        trace = SeismicTrace(
            index=self._count,
            header=header,
            samples=self._decode_samples(data),
            bytes_consumed=self._bytes_consumed,
        )
        self._count += 1
        self._state = CursorState.ACTIVE
        return trace

    def __iter__(self) -> Iterator[SeismicTrace]:
        while True:
            trace = self.next()
            if trace is None:
                return
            yield trace

    def close(self) -> None:
        """Abandon the walk. Not an error; closes the stream only if the cursor owns it."""
        if not self.exhausted:
            self._state = CursorState.EXHAUSTED
        if self._owns_stream:
            self._stream.close()

    def __enter__(self) -> "TraceCursor":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False

    # -------------------------
    # Internals
    # -------------------------
    def _sample_count(self, header: DecodedHeader) -> int:
        if self._fixed is not None:
            return max(self._fixed, 0)
        n = max(int(header[self._sample_count_field]), 0)
        if n == 0 and self._fallback is not None:
            n = max(self._fallback, 0)
        return n

    def _finish(self) -> None:
        self._state = CursorState.EXHAUSTED
        logger.debug("trace region exhausted: %d traces, %d bytes", self._count, self._bytes_consumed)

    def _fail(self, message: str, *, missing: int) -> None:
        self._state = CursorState.FAILED
        self._error = TruncatedTraceError(
            message,
            trace_index=self._count,
            bytes_consumed=self._bytes_consumed,
            missing=missing,
        )
        logger.warning("%s (%d complete traces kept)", message, self._count)
        raise self._error
