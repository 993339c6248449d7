from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO, List, Optional

from geodata_extractor.errors import SchemaError
from geodata_extractor.extract.facade import extract_header_only, extract_text, trace_summary
from geodata_extractor.ingest.charsets import require_charset
from geodata_extractor.ingest.segy_formats import (
    EXTENDED_TEXT_HEADER_SIZE,
    SEGY_BINARY_HEADER_REV1,
    SEGY_TRACE_HEADER,
    TEXT_HEADER_SIZE,
    DataSampleCode,
    binary_header_schema_for_revision,
)
from geodata_extractor.ingest.stream_io import skip_bytes
from geodata_extractor.ingest.trace_cursor import SAMPLE_DECODERS
from geodata_extractor.models.records import DecodedHeader, ExtractedRecord, TraceSummary
from geodata_extractor.models.schema import FormatSchema

logger = logging.getLogger(__name__)

SEGY_MIME = "application/segy"
SEGY_DCMI_TYPE = "Dataset"
SEGY_CHARSET = "IBM1047"

SUPPORTED_TYPES = frozenset({"application/seg", "application/segy", "application/sgy"})
SUPPORTED_EXTENSIONS = (".seg", ".segy", ".sgy")

# Binary header fields the extractor reads by name.
REQUIRED_BINARY_FIELDS = ("data_sample_code", "samples_per_trace")


@dataclass(frozen=True)
class SegyExtractorConfig:
    """
    SEG-Y extraction configuration.

    text_charset:
      Encoding of the 3200-byte textual header (EBCDIC code page 1047 by default).
    binary_schema:
      Binary header layout. None selects rev0/rev1 from the revision word.
    compute_trace_summary:
      Walk the trace region and report trace count and sample min/max. Off by
      default; only the headers are needed for indexing.
    max_traces:
      Stop the trace walk after this many traces (None = whole file).
    """
    text_charset: str = SEGY_CHARSET
    text_header_size: int = TEXT_HEADER_SIZE
    binary_schema: Optional[FormatSchema] = None
    trace_schema: FormatSchema = SEGY_TRACE_HEADER
    compute_trace_summary: bool = False
    max_traces: Optional[int] = None


class SegyExtractor:
    """
    Metadata extractor for SEG-Y files.

    Reads the textual header verbatim and the binary header, and optionally walks the
    traces. The content string is ``"<DATA_SAMPLE_CODE> <textual header> "``,
    followed by the trace summary when one was computed.
    """

    def __init__(self, config: Optional[SegyExtractorConfig] = None):
        self.config = config or SegyExtractorConfig()
        schema = self.config.binary_schema
        if schema is not None:
            missing = [name for name in REQUIRED_BINARY_FIELDS if name not in schema]
            if missing:
                raise SchemaError(f"binary header schema {schema.name!r} lacks fields: {', '.join(missing)}")

    @staticmethod
    def can_parse(file_path: str | Path) -> bool:
        return Path(file_path).suffix.lower() in SUPPORTED_EXTENSIONS

    def extract(self, stream: BinaryIO) -> ExtractedRecord:
        cfg = self.config
        warnings: List[str] = []

        # Fails before any byte is consumed.
        require_charset(cfg.text_charset)

        text = extract_text(stream, cfg.text_charset, cfg.text_header_size)
        binary = self._read_binary_header(stream)

        code = DataSampleCode.from_code(binary["data_sample_code"])
        if code is DataSampleCode.UNKNOWN:
            warnings.append(f"unknown data sample code {binary['data_sample_code']}")
            logger.warning("unknown SEG-Y data sample code %s", binary["data_sample_code"])

        summary = None
        if cfg.compute_trace_summary:
            summary = self._summarize(stream, binary, code, warnings)

        content = f"{code.name} {text} "
        if summary is not None:
            content += summary.describe()

        fields = binary.to_dict()
        fields["data_sample_format"] = code.name
        return ExtractedRecord(
            mime_override=SEGY_MIME,
            dcmi_type=SEGY_DCMI_TYPE,
            content=content,
            fields=fields,
            summary=summary,
            warnings=tuple(warnings),
        )

    def _read_binary_header(self, stream: BinaryIO) -> DecodedHeader:
        cfg = self.config
        if cfg.binary_schema is not None:
            return extract_header_only(stream, cfg.binary_schema, cfg.text_charset)

        # Rev0 fields are a subset of the rev1 layout at the same offsets.
        probe = extract_header_only(stream, SEGY_BINARY_HEADER_REV1, cfg.text_charset)
        schema = binary_header_schema_for_revision(probe["segy_revision"])
        if schema is SEGY_BINARY_HEADER_REV1:
            return probe
        return DecodedHeader({name: probe[name] for name in schema.field_names}, schema_name=schema.name)

    def _summarize(
        self,
        stream: BinaryIO,
        binary: DecodedHeader,
        code: DataSampleCode,
        warnings: List[str],
    ) -> Optional[TraceSummary]:
        cfg = self.config
        if code not in SAMPLE_DECODERS:
            warnings.append(f"trace summary skipped: samples stored as {code.name} are not decoded")
            return None

        n_ext = int(binary.get("extended_text_headers", 0))
        if n_ext < 0:
            warnings.append("trace summary skipped: variable number of extended textual headers")
            return None
        if n_ext > 0:
            need = n_ext * EXTENDED_TEXT_HEADER_SIZE
            skipped = skip_bytes(stream, need)
            if skipped < need:
                msg = f"stream ended inside extended textual headers ({skipped} of {need} bytes)"
                warnings.append(f"file is incomplete: {msg}")
                return TraceSummary(count=0, min=None, max=None, complete=False, error=msg)

        fixed = None
        if int(binary.get("fixed_length_trace_flag", 0)) == 1:
            fixed = int(binary["samples_per_trace"])

        summary = trace_summary(
            stream,
            cfg.trace_schema,
            sample_format=code,
            fallback_sample_count=int(binary["samples_per_trace"]),
            fixed_sample_count=fixed,
            charset=cfg.text_charset,
            max_traces=cfg.max_traces,
        )
        if not summary.complete:
            warnings.append(f"file is incomplete: {summary.error}")
        return summary


def extract_segy_file(file_path: str | Path, config: Optional[SegyExtractorConfig] = None) -> ExtractedRecord:
    path = Path(file_path).expanduser().resolve()
    if not path.exists():
        raise FileNotFoundError(str(path))
    with path.open("rb") as fh:
        record = SegyExtractor(config).extract(fh)
    logger.debug("extracted SEG-Y metadata from %s", path)
    return record
