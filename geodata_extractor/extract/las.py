from __future__ import annotations

import io
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO, Dict, List, Optional, Tuple

import lasio

from geodata_extractor.extract.facade import extract_text
from geodata_extractor.models.records import ExtractedRecord

logger = logging.getLogger(__name__)

LAS_MIME = "text/las"
LAS_DCMI_TYPE = "Dataset"
LAS_CHARSET = "US-ASCII"

SUPPORTED_TYPES = frozenset({LAS_MIME})
SUPPORTED_EXTENSIONS = (".las",)

# Section letter -> lasio.LASFile attribute.
_SECTIONS = {
    "V": "version",
    "W": "well",
    "C": "curves",
    "P": "params",
}

_LASIO_ERRORS = (
    lasio.exceptions.LASHeaderError,
    lasio.exceptions.LASDataError,
    lasio.exceptions.LASUnknownUnitError,
)


@dataclass(frozen=True)
class LasExtractorConfig:
    """
    LAS extraction configuration.

    parse_sections:
      Header sections whose items are returned as fields, by section letter
      (V = version, W = well, C = curves, P = parameters). Empty disables parsing;
      the content is the whole text either way.
    """
    charset: str = LAS_CHARSET
    parse_sections: Tuple[str, ...] = ("V", "W")


def parse_header_sections(text: str, sections: Tuple[str, ...] = ("V", "W")) -> Tuple[Dict[str, str], List[str]]:
    """
    Header items of the requested sections, read with lasio (the ~A data block is skipped).

    Returns (mnemonic -> value as text, warnings). A file lasio cannot read gives no
    fields and one warning; unknown section letters are reported the same way.
    """
    fields: Dict[str, str] = {}
    warnings: List[str] = []
    if not text.strip():
        return fields, warnings

    try:
        las = lasio.read(io.StringIO(text), ignore_data=True)
    except _LASIO_ERRORS as exc:
        warnings.append(f"LAS header not readable: {exc}")
        return fields, warnings

    for letter in sections:
        attr = _SECTIONS.get(letter.upper())
        if attr is None:
            warnings.append(f"unknown LAS section ~{letter}")
            continue
        for item in getattr(las, attr):
            fields[item.mnemonic.upper()] = str(item.value).strip()

    return fields, warnings


class LasExtractor:
    """Metadata extractor for CWLS LAS well-log files (content = the whole text)."""

    def __init__(self, config: Optional[LasExtractorConfig] = None):
        self.config = config or LasExtractorConfig()

    @staticmethod
    def can_parse(file_path: str | Path) -> bool:
        return Path(file_path).suffix.lower() in SUPPORTED_EXTENSIONS

    def extract(self, stream: BinaryIO) -> ExtractedRecord:
        cfg = self.config
        text = extract_text(stream, cfg.charset)

        fields: Dict[str, str] = {}
        warnings: List[str] = []
        if cfg.parse_sections:
            fields, warnings = parse_header_sections(text, cfg.parse_sections)
            for w in warnings:
                logger.warning("LAS header: %s", w)

        return ExtractedRecord(
            mime_override=LAS_MIME,
            dcmi_type=LAS_DCMI_TYPE,
            content=text,
            fields=dict(fields),
            warnings=tuple(warnings),
        )


def extract_las_file(file_path: str | Path, config: Optional[LasExtractorConfig] = None) -> ExtractedRecord:
    path = Path(file_path).expanduser().resolve()
    if not path.exists():
        raise FileNotFoundError(str(path))
    with path.open("rb") as fh:
        return LasExtractor(config).extract(fh)
