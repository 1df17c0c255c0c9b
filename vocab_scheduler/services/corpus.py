"""Loading and conversion of the vocabulary word list."""
from __future__ import annotations

import codecs
import csv
import io
import json
import re
import unicodedata
from collections import Counter
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from pathlib import Path

from loguru import logger
from pydantic import ValidationError as PydanticValidationError

from vocab_scheduler.schemas.vocabulary import VocabularyItem
from vocab_scheduler.utils.exceptions import CorpusError

DEFAULT_CATEGORY = "General"

# CSV header aliases per field, matched case-insensitively
COLUMN_ALIASES: dict[str, tuple[str, ...]] = {
    "source_text": ("spanish", "es", "word", "term", "sp", "palabra"),
    "target_text": ("english", "en", "translation", "meaning", "def"),
    "category": ("category", "topic", "type", "group", "theme"),
    "pronunciation": ("pronunciation", "phonetic", "pron"),
    "example": ("example", "sentence", "usage"),
}
REQUIRED_FIELDS = ("source_text", "target_text")


@dataclass(slots=True)
class ConversionReport:
    """Outcome of a CSV conversion."""

    items: list[VocabularyItem] = field(default_factory=list)
    rows_read: int = 0
    rows_skipped: int = 0
    columns: dict[str, str | None] = field(default_factory=dict)

    def category_counts(self) -> dict[str, int]:
        counts: dict[str, int] = {}
        for item in self.items:
            counts[item.category] = counts.get(item.category, 0) + 1
        return dict(sorted(counts.items(), key=lambda pair: pair[1], reverse=True))


def generate_id(text: str) -> str:
    """Build a URL-safe identifier from the source text."""

    decomposed = unicodedata.normalize("NFD", text.lower().strip())
    without_accents = "".join(char for char in decomposed if not unicodedata.combining(char))
    hyphenated = re.sub(r"\s+", "-", without_accents)
    return re.sub(r"[^a-z0-9-]", "", hyphenated)


def _unique_id(base: str, seen: set[str]) -> str:
    if base not in seen:
        return base
    counter = 2
    while f"{base}-{counter}" in seen:
        counter += 1
    return f"{base}-{counter}"


def detect_column(headers: Iterable[str], aliases: Iterable[str]) -> str | None:
    """Return the first header matching one of ``aliases``."""

    headers = list(headers)
    lowered = [header.lower().strip() for header in headers]
    for alias in aliases:
        if alias.lower() in lowered:
            return headers[lowered.index(alias.lower())]
    return None


def convert_csv_rows(rows: list[Mapping[str, str | None]]) -> ConversionReport:
    """Map CSV rows onto vocabulary items using header aliases."""

    report = ConversionReport(rows_read=len(rows))
    if not rows:
        raise CorpusError("CSV file is empty")

    headers = list(rows[0].keys())
    report.columns = {name: detect_column(headers, aliases) for name, aliases in COLUMN_ALIASES.items()}
    missing = [name for name in REQUIRED_FIELDS if report.columns[name] is None]
    if missing:
        raise CorpusError(
            "Required columns not found",
            {"missing": missing, "headers": headers},
        )

    def value(row: Mapping[str, str | None], name: str) -> str:
        column = report.columns.get(name)
        if column is None:
            return ""
        return (row.get(column) or "").strip()

    seen_ids: set[str] = set()
    for row in rows:
        source_text = value(row, "source_text")
        target_text = value(row, "target_text")
        if not source_text or not target_text:
            report.rows_skipped += 1
            continue

        item_id = _unique_id(generate_id(source_text) or "item", seen_ids)
        seen_ids.add(item_id)
        report.items.append(
            VocabularyItem(
                id=item_id,
                source_text=source_text,
                target_text=target_text,
                category=value(row, "category") or DEFAULT_CATEGORY,
                pronunciation=value(row, "pronunciation") or None,
                example=value(row, "example") or None,
            )
        )
    return report


def decode_csv_bytes(raw: bytes) -> str:
    """Decode CSV bytes, honouring UTF-8 and UTF-16 LE byte order marks."""

    if raw.startswith(codecs.BOM_UTF8):
        return raw[len(codecs.BOM_UTF8):].decode("utf-8")
    if raw.startswith(codecs.BOM_UTF16_LE):
        return raw[len(codecs.BOM_UTF16_LE):].decode("utf-16-le")
    return raw.decode("utf-8")


def read_csv(path: Path) -> ConversionReport:
    """Read and convert a CSV word list."""

    try:
        content = decode_csv_bytes(path.read_bytes())
    except (OSError, UnicodeDecodeError) as exc:
        raise CorpusError(f"Error reading CSV file: {exc}", {"path": str(path)}) from exc

    reader = csv.DictReader(io.StringIO(content), skipinitialspace=True)
    rows = list(reader)
    return convert_csv_rows(rows)


def write_corpus(items: list[VocabularyItem], path: Path) -> None:
    """Write items as a JSON word list (UTF-8, no BOM)."""

    payload = [item.model_dump(exclude_none=True) for item in items]
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(payload, ensure_ascii=False, indent=2), encoding="utf-8")


def load_corpus(path: Path) -> list[VocabularyItem]:
    """Load a JSON word list; ids must be unique."""

    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise CorpusError(f"Error reading word list: {exc}", {"path": str(path)}) from exc

    if not isinstance(payload, list):
        raise CorpusError("Word list must be a JSON array", {"path": str(path)})

    try:
        items = [VocabularyItem.model_validate(entry) for entry in payload]
    except PydanticValidationError as exc:
        raise CorpusError("Word list contains invalid entries", {"errors": exc.errors()}) from exc

    counts = Counter(item.id for item in items)
    duplicates = sorted(item_id for item_id, count in counts.items() if count > 1)
    if duplicates:
        raise CorpusError("Word list contains duplicate ids", {"duplicates": duplicates})

    logger.info("Loaded vocabulary corpus", path=str(path), items=len(items))
    return items
