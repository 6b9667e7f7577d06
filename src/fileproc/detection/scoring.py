"""Scoring rules that map extension, filename, and content signals to points."""

from __future__ import annotations

import re

from .models import ScoreTriple

CSV_EXTENSIONS: tuple[str, ...] = (".csv", ".tsv", ".txt")
EXCEL_EXTENSIONS: tuple[str, ...] = (".xlsx", ".xls", ".xlsm", ".xlsb")
XML_EXTENSIONS: tuple[str, ...] = (".xml", ".xsd", ".xsl", ".xslt", ".rss", ".atom", ".svg")

CSV_SEPARATORS: tuple[str, ...] = (",", ";", "\t", "|")
CSV_SAMPLE_LINES = 10

FILENAME_KEYWORD_SCORE = 0.3
CSV_KEYWORDS: tuple[str, ...] = ("csv", "data", "export")
EXCEL_KEYWORDS: tuple[str, ...] = ("xlsx", "xls", "spreadsheet", "workbook")
XML_KEYWORDS: tuple[str, ...] = ("xml", "config", "feed", "rss")

ZIP_MAGIC = b"\x50\x4b"
OLE_MAGIC = b"\xd0\xcf\x11\xe0"

_TAG_PATTERN = re.compile(r"<[^>]+>")
_CLOSING_TAG_PATTERN = re.compile(r"</[^>]+>")


def score_extension(extension: str) -> ScoreTriple:
    """Award one point to the type whose extension set contains ``extension``."""
    if extension in CSV_EXTENSIONS:
        return ScoreTriple(csv=1)
    if extension in EXCEL_EXTENSIONS:
        return ScoreTriple(excel=1)
    if extension in XML_EXTENSIONS:
        return ScoreTriple(xml=1)
    return ScoreTriple()


def score_filename(name: str) -> ScoreTriple:
    """Award keyword points for each type independently."""

    def _hit(keywords: tuple[str, ...]) -> float:
        return FILENAME_KEYWORD_SCORE if any(word in name for word in keywords) else 0.0

    return ScoreTriple(
        csv=_hit(CSV_KEYWORDS),
        excel=_hit(EXCEL_KEYWORDS),
        xml=_hit(XML_KEYWORDS),
    )


def score_content(text: str, raw: bytes) -> ScoreTriple:
    """Inspect a content sample for XML, Excel, and delimited-text signatures.

    XML markup is checked first and Excel magic numbers second; the CSV
    separator check only runs when neither of those scored.

    Args:
        text: Decoded content sample.
        raw: Raw bytes the text was decoded from.

    Returns:
        ScoreTriple: Content-derived points.
    """
    if not text and not raw:
        return ScoreTriple()

    xml = _score_xml(text)
    excel = _score_excel(raw)
    csv = 0.0
    if xml == 0 and excel == 0:
        csv = _score_csv(text)
    return ScoreTriple(csv=csv, excel=excel, xml=xml)


def _score_xml(text: str) -> float:
    # str.strip() keeps U+FEFF
    if not text.lstrip("\ufeff").strip().startswith("<"):
        return 0.0
    tags = len(_TAG_PATTERN.findall(text))
    closing = len(_CLOSING_TAG_PATTERN.findall(text))
    if tags and closing:
        return 1.0
    if tags:
        return 0.7
    return 0.0


def _score_excel(raw: bytes) -> float:
    if len(raw) < 8:
        return 0.0
    if raw.startswith(ZIP_MAGIC) or raw.startswith(OLE_MAGIC):
        return 1.0
    return 0.0


def _score_csv(text: str) -> float:
    lines = [line for line in text.split("\n") if line.strip()][:CSV_SAMPLE_LINES]
    if not lines:
        return 0.0
    with_separator = sum(1 for line in lines if any(sep in line for sep in CSV_SEPARATORS))
    if with_separator >= len(lines) * 0.5:
        return 1.0
    if with_separator:
        return 0.5
    return 0.0


__all__ = [
    "CSV_EXTENSIONS",
    "EXCEL_EXTENSIONS",
    "XML_EXTENSIONS",
    "CSV_SEPARATORS",
    "score_extension",
    "score_filename",
    "score_content",
]
