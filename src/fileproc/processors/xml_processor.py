"""XML reading, structure analysis, and JSON conversion.

Documents are parsed with ``xml.etree.ElementTree`` and reshaped into plain
objects: attributes live under ``"$"``, text mixed with child elements under
``"_"``, text-only elements collapse to strings, and repeated children become
lists. Namespaced names keep the prefix declared in the document.
"""

from __future__ import annotations

import io
import logging
import re
import time
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Set, Tuple

from pydantic import BaseModel, Field, field_serializer

from fileproc.detection.scoring import XML_EXTENSIONS
from fileproc.serialization import to_json, write_json

from .base import (
    ProcessorModel,
    ProcessorValidation,
    check_source,
    elapsed_ms,
    ensure_source,
    extension_of,
)
from .errors import ProcessingError

LOGGER = logging.getLogger(__name__)

LARGE_XML_BYTES = 20 * 1024 * 1024
ATTR_KEY = "$"
TEXT_KEY = "_"
TRUNCATED = "[... truncated for preview]"
PREVIEW_KEYS = 5
PREVIEW_ITEMS = 3
PREVIEW_ELEMENTS = 20

_WHITESPACE = re.compile(r"[\r\n\t ]+")
_NUMBER = re.compile(r"^[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?$")


class XmlProcessorOptions(BaseModel):
    """Conversion settings for XML documents.

    Attributes:
        encoding: Encoding used when inspecting the document as text.
        explicit_array: Always wrap child elements in lists.
        trim: Strip surrounding whitespace from text.
        ignore_attrs: Drop attributes from the converted object.
        merge_attrs: Store attributes as ordinary keys instead of under ``"$"``.
        explicit_root: Wrap the result in an object keyed by the root element.
        normalize: Collapse internal whitespace runs in text.
        parse_booleans: Convert ``true``/``false`` text to booleans.
        parse_numbers: Convert numeric text to numbers.
    """

    encoding: str = "utf-8"
    explicit_array: bool = False
    trim: bool = True
    ignore_attrs: bool = False
    merge_attrs: bool = False
    explicit_root: bool = True
    normalize: bool = False
    parse_booleans: bool = False
    parse_numbers: bool = False


class XmlElement(ProcessorModel):
    """One element occurrence, listed in document order."""

    name: str
    path: str
    attributes: Optional[Dict[str, str]] = None
    value: Optional[str] = None
    children: int = 0


class XmlStructureInfo(ProcessorModel):
    """Shape of an XML document."""

    root_element: str = ""
    total_elements: int = 0
    max_depth: int = 0
    namespaces: List[str] = Field(default_factory=list)
    elements: Set[str] = Field(default_factory=set)
    attributes: Set[str] = Field(default_factory=set)

    @field_serializer("elements", "attributes")
    def _sorted(self, value: Set[str]) -> List[str]:
        return sorted(value)


class XmlProcessorResult(ProcessorModel):
    """Converted document plus structure summary."""

    data: Dict[str, Any] = Field(default_factory=dict)
    structure: XmlStructureInfo = Field(default_factory=XmlStructureInfo)
    elements: List[XmlElement] = Field(default_factory=list)
    processing_time: float = 0.0
    file_name: Optional[str] = None


class XmlStatistics(ProcessorModel):
    """Summary counts for an XML document."""

    total_elements: int
    total_attributes: int
    max_depth: int
    file_size: int
    unique_elements: int
    unique_attributes: int
    has_namespaces: bool
    root_element: str


class XmlProcessor:
    """Convert XML documents to nested objects and describe their structure."""

    def __init__(self, options: XmlProcessorOptions | None = None, **overrides: Any) -> None:
        self._options = options or XmlProcessorOptions()
        if overrides:
            self.set_options(**overrides)

    @property
    def options(self) -> XmlProcessorOptions:
        """Return a copy of the current conversion settings."""
        return self._options.model_copy()

    def set_options(self, **changes: Any) -> None:
        """Merge ``changes`` into the current settings."""
        self._options = XmlProcessorOptions.model_validate(
            {**self._options.model_dump(), **changes}
        )

    def process_file(self, path: Path | str) -> XmlProcessorResult:
        """Parse an XML file and summarize its structure.

        Args:
            path: XML document to read.

        Returns:
            XmlProcessorResult: Converted data, structure summary, and element list.

        Raises:
            SourceNotFoundError: If the file does not exist.
            EmptySourceError: If the file has no content.
            ProcessingError: If the document is not well-formed XML.
        """
        started = time.perf_counter()
        file_path = Path(path)
        ensure_source(file_path)
        raw = file_path.read_bytes()
        result = self._process_bytes(raw)
        result.processing_time = elapsed_ms(started)
        result.file_name = file_path.name
        return result

    def process_string(self, text: str) -> XmlProcessorResult:
        """Parse XML content held in memory."""
        started = time.perf_counter()
        result = self._process_bytes(text.encode("utf-8"))
        result.processing_time = elapsed_ms(started)
        return result

    def validate_xml(self, path: Path | str) -> ProcessorValidation:
        """Check an XML file before processing it.

        Args:
            path: XML document to check.

        Returns:
            ProcessorValidation: Errors and warnings found.
        """
        result = ProcessorValidation()
        file_path = Path(path)
        try:
            stats = check_source(file_path, result)
            if stats is None:
                return result

            extension = extension_of(file_path)
            if f".{extension}" not in XML_EXTENSIONS:
                result.warnings.append(
                    f"File extension is '{extension}', expected XML format (.xml, .xsd, .xsl, etc.)"
                )

            if stats.st_size > LARGE_XML_BYTES:
                result.warnings.append("File size is very large (>20MB), processing might be slow")

            raw = file_path.read_bytes()
            content = raw.decode(self._options.encoding, errors="replace").lstrip("\ufeff")

            if not content.strip().startswith("<"):
                result.add_error("Invalid XML: File does not start with an XML tag")
            if "</" not in content:
                result.warnings.append("XML file might be self-closing only or malformed")
            if not content.startswith("<?xml"):
                result.warnings.append(
                    'XML file is missing XML declaration (<?xml version="1.0"?>)'
                )

            try:
                _parse(raw)
            except ET.ParseError as exc:
                result.add_error(f"XML syntax error: {exc}")

            result.file_info = {"size": stats.st_size, "encoding": self._options.encoding}
        except Exception as exc:
            result.add_error(f"Validation error: {exc}")

        return result

    def convert_to_json(self, path: Path | str, output_path: Path | str | None = None) -> str:
        """Convert an XML file to JSON with its structure summary.

        Returns:
            str: The written file path when ``output_path`` is given, otherwise the JSON text.
        """
        result = self.process_file(path)
        payload = {
            "fileName": result.file_name,
            "structure": result.structure,
            "data": result.data,
            "processingTime": result.processing_time,
        }
        if output_path:
            return str(write_json(payload, output_path))
        return to_json(payload)

    def get_statistics(self, path: Path | str) -> XmlStatistics:
        """Return element and attribute counts for an XML file."""
        file_path = Path(path)
        stats = ensure_source(file_path)
        result = self.process_file(file_path)
        structure = result.structure
        return XmlStatistics(
            total_elements=structure.total_elements,
            total_attributes=sum(len(element.attributes or {}) for element in result.elements),
            max_depth=structure.max_depth,
            file_size=stats.st_size,
            unique_elements=len(structure.elements),
            unique_attributes=len(structure.attributes),
            has_namespaces=bool(structure.namespaces),
            root_element=structure.root_element,
        )

    def get_preview(self, path: Path | str, max_depth: int = 3) -> XmlProcessorResult:
        """Return the document with data limited to ``max_depth`` levels."""
        result = self.process_file(path)
        return result.model_copy(
            update={
                "data": limit_depth(result.data, max_depth),
                "elements": result.elements[:PREVIEW_ELEMENTS],
            }
        )

    def get_elements_paths(self, path: Path | str) -> List[str]:
        """Return the dotted path of every element in document order."""
        return [element.path for element in self.process_file(path).elements]

    # Internal helpers -------------------------------------------------

    def _process_bytes(self, raw: bytes) -> XmlProcessorResult:
        text = raw.decode(self._options.encoding, errors="replace").lstrip("\ufeff").strip()
        if not text:
            raise ProcessingError("XML processing error: XML file contains no content")
        if not text.startswith("<"):
            raise ProcessingError(
                "Invalid XML: File contains non-XML content before the root element"
            )

        try:
            root, prefixes = _parse(raw)
        except ET.ParseError as exc:
            raise ProcessingError(f"XML processing error: {exc}") from exc

        names = _Names(prefixes)
        converted = self._convert(root, names)
        data = {names.qualify(root.tag): converted} if self._options.explicit_root else converted
        if not isinstance(data, dict):
            data = {TEXT_KEY: data}

        structure, elements = _analyze(root, names)
        LOGGER.debug(
            "Parsed XML root=%s elements=%d depth=%d",
            structure.root_element,
            structure.total_elements,
            structure.max_depth,
        )
        return XmlProcessorResult(data=data, structure=structure, elements=elements)

    def _convert(self, element: ET.Element, names: "_Names") -> Any:
        opts = self._options
        attributes = {} if opts.ignore_attrs else names.attributes(element)

        groups: Dict[str, List[Any]] = {}
        text_parts = [element.text or ""]
        for child in element:
            groups.setdefault(names.qualify(child.tag), []).append(self._convert(child, names))
            text_parts.append(child.tail or "")
        text = self._clean_text("".join(text_parts))

        if not attributes and not groups:
            return self._coerce(text)

        node: Dict[str, Any] = {}
        if attributes:
            if opts.merge_attrs:
                for key, value in attributes.items():
                    node[key] = [value] if opts.explicit_array else value
            else:
                node[ATTR_KEY] = attributes
        for name, values in groups.items():
            node[name] = values if opts.explicit_array or len(values) > 1 else values[0]
        if text:
            node[TEXT_KEY] = self._coerce(text)
        return node

    def _clean_text(self, text: str) -> str:
        if self._options.normalize:
            text = _WHITESPACE.sub(" ", text)
        if self._options.trim or not text.strip():
            text = text.strip()
        return text

    def _coerce(self, text: str) -> Any:
        if self._options.parse_booleans and text.lower() in ("true", "false"):
            return text.lower() == "true"
        if self._options.parse_numbers and _NUMBER.match(text):
            try:
                return int(text)
            except ValueError:
                return float(text)
        return text


class _Names:
    """Map ElementTree's ``{uri}local`` names back to document prefixes."""

    def __init__(self, prefixes: Dict[str, str]) -> None:
        self._prefixes = prefixes

    @property
    def declared(self) -> List[str]:
        return [prefix for prefix in self._prefixes.values() if prefix]

    def qualify(self, tag: str) -> str:
        if not tag.startswith("{"):
            return tag
        uri, _, local = tag[1:].partition("}")
        prefix = self._prefixes.get(uri)
        if prefix:
            return f"{prefix}:{local}"
        if prefix is None and uri == "http://www.w3.org/XML/1998/namespace":
            return f"xml:{local}"
        return local

    def attributes(self, element: ET.Element) -> Dict[str, str]:
        return {self.qualify(key): value for key, value in element.attrib.items()}


def _parse(raw: bytes) -> Tuple[ET.Element, Dict[str, str]]:
    prefixes: Dict[str, str] = {}
    root: Optional[ET.Element] = None
    for event, payload in ET.iterparse(io.BytesIO(raw), events=("start-ns", "start")):
        if event == "start-ns":
            prefix, uri = payload
            prefixes.setdefault(uri, prefix)
        elif root is None:
            root = payload
    if root is None:
        raise ET.ParseError("no element found")
    return root, prefixes


def _walk(element: ET.Element, depth: int = 1) -> Iterator[Tuple[ET.Element, int]]:
    yield element, depth
    for child in element:
        yield from _walk(child, depth + 1)


def _analyze(root: ET.Element, names: _Names) -> Tuple[XmlStructureInfo, List[XmlElement]]:
    structure = XmlStructureInfo(root_element=names.qualify(root.tag))
    elements: List[XmlElement] = []
    namespaces: List[str] = []
    paths: Dict[int, str] = {}

    # Pre-order walk: paths[depth - 1] always belongs to the current parent.
    for element, depth in _walk(root):
        name = names.qualify(element.tag)
        path = f"{paths[depth - 1]}.{name}" if depth > 1 else name
        paths[depth] = path

        attributes = names.attributes(element)
        structure.total_elements += 1
        structure.max_depth = max(structure.max_depth, depth)
        structure.elements.add(name)
        structure.attributes.update(attributes)
        for qualified in (name, *attributes):
            prefix, sep, _ = qualified.partition(":")
            if sep and prefix not in namespaces:
                namespaces.append(prefix)

        text = (element.text or "").strip()
        elements.append(
            XmlElement(
                name=name,
                path=path,
                attributes=attributes or None,
                value=text or None,
                children=len(element),
            )
        )

    for prefix in names.declared:
        if prefix not in namespaces:
            namespaces.append(prefix)
    structure.namespaces = namespaces
    return structure, elements


def limit_depth(data: Any, max_depth: int, current_depth: int = 0) -> Any:
    """Return a copy of ``data`` cut off below ``max_depth`` nesting levels.

    Lists keep their first three items and objects their first five keys; a
    ``"..."`` entry notes how many keys were dropped.
    """
    if current_depth >= max_depth:
        return TRUNCATED
    if isinstance(data, list):
        return [limit_depth(item, max_depth, current_depth + 1) for item in data[:PREVIEW_ITEMS]]
    if not isinstance(data, dict):
        return data

    limited: Dict[str, Any] = {}
    for index, (key, value) in enumerate(data.items()):
        if index >= PREVIEW_KEYS:
            limited["..."] = f"{len(data) - index} more properties"
            break
        limited[key] = limit_depth(value, max_depth, current_depth + 1)
    return limited


__all__ = [
    "XmlElement",
    "XmlProcessor",
    "XmlProcessorOptions",
    "XmlProcessorResult",
    "XmlStatistics",
    "XmlStructureInfo",
    "limit_depth",
]
