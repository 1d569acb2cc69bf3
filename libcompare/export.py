"""
CSV and XML rendering of result sets.

CSV output starts with a UTF-8 byte-order mark so spreadsheet applications
pick up the encoding. XML output mirrors the collection layout consumers of
the reports expect: <songs> for a single set, <comparisonResult> with
<commonSongs> and <uniqueSongs> for a pair, each holding a flat list of <song>.
"""

from __future__ import annotations

import csv
import io
import logging
import re
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Iterable, Optional, Sequence, Union

from .errors import ExportError
from .models import ScoredTrack, TrackRecord

logger = logging.getLogger(__name__)

Song = Union[TrackRecord, ScoredTrack]

BOM = "\ufeff"
CSV_HEADER = "Title,Artist,Album"
COMMON_SECTION_LABEL = "Common Songs"
DEFAULT_OTHER_LABEL = "Local Only Songs"

# Characters outside the XML 1.0 Char production
_XML_ILLEGAL = re.compile("[^\t\n\r\x20-\ud7ff\ue000-\ufffd\U00010000-\U0010ffff]")


################################################################################
# CSV
################################################################################


def _write_rows(out: io.StringIO, songs: Optional[Iterable[Song]]) -> None:
    out.write(CSV_HEADER + "\n")
    writer = csv.writer(out, quoting=csv.QUOTE_ALL, lineterminator="\n")
    for song in songs or ():
        writer.writerow([song.title or "", song.artist or "", song.album or ""])


def songs_to_csv(songs: Optional[Sequence[Song]]) -> bytes:
    """Render a single result set as BOM-prefixed UTF-8 CSV."""
    out = io.StringIO()
    out.write(BOM)
    _write_rows(out, songs)
    return out.getvalue().encode("utf-8")


def comparison_to_csv(
    common: Optional[Sequence[Song]],
    other: Optional[Sequence[Song]],
    other_label: str = DEFAULT_OTHER_LABEL,
) -> bytes:
    """Render common songs and a second set as two labelled CSV sections."""
    out = io.StringIO()
    out.write(BOM)
    out.write(f"--- {COMMON_SECTION_LABEL} ---\n")
    _write_rows(out, common)
    out.write("\n")
    out.write(f"--- {other_label} ---\n")
    _write_rows(out, other)
    return out.getvalue().encode("utf-8")


################################################################################
# XML
################################################################################


def _text(value: Optional[str]) -> str:
    value = value or ""
    bad = _XML_ILLEGAL.search(value)
    if bad:
        raise ValueError(f"character {bad.group()!r} is not allowed in XML: {value!r}")
    return value


def _append_songs(parent: ET.Element, songs: Optional[Iterable[Song]]) -> None:
    for song in songs or ():
        node = ET.SubElement(parent, "song")
        ET.SubElement(node, "title").text = _text(song.title)
        ET.SubElement(node, "artist").text = _text(song.artist)
        ET.SubElement(node, "album").text = _text(song.album)
        if isinstance(song, ScoredTrack):
            ET.SubElement(node, "matchScore").text = repr(float(song.match_score))


def _serialize(root: ET.Element) -> bytes:
    ET.indent(root, space="  ")
    return ET.tostring(root, encoding="utf-8", xml_declaration=True)


def songs_to_xml(songs: Optional[Sequence[Song]]) -> bytes:
    """Render a single result set as an indented <songs> document."""
    count = len(songs) if songs else 0
    logger.info("Exporting %d songs to XML", count)
    try:
        root = ET.Element("songs")
        _append_songs(root, songs)
        return _serialize(root)
    except (ValueError, TypeError) as e:
        logger.error("Error converting songs to XML: %s", e)
        raise ExportError(f"Error converting songs to XML: {e}") from e


def comparison_to_xml(
    common: Optional[Sequence[Song]], other: Optional[Sequence[Song]]
) -> bytes:
    """Render common songs and a second set as a <comparisonResult> document."""
    logger.info("Exporting comparison results to XML")
    try:
        root = ET.Element("comparisonResult")
        _append_songs(ET.SubElement(root, "commonSongs"), common)
        _append_songs(ET.SubElement(root, "uniqueSongs"), other)
        return _serialize(root)
    except (ValueError, TypeError) as e:
        logger.error("Error converting comparison results to XML: %s", e)
        raise ExportError(f"Error converting comparison results to XML: {e}") from e


def write_report(data: bytes, output_path: Union[str, Path]) -> Path:
    """Write rendered report bytes to disk, creating parent folders."""
    path = Path(output_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(data)
    logger.info("Wrote %d bytes to %s", len(data), path)
    return path
