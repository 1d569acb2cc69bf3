"""
Readers that turn catalog files and music folders into TrackRecords.

These sit in front of the comparison core: CSV exports with a header row,
XML exports built from <track> elements, and plain folders of audio files.
Entries missing a title or artist are skipped, never defaulted.
"""

from __future__ import annotations

import csv
import io
import logging
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import BinaryIO, List, Optional, Union

from .errors import InvalidScanError, MalformedInputError
from .models import TrackRecord

logger = logging.getLogger(__name__)

Source = Union[str, Path, bytes, BinaryIO]

_TITLE_TAGS = ("name", "title")


def _read_bytes(source: Source) -> bytes:
    if isinstance(source, bytes):
        return source
    if isinstance(source, (str, Path)):
        return Path(source).read_bytes()
    return source.read()


def _local_name(tag: str) -> str:
    # strip any "{namespace}" prefix
    return tag.rsplit("}", 1)[-1]


def parse_csv(source: Source, filename: Optional[str] = None) -> List[TrackRecord]:
    """Parse a CSV export: skip the header row, then Title,Artist[,Album] per row.

    Raises MalformedInputError if the file is not valid UTF-8.
    """
    if filename is None and isinstance(source, (str, Path)):
        filename = Path(source).name
    filename = filename or "<csv>"
    try:
        text = _read_bytes(source).decode("utf-8-sig")
    except UnicodeDecodeError as e:
        message = f"Error decoding CSV file '{filename}' as UTF-8 at byte {e.start}: {e.reason}"
        logger.error(message)
        raise MalformedInputError(message) from e
    rows = csv.reader(io.StringIO(text))
    next(rows, None)  # header

    tracks: List[TrackRecord] = []
    for line_no, row in enumerate(rows, start=2):
        if len(row) < 2:
            if any(cell.strip() for cell in row):
                logger.warning("Skipping CSV line %d: expected at least title and artist", line_no)
            continue
        album = row[2].strip() if len(row) > 2 and row[2].strip() else None
        tracks.append(TrackRecord(title=row[0].strip(), artist=row[1].strip(), album=album))
    logger.info("Parsed %d tracks from %s", len(tracks), filename)
    return tracks


def parse_xml(source: Source, filename: Optional[str] = None) -> List[TrackRecord]:
    """Parse an XML export made of <track> elements.

    Each <track> needs a <name> or <title> and an <artist>; <album> is optional.
    Raises MalformedInputError if the document is not well-formed.
    """
    if filename is None and isinstance(source, (str, Path)):
        filename = Path(source).name
    filename = filename or "<xml>"
    data = _read_bytes(source)

    try:
        root = ET.fromstring(data)
    except ET.ParseError as e:
        line, _column = e.position
        message = f"Error parsing XML file '{filename}' at line {line}: {e}"
        logger.error(message)
        raise MalformedInputError(message) from e

    tracks: List[TrackRecord] = []
    for element in root.iter():
        if _local_name(element.tag) != "track":
            continue
        fields = {}
        for child in element:
            name = _local_name(child.tag)
            if name in _TITLE_TAGS and child.text is not None:
                fields["title"] = child.text
            elif name in ("artist", "album") and child.text is not None:
                fields[name] = child.text
        if "title" not in fields or "artist" not in fields:
            logger.warning("Skipping track in '%s' due to missing title or artist", filename)
            continue
        tracks.append(TrackRecord(**fields))
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("Parsed track - Title: %s, Artist: %s", fields["title"], fields["artist"])
    logger.info("Parsed %d tracks from %s", len(tracks), filename)
    return tracks


def scan_music_folder(folder: Union[str, Path]) -> List[TrackRecord]:
    """One record per file directly inside `folder`, titled by the file's stem.

    Not recursive; subfolders are ignored. Artist is left empty.
    """
    path = Path(folder)
    if not path.is_dir():
        raise InvalidScanError(f"Invalid folder path provided: {folder}")

    tracks: List[TrackRecord] = []
    for entry in sorted(path.iterdir(), key=lambda p: p.name):
        # macOS AppleDouble files
        if entry.name.startswith("._"):
            continue
        if not entry.is_file():
            continue
        tracks.append(TrackRecord(title=entry.stem, artist=""))
    logger.info("Scanned %d songs from folder: %s", len(tracks), path)
    return tracks


def load_tracks(path: Union[str, Path]) -> List[TrackRecord]:
    """Load a catalog from an XML file, a CSV file or a music folder."""
    p = Path(path)
    if p.is_dir():
        return scan_music_folder(p)
    if not p.exists():
        raise MalformedInputError(f"Input file not found at {p}")
    if p.suffix.lower() == ".xml":
        return parse_xml(p)
    return parse_csv(p)
