"""
Subtitle model plus SRT parsing and serialization.

Timestamps are kept as the strings found in the document; they are only
converted to milliseconds while a shift is being applied (see offset.py).
"""
import re
from pathlib import Path
from typing import Iterable, List

from .logging import get_logger


ARROW = " --> ";

_BLOCK_SPLIT = re.compile( r"\r?\n\s*\r?\n" );
_LINE_SPLIT = re.compile( r"\r?\n" );


class SubtitleFileError( ValueError ):
    """Raised when a subtitle file cannot be used as input."""


class SubtitleEntry:
    """Represents a single subtitle cue with its timing and text."""

    __slots__ = ( "sequence_number", "start_time", "end_time", "text" );

    def __init__( self, sequence_number: int, start_time: str, end_time: str, text: str ):
        self.sequence_number = sequence_number;  # As declared in the document
        self.start_time = start_time;            # "HH:MM:SS,mmm" as loaded
        self.end_time = end_time;
        self.text = text;                        # Caption lines joined with "\n"

    def __eq__( self, other ):
        if not isinstance( other, SubtitleEntry ):
            return NotImplemented;
        return (
            self.sequence_number == other.sequence_number and
            self.start_time == other.start_time and
            self.end_time == other.end_time and
            self.text == other.text
        );

    def __repr__( self ):
        return f"SubtitleEntry({self.sequence_number}, {self.start_time}{ARROW}{self.end_time}, text={self.text[:30]!r})";


def _parse_sequence_number( line: str ):
    """Plain ASCII integer with an optional minus sign, else None."""
    digits = line.strip();
    negative = digits.startswith( "-" );
    if negative:
        digits = digits[1:];
    if not ( digits.isascii() and digits.isdigit() ):
        return None;
    return -int( digits ) if negative else int( digits );


def _parse_block( block: str ):
    lines = _LINE_SPLIT.split( block );
    if len( lines ) < 3:
        return None;

    sequence_number = _parse_sequence_number( lines[0] );
    if sequence_number is None:
        return None;

    times = lines[1].split( ARROW );
    if len( times ) < 2 or not times[0] or not times[1]:
        return None;

    return SubtitleEntry( sequence_number, times[0], times[1], "\n".join( lines[2:] ) );


def parse( document: str ) -> List[SubtitleEntry]:
    """
    Parse SRT text into subtitle entries, in document order.

    Blocks that do not look like a cue (fewer than three lines, a sequence
    number that is not an integer, or a missing/empty side of the " --> "
    time line) are skipped rather than reported. Hand-edited files often
    carry stray fragments and the rest of the document is still usable.

    Args:
        document: Raw SRT content (either line-ending convention)

    Returns:
        List of SubtitleEntry objects
    """
    logger = get_logger();
    entries = [];
    skipped = 0;

    # A byte-order mark left by the decoder is not part of the first cue
    stripped = document.lstrip( "\ufeff" ).strip();
    if not stripped:
        return entries;

    for position, block in enumerate( _BLOCK_SPLIT.split( stripped ) ):
        entry = _parse_block( block );
        if entry is None:
            skipped += 1;
            logger.debug( f"Skipping malformed block #{position + 1}: {block[:40]!r}" );
            continue;
        entries.append( entry );

    logger.debug( f"Parsed {len( entries )} subtitle entries ({skipped} skipped)" );
    return entries;


def serialize( entries: Iterable[SubtitleEntry] ) -> str:
    """
    Render entries back to SRT text.

    Each cue is "number\\nSTART --> END\\ntext", cues are separated by a
    blank line and the document ends with a blank line. Nothing is
    renumbered or re-wrapped.
    """
    blocks = [
        f"{entry.sequence_number}\n{entry.start_time}{ARROW}{entry.end_time}\n{entry.text}"
        for entry in entries
    ];
    if not blocks:
        return "";
    return "\n\n".join( blocks ) + "\n\n";


def validate_subtitle_file( subtitle_file: Path ):
    """
    Check that a path points at an existing .srt file.

    Raises:
        SubtitleFileError: If the file is missing or not an .srt file
    """
    subtitle_file = Path( subtitle_file );

    if subtitle_file.suffix.lower() != ".srt":
        raise SubtitleFileError( f"Only .srt files are supported, got: {subtitle_file.suffix or subtitle_file.name}" );

    if not subtitle_file.is_file():
        raise SubtitleFileError( f"Subtitle file not found: {subtitle_file}" );


def load_file( subtitle_file: Path ) -> List[SubtitleEntry]:
    """
    Read and parse an .srt file.

    The file is decoded as UTF-8; a leading byte-order mark is dropped.
    """
    subtitle_file = Path( subtitle_file );
    validate_subtitle_file( subtitle_file );

    get_logger().info( f"Parsing subtitle file: {subtitle_file}" );
    try:
        content = subtitle_file.read_text( encoding="utf-8-sig" );
    except UnicodeDecodeError as e:
        raise SubtitleFileError( f"Subtitle file is not valid UTF-8: {subtitle_file} ({e})" ) from e;

    entries = parse( content );
    get_logger().info( f"Parsed {len( entries )} subtitle entries" );
    return entries;
