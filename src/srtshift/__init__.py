"""
srtshift - SubRip subtitle timing editor.

Parses .srt documents, shifts selected (or all) cues by a fixed offset
and writes the result back out.
"""

__version__ = "0.1.0";
__author__ = "SubShift Project";
__license__ = "MIT";

from .timecode import TimestampError, compose_offset, format_timestamp, parse_timestamp
from .subtitles import SubtitleEntry, parse, serialize
from .offset import ShiftError, find_inverted_entries, shift

__all__ = [
    "SubtitleEntry",
    "ShiftError",
    "TimestampError",
    "compose_offset",
    "find_inverted_entries",
    "format_timestamp",
    "parse",
    "parse_timestamp",
    "serialize",
    "shift",
];
