"""
Time shifting for parsed subtitle entries.
"""
from typing import Iterable, List, Optional

from .subtitles import SubtitleEntry
from .timecode import format_timestamp, parse_timestamp
from .logging import get_logger


class ShiftError( ValueError ):
    """Raised when a shift request cannot be applied."""


def _resolve_targets( entries: List[SubtitleEntry], selected: Optional[Iterable[int]] ) -> List[int]:
    """
    Work out which positions a shift applies to.

    A non-empty selection restricts the shift to those positions; an empty
    or missing selection means every entry.
    """
    positions = set();

    for position in ( selected if selected is not None else () ):
        if isinstance( position, bool ) or not isinstance( position, int ):
            raise ShiftError( f"Selection must hold entry positions, got {position!r}" );
        if not 0 <= position < len( entries ):
            raise ShiftError( f"Selected position {position} is out of range for {len( entries )} entries" );
        positions.add( position );

    return sorted( positions ) if positions else list( range( len( entries ) ) );


def shift( entries: List[SubtitleEntry], delta_ms: int, selected: Optional[Iterable[int]] = None ) -> List[SubtitleEntry]:
    """
    Shift subtitle timestamps in place by a signed number of milliseconds.

    Start and end are shifted and clamped at zero independently, so a large
    backward shift can leave start > end. Entries outside the target set are
    not touched, not even reformatted.

    Args:
        entries: Entries to modify (mutated in place)
        delta_ms: Signed offset; positive delays the subtitles
        selected: 0-based positions to shift; None or empty shifts everything

    Returns:
        The entries that were shifted, in document order

    Raises:
        ShiftError: On a zero or non-integer delta, or a bad selection
        TimestampError: If a targeted entry carries a malformed timestamp;
            in that case no entry is modified
    """
    if isinstance( delta_ms, bool ) or not isinstance( delta_ms, int ):
        raise ShiftError( f"Shift must be a whole number of milliseconds, got {delta_ms!r}" );
    if delta_ms == 0:
        raise ShiftError( "Shift amount must not be zero" );

    logger = get_logger();
    positions = _resolve_targets( entries, selected );

    # Compute everything first so a bad timestamp leaves the sequence intact
    updates = [];
    for position in positions:
        entry = entries[position];
        new_start = format_timestamp( parse_timestamp( entry.start_time ) + delta_ms );
        new_end = format_timestamp( parse_timestamp( entry.end_time ) + delta_ms );
        updates.append( ( entry, new_start, new_end ) );

    for entry, new_start, new_end in updates:
        entry.start_time = new_start;
        entry.end_time = new_end;

    logger.debug( f"Shifted {len( updates )} of {len( entries )} entries by {delta_ms:+d}ms" );
    return [ entry for entry, _, _ in updates ];


def find_inverted_entries( entries: List[SubtitleEntry] ) -> List[int]:
    """
    Find entries whose end time precedes their start time.

    Durations are never enforced; this is an optional check callers can run
    after shifting.

    Returns:
        0-based positions of the offending entries
    """
    return [
        position for position, entry in enumerate( entries )
        if parse_timestamp( entry.end_time ) < parse_timestamp( entry.start_time )
    ];
