"""
SRT timestamp codec: "HH:MM:SS,mmm" <-> integer milliseconds.
"""

MS_PER_HOUR = 3600000;
MS_PER_MINUTE = 60000;
MS_PER_SECOND = 1000;


class TimestampError( ValueError ):
    """Raised when a timestamp string is not in HH:MM:SS,mmm form."""


def _component( value: str, original: str ) -> int:
    value = value.strip();
    if not ( value.isascii() and value.isdigit() ):
        raise TimestampError( f"Invalid timestamp: {original!r}" );
    return int( value );


def parse_timestamp( text: str ) -> int:
    """
    Convert an SRT timestamp to milliseconds since document start.

    Args:
        text: Timestamp like "00:01:23,456"

    Returns:
        Total milliseconds

    Raises:
        TimestampError: If the text does not hold exactly one comma, exactly
            two colons before it, and unsigned integer components
    """
    if not isinstance( text, str ):
        raise TimestampError( f"Timestamp must be a string, got {type( text ).__name__}" );

    if text.count( "," ) != 1:
        raise TimestampError( f"Invalid timestamp: {text!r}" );
    hms, ms = text.split( "," );

    if hms.count( ":" ) != 2:
        raise TimestampError( f"Invalid timestamp: {text!r}" );
    hours, minutes, seconds = ( _component( part, text ) for part in hms.split( ":" ) );

    return (
        hours * MS_PER_HOUR +
        minutes * MS_PER_MINUTE +
        seconds * MS_PER_SECOND +
        _component( ms, text )
    );


def format_timestamp( ms: int ) -> str:
    """
    Format milliseconds as an SRT timestamp.

    Negative values clamp to zero. Hours are padded to two digits but are
    not capped, so 100 hours formats as "100:00:00,000".
    """
    ms = max( 0, int( ms ) );

    hours = ms // MS_PER_HOUR;
    ms %= MS_PER_HOUR;
    minutes = ms // MS_PER_MINUTE;
    ms %= MS_PER_MINUTE;
    seconds = ms // MS_PER_SECOND;
    milliseconds = ms % MS_PER_SECOND;

    return f"{hours:02d}:{minutes:02d}:{seconds:02d},{milliseconds:03d}";


def compose_offset( hours: int = 0, minutes: int = 0, seconds: int = 0, milliseconds: int = 0, backward: bool = False ) -> int:
    """
    Build a signed shift in milliseconds from separate time components.

    Args:
        hours, minutes, seconds, milliseconds: Non-negative magnitudes
        backward: Negate the total (move subtitles earlier)

    Returns:
        Signed offset in milliseconds
    """
    for name, value in ( ( "hours", hours ), ( "minutes", minutes ), ( "seconds", seconds ), ( "milliseconds", milliseconds ) ):
        if value < 0:
            raise ValueError( f"{name} must not be negative, got {value}" );

    total = (
        hours * MS_PER_HOUR +
        minutes * MS_PER_MINUTE +
        seconds * MS_PER_SECOND +
        milliseconds
    );
    return -total if backward else total;
