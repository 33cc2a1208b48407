"""
Test cases for the SRT timestamp codec.
"""
import random

import pytest

from srtshift.timecode import TimestampError, compose_offset, format_timestamp, parse_timestamp


class TestParseTimestamp:
    """Test cases for parse_timestamp."""

    def test_parse_components( self ):
        assert parse_timestamp( "00:00:00,000" ) == 0;
        assert parse_timestamp( "00:00:01,500" ) == 1500;
        assert parse_timestamp( "01:02:03,004" ) == 3723004;

    def test_parse_hours_beyond_two_digits( self ):
        assert parse_timestamp( "100:00:00,000" ) == 360000000;

    def test_parse_tolerates_surrounding_whitespace( self ):
        assert parse_timestamp( " 00:00:02,000 " ) == 2000;

    @pytest.mark.parametrize( "text", [
        "00:00:01.000",       # no comma
        "00:00:01,000,000",   # two commas
        "00:01,000",          # one colon
        "00:00:00:01,000",    # three colons
        "aa:00:01,000",
        "00:00:01,",
        "-1:00:01,000",
        "",
    ] )
    def test_malformed_timestamp_raises( self, text ):
        with pytest.raises( TimestampError ):
            parse_timestamp( text );

    def test_timestamp_error_is_value_error( self ):
        with pytest.raises( ValueError ):
            parse_timestamp( "garbage" );

    def test_non_string_rejected( self ):
        with pytest.raises( TimestampError ):
            parse_timestamp( 1000 );


class TestFormatTimestamp:
    """Test cases for format_timestamp."""

    def test_format_padding( self ):
        assert format_timestamp( 0 ) == "00:00:00,000";
        assert format_timestamp( 1500 ) == "00:00:01,500";
        assert format_timestamp( 3723004 ) == "01:02:03,004";

    def test_negative_clamps_to_zero( self ):
        assert format_timestamp( -5 ) == format_timestamp( 0 ) == "00:00:00,000";

    def test_hours_not_capped( self ):
        assert format_timestamp( 360000000 ) == "100:00:00,000";

    def test_inverse_on_boundaries( self ):
        for ms in ( 0, 1, 999, 1000, 59999, 60000, 3599999, 3600000, 359999999 ):
            assert parse_timestamp( format_timestamp( ms ) ) == ms;

    def test_inverse_on_random_sample( self ):
        rng = random.Random( 1234 );
        for _ in range( 2000 ):
            ms = rng.randint( 0, 359999999 );
            assert parse_timestamp( format_timestamp( ms ) ) == ms;


class TestComposeOffset:
    """Test cases for building a shift from time components."""

    def test_forward( self ):
        assert compose_offset( hours=1, minutes=2, seconds=3, milliseconds=4 ) == 3723004;

    def test_backward_negates( self ):
        assert compose_offset( seconds=2, milliseconds=500, backward=True ) == -2500;

    def test_defaults_to_zero( self ):
        assert compose_offset() == 0;

    def test_negative_component_rejected( self ):
        with pytest.raises( ValueError ):
            compose_offset( seconds=-1 );
