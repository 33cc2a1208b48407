"""
Test cases for the srtshift CLI.
"""
import pytest
from pathlib import Path
from unittest.mock import patch
import argparse
import os

from srtshift.cli import ShiftCLI, main, parse_selection


SAMPLE_SRT = """1
00:00:01,000 --> 00:00:02,000
First

2
00:00:03,000 --> 00:00:04,000
Second

""";


@pytest.fixture
def workdir( tmp_path, monkeypatch ):
    monkeypatch.chdir( tmp_path );
    monkeypatch.setenv( "SRTSHIFT_BACKUP_DIR", str( tmp_path / "backup" ) );
    monkeypatch.delenv( "SRTSHIFT_MAX_BACKUPS", raising=False );
    ( tmp_path / "movie.srt" ).write_text( SAMPLE_SRT, encoding="utf-8" );
    return tmp_path;


class TestParseSelection:
    """Test cases for --select parsing."""

    def test_single_and_ranges( self ):
        assert parse_selection( "1,4,7-9" ) == [ 0, 3, 6, 7, 8 ];

    def test_duplicates_merged( self ):
        assert parse_selection( "2,1-3" ) == [ 0, 1, 2 ];

    @pytest.mark.parametrize( "value", [ "", "0", "a", "3-1", "1-x", ",," ] )
    def test_invalid( self, value ):
        with pytest.raises( argparse.ArgumentTypeError ):
            parse_selection( value );


class TestShiftCLI:
    """Test cases for ShiftCLI argument handling."""

    def test_cli_initialization( self ):
        cli = ShiftCLI();
        assert cli.parser is not None;
        assert cli.args is None;
        assert cli.logger is None;

    def test_missing_required( self ):
        with pytest.raises( SystemExit ):
            ShiftCLI().parse_args( [] );

    def test_valid_arguments( self, workdir ):
        cli = ShiftCLI();
        args = cli.parse_args( [ "--srt", "movie.srt", "--seconds", "2", "--backward", "--debug" ] );

        assert args.subtitle == Path( "movie.srt" );
        assert args.debug == True;
        assert cli.get_delta() == -2000;

    def test_offset_argument( self, workdir ):
        cli = ShiftCLI();
        cli.parse_args( [ "-s", "movie.srt", "--offset", "-250" ] );

        assert cli.get_delta() == -250;

    def test_zero_shift_rejected( self, workdir ):
        with pytest.raises( SystemExit ):
            ShiftCLI().parse_args( [ "-s", "movie.srt" ] );

    def test_offset_and_components_conflict( self, workdir ):
        with pytest.raises( SystemExit ):
            ShiftCLI().parse_args( [ "-s", "movie.srt", "--offset", "100", "--seconds", "1" ] );

    def test_negative_component_rejected( self, workdir ):
        with pytest.raises( SystemExit ):
            ShiftCLI().parse_args( [ "-s", "movie.srt", "--seconds", "-1" ] );

    def test_non_srt_rejected( self, workdir ):
        ( workdir / "movie.ass" ).write_text( "", encoding="utf-8" );

        with pytest.raises( SystemExit ):
            ShiftCLI().parse_args( [ "-s", "movie.ass", "--seconds", "1" ] );

    @patch( "srtshift.cli.Path.exists" )
    def test_file_validation( self, mock_exists, workdir ):
        mock_exists.return_value = False;

        with pytest.raises( SystemExit ):
            ShiftCLI().parse_args( [ "-s", "nonexistent.srt", "--seconds", "1" ] );

    def test_bad_backup_limit( self, workdir, monkeypatch ):
        monkeypatch.setenv( "SRTSHIFT_MAX_BACKUPS", "lots" );

        with pytest.raises( SystemExit ):
            ShiftCLI().parse_args( [ "-s", "movie.srt", "--seconds", "1" ] );


class TestEnvironmentLoading:
    """Test environment variable loading."""

    @patch.dict( os.environ, {
        "SRTSHIFT_BACKUP_DIR": "/tmp/srt-backups",
        "SRTSHIFT_MAX_BACKUPS": "3"
    } )
    def test_environment_variable_loading( self ):
        cli = ShiftCLI();
        cli._load_environment();

        assert cli.backup_dir == "/tmp/srt-backups";
        assert cli.max_backups == "3";

    def test_dotenv_file( self, workdir, monkeypatch ):
        monkeypatch.delenv( "SRTSHIFT_BACKUP_DIR", raising=False );
        ( workdir / ".env" ).write_text( "SRTSHIFT_BACKUP_DIR=from-dotenv\n", encoding="utf-8" );

        cli = ShiftCLI();
        cli._load_environment();
        assert cli.backup_dir == "from-dotenv";


class TestMain:
    """End-to-end runs of main()."""

    def test_shift_all_writes_edited_file( self, workdir ):
        main( [ "-s", "movie.srt", "--seconds", "1" ] );

        output = ( workdir / "movie_edited.srt" ).read_text( encoding="utf-8" );
        assert output == (
            "1\n00:00:02,000 --> 00:00:03,000\nFirst\n\n"
            "2\n00:00:04,000 --> 00:00:05,000\nSecond\n\n"
        );

    def test_shift_selected_to_explicit_output( self, workdir ):
        main( [ "-s", "movie.srt", "--offset", "-1500", "--select", "2", "-o", "out.srt" ] );

        output = ( workdir / "out.srt" ).read_text( encoding="utf-8" );
        assert "00:00:01,000 --> 00:00:02,000\nFirst" in output;
        assert "00:00:01,500 --> 00:00:02,500\nSecond" in output;

    def test_overwrite_creates_backup( self, workdir ):
        main( [ "-s", "movie.srt", "--ms", "10", "-o", "movie.srt" ] );

        assert len( list( ( workdir / "backup" ).glob( "movie.*.srt" ) ) ) == 1;
        assert "00:00:01,010" in ( workdir / "movie.srt" ).read_text( encoding="utf-8" );

    def test_dry_run_writes_nothing( self, workdir ):
        main( [ "-s", "movie.srt", "--seconds", "1", "--dry-run" ] );

        assert not ( workdir / "movie_edited.srt" ).exists();

    def test_selection_out_of_range( self, workdir ):
        with pytest.raises( SystemExit ) as excinfo:
            main( [ "-s", "movie.srt", "--seconds", "1", "--select", "5" ] );
        assert excinfo.value.code == 1;
        assert not ( workdir / "movie_edited.srt" ).exists();

    def test_malformed_timestamp_exits( self, workdir ):
        ( workdir / "broken.srt" ).write_text( "1\n00:00:01.000 --> 00:00:02,000\nA\n", encoding="utf-8" );

        with pytest.raises( SystemExit ) as excinfo:
            main( [ "-s", "broken.srt", "--seconds", "1" ] );
        assert excinfo.value.code == 1;

    def test_empty_document_exits( self, workdir ):
        ( workdir / "empty.srt" ).write_text( "\n", encoding="utf-8" );

        with pytest.raises( SystemExit ):
            main( [ "-s", "empty.srt", "--seconds", "1" ] );

    def test_list_prints_entries( self, workdir, capsys ):
        main( [ "-s", "movie.srt", "--list" ] );

        out = capsys.readouterr().out;
        assert "00:00:03,000" in out;
        assert "Second" in out;
        assert not ( workdir / "movie_edited.srt" ).exists();
