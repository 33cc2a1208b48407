"""
CLI entry point for srtshift with argument parsing and environment variable loading.
"""
import argparse
import os
import sys
from pathlib import Path
from dotenv import load_dotenv
from rich.console import Console
from rich.table import Table
from rich.text import Text

from . import __version__
from .backup import BackupManager, DEFAULT_MAX_BACKUPS
from .session import SubtitleSession
from .timecode import TimestampError, compose_offset
from .logging import setup_logging


def parse_selection( value: str ) -> list:
    """
    Parse a 1-based selection like "1,4,7-9" into 0-based positions.

    Raises:
        argparse.ArgumentTypeError: On anything that is not a number or range
    """
    positions = set();
    for part in value.split( "," ):
        part = part.strip();
        if not part:
            continue;
        try:
            if "-" in part:
                first, last = ( int( bound ) for bound in part.split( "-", 1 ) );
            else:
                first = last = int( part );
        except ValueError:
            raise argparse.ArgumentTypeError( f"Invalid selection: {part!r}" );
        if first < 1 or last < first:
            raise argparse.ArgumentTypeError( f"Invalid selection range: {part!r}" );
        positions.update( range( first - 1, last ) );
    if not positions:
        raise argparse.ArgumentTypeError( "Selection is empty" );
    return sorted( positions );


class ShiftCLI:
    """
    Command line interface for shifting SRT subtitle timing.

    Paths for logs and backups come from the environment (optionally via a
    .env file in the working directory).
    """

    def __init__( self ):
        self.parser = self._create_parser();
        self.args = None;
        self.logger = None;
        self.console = Console();

    def _create_parser( self ):
        parser = argparse.ArgumentParser(
            prog="srtshift",
            description="Shift the timing of all or selected subtitles in an .srt file",
            epilog="Environment variables: SRTSHIFT_LOG_DIR, SRTSHIFT_BACKUP_DIR, SRTSHIFT_MAX_BACKUPS"
        );

        parser.add_argument(
            "--sub", "--subs", "--srt", "--subtitle", "-s",
            required=True,
            type=Path,
            dest="subtitle",
            help="Path to subtitle file (.srt format only)"
        );

        parser.add_argument(
            "--output", "-o",
            type=Path,
            help="Output file (default: <name>_edited.srt next to the input)"
        );

        parser.add_argument(
            "--offset",
            type=int,
            default=0,
            help="Signed shift in milliseconds, e.g. 1500 or -250"
        );

        parser.add_argument( "--hours", type=int, default=0, help="Hours to shift by" );
        parser.add_argument( "--minutes", type=int, default=0, help="Minutes to shift by" );
        parser.add_argument( "--seconds", type=int, default=0, help="Seconds to shift by" );
        parser.add_argument( "--milliseconds", "--ms", type=int, default=0, help="Milliseconds to shift by" );

        parser.add_argument(
            "--backward", "-b",
            action="store_true",
            help="Shift the component-based amount backward (earlier)"
        );

        parser.add_argument(
            "--select",
            type=parse_selection,
            help="Only shift these entries, by 1-based position (e.g. 1,4,7-9); default: all"
        );

        parser.add_argument(
            "--list",
            action="store_true",
            help="List the subtitle entries and exit"
        );

        parser.add_argument(
            "--dry-run",
            action="store_true",
            help="Apply the shift and report, but do not write the output file"
        );

        parser.add_argument(
            "--no-backup",
            action="store_true",
            help="Do not back up an existing output file before overwriting it"
        );

        parser.add_argument(
            "--debug",
            action="store_true",
            help="Enable debug mode with verbose output"
        );

        parser.add_argument( "--version", action="version", version=f"%(prog)s {__version__}" );

        return parser;

    def _load_environment( self ):
        """Load environment variables from .env file and system."""
        env_file = Path( ".env" );
        if env_file.exists():
            load_dotenv( env_file );

        self.log_dir = os.getenv( "SRTSHIFT_LOG_DIR", "logs" );
        self.backup_dir = os.getenv( "SRTSHIFT_BACKUP_DIR", "backup" );
        self.max_backups = os.getenv( "SRTSHIFT_MAX_BACKUPS", str( DEFAULT_MAX_BACKUPS ) );

    def _component_shift_requested( self ):
        return any( ( self.args.hours, self.args.minutes, self.args.seconds, self.args.milliseconds ) );

    def _validate_arguments( self ):
        """Validate parsed arguments and environment setup."""
        errors = [];

        if self.args.subtitle.suffix.lower() != ".srt":
            errors.append( f"Only .srt subtitle files are supported, got: {self.args.subtitle.suffix or self.args.subtitle.name}" );
        elif not self.args.subtitle.exists():
            errors.append( f"Subtitle file not found: {self.args.subtitle}" );

        if self.args.output and self.args.output.suffix.lower() != ".srt":
            errors.append( f"Output file must have an .srt extension, got: {self.args.output}" );

        for name in ( "hours", "minutes", "seconds", "milliseconds" ):
            if getattr( self.args, name ) < 0:
                errors.append( f"--{name} must not be negative (use --backward)" );

        if self.args.offset and self._component_shift_requested():
            errors.append( "Use either --offset or --hours/--minutes/--seconds/--milliseconds, not both" );

        if self.args.backward and self.args.offset:
            errors.append( "--backward applies to component shifts; give --offset a negative value instead" );

        if not self.args.list and not self.args.offset and not self._component_shift_requested():
            errors.append( "Please enter a time value to shift (--offset or --hours/--minutes/--seconds/--milliseconds)" );

        try:
            if int( self.max_backups ) < 1:
                errors.append( "SRTSHIFT_MAX_BACKUPS must be at least 1" );
        except ValueError:
            errors.append( f"SRTSHIFT_MAX_BACKUPS must be an integer, got: {self.max_backups!r}" );

        return errors;

    def parse_args( self, argv=None ):
        """Parse command line arguments and validate configuration."""
        self.args = self.parser.parse_args( argv );

        self._load_environment();

        self.logger = setup_logging( debug=self.args.debug, log_dir=Path( self.log_dir ) );

        errors = self._validate_arguments();
        if errors:
            self.logger.error( "Configuration errors:" );
            for error in errors:
                self.logger.error( f"  - {error}" );
            sys.exit( 1 );

        self.logger.debug( f"srtshift v{__version__} starting..." );
        self.logger.debug( f"Subtitles: {self.args.subtitle}" );
        return self.args;

    def get_delta( self ) -> int:
        """Signed shift in milliseconds from either --offset or the components."""
        if self.args.offset:
            return self.args.offset;
        return compose_offset(
            self.args.hours,
            self.args.minutes,
            self.args.seconds,
            self.args.milliseconds,
            backward=self.args.backward
        );

    def create_session( self ) -> SubtitleSession:
        backups = BackupManager( Path( self.backup_dir ), int( self.max_backups ) );
        return SubtitleSession( backup_manager=backups );

    def report_inverted_entries( self, session: SubtitleSession ):
        """Warn about entries that end before they start; never fatal."""
        try:
            inverted = session.inverted_entries();
        except TimestampError as e:
            self.logger.warning( f"Skipped duration check: {e}" );
            return;

        if inverted:
            listed = ", ".join( str( position + 1 ) for position in inverted[:10] );
            more = " ..." if len( inverted ) > 10 else "";
            self.logger.warning( f"{len( inverted )} entries end before they start: {listed}{more}" );

    def print_entries( self, session: SubtitleSession ):
        """Print the loaded entries as a table on stdout."""
        table = Table( title=Text( str( session.source_file or "" ) ) );
        table.add_column( "#", justify="right" );
        table.add_column( "Seq", justify="right" );
        table.add_column( "Start" );
        table.add_column( "End" );
        table.add_column( "Text" );

        selected = set( session.selection );
        for position, entry in enumerate( session.entries ):
            marker = "*" if position in selected else "";
            table.add_row(
                f"{marker}{position + 1}",
                str( entry.sequence_number ),
                Text( entry.start_time ),
                Text( entry.end_time ),
                Text( entry.text )
            );

        self.console.print( table );


def main( argv=None ):
    """Main entry point for the srtshift CLI."""
    cli = ShiftCLI();
    args = cli.parse_args( argv );
    logger = cli.logger;

    try:
        session = cli.create_session();
        session.load_file( args.subtitle );

        if not session.entries:
            logger.error( f"No subtitle entries found in {args.subtitle}" );
            sys.exit( 1 );

        if args.select:
            session.select( *args.select );

        if args.list:
            cli.print_entries( session );
            return;

        session.shift( cli.get_delta() );

        cli.report_inverted_entries( session );

        output_file = args.output or session.default_output_path();
        if args.dry_run:
            logger.info( f"Dry run: Would save shifted subtitles to {output_file}" );
            return;

        session.save( output_file, backup=not args.no_backup );

    except IndexError as e:
        logger.error( f"Invalid selection: {e}" );
        sys.exit( 1 );
    except ValueError as e:
        logger.error( str( e ) );
        sys.exit( 1 );
    except KeyboardInterrupt:
        logger.warning( "Interrupted by user" );
        sys.exit( 130 );
    except Exception as e:
        logger.error( f"Unexpected error: {e}" );
        if args.debug:
            raise;
        sys.exit( 1 );


if __name__ == "__main__":
    main();
