"""
Editing session: the loaded subtitle entries plus the user's selection.
"""
from pathlib import Path
from typing import List, Optional, Tuple

from .backup import BackupManager
from .offset import find_inverted_entries, shift
from .subtitles import SubtitleEntry, load_file, parse, serialize
from .timecode import compose_offset
from .logging import get_logger


DEFAULT_OUTPUT_NAME = "edited.srt";


class SubtitleSession:
    """
    Owns one loaded subtitle document for the duration of an edit.

    The selection is a set of 0-based entry positions kept beside the
    entries, not on them; it is UI state and is never written out. Loading
    a new document replaces the entries and clears the selection.
    """

    def __init__( self, backup_manager: BackupManager = None ):
        self.logger = get_logger();
        self.backup_manager = backup_manager;
        self.entries: List[SubtitleEntry] = [];
        self.source_file: Optional[Path] = None;
        self._selection = set();

    def load_text( self, text: str, name: str = None ) -> List[SubtitleEntry]:
        """
        Load SRT text that did not come from a file on disk.

        Args:
            text: Raw SRT content
            name: Original file name (e.g. from an upload), used for the output name
        """
        self.entries = parse( text );
        self.source_file = Path( name ) if name else None;
        self._selection.clear();
        return self.entries;

    def load_file( self, subtitle_file: Path ) -> List[SubtitleEntry]:
        """
        Load an .srt file, replacing whatever was loaded before.

        Raises:
            SubtitleFileError: If the file is missing or not an .srt file
        """
        entries = load_file( subtitle_file );
        self.entries = entries;
        self.source_file = Path( subtitle_file );
        self._selection.clear();
        return self.entries;

    @property
    def selection( self ) -> Tuple[int, ...]:
        return tuple( sorted( self._selection ) );

    def _check_position( self, position: int ):
        if not 0 <= position < len( self.entries ):
            raise IndexError( f"No subtitle entry at position {position}" );

    def select( self, *positions: int ):
        for position in positions:
            self._check_position( position );
        self._selection.update( positions );

    def deselect( self, *positions: int ):
        self._selection.difference_update( positions );

    def toggle( self, position: int ) -> bool:
        """Flip one entry's selection; returns whether it is now selected."""
        self._check_position( position );
        if position in self._selection:
            self._selection.discard( position );
            return False;
        self._selection.add( position );
        return True;

    def clear_selection( self ):
        self._selection.clear();

    def shift( self, delta_ms: int ) -> List[SubtitleEntry]:
        """Shift the selected entries, or all of them when none are selected."""
        shifted = shift( self.entries, delta_ms, self._selection );
        scope = "selected" if self._selection else "all";
        self.logger.info( f"Shifted {len( shifted )} ({scope}) subtitle entries by {delta_ms:+d}ms" );
        return shifted;

    def shift_by( self, hours: int = 0, minutes: int = 0, seconds: int = 0, milliseconds: int = 0, backward: bool = False ) -> List[SubtitleEntry]:
        return self.shift( compose_offset( hours, minutes, seconds, milliseconds, backward ) );

    def inverted_entries( self ) -> List[int]:
        return find_inverted_entries( self.entries );

    def to_text( self ) -> str:
        return serialize( self.entries );

    def default_output_path( self ) -> Path:
        """<stem>_edited.srt beside the source (or named) file, else edited.srt."""
        if self.source_file is None:
            return Path( DEFAULT_OUTPUT_NAME );
        return self.source_file.with_name( f"{self.source_file.stem}_edited{self.source_file.suffix}" );

    def save( self, output_file: Path = None, backup: bool = True ) -> Path:
        """
        Write the current entries as UTF-8 SRT text.

        Args:
            output_file: Destination; defaults to default_output_path()
            backup: Copy an existing destination aside before overwriting it

        Returns:
            Path that was written
        """
        output_file = Path( output_file ) if output_file else self.default_output_path();

        if backup and output_file.exists():
            if self.backup_manager is None:
                self.backup_manager = BackupManager();
            self.backup_manager.create_backup( output_file );

        output_file.parent.mkdir( parents=True, exist_ok=True );
        output_file.write_text( self.to_text(), encoding="utf-8", newline="" );
        self.logger.info( f"Saved {len( self.entries )} subtitle entries to {output_file}" );
        return output_file;
