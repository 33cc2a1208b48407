"""
Timestamped backups of subtitle files that are about to be overwritten.
"""
import os
import shutil
from datetime import datetime, timedelta
from pathlib import Path
from typing import List, Tuple

from .logging import get_logger


DEFAULT_MAX_BACKUPS = 10;
STAMP_FORMAT = "%Y-%m-%dT%H-%M-%S.%f";


class BackupManager:
    """
    Copies a file into a backup directory before it is replaced.

    Rules:
    - Copies are named <stem>.<ISO-8601 timestamp><suffix>
    - Only the newest max_backups copies per file are retained
    """

    def __init__( self, backup_dir: Path = None, max_backups: int = None ):
        self.logger = get_logger();

        if backup_dir is None:
            backup_dir = os.getenv( "SRTSHIFT_BACKUP_DIR", "backup" );
        if max_backups is None:
            max_backups = int( os.getenv( "SRTSHIFT_MAX_BACKUPS", DEFAULT_MAX_BACKUPS ) );
        if max_backups < 1:
            raise ValueError( f"max_backups must be at least 1, got {max_backups}" );

        self.backup_dir = Path( backup_dir );
        self.max_backups = max_backups;

    def get_backup_filename( self, original_file: Path, timestamp: datetime = None ) -> str:
        timestamp = timestamp or datetime.now();
        return f"{original_file.stem}.{timestamp.strftime( STAMP_FORMAT )}{original_file.suffix}";

    def get_existing_backups( self, original_file: Path ) -> List[Tuple[Path, datetime]]:
        """
        List backups of a file, oldest first.

        Returns:
            List of (backup_path, timestamp) tuples
        """
        if not self.backup_dir.is_dir():
            return [];

        prefix = f"{original_file.stem}.";
        backups = [];
        for backup_path in self.backup_dir.glob( f"{original_file.stem}.*{original_file.suffix}" ):
            stamp = backup_path.name[len( prefix ):len( backup_path.name ) - len( original_file.suffix )];
            try:
                timestamp = datetime.strptime( stamp, STAMP_FORMAT );
            except ValueError:
                self.logger.debug( f"Ignoring unrelated file in backup dir: {backup_path.name}" );
                continue;
            backups.append( ( backup_path, timestamp ) );

        backups.sort( key=lambda x: x[1] );
        return backups;

    def apply_retention_policy( self, original_file: Path ) -> int:
        """
        Delete the oldest backups of a file beyond max_backups.

        Returns:
            Number of backups removed
        """
        backups = self.get_existing_backups( original_file );
        if len( backups ) <= self.max_backups:
            return 0;

        removed = 0;
        for backup_path, _ in backups[:-self.max_backups]:
            try:
                backup_path.unlink();
                removed += 1;
                self.logger.debug( f"Removed old backup: {backup_path.name}" );
            except OSError as e:
                self.logger.warning( f"Could not remove backup {backup_path}: {e}" );

        if removed:
            self.logger.info( f"Removed {removed} old backup(s) of {original_file.name}" );
        return removed;

    def create_backup( self, file_path: Path ) -> Path:
        """
        Copy a file into the backup directory and prune old copies.

        Returns:
            Path to the new backup

        Raises:
            FileNotFoundError: If file_path does not exist
        """
        file_path = Path( file_path );
        if not file_path.is_file():
            raise FileNotFoundError( f"File to backup not found: {file_path}" );

        self.backup_dir.mkdir( parents=True, exist_ok=True );
        # Two backups in the same clock tick get consecutive stamps
        timestamp = datetime.now();
        backup_path = self.backup_dir / self.get_backup_filename( file_path, timestamp );
        while backup_path.exists():
            timestamp += timedelta( microseconds=1 );
            backup_path = self.backup_dir / self.get_backup_filename( file_path, timestamp );

        shutil.copy2( file_path, backup_path );
        self.logger.info( f"Created backup: {backup_path}" );

        self.apply_retention_policy( file_path );
        return backup_path;
