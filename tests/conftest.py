"""
Shared test setup: keep log files out of the working tree.
"""
import os
import sys
import tempfile
from pathlib import Path

# Add src directory to path for testing
sys.path.insert( 0, str( Path( __file__ ).parent.parent / "src" ) );

os.environ.setdefault( "SRTSHIFT_LOG_DIR", tempfile.mkdtemp( prefix="srtshift-logs-" ) );
