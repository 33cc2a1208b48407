"""
Logging for srtshift.

Library code only ever asks for the "srtshift" logger, which carries a
NullHandler and writes nothing. Output is switched on by the application
(the CLI) through setup_logging(): a Rich handler on stderr plus a
rotating file under the log directory.
"""
import os
import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from rich.console import Console
from rich.logging import RichHandler


LOGGER_NAME = "srtshift";
LOG_FILE_BYTES = 5 * 1024 * 1024;
LOG_FILE_BACKUPS = 5;
FILE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s";

logging.getLogger( LOGGER_NAME ).addHandler( logging.NullHandler() );


def get_logger() -> logging.Logger:
    """Logger for library modules; silent until setup_logging() runs."""
    return logging.getLogger( LOGGER_NAME );


def _drop_configured_handlers( logger: logging.Logger ):
    for handler in list( logger.handlers ):
        if isinstance( handler, logging.NullHandler ):
            continue;
        logger.removeHandler( handler );
        handler.close();


def setup_logging( debug: bool = False, log_dir: Path = None ) -> logging.Logger:
    """
    Attach console and file output to the srtshift logger.

    Calling it again replaces the handlers from the previous call, so the
    CLI can reconfigure after reading --debug.

    Args:
        debug: Show DEBUG records on the console (the file always gets them)
        log_dir: Directory for srtshift.log; defaults to $SRTSHIFT_LOG_DIR or ./logs

    Returns:
        The configured logger
    """
    logger = get_logger();
    _drop_configured_handlers( logger );
    logger.setLevel( logging.DEBUG );
    logger.propagate = False;

    console_handler = RichHandler(
        console=Console( stderr=True ),
        rich_tracebacks=True,
        show_time=False,
        show_path=debug
    );
    console_handler.setLevel( logging.DEBUG if debug else logging.INFO );
    console_handler.setFormatter( logging.Formatter( "%(message)s" ) );
    logger.addHandler( console_handler );

    log_dir = Path( log_dir if log_dir is not None else os.getenv( "SRTSHIFT_LOG_DIR", "logs" ) );
    log_dir.mkdir( parents=True, exist_ok=True );

    file_handler = RotatingFileHandler(
        log_dir / f"{LOGGER_NAME}.log",
        maxBytes=LOG_FILE_BYTES,
        backupCount=LOG_FILE_BACKUPS,
        encoding="utf-8"
    );
    file_handler.setLevel( logging.DEBUG );
    file_handler.setFormatter( logging.Formatter( FILE_FORMAT ) );
    logger.addHandler( file_handler );

    return logger;
