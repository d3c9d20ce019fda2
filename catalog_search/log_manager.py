"""
File-only logging for the catalog search engine.

Loggers never write to the console. Each one gets its own rotating file
under ~/.catalog-search/logs/ (or CATALOG_SEARCH_LOG_DIR), grouped by
component, and errors are also collected in a shared error.log.
CATALOG_SEARCH_DEBUG switches loggers to DEBUG with source locations.
"""

import os
import logging
import logging.handlers
import json
from pathlib import Path
from typing import Optional, Dict, Any

_MAX_BYTES = 10 * 1024 * 1024
_BACKUPS = 5
_DATEFMT = '%Y-%m-%d %H:%M:%S'


class LoggingManager:
    """Singleton that creates and caches the package's file loggers."""
    
    _instance = None
    _initialized = False
    
    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance
    
    def __init__(self):
        if self._initialized:
            return
        log_dir = os.environ.get('CATALOG_SEARCH_LOG_DIR')
        self.log_dir = Path(log_dir).expanduser() if log_dir else Path.home() / '.catalog-search' / 'logs'
        self.debug_mode = os.environ.get('CATALOG_SEARCH_DEBUG', '').lower() in ('1', 'true', 'yes')
        self.loggers: Dict[str, logging.Logger] = {}
        self._error_handler = None
        self._initialized = True
    
    def get_logger(self, name: str, component: Optional[str] = None) -> logging.Logger:
        """
        Get or create a logger.
        
        Args:
            name: Logger name (e.g., 'FilterComposer')
            component: Sub-directory for the log file ('search', 'store'), or None
            
        Returns:
            Configured logger instance
        """
        logger_key = f"{component}.{name}" if component else name
        if logger_key in self.loggers:
            return self.loggers[logger_key]
        
        logger = logging.getLogger(f"catalog-search.{logger_key}")
        logger.setLevel(logging.DEBUG if self.debug_mode else logging.INFO)
        logger.handlers = []
        logger.propagate = False
        
        directory = self.log_dir / component if component else self.log_dir
        logger.addHandler(self._file_handler(directory / f"{name.lower()}.log", self._formatter()))
        logger.addHandler(self._shared_error_handler())
        
        self.loggers[logger_key] = logger
        return logger
    
    def log_with_context(self, logger: logging.Logger, level: int, message: str,
                         context: Optional[Dict[str, Any]] = None):
        """Log a message with a JSON-rendered context suffix."""
        if context:
            message = f"{message} | Context: {json.dumps(context, default=str)}"
        logger.log(level, message)
    
    def _formatter(self) -> logging.Formatter:
        if self.debug_mode:
            return logging.Formatter(
                '%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s',
                datefmt=_DATEFMT
            )
        return logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s', datefmt=_DATEFMT)
    
    def _shared_error_handler(self) -> logging.Handler:
        # One handler for every logger, so error.log has a single writer
        if self._error_handler is None:
            self._error_handler = self._file_handler(
                self.log_dir / 'error.log',
                logging.Formatter(
                    '%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d]\n%(message)s\n',
                    datefmt=_DATEFMT
                ),
                level=logging.ERROR
            )
        return self._error_handler
    
    @staticmethod
    def _file_handler(path: Path, formatter: logging.Formatter,
                      level: int = logging.NOTSET) -> logging.Handler:
        path.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.handlers.RotatingFileHandler(
            path, maxBytes=_MAX_BYTES, backupCount=_BACKUPS, encoding='utf-8'
        )
        handler.setFormatter(formatter)
        handler.setLevel(level)
        return handler


_logging_manager = None


def get_logging_manager() -> LoggingManager:
    """Get the singleton LoggingManager instance"""
    global _logging_manager
    if _logging_manager is None:
        _logging_manager = LoggingManager()
    return _logging_manager


def get_logger(name: str, component: Optional[str] = None) -> logging.Logger:
    """Convenience function to get a logger."""
    return get_logging_manager().get_logger(name, component)


def log_with_context(logger: logging.Logger, level: int, message: str,
                     context: Optional[Dict[str, Any]] = None):
    """Module-level shortcut for LoggingManager.log_with_context."""
    get_logging_manager().log_with_context(logger, level, message, context)
