"""
Configuration helpers for the catalog search API.
Supports environment variables for easy deployment configuration.
"""

import os
from typing import Optional, Dict, Any


DEFAULT_HOME = os.path.join("~", ".catalog-search")


class Config:
    """
    Configuration helper that reads from environment variables.
    
    Environment variables:
        CATALOG_SEARCH_DB_PATH: SQLite database path
        CATALOG_SEARCH_LOG_DIR: Directory for log files (read by log_manager)
        CATALOG_SEARCH_DEBUG: Enable debug logging (1/true/yes)
    """
    
    @staticmethod
    def default_db_path() -> str:
        """Default location of the catalog database."""
        return os.path.expanduser(os.path.join(DEFAULT_HOME, "data", "catalog.db"))
    
    @staticmethod
    def from_env() -> Dict[str, Any]:
        """
        Create configuration from environment variables.
        
        Returns:
            Dict with configuration parameters for CatalogSearchAPI
            
        Example:
            from catalog_search import CatalogSearchAPI
            from catalog_search.config import Config
            
            config = Config.from_env()
            api = CatalogSearchAPI(**config)
        """
        return {
            "db_path": os.getenv("CATALOG_SEARCH_DB_PATH", Config.default_db_path())
        }
    
    @staticmethod
    def for_local(db_path: Optional[str] = None) -> Dict[str, Any]:
        """
        Configuration for local file storage.
        
        Args:
            db_path: Path to the SQLite file (default: ~/.catalog-search/data/catalog.db)
            
        Returns:
            Configuration dict for local setup
        """
        return {
            "db_path": os.path.expanduser(db_path) if db_path else Config.default_db_path()
        }
