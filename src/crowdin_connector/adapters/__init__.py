from .crowdin_api import CrowdinApiAdapter
from .sqlite_config import SQLiteConfigStorage

__all__ = ["CrowdinApiAdapter", "SQLiteConfigStorage"]
