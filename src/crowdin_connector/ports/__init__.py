from .config_port import ConfigPort
from .crowdin_port import CrowdinPort
from .storage_port import JobStoragePort

__all__ = ["ConfigPort", "CrowdinPort", "JobStoragePort"]
