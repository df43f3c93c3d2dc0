"""
Service Layer

Service classes for filesystem, git, hook and configuration access.
The core engine stays pure; everything with side effects lives here.
"""

from mixbump.services.config_service import ConfigService, MixbumpConfig
from mixbump.services.file_service import FileService
from mixbump.services.git_service import GitService, RevisionStatus, RevisionVersion
from mixbump.services.hook_service import HookOptions, HookService

__all__ = [
    "ConfigService",
    "FileService",
    "GitService",
    "HookOptions",
    "HookService",
    "MixbumpConfig",
    "RevisionStatus",
    "RevisionVersion",
]
