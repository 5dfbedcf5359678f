"""Migration domain: relocating existing provider configuration."""

from ai_dotfiles.migration.actions import (
    ACTION_CHOICES,
    FileMigrationResult,
    MigrationAction,
    MigrationResult,
)
from ai_dotfiles.migration.migrator import (
    local_dir_for,
    local_file_for,
    migrate_directory_config,
    migrate_single_file_config,
    remove_existing_config,
    remove_single_file_config,
)

__all__ = [
    "ACTION_CHOICES",
    "FileMigrationResult",
    "MigrationAction",
    "MigrationResult",
    "local_dir_for",
    "local_file_for",
    "migrate_directory_config",
    "migrate_single_file_config",
    "remove_existing_config",
    "remove_single_file_config",
]
