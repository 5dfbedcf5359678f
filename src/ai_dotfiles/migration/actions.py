"""Migration actions and result types."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path


class MigrationAction(enum.Enum):
    """What to do with configuration left over from a previous run."""

    REPLACE = "replace"
    MIGRATE_SUPERSEDE = "migrate-supersede"
    MIGRATE_PRESERVE = "migrate-preserve"
    SKIP = "skip"

    @property
    def is_migration(self) -> bool:
        return self in (MigrationAction.MIGRATE_SUPERSEDE, MigrationAction.MIGRATE_PRESERVE)

    @classmethod
    def parse(cls, value: str | MigrationAction) -> MigrationAction:
        """Accept an enum member or its string value.

        Raises ``ValueError`` for anything else.
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            valid = ", ".join(a.value for a in cls)
            raise ValueError(f"Unknown migration action {value!r} (expected one of: {valid})") from None


ACTION_CHOICES: tuple[str, ...] = tuple(a.value for a in MigrationAction)


@dataclass
class MigrationResult:
    """Outcome of a directory migration.

    ``files_migrated == 0`` means there was nothing to migrate and the
    filesystem was not touched.
    """

    files_migrated: int
    action: MigrationAction
    files: list[str] = field(default_factory=list)


@dataclass
class FileMigrationResult:
    """Outcome of a single-file migration."""

    migrated: bool
    action: MigrationAction
    destination: Path
