import os
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import List, Optional

from . import config
from .exceptions import ConfigurationError, DescriptorParseError


@dataclass(frozen=True)
class LibraryRoots:
    """
    The two mirrored trees: media originals and sidecar descriptors.
    A sidecar at `sidecar/a/b/foo.yml` describes media in `originals/a/b/`.
    """
    originals: Path
    sidecar: Path

    @classmethod
    def from_env(cls, environ=None, originals: Optional[Path] = None, sidecar: Optional[Path] = None) -> "LibraryRoots":
        """
        Each root comes from its argument when given, else from its
        environment variable.
        """
        environ = os.environ if environ is None else environ
        if originals is None and environ.get(config.ORIGINALS_ENV):
            originals = Path(environ[config.ORIGINALS_ENV])
        if sidecar is None and environ.get(config.SIDECAR_ENV):
            sidecar = Path(environ[config.SIDECAR_ENV])

        missing = [
            name for name, value in ((config.ORIGINALS_ENV, originals), (config.SIDECAR_ENV, sidecar))
            if value is None
        ]
        if missing:
            raise ConfigurationError(f"Missing environment variables: {', '.join(missing)}")
        return cls(Path(originals), Path(sidecar))


@dataclass
class Descriptor:
    """
    Parsed sidecar descriptor. Only the fields the organizer consumes are kept.
    """
    path: Path
    taken_at: Optional[datetime] = None
    private: bool = False
    deleted_at: Optional[datetime] = None

    @property
    def archived(self) -> bool:
        return self.deleted_at is not None

    def require_taken_at(self) -> datetime:
        if self.taken_at is None:
            raise DescriptorParseError(f"{self.path} has no {config.TAKEN_AT_FIELD}")
        return self.taken_at


@dataclass
class MediaStack:
    """
    A descriptor path grouped with its media files.
    A list because it could be a stack (burst, or the same shot in several formats).
    """
    descriptor_path: Path
    media_paths: List[Path] = field(default_factory=list)


@dataclass(frozen=True)
class MovePlan:
    current_path: Path
    target_path: Path


@dataclass(frozen=True)
class RenamePlan:
    current_path: Path
    target_name: str    # new stem, extension excluded

    @property
    def target_path(self) -> Path:
        return self.current_path.with_name(self.target_name + self.current_path.suffix)

    def as_move(self) -> MovePlan:
        return MovePlan(self.current_path, self.target_path)


class PromptState(Enum):
    PROMPT = "prompt"
    AUTO_CONFIRM = "auto_confirm"


@dataclass
class BatchSummary:
    applied: int = 0
    skipped: int = 0
