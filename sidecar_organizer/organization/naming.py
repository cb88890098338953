import logging
from datetime import datetime
from pathlib import Path
from typing import Iterable, List, Optional

from tqdm import tqdm

from .. import config
from ..metadata.descriptor import read_descriptor
from ..metadata.linking import SidecarLinker
from ..metadata.stacks import select_primary
from ..models import RenamePlan
from ..scanning.filesystem import strip_extension
from ..scanning.hasher import FileHasher


def canonical_name(taken_at: datetime, checksum: str) -> str:
    """e.g. 20030711_140833_0F7C9F04"""
    return taken_at.strftime(config.NAME_DATE_FORMAT) + checksum


class RenamePlanner:
    """
    Renames media the way the media manager names imported files:
    capture time plus the CRC32C of the stack's primary file.
    Useful for media that was indexed rather than imported, or whose
    capture date was edited after import.
    """
    def __init__(self, linker: SidecarLinker, hasher: Optional[FileHasher] = None):
        self.linker = linker
        self.hasher = hasher or FileHasher()

    def plan_renames(self, descriptor_paths: Iterable[Path]) -> List[RenamePlan]:
        descriptor_paths = [Path(p) for p in descriptor_paths]
        plans = []
        planned = set()

        for descriptor_path in tqdm(descriptor_paths, desc="Hashing"):
            for plan in self.plan_stack(descriptor_path):
                # A file may only be renamed once per batch
                if plan.current_path in planned:
                    logging.warning(f"{plan.current_path} matches more than one descriptor, not renaming again")
                    continue
                planned.add(plan.current_path)
                plans.append(plan)

        logging.info(f"Found {len(plans)} files that need renaming")
        return plans

    def plan_stack(self, descriptor_path: Path) -> List[RenamePlan]:
        descriptor_stem = strip_extension(descriptor_path.name)

        # Only the descriptor's own files and its burst frames ('foo.00002.jpg').
        # Prefix neighbours such as 'IMG_10.jpg' for 'IMG_1.yml' belong to
        # another descriptor.
        media_paths = [
            p for p in self.linker.locate(descriptor_path)
            if _burst_suffix(strip_extension(p.name), descriptor_stem) is not None
        ]
        if not media_paths:
            logging.warning(f"No media found for {descriptor_path}, not renaming")
            return []

        primary = select_primary(media_paths)
        descriptor = read_descriptor(descriptor_path)
        target_name = canonical_name(
            descriptor.require_taken_at(),
            self.hasher.compute_checksum(primary),
        )

        # Every member gets the primary's name; burst frames keep their frame
        # segment ('foo.00002.jpg' -> '<name>.00002.jpg').
        # Known limitation: look-alike shots stacked under one descriptor are
        # renamed too, though their own content hashes differ.
        plans = []
        for media_path in media_paths:
            current_stem = strip_extension(media_path.name)
            member_name = target_name + _burst_suffix(current_stem, descriptor_stem)
            if current_stem != member_name:
                plans.append(RenamePlan(media_path, member_name))

        return plans


def _burst_suffix(media_stem: str, descriptor_stem: str) -> Optional[str]:
    """
    '' for an exact stem match, '.00002' for a burst frame,
    None when media_stem only shares a prefix with descriptor_stem.
    """
    rest = media_stem[len(descriptor_stem):]
    if rest == '' or rest.startswith('.'):
        return rest
    return None
