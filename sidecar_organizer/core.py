import logging
from pathlib import Path
from typing import Callable, List, Optional

from . import config
from .metadata.linking import SidecarLinker
from .models import BatchSummary, Descriptor, LibraryRoots
from .organization.mover import FileMover, Prompter
from .organization.naming import RenamePlanner
from .organization.rules import DestinationPlanner
from .scanning.filesystem import recursive_search


class SidecarOrganizerApp:
    """
    Reconciles the originals tree with the sidecar tree.

    Every operation is plan-then-apply: plans are computed up front, then
    handed to FileMover in order. Reorganizing and renaming are separate
    batches, each with its own "do the rest automatically" state.
    """
    def __init__(self, roots: LibraryRoots, prompter: Optional[Prompter] = None):
        self.roots = roots
        self.linker = SidecarLinker(roots)
        self.planner = DestinationPlanner(roots)
        self.renamer = RenamePlanner(self.linker)
        self.mover = FileMover(prompter)

    def descriptor_paths(self) -> List[Path]:
        paths = recursive_search(self.roots.sidecar, config.DESCRIPTOR_EXTS)
        logging.info(f"Found {len(paths)} descriptor files in {self.roots.sidecar}")
        return paths

    def find_orphans(self) -> List[Path]:
        return self.linker.find_orphans(self.descriptor_paths())

    def relocate_orphans(self, target_dir: Path, prompt: bool = True, dry_run: bool = False) -> BatchSummary:
        """Moves orphaned descriptors out of the sidecar tree, keeping their relative folders."""
        plans = self.planner.plan_to_folder(self.find_orphans(), target_dir, old_dir=self.roots.sidecar)
        return self.mover.run_batch("Move", plans, prompt=prompt, dry_run=dry_run)

    def organize(self, prompt: bool = True, dry_run: bool = False) -> BatchSummary:
        """Moves media into originals/YYYY/MM based on each descriptor's capture time."""
        stacks = self.linker.locate_all(self.descriptor_paths())
        plans = self.planner.plan_moves(stacks)
        return self.mover.run_batch("Move", plans, prompt=prompt, dry_run=dry_run)

    def rename(self, prompt: bool = True, dry_run: bool = False) -> BatchSummary:
        """Renames media to <capture time>_<CRC32C of primary>.<ext>."""
        plans = self.renamer.plan_renames(self.descriptor_paths())
        return self.mover.run_batch("Rename", [p.as_move() for p in plans], prompt=prompt, dry_run=dry_run)

    def collect_to_folder(self,
                          folder_name: str,
                          predicate: Callable[[Descriptor], bool],
                          prompt: bool = True,
                          dry_run: bool = False) -> BatchSummary:
        """Gathers the media of every matching descriptor into originals/<folder_name>."""
        stacks = self.linker.collect(self.descriptor_paths(), predicate)
        media_paths = [p for stack in stacks for p in stack.media_paths]
        plans = self.planner.plan_to_folder(media_paths, self.roots.originals / folder_name)
        return self.mover.run_batch("Move", plans, prompt=prompt, dry_run=dry_run)
