import logging
import os
from pathlib import Path
from typing import Callable, Iterable, List, Optional

from ..exceptions import ConfigurationError
from ..models import Descriptor, LibraryRoots, MediaStack
from ..scanning.filesystem import first_stem, recursive_search, stem_matches
from .descriptor import read_descriptor


class SidecarLinker:
    """
    Handles relationship discovery between sidecar descriptors and media files.
    The sidecar tree mirrors the originals tree, so a descriptor's media lives
    in the same relative directory under the originals root.
    """
    def __init__(self, roots: LibraryRoots):
        self.roots = roots

    def media_dir_for(self, descriptor_path: Path) -> Path:
        descriptor_path = Path(descriptor_path)
        try:
            relative = descriptor_path.relative_to(self.roots.sidecar)
        except ValueError:
            raise ConfigurationError(
                f"Path is {descriptor_path} but should begin with {self.roots.sidecar}"
            ) from None
        return (self.roots.originals / relative).parent

    def locate(self, descriptor_path: Path) -> List[Path]:
        """
        Returns every media file in the mirrored directory whose stem starts
        with the descriptor's stem. Non-recursive; sorted by name.

        Could match several files for a burst such as
        '20210717_163906_1BF7A639.00002.jpg', which shares the single
        descriptor '20210717_163906_1BF7A639.yml'.
        """
        descriptor_path = Path(descriptor_path)
        media_dir = self.media_dir_for(descriptor_path)

        if not media_dir.is_dir():
            # Descriptor is an orphan candidate
            return []

        with os.scandir(media_dir) as it:
            entries = sorted(it, key=lambda e: e.name)

        return [
            Path(e.path) for e in entries
            if not e.is_dir() and stem_matches(e.name, descriptor_path.name)
        ]

    def locate_all(self, descriptor_paths: Iterable[Path]) -> List[MediaStack]:
        return [
            MediaStack(Path(p), self.locate(p))
            for p in descriptor_paths
        ]

    def find_orphans(self, descriptor_paths: Iterable[Path]) -> List[Path]:
        """
        Descriptors with no media file anywhere under the originals root.
        Joined on the stem up to the first dot, so burst frames count as matches.
        """
        media_files = recursive_search(self.roots.originals)
        logging.info(f"Found {len(media_files)} files in {self.roots.originals}")

        # Index by first-dot stem for O(1) lookup
        media_stems = {first_stem(p.name) for p in media_files}

        orphans = []
        for descriptor_path in descriptor_paths:
            descriptor_path = Path(descriptor_path)
            if first_stem(descriptor_path.name) not in media_stems:
                orphans.append(descriptor_path)
                logging.info(f"Orphan: {descriptor_path}")

        return orphans

    def collect(self,
                descriptor_paths: Iterable[Path],
                predicate: Optional[Callable[[Descriptor], bool]] = None) -> List[MediaStack]:
        """
        Locates the stacks of every descriptor the predicate accepts
        (all of them when no predicate is given).
        """
        descriptor_paths = [Path(p) for p in descriptor_paths]
        if predicate is not None:
            descriptor_paths = [p for p in descriptor_paths if predicate(read_descriptor(p))]

        logging.info(f"Found {len(descriptor_paths)} descriptor files")
        stacks = [s for s in self.locate_all(descriptor_paths) if s.media_paths]
        logging.info(f"Found {sum(len(s.media_paths) for s in stacks)} media files in {len(stacks)} stacks")

        # Bursts map many files to one descriptor, so only fewer stacks is suspicious
        if len(stacks) < len(descriptor_paths):
            logging.warning(f"{len(descriptor_paths) - len(stacks)} descriptors have no media files")

        return stacks
