import logging
from pathlib import Path
from typing import Iterable, List, Optional

from tqdm import tqdm

from .. import config
from ..exceptions import ConfigurationError
from ..metadata.descriptor import read_descriptor
from ..models import LibraryRoots, MediaStack, MovePlan


class DestinationPlanner:
    def __init__(self, roots: LibraryRoots):
        self.roots = roots

    def plan_moves(self, stacks: Iterable[MediaStack]) -> List[MovePlan]:
        """
        Calculates where each stack member belongs: originals/YYYY/MM/<same name>.

        Private and archived items are left where they are. Files already in
        place produce no plan, so repeated runs converge.
        """
        stacks = list(stacks)
        to_move = []

        for stack in tqdm(stacks, desc="Planning moves"):
            descriptor = read_descriptor(stack.descriptor_path)

            if descriptor.private or descriptor.archived:
                logging.debug(f"Skipping private/archived {stack.descriptor_path}")
                continue

            taken_at = descriptor.require_taken_at()
            folder = config.folder_for(self.roots.originals, taken_at.year, taken_at.month)

            for media_path in stack.media_paths:
                target = folder / media_path.name
                if media_path != target:
                    to_move.append(MovePlan(media_path, target))

        logging.info(f"Found {len(to_move)} files that need moving")
        return to_move

    def plan_to_folder(self,
                       paths: Iterable[Path],
                       target_dir: Path,
                       old_dir: Optional[Path] = None) -> List[MovePlan]:
        """
        Plans moving arbitrary files into target_dir.

        With old_dir, the structure below old_dir is kept: for old_dir
        'storage/sidecar', 'storage/sidecar/2020/foo.yml' goes to
        'target_dir/2020/foo.yml'. Without it every file lands directly in
        target_dir.
        """
        to_move = []
        for path in paths:
            path = Path(path)
            if old_dir is not None:
                try:
                    target = target_dir / path.relative_to(old_dir)
                except ValueError:
                    raise ConfigurationError(f"{path} is not below {old_dir}") from None
            else:
                target = target_dir / path.name

            # No need to move as the file is already there
            if path != target:
                to_move.append(MovePlan(path, target))

        logging.info(f"Found {len(to_move)} files that need moving")
        return to_move
