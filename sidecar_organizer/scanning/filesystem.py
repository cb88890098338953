import os
import logging
from pathlib import Path
from typing import Iterable, Iterator, List, Optional, Union

PathLike = Union[str, Path]


def strip_extension(name: str) -> str:
    """
    Removes exactly the last extension segment.
    'file.png.zip' -> 'file.png', 'file' -> 'file'.
    """
    return os.path.splitext(name)[0]


def first_stem(name: str) -> str:
    """
    Basename up to the first dot. Orphan detection joins on this so that
    '20210717_163906_1BF7A639.00002.jpg' still pairs with '20210717_163906_1BF7A639.yml'.
    """
    return os.path.basename(name).split('.')[0]


def stem_matches(media_name: str, descriptor_name: str) -> bool:
    """
    Stack membership: the media stem must start with the descriptor stem.
    Prefix rather than equality so burst frames ('foo.00002.jpg') join 'foo.yml'.
    """
    return strip_extension(media_name).startswith(strip_extension(descriptor_name))


def recursive_search(folder: PathLike, extensions: Optional[Iterable[str]] = None) -> List[Path]:
    """
    Finds every file below folder, optionally keeping only the given
    extensions (with leading dot, e.g. '.yml').
    """
    wanted = set(extensions) if extensions is not None else None
    return [
        p for p in _iter_files(Path(folder))
        if wanted is None or p.suffix in wanted
    ]


def _iter_files(root: Path) -> Iterator[Path]:
    """Depth-first walker using os.scandir for speed."""
    stack = [root]
    while stack:
        current = stack.pop()

        try:
            with os.scandir(current) as it:
                entries = list(it)
        except (OSError, PermissionError) as e:
            logging.warning(f"Cannot read {current}: {e}")
            continue

        # Sort for stable traversal order
        entries.sort(key=lambda e: e.name)

        dirs = []
        for e in entries:
            if e.is_dir():
                dirs.append(Path(e.path))
            elif e.is_file():
                yield Path(e.path)

        # Push dirs to stack (reversed so we process A before Z)
        for d in reversed(dirs):
            stack.append(d)
