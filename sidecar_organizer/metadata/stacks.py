"""
Primary-file selection for media stacks.

Mirrors the media manager's own heuristic: the stack is scanned once, in
order, and every rule that applies to a candidate replaces the running
primary. The last applicable rule wins, so with several non-jpeg formats the
result depends on the order of the stack. That order dependence is kept on
purpose.
"""
from functools import reduce
from pathlib import Path
from typing import Callable, List, Optional, Sequence, Tuple

from .. import config

Rule = Callable[[Optional[Path], Path], bool]


def file_type(path: Path) -> str:
    return config.EXT_TO_TYPE.get(path.suffix.lower(), 'other')


def _first_jpeg(current: Optional[Path], candidate: Path) -> bool:
    return current is None and file_type(candidate) == 'jpeg'


def _always(kind: str) -> Rule:
    return lambda current, candidate: file_type(candidate) == kind


def _shorter_jpeg(current: Optional[Path], candidate: Path) -> bool:
    return (
        current is not None
        and file_type(candidate) == 'jpeg'
        and file_type(current) == 'jpeg'
        and len(candidate.name) < len(current.name)
    )


# Evaluated top to bottom; the first rule that applies decides.
PRIMARY_RULES: List[Tuple[str, Rule]] = [
    ('jpeg-first', _first_jpeg),
    ('raw', _always('raw')),
    ('heif', _always('heif')),
    ('image-other', _always('image')),
    ('video', _always('video')),
    ('jpeg-shorter-name', _shorter_jpeg),
]


def apply_rules(current: Optional[Path], candidate: Path) -> Optional[Path]:
    """One step of the scan: returns the primary after looking at candidate."""
    for _name, rule in PRIMARY_RULES:
        if rule(current, candidate):
            return candidate
    return current


def select_primary(media_paths: Sequence[Path]) -> Optional[Path]:
    """
    Returns the stack's representative file, or None for an empty stack.
    A stack where no rule applies (e.g. only .mov files) falls back to its
    first member.
    """
    if not media_paths:
        return None
    primary = reduce(apply_rules, media_paths, None)
    return primary if primary is not None else media_paths[0]
