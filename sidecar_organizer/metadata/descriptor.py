import logging
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Any, Optional

import yaml

from .. import config
from ..exceptions import DescriptorParseError, FileOperationError
from ..models import Descriptor


def read_descriptor(path: Path) -> Descriptor:
    """
    Loads a YAML sidecar. Read fresh on every call; nothing is cached.

    Unrecognized fields are ignored. An empty document is a descriptor with
    every field at its default.
    """
    try:
        with open(path, 'r', encoding='utf-8') as f:
            raw = yaml.safe_load(f)
    except OSError as e:
        raise FileOperationError(f"Failed to read descriptor {path}: {e}") from e
    except yaml.YAMLError as e:
        logging.error(f"Malformed descriptor {path}: {e}")
        raise DescriptorParseError(f"Malformed descriptor {path}: {e}") from e

    try:
        return parse_descriptor(path, raw)
    except DescriptorParseError as e:
        logging.error(str(e))
        raise


def parse_descriptor(path: Path, raw: Any) -> Descriptor:
    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise DescriptorParseError(f"{path} is not a mapping")

    # 'Private:' with no value loads as None
    private = raw.get(config.PRIVATE_FIELD)
    if private is None:
        private = False
    elif not isinstance(private, bool):
        raise DescriptorParseError(f"{path}: {config.PRIVATE_FIELD} must be true or false, got {private!r}")

    return Descriptor(
        path=path,
        taken_at=_parse_datetime(path, config.TAKEN_AT_FIELD, raw.get(config.TAKEN_AT_FIELD)),
        private=private,
        deleted_at=_parse_datetime(path, config.DELETED_AT_FIELD, raw.get(config.DELETED_AT_FIELD)),
    )


def _parse_datetime(path: Path, field_name: str, value: Any) -> Optional[datetime]:
    """
    PyYAML already turns ISO timestamps into datetimes; quoted strings are
    parsed here. Aware values are normalized to UTC.
    """
    if value is None:
        return None

    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, date):
        dt = datetime(value.year, value.month, value.day)
    elif isinstance(value, str):
        try:
            # fromisoformat only accepts 'Z' from 3.11 on
            dt = datetime.fromisoformat(value.strip().replace('Z', '+00:00'))
        except ValueError as e:
            raise DescriptorParseError(f"{path}: {field_name} is not a date-time: {value!r}") from e
    else:
        raise DescriptorParseError(f"{path}: {field_name} is not a date-time: {value!r}")

    if dt.tzinfo is not None:
        dt = dt.astimezone(timezone.utc)
    return dt
