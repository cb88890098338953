from pathlib import Path

import crc32c

from .. import config
from ..exceptions import FileOperationError


class FileHasher:
    def compute_checksum(self, path: Path) -> str:
        """
        CRC32C of the whole file as zero-padded uppercase hex,
        e.g. '90F599E3'. This is the hash segment of canonical file names.
        """
        try:
            value = self._crc32c(path)
        except OSError as e:
            raise FileOperationError(f"Failed to read {path}: {e}") from e
        return format(value, f"0{config.CHECKSUM_WIDTH}X")

    def _crc32c(self, path: Path) -> int:
        """Reads entire file in chunks."""
        value = 0
        with open(path, 'rb') as f:
            while chunk := f.read(config.HASH_CHUNK_SIZE):
                value = crc32c.crc32c(chunk, value)
        return value
