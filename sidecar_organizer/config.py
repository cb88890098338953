"""
Configuration constants for the sidecar organizer.
"""
from pathlib import Path

# --- Environment ---
ORIGINALS_ENV = "ORIGINALS_PATH"
SIDECAR_ENV = "SIDECAR_PATH"

# --- File Type Definitions ---
DESCRIPTOR_EXTS = {'.yml'}

JPEG_EXTS = {'.jpg', '.jpeg'}
RAW_EXTS = {'.raw', '.cr2', '.cr3', '.nef', '.arw', '.orf', '.rw2', '.dng'}
HEIF_EXTS = {'.heif', '.heic'}
IMAGE_OTHER_EXTS = {'.png', '.gif'}
VIDEO_EXTS = {'.mp4', '.webm', '.mkv'}

# Extension to Type Mapping
# Used by the stack rules to classify files without if/else chains
EXT_TO_TYPE = {}
for ext in JPEG_EXTS: EXT_TO_TYPE[ext] = 'jpeg'
for ext in RAW_EXTS: EXT_TO_TYPE[ext] = 'raw'
for ext in HEIF_EXTS: EXT_TO_TYPE[ext] = 'heif'
for ext in IMAGE_OTHER_EXTS: EXT_TO_TYPE[ext] = 'image'
for ext in VIDEO_EXTS: EXT_TO_TYPE[ext] = 'video'

# --- Descriptor Fields ---
TAKEN_AT_FIELD = 'TakenAt'
PRIVATE_FIELD = 'Private'
DELETED_AT_FIELD = 'DeletedAt'

# --- Hashing ---
HASH_CHUNK_SIZE = 64 * 1024  # 64 KB chunks for reading
CHECKSUM_WIDTH = 8  # CRC32C is 32 bits -> 8 hex digits

# --- Organization ---
FOLDER_PATTERN = "{year}/{month:02d}"
NAME_DATE_FORMAT = "%Y%m%d_%H%M%S_"


def folder_for(root: Path, year: int, month: int) -> Path:
    return root / FOLDER_PATTERN.format(year=year, month=month)
