import pytest
from pathlib import Path
from sidecar_organizer.models import LibraryRoots

@pytest.fixture
def roots(tmp_path):
    """Returns LibraryRoots for an empty library under tmp_path/app."""
    app = tmp_path / "app"
    r = LibraryRoots(originals=app / "originals", sidecar=app / "storage" / "sidecar")
    r.originals.mkdir(parents=True)
    r.sidecar.mkdir(parents=True)
    return r

@pytest.fixture
def make_files(tmp_path):
    """Writes {relative_path: content} under tmp_path/app, like a small in-memory volume."""
    def _make(files: dict) -> Path:
        base = tmp_path / "app"
        for rel, content in files.items():
            p = base / rel
            p.parent.mkdir(parents=True, exist_ok=True)
            p.write_text(content)
        return base
    return _make
