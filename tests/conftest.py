from __future__ import annotations

from pathlib import Path
import sys


import pytest


# Ensure the repository root (parent of ./tests) is importable during pytest collection.
# This avoids ModuleNotFoundError for imports like `import persistence...` under pytest import modes
# that don't automatically prepend the cwd/rootdir to sys.path.
REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))


@pytest.fixture
def storage_root(tmp_path: Path) -> Path:
    root = tmp_path / "data"
    root.mkdir()
    return root


@pytest.fixture
def fs_storage(storage_root: Path):
    from persistence import FilesystemStorage

    return FilesystemStorage(storage_root)


@pytest.fixture
def client(fs_storage):
    """
    HTTP client bound to an app serving the temp storage root.
    """
    from fastapi.testclient import TestClient

    import app as app_module

    with TestClient(app_module.create_app(fs_storage)) as c:
        yield c


@pytest.fixture
def fs_tree(storage_root: Path):
    """Every path under the storage root, relative and sorted, for before/after comparisons."""

    def _tree() -> list[str]:
        return sorted(str(p.relative_to(storage_root)) for p in storage_root.rglob("*"))

    return _tree
