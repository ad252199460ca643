"""Shared pytest fixtures for bundlesync tests."""

from __future__ import annotations

import json
from pathlib import Path

import pytest


@pytest.fixture
def project_root(tmp_path: Path) -> Path:
    """An empty project root with a ``Bundles`` directory."""
    (tmp_path / "Bundles").mkdir()
    return tmp_path


@pytest.fixture
def make_module(project_root: Path):
    """Create ``Bundles/<name>/composer.json`` with the given content."""

    def _make(name: str, manifest: dict | None = None, raw: str | None = None) -> Path:
        module_dir = project_root / "Bundles" / name
        module_dir.mkdir(parents=True, exist_ok=True)
        manifest_path = module_dir / "composer.json"
        if raw is not None:
            manifest_path.write_text(raw, encoding="utf-8")
        else:
            payload = manifest if manifest is not None else {"name": f"acme/{name.lower()}"}
            manifest_path.write_text(json.dumps(payload, indent=4), encoding="utf-8")
        return manifest_path

    return _make
