"""Read, modify and atomically write module manifests (composer.json).

Writes go through a sibling ``.tmp`` file that is renamed over the target,
with a ``.backup`` copy of the previous file kept until the rename succeeds.
"""

from __future__ import annotations

import json
import os
import shutil
from pathlib import Path
from typing import Any

import structlog

from bundlesync.core.errors import ErrorKind, Outcome

log = structlog.get_logger("bundlesync.manifest")

MANIFEST_FILENAME = "composer.json"
DECLARATION_FILENAME = "dependency.json"
DECLARATION_PACKAGE = "spryker/transfer"

BACKUP_SUFFIX = ".backup"
TEMP_SUFFIX = ".tmp"

_REQUIRE_SECTIONS = ("require", "require-dev")


def dump_json(data: dict[str, Any]) -> str:
    """Serialize like ``composer``: 4-space indent, slashes and unicode unescaped."""
    return json.dumps(data, indent=4, ensure_ascii=False) + "\n"


class ManifestStore:
    """Stateless accessor for manifest and dependency declaration files."""

    # ── file level ─────────────────────────────────────────────────────────

    def exists(self, path: str | Path) -> bool:
        """Return True only if *path* resolves to a readable regular file."""
        try:
            real_path = Path(path).resolve(strict=True)
        except (OSError, RuntimeError, ValueError):
            return False
        return real_path.is_file() and os.access(real_path, os.R_OK)

    def read(self, path: str | Path) -> dict[str, Any] | None:
        """Load *path* as a JSON object, or return None (cause is logged)."""
        try:
            real_path = Path(path).resolve(strict=True)
        except (OSError, RuntimeError, ValueError):
            log.warning("manifest.invalid_path", path=str(path))
            return None

        if not real_path.is_file() or not os.access(real_path, os.R_OK):
            log.warning("manifest.not_readable", path=str(real_path))
            return None

        try:
            content = real_path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            log.error("manifest.read_failed", path=str(real_path), error=str(exc))
            return None

        try:
            data = json.loads(content)
        except (json.JSONDecodeError, RecursionError) as exc:
            log.error("manifest.invalid_json", path=str(real_path), error=str(exc))
            return None

        if not isinstance(data, dict):
            log.error("manifest.not_an_object", path=str(real_path))
            return None

        return data

    def write(self, path: str | Path, data: dict[str, Any]) -> Outcome:
        """Atomically replace *path* with the JSON serialization of *data*.

        The original file is left untouched on any failure. The backup copy
        is removed only after the temp file has been renamed into place.
        """
        target = Path(path)
        try:
            directory = target.parent.resolve(strict=True)
        except (OSError, RuntimeError, ValueError):
            log.error("manifest.invalid_directory", directory=str(target.parent))
            return _resource_failure(f"Invalid directory path: {target.parent}")

        full_path = directory / target.name
        backup_path = full_path.with_name(full_path.name + BACKUP_SUFFIX)
        temp_path = full_path.with_name(full_path.name + TEMP_SUFFIX)

        if full_path.exists():
            try:
                shutil.copy2(full_path, backup_path)
            except OSError as exc:
                log.error("manifest.backup_failed", path=str(backup_path), error=str(exc))
                return _resource_failure(f"Failed to create backup: {backup_path.name}")

        try:
            content = dump_json(data)
        except (TypeError, ValueError, RecursionError) as exc:
            log.error("manifest.encode_failed", path=str(full_path), error=str(exc))
            return _resource_failure("Failed to encode data to JSON")

        try:
            with open(temp_path, "w", encoding="utf-8") as fh:
                fh.write(content)
                fh.flush()
                os.fsync(fh.fileno())
        except OSError as exc:
            log.error("manifest.temp_write_failed", path=str(temp_path), error=str(exc))
            temp_path.unlink(missing_ok=True)
            return _resource_failure(f"Failed to write temporary file: {temp_path.name}")

        try:
            os.replace(temp_path, full_path)
        except OSError as exc:
            log.error("manifest.rename_failed", path=str(full_path), error=str(exc))
            temp_path.unlink(missing_ok=True)
            return _resource_failure(f"Failed to rename temporary file to: {full_path.name}")

        backup_path.unlink(missing_ok=True)
        log.debug("manifest.written", path=str(full_path))
        return Outcome.success()

    # ── field level ────────────────────────────────────────────────────────

    def get_field(self, path: str | Path, package_name: str) -> str | None:
        """Return the constraint for *package_name* from require, then require-dev."""
        data = self.read(path)
        if data is None:
            return None

        for section_name in _REQUIRE_SECTIONS:
            section = data.get(section_name)
            if isinstance(section, dict) and section.get(package_name) is not None:
                version = section[package_name]
                return version if isinstance(version, str) else None
        return None

    def set_field(self, path: str | Path, package_name: str, version: str) -> Outcome:
        """Set ``require[package_name] = version`` and write the manifest back."""
        data = self.read(path)
        if data is None:
            return _resource_failure(f"Could not read manifest: {Path(path).name}")

        require = data.get("require")
        if not isinstance(require, dict):
            require = {}
            data["require"] = require
        require[package_name] = version

        return self.write(path, data)

    # ── dependency declaration ─────────────────────────────────────────────

    def ensure_dependency_declaration(
        self, module_root: str | Path, description: str | None
    ) -> Outcome:
        """Make sure the module's dependency.json lists ``spryker/transfer``.

        An existing entry is left as-is. Other keys in an existing file are
        preserved.
        """
        if description is None or not description.strip():
            return Outcome.failure(
                ErrorKind.INVALID_ARGUMENT, "Description cannot be null or empty"
            )

        try:
            real_root = Path(module_root).resolve(strict=True)
        except (OSError, RuntimeError, ValueError):
            log.error("declaration.invalid_module_dir", directory=str(module_root))
            return _resource_failure(f"Invalid module directory: {module_root}")

        declaration_path = real_root / DECLARATION_FILENAME

        if declaration_path.exists():
            try:
                existing = json.loads(declaration_path.read_text(encoding="utf-8"))
            except (OSError, UnicodeDecodeError) as exc:
                log.error(
                    "declaration.read_failed", path=str(declaration_path), error=str(exc)
                )
                return _resource_failure("Failed to read existing dependency file")
            except (json.JSONDecodeError, RecursionError) as exc:
                log.error(
                    "declaration.invalid_json", path=str(declaration_path), error=str(exc)
                )
                return _resource_failure("Invalid JSON in existing dependency file")

            if not isinstance(existing, dict):
                log.error("declaration.not_an_object", path=str(declaration_path))
                return _resource_failure(
                    "Existing dependency file does not contain a valid JSON object"
                )

            include = existing.get("include")
            if isinstance(include, dict):
                if DECLARATION_PACKAGE in include:
                    return Outcome.success()
                include[DECLARATION_PACKAGE] = description
            else:
                existing["include"] = {DECLARATION_PACKAGE: description}
            declaration = existing
        else:
            declaration = {"include": {DECLARATION_PACKAGE: description}}

        return self.write(declaration_path, declaration)


def _resource_failure(message: str) -> Outcome:
    return Outcome.failure(ErrorKind.RESOURCE_ACCESS, message)
