"""Manifest store — composer.json and dependency.json read/modify/write."""

from bundlesync.engines.manifest_store.store import (
    BACKUP_SUFFIX,
    DECLARATION_FILENAME,
    DECLARATION_PACKAGE,
    MANIFEST_FILENAME,
    TEMP_SUFFIX,
    ManifestStore,
)

__all__ = [
    "BACKUP_SUFFIX",
    "DECLARATION_FILENAME",
    "DECLARATION_PACKAGE",
    "MANIFEST_FILENAME",
    "TEMP_SUFFIX",
    "ManifestStore",
]
