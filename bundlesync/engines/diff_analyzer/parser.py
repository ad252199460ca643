"""Extract changed module names from unified diff file headers."""

from __future__ import annotations

import re

from bundlesync.config import DEFAULT_BUNDLES_DIR

MARKER_FILENAME = "transfer.xml"

_FILE_HEADER_PREFIXES = ("+++", "---")


def _module_path_re(bundles_dir: str) -> re.Pattern[str]:
    return re.compile(rf"{re.escape(bundles_dir)}/([^/]+)/")


def parse_modules_from_diff(
    diff: str,
    marker: str = MARKER_FILENAME,
    bundles_dir: str = DEFAULT_BUNDLES_DIR,
) -> list[str]:
    """Return module names whose *marker* file appears in a diff file header.

    Only ``+++``/``---`` lines mentioning *marker* are considered. The module
    is the first path segment after ``<bundles_dir>/``, e.g.::

        +++ b/Bundles/Customer/src/Shared/Transfer/transfer.xml  ->  Customer

    Names are deduplicated and kept in order of first appearance.
    """
    pattern = _module_path_re(bundles_dir)
    seen: set[str] = set()
    modules: list[str] = []

    for line in diff.split("\n"):
        if not line.startswith(_FILE_HEADER_PREFIXES):
            continue
        if marker not in line:
            continue

        match = pattern.search(line)
        if match is None:
            continue

        name = match.group(1)
        if not name.strip() or name in seen:
            continue
        seen.add(name)
        modules.append(name)

    return modules
