"""Mapping of source file targets to paths on disk."""

from __future__ import annotations

import logging
import os

from rulehash.types import SourceFile

logger = logging.getLogger("rulehash.sources")


def source_file_path(source: SourceFile) -> str:
    """Compute the on-disk path of a source file from its target metadata.

    The directory comes from the declaring build file in ``location``
    (everything before the first ``:``); the file name is the label part
    after the last ``:`` once the leading ``//`` is removed.
    """
    path_to_target = os.path.dirname(source.location.split(":", 1)[0])

    name = source.name[2:] if source.name.startswith("//") else source.name
    path_from_target = name.rsplit(":", 1)[-1]

    return os.path.normpath(os.path.join(path_to_target, path_from_target))


class SourceLocationResolver:
    """Resolves source files to existing paths, remembering each lookup.

    Relative locations are resolved against the process working directory.
    A path found missing stays missing for the lifetime of the resolver.
    """

    def __init__(self) -> None:
        self._cache: dict[str, str | None] = {}

    def resolve(self, source: SourceFile) -> str | None:
        """Return the existing path for ``source``, or None when it is not on disk."""
        combined_path = source_file_path(source)
        if combined_path in self._cache:
            return self._cache[combined_path]

        if not os.path.exists(combined_path):
            logger.info(
                "File %s does not exist on disk (location=%s, label=%s)",
                combined_path,
                source.location,
                source.name,
            )
            self._cache[combined_path] = None
            return None

        self._cache[combined_path] = combined_path
        return combined_path

    def __len__(self) -> int:
        return len(self._cache)

    def clear(self) -> None:
        self._cache.clear()
