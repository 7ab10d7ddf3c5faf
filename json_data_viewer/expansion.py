"""Expansion state of a nested-value tree, keyed by structural path."""

from __future__ import annotations

import logging
from typing import Iterator, Set

logger = logging.getLogger(__name__)


class ExpansionSet:
    """Set of expanded node paths.

    A path is expanded iff it is a member. Paths are opaque keys built by
    `paths.child_path`; nothing here parses them.
    """

    def __init__(self) -> None:
        self._paths: Set[str] = set()

    def is_expanded(self, path: str) -> bool:
        return path in self._paths

    def toggle(self, path: str) -> None:
        if path in self._paths:
            self._paths.discard(path)
        else:
            self._paths.add(path)

    def expand(self, path: str) -> None:
        self._paths.add(path)

    def collapse(self, path: str) -> None:
        self._paths.discard(path)

    def reset(self) -> None:
        """Forget every expanded path. Called whenever a new root value is loaded."""
        if self._paths:
            logger.debug(f"Clearing {len(self._paths)} expanded paths")
        self._paths.clear()

    def __contains__(self, path: object) -> bool:
        return path in self._paths

    def __len__(self) -> int:
        return len(self._paths)

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self._paths))
