"""Lazy tree navigation over a scanned directory tree.

The controller owns the root ``DirectoryNode`` and hands out integer
handles for the directories the presentation layer shows. Widgets keep
only these handles; every lookup goes through ``entry()`` so a stale
handle fails loudly with ``UnknownNodeError`` instead of yielding the
wrong directory.
"""

from __future__ import annotations

import itertools
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable

from duview.core.scanner import ScanError, scan
from duview.models.tree import DirectoryNode
from duview.utils import describe, node_label

log = logging.getLogger(__name__)

Scanner = Callable[..., DirectoryNode]


class NodeState(Enum):
    COLLAPSED = "collapsed"
    EXPANDED_UNLOADED = "expanded-unloaded"
    EXPANDED_LOADED = "expanded-loaded"


class UnknownNodeError(KeyError):
    """Raised for a handle the controller does not (or no longer) know."""


@dataclass(slots=True)
class TreeEntry:
    """Presentation-side record for one directory.

    ``children`` is None until the entry has been expanded once; it
    stays materialized across later collapses.
    """

    handle: int
    node: DirectoryNode
    parent: int | None
    state: NodeState = NodeState.COLLAPSED
    children: list[int] | None = None

    @property
    def loaded(self) -> bool:
        return self.children is not None

    @property
    def expandable(self) -> bool:
        return bool(self.node.subdirs)


class NavigationController:
    """Tracks expand/collapse state and the active directory."""

    def __init__(
        self,
        root: DirectoryNode,
        recency_minutes: int = 0,
        scanner: Scanner = scan,
    ) -> None:
        self.recency_minutes = recency_minutes
        self._scanner = scanner
        self._handles = itertools.count()
        self._index: dict[int, TreeEntry] = {}

        self.root_handle = self._register(root, parent=None)
        root_entry = self._index[self.root_handle]
        root_entry.state = NodeState.EXPANDED_LOADED
        self._materialize(root_entry)
        self._active = self.root_handle

    # -- Lookups --

    @property
    def root(self) -> DirectoryNode:
        return self._index[self.root_handle].node

    @property
    def active(self) -> int:
        return self._active

    @property
    def active_directory(self) -> DirectoryNode:
        return self.directory(self._active)

    def entry(self, handle: int) -> TreeEntry:
        try:
            return self._index[handle]
        except KeyError:
            raise UnknownNodeError(handle) from None

    def directory(self, handle: int) -> DirectoryNode:
        return self.entry(handle).node

    def state(self, handle: int) -> NodeState:
        return self.entry(handle).state

    def children(self, handle: int) -> list[int]:
        """Materialized child handles, largest directory first."""
        return list(self.entry(handle).children or [])

    def label(self, handle: int) -> str:
        return node_label(self.directory(handle))

    def file_rows(self, handle: int | None = None) -> list[list[str]]:
        """Formatted file table rows for *handle* (default: the active node)."""
        node = self.directory(self._active if handle is None else handle)
        return [describe(f) for f in node.files]

    def __contains__(self, handle: object) -> bool:
        return handle in self._index

    # -- Transitions --

    def focus(self, handle: int) -> list[list[str]]:
        """Make *handle* the active directory and return its file rows."""
        self.entry(handle)
        self._active = handle
        return self.file_rows(handle)

    def select(self, handle: int) -> list[int]:
        """Toggle a node between expanded and collapsed.

        Expanding materializes the children on first use from the
        already scanned tree (no filesystem access). Collapsing folds
        the node and all of its descendants.

        Returns:
            Handles of children materialized by this call (empty when
            the node collapsed or its children already existed).
        """
        entry = self.entry(handle)
        if entry.state is NodeState.EXPANDED_LOADED:
            self._collapse(entry)
            return []

        entry.state = NodeState.EXPANDED_LOADED
        if entry.loaded:
            return []
        return self._materialize(entry)

    def refresh(self, handle: int) -> bool:
        """Re-scan a node's directory and replace its subtree.

        The fresh node replaces the old one wholesale. Ancestor sizes
        are left as they were; they only change when the ancestor itself
        is refreshed.

        Returns:
            False if the scan failed, in which case nothing changed.
        """
        entry = self.entry(handle)
        old = entry.node
        try:
            fresh = self._scanner(old.path, self.recency_minutes)
        except ScanError as e:
            log.warning("Refresh of %s failed: %s", old.path, e)
            return False

        was_loaded = entry.state is NodeState.EXPANDED_LOADED
        self._drop_children(entry)
        entry.node = fresh

        if entry.parent is not None:
            parent = self._index[entry.parent].node
            parent.subdirs = [fresh if d is old else d for d in parent.subdirs]
            parent.sort()

        if was_loaded:
            self._materialize(entry)
        elif entry.state is NodeState.EXPANDED_UNLOADED and not fresh.subdirs:
            entry.state = NodeState.COLLAPSED

        if self._active not in self._index:
            self._active = handle

        log.info("Refreshed %s: %d -> %d bytes", fresh.path, old.size, fresh.size)
        return True

    # -- Internals --

    def _register(self, node: DirectoryNode, parent: int | None) -> int:
        handle = next(self._handles)
        state = NodeState.EXPANDED_UNLOADED if node.subdirs else NodeState.COLLAPSED
        self._index[handle] = TreeEntry(handle=handle, node=node, parent=parent, state=state)
        return handle

    def _materialize(self, entry: TreeEntry) -> list[int]:
        entry.node.subdirs.sort(key=lambda d: d.size, reverse=True)
        entry.children = [self._register(sub, entry.handle) for sub in entry.node.subdirs]
        return list(entry.children)

    def _collapse(self, entry: TreeEntry) -> None:
        stack = [entry]
        while stack:
            current = stack.pop()
            current.state = NodeState.COLLAPSED
            stack.extend(self._index[child] for child in current.children or [])

    def _drop_children(self, entry: TreeEntry) -> None:
        stack = list(entry.children or [])
        while stack:
            handle = stack.pop()
            stack.extend(self._index.pop(handle).children or [])
        entry.children = None
