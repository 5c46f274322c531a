"""Directory tree widget backed by the navigation controller."""

from __future__ import annotations

from textual.binding import Binding
from textual.widgets import Tree
from textual.widgets.tree import TreeNode

from duview.core.navigation import NavigationController, NodeState
from duview_tui.constants import TREE_TITLE


class DirectoryTree(Tree[int]):
    """Tree whose nodes carry navigation handles as their data.

    Expansion always goes through the controller; the widget only
    mirrors the controller's node states.
    """

    BINDINGS = [
        Binding("j", "cursor_down", "Down", show=False),
        Binding("k", "cursor_up", "Up", show=False),
    ]

    def __init__(self, controller: NavigationController, **kwargs) -> None:
        root = controller.root_handle
        super().__init__(controller.label(root), data=root, **kwargs)
        self.auto_expand = False
        self.border_title = TREE_TITLE
        self._navigation = controller
        self._handle_nodes: dict[int, TreeNode[int]] = {root: self.root}

    def on_mount(self) -> None:
        self._populate(self.root)
        self._sync(self.root)
        self.cursor_line = 0

    # -- Expansion --

    def toggle(self, node: TreeNode[int]) -> None:
        if node.data is None:
            return
        added = self._navigation.select(node.data)
        if added:
            self._add_children(node, added)
        self._sync(node)

    def action_toggle_node(self) -> None:
        if self.cursor_node is not None:
            self.toggle(self.cursor_node)

    def on_tree_node_selected(self, event: Tree.NodeSelected[int]) -> None:
        self.toggle(event.node)

    def on_tree_node_expanded(self, event: Tree.NodeExpanded[int]) -> None:
        # Expansion by mouse bypasses toggle(); bring the controller along.
        handle = event.node.data
        if handle in self._navigation and self._navigation.state(handle) is not NodeState.EXPANDED_LOADED:
            self.toggle(event.node)

    def on_tree_node_collapsed(self, event: Tree.NodeCollapsed[int]) -> None:
        handle = event.node.data
        if handle in self._navigation and self._navigation.state(handle) is NodeState.EXPANDED_LOADED:
            self.toggle(event.node)

    # -- Refresh --

    def refresh_node(self, handle: int) -> None:
        """Rebuild one node after the controller re-scanned it."""
        node = self._handle_nodes.get(handle)
        if node is None:
            return
        node.set_label(self._navigation.label(handle))
        node.remove_children()
        self._handle_nodes = {h: n for h, n in self._handle_nodes.items() if h in self._navigation}
        self._populate(node)
        self._sync(node)

    # -- Internals --

    def _populate(self, node: TreeNode[int]) -> None:
        entry = self._navigation.entry(node.data)
        node.allow_expand = entry.expandable
        if entry.loaded:
            self._add_children(node, self._navigation.children(node.data))

    def _add_children(self, node: TreeNode[int], handles: list[int]) -> None:
        for handle in handles:
            child = node.add(self._navigation.label(handle), data=handle)
            self._handle_nodes[handle] = child
            self._populate(child)

    def _sync(self, node: TreeNode[int]) -> None:
        """Match the widget's expanded flags to the controller's states."""
        if self._navigation.state(node.data) is NodeState.EXPANDED_LOADED:
            node.expand()
        else:
            node.collapse()
        for child in node.children:
            self._sync(child)
