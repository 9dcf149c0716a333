"""Tour Tree Model

Provides a QAbstractItemModel for the tours tool window:
Root ("Code Tours") -> Tour -> Step.

The model is built from an immutable ``RootNode`` snapshot
(``TourStateEngine.tree()``) and is rebuilt wholesale via ``reload`` whenever
the engine publishes ``TOUR_LIST_CHANGED``. It never mutates tours itself.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from PyQt6.QtCore import QAbstractItemModel, QModelIndex, Qt

from tours.tree import RootNode, StepNode, TourNode, TreeNode, label_of


@dataclass(eq=False)
class TourTreeItem:
    """Qt-side wrapper giving each snapshot node a parent link and row."""

    node: TreeNode
    parent: Optional["TourTreeItem"] = None
    children: List["TourTreeItem"] = field(default_factory=list)

    @property
    def label(self) -> str:
        return label_of(self.node)

    def append(self, child: "TourTreeItem") -> None:
        child.parent = self
        self.children.append(child)

    def row(self) -> int:
        if not self.parent:
            return 0
        return self.parent.children.index(self)


def _build_items(root: RootNode) -> TourTreeItem:
    root_item = TourTreeItem(node=root)
    for tour_node in root.children:
        tour_item = TourTreeItem(node=tour_node)
        for step_node in tour_node.children:
            tour_item.append(TourTreeItem(node=step_node))
        root_item.append(tour_item)
    return root_item


class TourTreeModel(QAbstractItemModel):  # pragma: no cover - exercised via tests
    def __init__(self, root: RootNode):
        super().__init__()
        self._root = _build_items(root)

    def reload(self, root: RootNode) -> None:
        self.beginResetModel()
        self._root = _build_items(root)
        self.endResetModel()

    # Required overrides
    def rowCount(self, parent: QModelIndex = QModelIndex()):  # type: ignore[override]
        if parent.isValid() and parent.column() != 0:
            return 0
        return len(self._item_from_index(parent).children)

    def columnCount(self, parent: QModelIndex = QModelIndex()):  # type: ignore[override]
        return 1

    def index(self, row: int, column: int, parent: QModelIndex = QModelIndex()):  # type: ignore[override]
        if column != 0 or row < 0:
            return QModelIndex()
        parent_item = self._item_from_index(parent)
        if row >= len(parent_item.children):
            return QModelIndex()
        return self.createIndex(row, column, parent_item.children[row])

    def parent(self, index: QModelIndex):  # type: ignore[override]
        if not index.isValid():
            return QModelIndex()
        item: TourTreeItem = index.internalPointer()  # type: ignore
        if not item or not item.parent or item.parent is self._root:
            return QModelIndex()
        return self.createIndex(item.parent.row(), 0, item.parent)

    def data(self, index: QModelIndex, role: int = Qt.ItemDataRole.DisplayRole):  # type: ignore[override]
        if not index.isValid():
            return None
        item: TourTreeItem = index.internalPointer()  # type: ignore
        if role == Qt.ItemDataRole.DisplayRole:
            return item.label
        if role == Qt.ItemDataRole.UserRole:
            return item.node
        if role == Qt.ItemDataRole.ToolTipRole and isinstance(item.node, StepNode):
            return item.node.step.location_label or None
        if role == Qt.ItemDataRole.FontRole and isinstance(item.node, TourNode) and item.node.active:
            from PyQt6.QtGui import QFont  # local import keeps QtGui off the headless path

            font = QFont()
            font.setBold(True)
            return font
        return None

    def flags(self, index: QModelIndex):  # type: ignore[override]
        if not index.isValid():
            return Qt.ItemFlag.NoItemFlags
        return Qt.ItemFlag.ItemIsEnabled | Qt.ItemFlag.ItemIsSelectable

    def headerData(self, section: int, orientation: Qt.Orientation, role: int = Qt.ItemDataRole.DisplayRole):  # type: ignore[override]
        if orientation == Qt.Orientation.Horizontal and role == Qt.ItemDataRole.DisplayRole and section == 0:
            return self._root.label
        return None

    # Helpers
    def _item_from_index(self, index: QModelIndex | None) -> TourTreeItem:
        if index is None or not index.isValid():
            return self._root
        return index.internalPointer()  # type: ignore

    def get_node(self, index: QModelIndex) -> TreeNode:
        return self._item_from_index(index).node

    def get_step_ref(self, index: QModelIndex) -> Tuple[str, int] | None:
        """Return ``(tour_id, step_index)`` for a step row, else None."""
        if not index.isValid():
            return None
        node = self.get_node(index)
        if isinstance(node, StepNode):
            return node.tour_id, node.index
        return None

    def index_for_tour(self, tour_id: str) -> QModelIndex:
        for row, item in enumerate(self._root.children):
            if isinstance(item.node, TourNode) and item.node.tour.id == tour_id:
                return self.createIndex(row, 0, item)
        return QModelIndex()


__all__ = ["TourTreeModel", "TourTreeItem"]
