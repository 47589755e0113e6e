"""Project tree and project file handling."""

from __future__ import annotations

import xml.etree.ElementTree as ET
from os import PathLike
from pathlib import Path
from typing import Any, Iterator, Optional, Union

PROJECT_HEADER = "项目结构"

PathArg = Union[str, PathLike]


class TreeItem:
    """A node of the project tree with display text and a data value."""

    def __init__(self, text: str = "", data: Any = None):
        self.text = text
        self.data = data
        self.icon = ""
        self.parent: Optional[TreeItem] = None
        self._children: list[TreeItem] = []

    def __repr__(self) -> str:
        return f"TreeItem({self.text!r}, {self.data!r})"

    def __len__(self) -> int:
        return len(self._children)

    def __iter__(self) -> Iterator[TreeItem]:
        return iter(list(self._children))

    def __getitem__(self, row: int) -> TreeItem:
        return self._children[row]

    @property
    def children(self) -> tuple[TreeItem, ...]:
        return tuple(self._children)

    @property
    def row(self) -> Optional[int]:
        """Position under the parent, or None for an unattached item."""
        if self.parent is None:
            return None
        return next(i for i, c in enumerate(self.parent._children) if c is self)

    def _ancestors(self) -> Iterator[TreeItem]:
        node = self
        while node is not None:
            yield node
            node = node.parent

    def append(self, item: TreeItem) -> None:
        """Add *item* as the last child."""
        self.insert(len(self._children), item)

    def insert(self, row: int, item: TreeItem) -> None:
        """Insert *item* as a child at position *row*."""
        if not 0 <= row <= len(self._children):
            raise IndexError(f"row {row} out of range 0..{len(self._children)}")
        if item.parent is not None:
            raise ValueError("item already has a parent")
        if any(node is item for node in self._ancestors()):
            raise ValueError("an item cannot be placed inside itself")
        self._children.insert(row, item)
        item.parent = self

    def take(self, row: int) -> TreeItem:
        """Detach and return the child at *row*."""
        if not 0 <= row < len(self._children):
            raise IndexError(f"row {row} out of range")
        item = self._children.pop(row)
        item.parent = None
        return item

    def remove(self, row: int) -> None:
        """Delete the child at *row*."""
        self.take(row)

    def find_child(self, data: Any) -> Optional[TreeItem]:
        """Return the first child whose data equals *data*."""
        return next((c for c in self._children if c.data == data), None)


def _item_to_xml(item: TreeItem) -> ET.Element:
    element = ET.Element("item", text=item.text)
    if item.data is not None:
        element.set("type", str(item.data))
    if item.icon:
        element.set("icon", item.icon)
    element.extend(_item_to_xml(child) for child in item)
    return element


def _item_from_xml(element: ET.Element) -> TreeItem:
    item = TreeItem(element.get("text", ""), element.get("type"))
    item.icon = element.get("icon", "")
    for child in element.findall("item"):
        item.append(_item_from_xml(child))
    return item


class ProjectManager:
    """Owns the project tree, its file path and the unsaved-changes flag."""

    def __init__(self):
        self.model = TreeItem(PROJECT_HEADER)
        self.path: Optional[str] = None
        self.unsaved_changes = False

    @property
    def root_item(self) -> Optional[TreeItem]:
        """The top-level project node, if there is one."""
        return self.model[0] if len(self.model) else None

    def new_project(self) -> None:
        """Forget the current file path and mark the project as saved."""
        self.path = None
        self.unsaved_changes = False

    def load_project(self, path: PathArg) -> None:
        """Replace the tree with the one stored in the XML file at *path*."""
        root = ET.parse(path).getroot()
        if root.tag != "project":
            raise ValueError(f"{path}: not a project file")
        items = [_item_from_xml(element) for element in root.findall("item")]
        while len(self.model):
            self.model.remove(0)
        for item in items:
            self.model.append(item)
        self.path = str(path)
        self.unsaved_changes = False

    def save_project(self, path: PathArg) -> None:
        """Write the tree as XML to *path* and remember it as the project file."""
        root = ET.Element("project")
        root.extend(_item_to_xml(item) for item in self.model)
        tree = ET.ElementTree(root)
        ET.indent(tree)
        tree.write(Path(path), encoding="utf-8", xml_declaration=True)
        self.path = str(path)
        self.unsaved_changes = False

    def rename_project(self, name: str) -> None:
        """Rename the top-level node; nothing happens when the tree is empty."""
        root = self.root_item
        if root is not None:
            root.text = name
            self.unsaved_changes = True