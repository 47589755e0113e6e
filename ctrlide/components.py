"""Component catalogue and operations on components in the project tree."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional

from .config_editor import ChannelEditor, DIChannelEditor, DOChannelEditor
from .iomodule import DIModule, DOModule
from .project import TreeItem

HOST_MODULE = "HostModule"
DI_MODULE = "DIModule"
DO_MODULE = "DOModule"

_SECOND_LEVEL = (
    ("回路模块", ":/icons/loop.png"),
    ("DI模块", ":/icons/di.png"),
    ("DO模块", ":/icons/do.png"),
    ("AI模块", ":/icons/ai.png"),
    ("继电器模块", ":/icons/relay.png"),
    ("通信模块", ":/icons/comm.png"),
)


@dataclass(frozen=True)
class ComponentInfo:
    """A kind of component, or one component about to be added to a project."""

    name: str
    type: str
    description: str = ""
    level: int = 1
    icon_path: str = ""


def default_component_types() -> list[ComponentInfo]:
    """Return the built-in component types: the host module, then its children."""
    types = [
        ComponentInfo(
            name="主机模块",
            type=HOST_MODULE,
            description="控制器主机模块",
            level=1,
            icon_path=":/icons/host.png",
        )
    ]
    types.extend(
        ComponentInfo(
            name=name,
            type=name.replace("模块", "Module"),
            description=f"{name}，连接到主机模块",
            level=2,
            icon_path=icon,
        )
        for name, icon in _SECOND_LEVEL
    )
    return types


def _attached_parent(item: TreeItem) -> TreeItem:
    if item.parent is None:
        raise ValueError(f"{item.text!r} is not part of a project tree")
    return item.parent


class ComponentManager:
    """Knows the component types and reorders, deletes and moves tree items."""

    def __init__(self):
        self._types = default_component_types()
        self.di_module = DIModule()
        self.do_module = DOModule()

    @property
    def component_types(self) -> list[ComponentInfo]:
        return list(self._types)

    def find_type(self, type_name: str) -> ComponentInfo:
        """Return the component type called *type_name*."""
        for info in self._types:
            if info.type == type_name:
                return info
        raise KeyError(f"unknown component type {type_name!r}")

    def create_component(self, type_name: str, name: str = "") -> ComponentInfo:
        """Describe a new component of the given type; a blank name means the type's own."""
        info = self.find_type(type_name)
        name = (name or "").strip()
        return replace(info, name=name or info.name)

    def editor_for(self, item: Optional[TreeItem]) -> Optional[ChannelEditor]:
        """Return a channel editor for a DI or DO item, or None for anything else."""
        if item is None:
            return None
        if item.data == DI_MODULE:
            return DIChannelEditor(self.di_module)
        if item.data == DO_MODULE:
            return DOChannelEditor(self.do_module)
        return None

    def move_up(self, item: TreeItem) -> bool:
        """Swap *item* with its previous sibling; False if it is already first."""
        parent = item.parent
        if parent is None:
            return False
        row = item.row
        if row <= 0:
            return False
        parent.insert(row - 1, parent.take(row))
        return True

    def move_down(self, item: TreeItem) -> bool:
        """Swap *item* with its next sibling; False if it is already last."""
        parent = item.parent
        if parent is None:
            return False
        row = item.row
        if row >= len(parent) - 1:
            return False
        parent.insert(row + 1, parent.take(row))
        return True

    def delete(self, item: TreeItem) -> None:
        """Remove *item* from its parent."""
        parent = _attached_parent(item)
        parent.remove(item.row)

    def move(self, item: TreeItem, target: TreeItem) -> TreeItem:
        """Recreate *item* from its text and type as the last child of *target*."""
        parent = _attached_parent(item)
        node: Optional[TreeItem] = target
        while node is not None:
            if node is item:
                raise ValueError("a component cannot be moved into itself")
            node = node.parent
        moved = TreeItem(item.text, item.data)
        parent.remove(item.row)
        target.append(moved)
        return moved