"""Project-level actions of the IDE, independent of any widget toolkit."""

from __future__ import annotations

from typing import Optional

from .components import HOST_MODULE, ComponentInfo, ComponentManager
from .project import ProjectManager, TreeItem
from .themes import Theme, ThemeManager

NEW_PROJECT_NAME = "新项目"

_THEME_MESSAGES = {
    Theme.DEFAULT: "已应用默认主题",
    Theme.ATOM_ONE: "已应用ATOM ONE主题",
    Theme.SOLARIZED_LIGHT: "已应用Solarized Light主题",
}

_THEME_CYCLE = {
    Theme.DEFAULT: Theme.ATOM_ONE,
    Theme.ATOM_ONE: Theme.SOLARIZED_LIGHT,
    Theme.SOLARIZED_LIGHT: Theme.DEFAULT,
}


class ComponentError(Exception):
    """An action on a component cannot be carried out."""


class IDEController:
    """Ties the project tree, the component catalogue and the themes together."""

    def __init__(self, themes: Optional[ThemeManager] = None):
        self.project = ProjectManager()
        self.components = ComponentManager()
        self.themes = themes if themes is not None else ThemeManager()
        self.theme = Theme.DEFAULT
        self.status_message = ""

    def _ensure_root(self) -> TreeItem:
        root = self.project.root_item
        if root is None:
            root = TreeItem(NEW_PROJECT_NAME)
            self.project.model.append(root)
        return root

    def _in_project(self, item: TreeItem) -> bool:
        node = item.parent
        while node is not None:
            if node is self.project.model:
                return True
            node = node.parent
        return False

    def _require_component(self, item: Optional[TreeItem], message: str) -> TreeItem:
        """Accept only items below the top-level project node."""
        if (
            item is None
            or item.parent is None
            or item.parent is self.project.model
            or not self._in_project(item)
        ):
            raise ComponentError(message)
        return item

    def add_component(
        self, component: ComponentInfo, selected: Optional[TreeItem] = None
    ) -> TreeItem:
        """Place a new item for *component* in the tree and return it.

        Host modules go under the project node; other modules go under the
        selected host module, or else the first host module of the project.
        """
        root = self._ensure_root()
        if component.level == 1:
            parent = root
        elif component.level == 2:
            if selected is not None and selected.data == HOST_MODULE:
                parent = selected
            else:
                parent = root.find_child(HOST_MODULE)
            if parent is None:
                raise ComponentError("请先添加主机模块！")
        else:
            raise ValueError(f"unsupported component level {component.level!r}")

        item = TreeItem(component.name, component.type)
        item.icon = component.icon_path
        parent.append(item)
        self.project.unsaved_changes = True
        self.status_message = f"已添加组件: {component.name}"
        return item

    def delete_component(self, item: Optional[TreeItem]) -> None:
        """Remove a component from the project."""
        item = self._require_component(item, "请先选择要删除的组件")
        self.components.delete(item)
        self.project.unsaved_changes = True
        self.status_message = "组件已删除"

    def move_component(
        self, item: Optional[TreeItem], target: Optional[TreeItem]
    ) -> TreeItem:
        """Move a component to the end of *target*'s children and return the new item."""
        item = self._require_component(item, "请先选择要移动的组件")
        if target is None or target is item:
            raise ComponentError("请选择新的位置")
        try:
            moved = self.components.move(item, target)
        except ValueError as exc:
            raise ComponentError(str(exc)) from exc
        self.project.unsaved_changes = True
        self.status_message = f"组件已移动: {moved.text}"
        return moved

    def _reorder(self, item: Optional[TreeItem], up: bool) -> bool:
        item = self._require_component(item, "请先选择要移动的组件")
        moved = self.components.move_up(item) if up else self.components.move_down(item)
        if moved:
            self.project.unsaved_changes = True
            direction = "上移" if up else "下移"
            self.status_message = f"组件已{direction}: {item.text}"
        return moved

    def move_up(self, item: Optional[TreeItem]) -> bool:
        """Move a component one place up; False if it is already first."""
        return self._reorder(item, up=True)

    def move_down(self, item: Optional[TreeItem]) -> bool:
        """Move a component one place down; False if it is already last."""
        return self._reorder(item, up=False)

    def rename_project(self, name: str) -> bool:
        """Rename the project node; an empty name or an empty tree changes nothing."""
        if not name or self.project.root_item is None:
            return False
        self.project.rename_project(name)
        self.status_message = f"项目已重命名为: {name}"
        return True

    def set_theme(self, theme: Theme) -> str:
        """Apply *theme* and return its style sheet."""
        theme = Theme(theme)
        sheet = self.themes.apply(theme)
        self.theme = theme
        self.status_message = _THEME_MESSAGES[theme]
        return sheet

    def cycle_theme(self) -> Theme:
        """Switch to the next theme in turn and return it."""
        next_theme = _THEME_CYCLE[self.theme]
        self.set_theme(next_theme)
        return next_theme