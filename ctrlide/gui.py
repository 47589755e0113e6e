"""Tk main window of the controller IDE."""

from __future__ import annotations

import argparse
import tkinter as tk
import xml.etree.ElementTree as ET
from tkinter import filedialog, messagebox, simpledialog, ttk
from typing import Iterator, NamedTuple, Optional, Sequence

from .components import ComponentInfo
from .config_editor import (
    COLUMN_HEADERS,
    DESCRIPTION_COLUMN,
    NAME_COLUMN,
    VALUE_COLUMN,
    ChannelEditor,
)
from .controller import ComponentError, IDEController
from .project import PROJECT_HEADER, TreeItem
from .themes import Theme, ThemeManager

WINDOW_TITLE = "Controller IDE"
STATUS_TIMEOUT_MS = 3000
PROJECT_FILETYPES = [("XML 项目文件", "*.xml")]

COMMAND_NAMES = (
    "new_project",
    "open_project",
    "save_project",
    "save_project_as",
    "rename_project",
    "exit",
    "add_component",
    "delete_component",
    "move_component",
    "configure_component",
    "set_default_theme",
    "set_atom_one_theme",
    "set_solarized_light_theme",
    "move_up",
    "move_down",
)


class MenuEntry(NamedTuple):
    """One menu item; *theme* marks an item of the theme radio group."""

    label: str
    command: str
    shortcut: Optional[str] = None
    theme: Optional[Theme] = None


MenuSpec = list[tuple[str, list[Optional[MenuEntry]]]]

_TOOLBAR = (
    ("文件", ("new_project", "open_project", "save_project", "rename_project")),
    ("组件", ("add_component", "delete_component", "move_component", "configure_component")),
)

_TOOLBAR_LABELS = {
    "new_project": "新建项目",
    "open_project": "打开项目",
    "save_project": "保存项目",
    "rename_project": "重命名项目",
    "add_component": "添加组件",
    "delete_component": "删除组件",
    "move_component": "移动组件",
    "configure_component": "配置组件",
}


def menu_spec() -> MenuSpec:
    """Return the menu bar: menu titles with their entries; None is a separator."""
    return [
        (
            "文件",
            [
                MenuEntry("新建项目", "new_project"),
                MenuEntry("打开项目", "open_project"),
                MenuEntry("保存项目", "save_project"),
                MenuEntry("项目另存为", "save_project_as"),
                MenuEntry("重命名项目", "rename_project"),
                None,
                MenuEntry("退出", "exit"),
            ],
        ),
        (
            "组件",
            [
                MenuEntry("添加组件", "add_component"),
                MenuEntry("删除组件", "delete_component"),
                MenuEntry("移动组件", "move_component"),
                MenuEntry("配置组件", "configure_component"),
            ],
        ),
        (
            "主题",
            [
                MenuEntry("默认主题", "set_default_theme", theme=Theme.DEFAULT),
                MenuEntry("ATOM ONE", "set_atom_one_theme", theme=Theme.ATOM_ONE),
                MenuEntry(
                    "Solarized Light",
                    "set_solarized_light_theme",
                    theme=Theme.SOLARIZED_LIGHT,
                ),
            ],
        ),
        (
            "编辑",
            [
                None,
                MenuEntry("上移组件", "move_up", shortcut="Ctrl+Up"),
                MenuEntry("下移组件", "move_down", shortcut="Ctrl+Down"),
            ],
        ),
    ]


def context_menu_spec(is_root: bool) -> list[Optional[MenuEntry]]:
    """Return the entries of the project tree's context menu."""
    entries: list[Optional[MenuEntry]] = []
    if is_root:
        entries += [MenuEntry("重命名项目", "rename_project"), None]
    entries.append(MenuEntry("添加组件", "add_component"))
    if not is_root:
        entries += [
            MenuEntry("配置组件", "configure_component"),
            MenuEntry("删除组件", "delete_component"),
            MenuEntry("移动组件", "move_component"),
            None,
            MenuEntry("上移", "move_up"),
            MenuEntry("下移", "move_down"),
        ]
    return entries


def _walk(item: TreeItem, depth: int = 0) -> Iterator[tuple[int, TreeItem]]:
    """Yield every descendant of *item* depth-first with its depth."""
    for child in item:
        yield depth, child
        yield from _walk(child, depth + 1)


def _ask_component(parent: tk.Misc, types: Sequence[ComponentInfo]) -> Optional[tuple[str, str]]:
    """Ask for a component type and a name; return (type, name) or None."""
    dialog = tk.Toplevel(parent)
    dialog.title("添加组件")
    dialog.transient(parent)
    dialog.minsize(400, 0)

    ttk.Label(dialog, text="选择要添加的组件类型:").pack(anchor="w", padx=8, pady=(8, 4))
    listbox = tk.Listbox(dialog, exportselection=False, height=len(types))
    for info in types:
        listbox.insert("end", info.name)
    listbox.pack(fill="both", expand=True, padx=8)

    name_row = ttk.Frame(dialog)
    name_row.pack(fill="x", padx=8, pady=4)
    ttk.Label(name_row, text="组件名称:").pack(side="left")
    name_var = tk.StringVar(dialog)
    entry = ttk.Entry(name_row, textvariable=name_var)
    entry.pack(side="left", fill="x", expand=True)

    result: dict[str, tuple[str, str]] = {}

    def current() -> Optional[ComponentInfo]:
        selection = listbox.curselection()
        return types[selection[0]] if selection else None

    def on_select(_event=None) -> None:
        info = current()
        ok_button.state(["!disabled"] if info else ["disabled"])
        if info is not None:
            name_var.set(info.name)
            entry.select_range(0, "end")

    def accept(_event=None) -> None:
        info = current()
        if info is None:
            return
        result["value"] = (info.type, name_var.get())
        dialog.destroy()

    buttons = ttk.Frame(dialog)
    buttons.pack(fill="x", padx=8, pady=(4, 8))
    ttk.Button(buttons, text="取消", command=dialog.destroy).pack(side="right")
    ok_button = ttk.Button(buttons, text="确定", command=accept)
    ok_button.pack(side="right", padx=4)
    ok_button.state(["disabled"])

    listbox.bind("<<ListboxSelect>>", on_select)
    listbox.bind("<Double-Button-1>", accept)
    dialog.grab_set()
    parent.wait_window(dialog)
    return result.get("value")


def _ask_target(parent: tk.Misc, model: TreeItem, item_text: str) -> Optional[TreeItem]:
    """Show the project tree and return the chosen new location."""
    dialog = tk.Toplevel(parent)
    dialog.title("移动组件")
    dialog.transient(parent)
    dialog.minsize(400, 300)

    ttk.Label(dialog, text=f'选择 "{item_text}" 的新位置:').pack(anchor="w", padx=8, pady=(8, 4))
    tree = ttk.Treeview(dialog, show="tree")
    tree.pack(fill="both", expand=True, padx=8)
    items: dict[str, TreeItem] = {}
    parents = {id(model): ""}
    for _depth, node in _walk(model):
        iid = tree.insert(parents[id(node.parent)], "end", text=node.text, open=True)
        items[iid] = node
        parents[id(node)] = iid

    result: dict[str, TreeItem] = {}

    def accept() -> None:
        selection = tree.selection()
        if selection:
            result["target"] = items[selection[0]]
        dialog.destroy()

    buttons = ttk.Frame(dialog)
    buttons.pack(fill="x", padx=8, pady=(4, 8))
    ttk.Button(buttons, text="取消", command=dialog.destroy).pack(side="right")
    ttk.Button(buttons, text="确定", command=accept).pack(side="right", padx=4)

    dialog.grab_set()
    parent.wait_window(dialog)
    return result.get("target")


def _edit_channels(parent: tk.Misc, editor: ChannelEditor) -> None:
    """Run the channel/bit table dialog for a DI or DO module."""
    dialog = tk.Toplevel(parent)
    dialog.title(editor.title)
    dialog.transient(parent)
    dialog.minsize(600, 400)

    top = ttk.Frame(dialog)
    top.pack(fill="x", padx=8, pady=8)
    options = editor.channel_count_options()
    ttk.Label(top, text="通道数量:").pack(side="left")
    count_box = ttk.Combobox(top, state="readonly", values=[label for label, _ in options], width=10)
    counts = [count for _, count in options]
    count_box.current(counts.index(editor.module.channel_count))
    count_box.pack(side="left")
    ttk.Label(top, text="选择通道:").pack(side="left", padx=(20, 0))
    channel_box = ttk.Combobox(top, state="readonly", values=editor.channel_labels(), width=10)
    channel_box.current(editor.current_channel)
    channel_box.pack(side="left")

    columns = ("bit", "name", "value", "description")
    table = ttk.Treeview(dialog, columns=columns, show="headings", height=8)
    for column, header, width in zip(columns, COLUMN_HEADERS, (50, 200, 50, 200)):
        table.heading(column, text=header)
        table.column(column, width=width, stretch=column == "description")
    table.pack(fill="both", expand=True, padx=8)

    hint = ttk.Label(dialog, text="提示：双击单元格进行编辑", foreground="gray")
    hint.pack(anchor="w", padx=8)

    def fill() -> None:
        table.delete(*table.get_children())
        for row in editor.rows():
            table.insert(
                "", "end", iid=str(row.bit),
                values=(row.bit, row.name, row.value, row.description),
            )

    def on_count(_event=None) -> None:
        editor.set_channel_count(counts[count_box.current()])
        channel_box["values"] = editor.channel_labels()
        channel_box.current(0)
        fill()

    def on_channel(_event=None) -> None:
        editor.select_channel(channel_box.current())
        fill()

    def on_double_click(event) -> None:
        row_id = table.identify_row(event.y)
        column_id = table.identify_column(event.x)
        if not row_id or not column_id:
            return
        bit = int(row_id)
        column = int(column_id.lstrip("#")) - 1
        current = editor.rows()[bit]
        if column == VALUE_COLUMN:
            editor.set_value(bit, 1 - current.value)
        elif column in (NAME_COLUMN, DESCRIPTION_COLUMN):
            initial = current.name if column == NAME_COLUMN else current.description
            header = COLUMN_HEADERS[column]
            text = simpledialog.askstring(header, f"{header}:", initialvalue=initial, parent=dialog)
            if text is None:
                return
            editor.edit_cell(bit, column, text)
        else:
            return
        fill()

    def save() -> None:
        messagebox.showinfo("保存配置", f"{editor.module.kind}模块配置已保存", parent=dialog)
        dialog.destroy()

    buttons = ttk.Frame(dialog)
    buttons.pack(fill="x", padx=8, pady=8)
    ttk.Button(buttons, text="取消", command=dialog.destroy).pack(side="right")
    ttk.Button(buttons, text="保存", command=save).pack(side="right", padx=4)

    count_box.bind("<<ComboboxSelected>>", on_count)
    channel_box.bind("<<ComboboxSelected>>", on_channel)
    table.bind("<Double-Button-1>", on_double_click)
    fill()
    dialog.grab_set()
    parent.wait_window(dialog)


class MainWindow:
    """The IDE's main window: menus, toolbar, project tree and status bar."""

    def __init__(self, root: tk.Tk, controller: Optional[IDEController] = None):
        self.root = root
        self.controller = controller if controller is not None else IDEController()
        self._items: dict[str, TreeItem] = {}
        self._status_job: Optional[str] = None
        self._commands = {
            "new_project": self.new_project,
            "open_project": self.open_project,
            "save_project": self.save_project,
            "save_project_as": self.save_project_as,
            "rename_project": self.rename_project,
            "exit": self.root.destroy,
            "add_component": self.add_component,
            "delete_component": self.delete_component,
            "move_component": self.move_component,
            "configure_component": self.configure_component,
            "set_default_theme": lambda: self._apply_theme(Theme.DEFAULT),
            "set_atom_one_theme": lambda: self._apply_theme(Theme.ATOM_ONE),
            "set_solarized_light_theme": lambda: self._apply_theme(Theme.SOLARIZED_LIGHT),
            "move_up": self.move_up,
            "move_down": self.move_down,
        }
        self._theme_var = tk.StringVar(root, value=self.controller.theme.name)

        root.title(WINDOW_TITLE)
        root.minsize(800, 600)
        self._build_menus()
        self._build_toolbar()
        self._build_status_bar()
        self._build_panes()
        root.bind("<Control-Up>", lambda _e: self.move_up())
        root.bind("<Control-Down>", lambda _e: self.move_down())
        self.refresh_tree()

    # construction

    def _add_entries(self, menu: tk.Menu, entries: Sequence[Optional[MenuEntry]]) -> None:
        for entry in entries:
            if entry is None:
                menu.add_separator()
            elif entry.theme is not None:
                menu.add_radiobutton(
                    label=entry.label,
                    variable=self._theme_var,
                    value=entry.theme.name,
                    command=self._commands[entry.command],
                )
            else:
                menu.add_command(
                    label=entry.label,
                    command=self._commands[entry.command],
                    accelerator=entry.shortcut or "",
                )

    def _build_menus(self) -> None:
        menubar = tk.Menu(self.root)
        for title, entries in menu_spec():
            menu = tk.Menu(menubar, tearoff=False)
            self._add_entries(menu, entries)
            menubar.add_cascade(label=title, menu=menu)
        self.root.config(menu=menubar)

    def _build_toolbar(self) -> None:
        bar = ttk.Frame(self.root)
        bar.pack(side="top", fill="x")
        for _title, commands in _TOOLBAR:
            group = ttk.Frame(bar)
            group.pack(side="left", padx=(0, 12))
            for command in commands:
                ttk.Button(
                    group, text=_TOOLBAR_LABELS[command], command=self._commands[command]
                ).pack(side="left")

    def _build_status_bar(self) -> None:
        self.status = ttk.Label(self.root, anchor="w", relief="sunken")
        self.status.pack(side="bottom", fill="x")

    def _build_panes(self) -> None:
        panes = ttk.PanedWindow(self.root, orient="horizontal")
        panes.pack(fill="both", expand=True)

        left = ttk.PanedWindow(panes, orient="vertical")
        project_frame = ttk.LabelFrame(left, text="项目")
        self.tree = ttk.Treeview(project_frame, show="tree headings")
        self.tree.heading("#0", text=PROJECT_HEADER)
        self.tree.pack(fill="both", expand=True)
        self.tree.bind("<Button-3>", self._show_context_menu)
        left.add(project_frame, weight=3)

        library_frame = ttk.LabelFrame(left, text="组件库")
        self.component_list = tk.Listbox(library_frame)
        self.component_list.pack(fill="both", expand=True)
        left.add(library_frame, weight=1)
        panes.add(left, weight=1)

        panes.add(ttk.Frame(panes), weight=3)

        properties_frame = ttk.LabelFrame(panes, text="属性")
        self.properties = ttk.Treeview(properties_frame, show="tree")
        self.properties.pack(fill="both", expand=True)
        panes.add(properties_frame, weight=1)

    # tree helpers

    def refresh_tree(self) -> None:
        """Rebuild the tree view from the project model, keeping the selection."""
        selected = self.selected_item()
        self.tree.delete(*self.tree.get_children())
        self._items.clear()
        parents = {id(self.controller.project.model): ""}
        for _depth, node in _walk(self.controller.project.model):
            iid = self.tree.insert(parents[id(node.parent)], "end", text=node.text, open=True)
            self._items[iid] = node
            parents[id(node)] = iid
        if selected is not None:
            self._select(selected)

    def _select(self, item: TreeItem) -> None:
        for iid, node in self._items.items():
            if node is item:
                self.tree.selection_set(iid)
                self.tree.focus(iid)
                self.tree.see(iid)
                return

    def selected_item(self) -> Optional[TreeItem]:
        selection = self.tree.selection()
        return self._items.get(selection[0]) if selection else None

    def _is_component(self, item: Optional[TreeItem]) -> bool:
        return (
            item is not None
            and item.parent is not None
            and item.parent is not self.controller.project.model
        )

    def show_status(self, message: str) -> None:
        """Show *message* in the status bar for a few seconds."""
        if self._status_job is not None:
            self.root.after_cancel(self._status_job)
        self.status.config(text=message)
        self._status_job = self.root.after(
            STATUS_TIMEOUT_MS, lambda: self.status.config(text="")
        )

    def _show_context_menu(self, event) -> None:
        iid = self.tree.identify_row(event.y)
        if not iid:
            return
        self.tree.selection_set(iid)
        self.tree.focus(iid)
        menu = tk.Menu(self.root, tearoff=False)
        self._add_entries(menu, context_menu_spec(self.tree.parent(iid) == ""))
        try:
            menu.tk_popup(event.x_root, event.y_root)
        finally:
            menu.grab_release()

    # project actions

    def _confirm_unsaved(self) -> bool:
        """Offer to save pending changes; False if the user cancelled."""
        if not self.controller.project.unsaved_changes:
            return True
        reply = messagebox.askyesnocancel(
            "保存更改", "是否保存当前项目的更改?", parent=self.root
        )
        if reply is None:
            return False
        if reply:
            self.save_project()
        return True

    def new_project(self) -> None:
        if self._confirm_unsaved():
            self.controller.project.new_project()

    def open_project(self) -> None:
        if not self._confirm_unsaved():
            return
        path = filedialog.askopenfilename(
            parent=self.root, title="打开项目", filetypes=PROJECT_FILETYPES
        )
        if path:
            self._open_path(path)

    def _open_path(self, path: str) -> None:
        try:
            self.controller.project.load_project(path)
        except (OSError, ET.ParseError, ValueError) as exc:
            messagebox.showerror("打开项目", str(exc), parent=self.root)
            return
        self.refresh_tree()

    def save_project(self) -> None:
        path = self.controller.project.path
        if path:
            self._write(path)
        else:
            self.save_project_as()

    def save_project_as(self) -> None:
        path = filedialog.asksaveasfilename(
            parent=self.root,
            title="保存项目",
            filetypes=PROJECT_FILETYPES,
            defaultextension=".xml",
        )
        if path:
            self._write(path)

    def _write(self, path: str) -> None:
        try:
            self.controller.project.save_project(path)
        except OSError as exc:
            messagebox.showerror("保存项目", str(exc), parent=self.root)

    def rename_project(self) -> None:
        root_item = self.controller.project.root_item
        name = simpledialog.askstring(
            "重命名项目",
            "项目名称:",
            initialvalue=root_item.text if root_item is not None else "",
            parent=self.root,
        )
        if name and self.controller.rename_project(name):
            self.refresh_tree()
            self.show_status(self.controller.status_message)

    # component actions

    def add_component(self) -> None:
        choice = _ask_component(self.root, self.controller.components.component_types)
        if choice is None:
            return
        type_name, name = choice
        info = self.controller.components.create_component(type_name, name)
        try:
            item = self.controller.add_component(info, self.selected_item())
        except ComponentError as exc:
            messagebox.showwarning("添加组件", str(exc), parent=self.root)
            return
        self.refresh_tree()
        self._select(item)
        self.show_status(self.controller.status_message)

    def configure_component(self) -> None:
        item = self.selected_item()
        if item is None:
            messagebox.showinfo("配置组件", "请先选择一个组件", parent=self.root)
            return
        editor = self.controller.components.editor_for(item)
        if editor is None:
            messagebox.showinfo("配置组件", "组件配置功能将在后续版本中实现", parent=self.root)
            return
        _edit_channels(self.root, editor)

    def delete_component(self) -> None:
        item = self.selected_item()
        if not self._is_component(item):
            messagebox.showwarning("删除组件", "请先选择要删除的组件", parent=self.root)
            return
        confirmed = messagebox.askyesno(
            "删除组件",
            f'确定要删除组件 "{item.text}" 吗?\n\n此操作不可撤销。',
            default=messagebox.NO,
            parent=self.root,
        )
        if not confirmed:
            return
        self.controller.delete_component(item)
        self.refresh_tree()
        self.show_status(self.controller.status_message)

    def move_component(self) -> None:
        item = self.selected_item()
        if not self._is_component(item):
            messagebox.showwarning("移动组件", "请先选择要移动的组件", parent=self.root)
            return
        target = _ask_target(self.root, self.controller.project.model, item.text)
        if target is None or target is item:
            return
        try:
            moved = self.controller.move_component(item, target)
        except ComponentError as exc:
            messagebox.showwarning("移动组件", str(exc), parent=self.root)
            return
        self.refresh_tree()
        self._select(moved)
        self.show_status(self.controller.status_message)

    def _reorder(self, up: bool) -> None:
        item = self.selected_item()
        if not self._is_component(item):
            messagebox.showwarning("移动组件", "请先选择要移动的组件", parent=self.root)
            return
        moved = self.controller.move_up(item) if up else self.controller.move_down(item)
        if moved:
            self.refresh_tree()
            self._select(item)
            self.show_status(self.controller.status_message)

    def move_up(self) -> None:
        self._reorder(up=True)

    def move_down(self) -> None:
        self._reorder(up=False)

    # themes

    def _apply_theme(self, theme: Theme) -> None:
        self.controller.set_theme(theme)
        self._theme_var.set(theme.name)
        self.show_status(self.controller.status_message)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Start the IDE window."""
    parser = argparse.ArgumentParser(prog="ctrlide", description="Controller IDE")
    parser.add_argument("project", nargs="?", help="project file to open")
    parser.add_argument("--themes", metavar="DIR", default=None,
                        help="directory holding the themes/ style sheets")
    args = parser.parse_args(argv)

    root = tk.Tk()
    controller = IDEController(ThemeManager(args.themes))
    window = MainWindow(root, controller)
    if args.project:
        window._open_path(args.project)
    root.mainloop()
    return 0