import pytest

from ctrlide.components import HOST_MODULE
from ctrlide.controller import IDEController
from ctrlide.gui import COMMAND_NAMES, _walk, context_menu_spec, main, menu_spec
from ctrlide.themes import Theme


def _menu(title):
    return dict(menu_spec())[title]


def _labels(entries):
    return [entry.label if entry is not None else None for entry in entries]


def test_menu_titles_in_order():
    assert [title for title, _ in menu_spec()] == ["文件", "组件", "主题", "编辑"]


def test_file_menu_entries():
    assert _labels(_menu("文件")) == [
        "新建项目", "打开项目", "保存项目", "项目另存为", "重命名项目", None, "退出",
    ]


def test_component_menu_entries():
    assert _labels(_menu("组件")) == ["添加组件", "删除组件", "移动组件", "配置组件"]


def test_theme_menu_covers_every_theme_in_order():
    entries = _menu("主题")
    assert [entry.theme for entry in entries] == list(Theme)
    assert [entry.label for entry in entries] == [theme.title for theme in Theme]


def test_edit_menu_has_move_shortcuts():
    entries = _menu("编辑")
    assert entries[0] is None
    assert [(e.command, e.shortcut) for e in entries[1:]] == [
        ("move_up", "Ctrl+Up"),
        ("move_down", "Ctrl+Down"),
    ]


def test_every_command_is_known():
    used = {entry.command for _, entries in menu_spec() for entry in entries if entry}
    used |= {e.command for flag in (True, False) for e in context_menu_spec(flag) if e}
    assert used <= set(COMMAND_NAMES)
    assert set(COMMAND_NAMES) == {e.command for _, es in menu_spec() for e in es if e}


def test_context_menu_for_root():
    assert _labels(context_menu_spec(True)) == ["重命名项目", None, "添加组件"]


def test_context_menu_for_component():
    labels = _labels(context_menu_spec(False))
    assert labels[0] == "添加组件"
    assert "重命名项目" not in labels
    assert labels[-2:] == ["上移", "下移"]
    assert labels.index(None) == labels.index("上移") - 1


def test_walk_visits_tree_depth_first():
    controller = IDEController()
    components = controller.components
    host = controller.add_component(components.create_component(HOST_MODULE))
    di = controller.add_component(components.create_component("DIModule"))
    do = controller.add_component(components.create_component("DOModule"))
    walked = list(_walk(controller.project.model))
    root = controller.project.root_item
    assert [(depth, item) for depth, item in walked] == [
        (0, root), (1, host), (2, di), (2, do),
    ]


def test_walk_of_empty_model_is_empty():
    assert list(_walk(IDEController().project.model)) == []


def test_main_help_exits_cleanly():
    with pytest.raises(SystemExit) as info:
        main(["--help"])
    assert info.value.code == 0


def test_main_rejects_unknown_option():
    with pytest.raises(SystemExit) as info:
        main(["--no-such-option"])
    assert info.value.code == 2