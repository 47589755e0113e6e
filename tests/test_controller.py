import pytest

from ctrlide.components import HOST_MODULE
from ctrlide.controller import ComponentError, IDEController
from ctrlide.themes import Theme, ThemeManager


@pytest.fixture
def applied():
    return []


@pytest.fixture
def controller(tmp_path, applied):
    themes_dir = tmp_path / "themes"
    themes_dir.mkdir()
    for theme in Theme:
        (tmp_path / theme.value).write_text(f"/* {theme.name} */", encoding="utf-8")
    return IDEController(ThemeManager(tmp_path, applied.append))


def _add(ctrl, type_name, name="", selected=None):
    info = ctrl.components.create_component(type_name, name)
    return ctrl.add_component(info, selected)


def test_first_component_creates_project_root(controller):
    host = _add(controller, HOST_MODULE)
    root = controller.project.root_item
    assert root.text == "新项目"
    assert host.parent is root
    assert host.data == HOST_MODULE
    assert host.icon == ":/icons/host.png"
    assert controller.project.unsaved_changes is True
    assert controller.status_message == "已添加组件: 主机模块"


def test_second_level_without_host_is_rejected(controller):
    with pytest.raises(ComponentError):
        _add(controller, "DIModule")
    host = _add(controller, HOST_MODULE)
    assert len(host) == 0
    di = _add(controller, "DIModule")
    assert di.parent is host
    assert len(host) == 1


def test_second_level_goes_under_first_host(controller):
    host = _add(controller, HOST_MODULE)
    di = _add(controller, "DIModule", "输入一")
    assert di.parent is host
    assert di.text == "输入一"


def test_second_level_goes_under_selected_host(controller):
    _add(controller, HOST_MODULE, "A")
    second = _add(controller, HOST_MODULE, "B")
    do = _add(controller, "DOModule", selected=second)
    assert do.parent is second
    assert len(second) == 1


def test_non_host_selection_falls_back_to_host(controller):
    host = _add(controller, HOST_MODULE)
    di = _add(controller, "DIModule")
    do = _add(controller, "DOModule", selected=di)
    assert do.parent is host


def test_delete_component(controller):
    host = _add(controller, HOST_MODULE)
    di = _add(controller, "DIModule")
    controller.project.unsaved_changes = False
    controller.delete_component(di)
    assert len(host) == 0
    assert controller.project.unsaved_changes is True
    assert controller.status_message == "组件已删除"


def test_delete_root_or_none_is_rejected(controller):
    _add(controller, HOST_MODULE)
    with pytest.raises(ComponentError):
        controller.delete_component(controller.project.root_item)
    with pytest.raises(ComponentError):
        controller.delete_component(None)


def test_move_component_to_other_host(controller):
    first = _add(controller, HOST_MODULE, "A")
    second = _add(controller, HOST_MODULE, "B")
    di = _add(controller, "DIModule", "X", selected=first)
    moved = controller.move_component(di, second)
    assert moved.parent is second
    assert (moved.text, moved.data) == ("X", "DIModule")
    assert len(first) == 0


def test_move_into_itself_is_rejected(controller):
    host = _add(controller, HOST_MODULE)
    di = _add(controller, "DIModule")
    with pytest.raises(ComponentError):
        controller.move_component(host, di)
    with pytest.raises(ComponentError):
        controller.move_component(di, di)


def test_move_up_and_down(controller):
    host = _add(controller, HOST_MODULE)
    di = _add(controller, "DIModule")
    do = _add(controller, "DOModule")
    assert controller.move_up(di) is False
    assert controller.move_up(do) is True
    assert host.children == (do, di)
    assert controller.move_down(di) is False
    assert controller.move_down(do) is True
    assert host.children == (di, do)


def test_move_up_of_root_is_rejected(controller):
    _add(controller, HOST_MODULE)
    with pytest.raises(ComponentError):
        controller.move_up(controller.project.root_item)


def test_rename_project(controller):
    _add(controller, HOST_MODULE)
    assert controller.rename_project("机柜") is True
    assert controller.project.root_item.text == "机柜"
    assert controller.rename_project("") is False
    assert controller.project.root_item.text == "机柜"


def test_rename_empty_project_does_nothing(controller):
    assert controller.rename_project("name") is False
    assert controller.project.root_item is None


def test_set_theme_applies_sheet(controller, applied):
    sheet = controller.set_theme(Theme.ATOM_ONE)
    assert applied == [sheet]
    assert sheet == controller.themes.stylesheet(Theme.ATOM_ONE)
    assert controller.theme is Theme.ATOM_ONE
    assert controller.status_message == "已应用ATOM ONE主题"


def test_cycle_theme_visits_all_and_returns(controller):
    seen = [controller.cycle_theme() for _ in range(3)]
    assert seen == [Theme.ATOM_ONE, Theme.SOLARIZED_LIGHT, Theme.DEFAULT]
    assert controller.themes.current is Theme.DEFAULT