import pytest

from ctrlide.project import PROJECT_HEADER, ProjectManager, TreeItem


def make_tree():
    root = TreeItem("root")
    a, b, c = TreeItem("a", "A"), TreeItem("b", "B"), TreeItem("c", "C")
    for item in (a, b, c):
        root.append(item)
    return root, a, b, c


def test_append_sets_parent_and_row():
    root, a, b, c = make_tree()
    assert [i.text for i in root] == ["a", "b", "c"]
    assert c.parent is root
    assert (a.row, b.row, c.row) == (0, 1, 2)
    assert root.row is None


def test_insert_and_take():
    root, a, b, c = make_tree()
    taken = root.take(2)
    assert taken is c
    assert c.parent is None
    root.insert(0, taken)
    assert [i.text for i in root] == ["c", "a", "b"]


def test_remove():
    root, a, b, c = make_tree()
    root.remove(1)
    assert root.children == (a, c)
    assert b.parent is None


def test_out_of_range_rows():
    root, *_ = make_tree()
    with pytest.raises(IndexError):
        root.take(3)
    with pytest.raises(IndexError):
        root.insert(5, TreeItem("x"))


def test_insert_item_with_parent_rejected():
    root, a, *_ = make_tree()
    other = TreeItem("other")
    with pytest.raises(ValueError):
        other.append(a)


def test_insert_into_own_descendant_rejected():
    root, a, *_ = make_tree()
    with pytest.raises(ValueError):
        a.append(root)


def test_find_child():
    root, a, b, c = make_tree()
    assert root.find_child("B") is b
    assert root.find_child("Z") is None


def test_manager_initial_state():
    manager = ProjectManager()
    assert manager.model.text == PROJECT_HEADER
    assert manager.root_item is None
    assert manager.path is None
    assert manager.unsaved_changes is False


def test_rename_empty_project_does_nothing():
    manager = ProjectManager()
    manager.rename_project("x")
    assert manager.unsaved_changes is False
    assert len(manager.model) == 0


def test_rename_project_marks_unsaved():
    manager = ProjectManager()
    manager.model.append(TreeItem("新项目"))
    manager.rename_project("plant")
    assert manager.root_item.text == "plant"
    assert manager.unsaved_changes is True


def test_save_load_round_trip(tmp_path):
    path = tmp_path / "p.xml"
    manager = ProjectManager()
    root = TreeItem("新项目")
    host = TreeItem("主机模块", "HostModule")
    host.icon = ":/icons/host.png"
    di = TreeItem("DI模块", "DIModule")
    host.append(di)
    root.append(host)
    manager.model.append(root)
    manager.unsaved_changes = True
    manager.save_project(path)
    assert manager.path == str(path)
    assert manager.unsaved_changes is False

    loaded = ProjectManager()
    loaded.unsaved_changes = True
    loaded.load_project(path)
    assert loaded.path == str(path)
    assert loaded.unsaved_changes is False
    loaded_root = loaded.root_item
    assert loaded_root.text == root.text and loaded_root.data is None
    loaded_host = loaded_root[0]
    assert (loaded_host.text, loaded_host.data, loaded_host.icon) == (
        host.text,
        host.data,
        host.icon,
    )
    assert [(i.text, i.data) for i in loaded_host] == [(di.text, di.data)]


def test_load_replaces_existing_tree(tmp_path):
    path = tmp_path / "p.xml"
    source = ProjectManager()
    source.model.append(TreeItem("one"))
    source.save_project(path)

    target = ProjectManager()
    target.model.append(TreeItem("old"))
    target.model.append(TreeItem("older"))
    target.load_project(path)
    assert [i.text for i in target.model] == ["one"]


def test_load_rejects_other_xml(tmp_path):
    path = tmp_path / "p.xml"
    path.write_text("<other/>", encoding="utf-8")
    with pytest.raises(ValueError):
        ProjectManager().load_project(path)


def test_new_project_clears_path(tmp_path):
    manager = ProjectManager()
    manager.save_project(tmp_path / "p.xml")
    manager.unsaved_changes = True
    manager.new_project()
    assert manager.path is None
    assert manager.unsaved_changes is False