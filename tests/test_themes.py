import pytest

from ctrlide.themes import Theme, ThemeManager


@pytest.fixture
def theme_dir(tmp_path):
    themes = tmp_path / "themes"
    themes.mkdir()
    (themes / "default.qss").write_text("QWidget { color: black; }", encoding="utf-8")
    (themes / "atom_one.qss").write_text("QWidget { color: white; }", encoding="utf-8")
    return tmp_path


def test_stylesheets_loaded_from_files(theme_dir):
    manager = ThemeManager(theme_dir)
    assert manager.stylesheet(Theme.DEFAULT) == "QWidget { color: black; }"
    assert manager.stylesheet(Theme.ATOM_ONE) == "QWidget { color: white; }"


def test_missing_file_gives_empty_stylesheet(theme_dir):
    manager = ThemeManager(theme_dir)
    assert manager.stylesheet(Theme.SOLARIZED_LIGHT) == ""


def test_apply_calls_back_and_sets_current(theme_dir):
    applied = []
    manager = ThemeManager(theme_dir, applied.append)
    assert manager.current is Theme.DEFAULT
    result = manager.apply(Theme.ATOM_ONE)
    assert applied == ["QWidget { color: white; }"]
    assert result == applied[0]
    assert manager.current is Theme.ATOM_ONE


def test_apply_without_callback(theme_dir):
    manager = ThemeManager(theme_dir)
    manager.apply(Theme.SOLARIZED_LIGHT)
    assert manager.current is Theme.SOLARIZED_LIGHT


def test_apply_rejects_unknown_theme(theme_dir):
    manager = ThemeManager(theme_dir)
    with pytest.raises(ValueError):
        manager.apply("themes/unknown.qss")
    assert manager.current is Theme.DEFAULT


def test_available_themes(tmp_path):
    assert ThemeManager(tmp_path).available_themes() == [
        "默认主题",
        "ATOM ONE",
        "Solarized Light",
    ]


def test_theme_paths():
    assert Theme("themes/default.qss") is Theme.DEFAULT
    assert Theme("themes/solarized_light.qss").title == "Solarized Light"