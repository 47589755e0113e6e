"""Style-sheet themes loaded from .qss files."""

from __future__ import annotations

from enum import Enum
from os import PathLike
from pathlib import Path
from typing import Callable, Optional, Union


class Theme(Enum):
    """Available themes, valued by their style-sheet path."""

    DEFAULT = "themes/default.qss"
    ATOM_ONE = "themes/atom_one.qss"
    SOLARIZED_LIGHT = "themes/solarized_light.qss"

    @property
    def title(self) -> str:
        return _TITLES[self]


_TITLES = {
    Theme.DEFAULT: "默认主题",
    Theme.ATOM_ONE: "ATOM ONE",
    Theme.SOLARIZED_LIGHT: "Solarized Light",
}


def _read_stylesheet(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError):
        return ""


class ThemeManager:
    """Holds the style sheets of all themes and applies one at a time."""

    def __init__(
        self,
        base_dir: Optional[Union[str, PathLike]] = None,
        on_apply: Optional[Callable[[str], None]] = None,
    ):
        base = Path(base_dir) if base_dir is not None else Path()
        self._on_apply = on_apply
        self._sheets = {theme: _read_stylesheet(base / theme.value) for theme in Theme}
        self.current = Theme.DEFAULT

    def apply(self, theme: Theme) -> str:
        """Make *theme* current, hand its style sheet to the callback and return it."""
        theme = Theme(theme)
        sheet = self._sheets[theme]
        if self._on_apply is not None:
            self._on_apply(sheet)
        self.current = theme
        return sheet

    def stylesheet(self, theme: Theme) -> str:
        """Return the style sheet of *theme*, empty if its file was unreadable."""
        return self._sheets.get(Theme(theme), "")

    def available_themes(self) -> list[str]:
        """Return the display names of all themes."""
        return [theme.title for theme in Theme]