"""Editing state for the channel/bit tables of DI and DO modules."""

from __future__ import annotations

from dataclasses import dataclass, replace

from .iomodule import BITS_PER_CHANNEL, CHANNEL_COUNTS, DIModule, DOModule, IOModule

BIT_COLUMN = 0
NAME_COLUMN = 1
VALUE_COLUMN = 2
DESCRIPTION_COLUMN = 3
COLUMN_HEADERS = ("位", "变量名", "值", "描述")
VALUE_CHOICES = (0, 1)


@dataclass(frozen=True)
class BitRow:
    """One row of the bit table as it is shown to the user."""

    bit: int
    name: str
    value: int
    description: str


class ChannelEditor:
    """Edits the bit variables of one module, one channel at a time."""

    title = "模块配置"

    def __init__(self, module: IOModule):
        self.module = module
        self.current_channel = 0

    def channel_count_options(self) -> list[tuple[str, int]]:
        """Return the selectable channel counts with their labels."""
        return [(f"{count}通道", count) for count in CHANNEL_COUNTS]

    def channel_labels(self) -> list[str]:
        """Return a label for every channel of the module."""
        return [f"通道 {number}" for number in range(self.module.channel_count)]

    def set_channel_count(self, count: int) -> None:
        """Resize the module and go back to the first channel."""
        self.module.set_channel_count(count)
        self.current_channel = 0

    def select_channel(self, index: int) -> None:
        """Make channel *index* the one being edited."""
        if not 0 <= index < self.module.channel_count:
            raise IndexError(
                f"channel {index} out of range 0..{self.module.channel_count - 1}"
            )
        self.current_channel = index

    def rows(self) -> list[BitRow]:
        """Return the table rows for the current channel."""
        channel = self.module.channel(self.current_channel)
        return [
            BitRow(bit, variable.name, variable.value, variable.description)
            for bit, variable in enumerate(channel.bits)
        ]

    @staticmethod
    def _check_cell(row: int, column: int) -> None:
        if not 0 <= row < BITS_PER_CHANNEL:
            raise IndexError(f"row {row} out of range 0..{BITS_PER_CHANNEL - 1}")
        if not 0 <= column < len(COLUMN_HEADERS):
            raise IndexError(
                f"column {column} out of range 0..{len(COLUMN_HEADERS) - 1}"
            )

    def edit_cell(self, row: int, column: int, text: str) -> None:
        """Store *text* typed into a cell; only name and description are editable."""
        self._check_cell(row, column)
        if column not in (NAME_COLUMN, DESCRIPTION_COLUMN):
            return
        variable = self.module.get_bit(self.current_channel, row)
        self.module.set_bit(self.current_channel, row, self._edited(variable, column, text))

    def _edited(self, variable, column: int, text: str):
        if column == NAME_COLUMN:
            return replace(variable, name=text)
        return replace(variable, description=text)

    def set_value(self, row: int, value: int) -> None:
        """Set the bit value of *row* to 0 or 1."""
        self._check_cell(row, VALUE_COLUMN)
        if isinstance(value, bool) or value not in VALUE_CHOICES:
            raise ValueError(f"bit value must be 0 or 1, not {value!r}")
        variable = self.module.get_bit(self.current_channel, row)
        self.module.set_bit(self.current_channel, row, replace(variable, value=value))


class DIChannelEditor(ChannelEditor):
    """Editor for a DI module; an edited bit always becomes a global variable."""

    title = "DI模块配置"

    def __init__(self, module: DIModule):
        super().__init__(module)

    def _edited(self, variable, column: int, text: str):
        return replace(super()._edited(variable, column, text), is_global=True)


class DOChannelEditor(ChannelEditor):
    """Editor for a DO module; an edit changes only the cell's own field."""

    title = "DO模块配置"

    def __init__(self, module: DOModule):
        super().__init__(module)