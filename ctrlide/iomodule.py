"""Digital input/output modules: channels of eight bit variables each."""

from __future__ import annotations

import contextlib
import dataclasses
import json
from dataclasses import dataclass, field
from os import PathLike
from pathlib import Path
from typing import Any, Union

BITS_PER_CHANNEL = 8
CHANNEL_COUNTS = (8, 16, 32)
DEFAULT_CHANNEL_COUNT = 8

PathArg = Union[str, PathLike]


@dataclass
class BitVariable:
    """A named variable bound to one bit of a channel."""

    name: str = ""
    description: str = ""
    is_global: bool = True
    value: int = 0


def _blank_bits() -> list[BitVariable]:
    return [BitVariable() for _ in range(BITS_PER_CHANNEL)]


@dataclass
class Channel:
    """One channel of a module, holding eight bit variables."""

    number: int
    bits: list[BitVariable] = field(default_factory=_blank_bits)


def _json_int(value: Any) -> int:
    if isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value)
    return 0


def _json_str(value: Any) -> str:
    return value if isinstance(value, str) else ""


def _json_bool(value: Any) -> bool:
    return value if isinstance(value, bool) else False


def _json_object(value: Any) -> dict:
    return value if isinstance(value, dict) else {}


def _bit_from_json(raw: Any) -> BitVariable:
    obj = _json_object(raw)
    return BitVariable(
        name=_json_str(obj.get("name")),
        description=_json_str(obj.get("description")),
        is_global=_json_bool(obj.get("isGlobal")),
        value=_json_int(obj["value"]) if "value" in obj else 0,
    )


class IOModule:
    """A module with 8, 16 or 32 channels of bit variables."""

    kind = "IO"

    def __init__(self):
        self._channels = [Channel(i) for i in range(DEFAULT_CHANNEL_COUNT)]

    @property
    def channel_count(self) -> int:
        return len(self._channels)

    @property
    def channels(self) -> tuple[Channel, ...]:
        return tuple(self._channels)

    def set_channel_count(self, count: int) -> None:
        """Resize to *count* channels, keeping the channels that remain."""
        if isinstance(count, bool) or count not in CHANNEL_COUNTS:
            raise ValueError(
                f"channel count must be one of {CHANNEL_COUNTS}, not {count!r}"
            )
        del self._channels[count:]
        self._channels.extend(
            Channel(i) for i in range(len(self._channels), count)
        )
        for number, channel in enumerate(self._channels):
            channel.number = number

    def _check_channel(self, number: int) -> None:
        if not 0 <= number < self.channel_count:
            raise IndexError(
                f"channel {number} out of range 0..{self.channel_count - 1}"
            )

    @staticmethod
    def _check_bit(bit: int) -> None:
        if not 0 <= bit < BITS_PER_CHANNEL:
            raise IndexError(f"bit {bit} out of range 0..{BITS_PER_CHANNEL - 1}")

    def channel(self, number: int) -> Channel:
        """Return the channel with the given number."""
        self._check_channel(number)
        return self._channels[number]

    def set_bit(self, channel: int, bit: int, variable: BitVariable) -> None:
        """Store a copy of *variable* at the given channel and bit."""
        self._check_channel(channel)
        self._check_bit(bit)
        self._channels[channel].bits[bit] = dataclasses.replace(variable)

    def get_bit(self, channel: int, bit: int) -> BitVariable:
        """Return a copy of the variable at the given channel and bit."""
        self._check_channel(channel)
        self._check_bit(bit)
        return dataclasses.replace(self._channels[channel].bits[bit])

    def to_dict(self) -> dict:
        """Return the configuration as a JSON-ready dictionary."""
        return {
            "channelCount": self.channel_count,
            "channels": [
                {
                    "channelNumber": channel.number,
                    "bits": [
                        {
                            "name": bit.name,
                            "description": bit.description,
                            "isGlobal": bit.is_global,
                            "value": bit.value,
                        }
                        for bit in channel.bits
                    ],
                }
                for channel in self._channels
            ],
        }

    def load_dict(self, data: dict) -> None:
        """Apply a configuration dictionary, ignoring entries that do not fit."""
        if not isinstance(data, dict):
            raise TypeError("configuration must be a dictionary")
        if "channelCount" in data:
            with contextlib.suppress(ValueError):
                self.set_channel_count(_json_int(data["channelCount"]))
        channels = data.get("channels")
        if not isinstance(channels, list):
            return
        for raw_channel in channels[: self.channel_count]:
            entry = _json_object(raw_channel)
            number = _json_int(entry.get("channelNumber"))
            bits = entry.get("bits")
            if not isinstance(bits, list) or not 0 <= number < self.channel_count:
                continue
            target = self._channels[number].bits
            for bit, raw_bit in enumerate(bits[:BITS_PER_CHANNEL]):
                target[bit] = _bit_from_json(raw_bit)

    def save(self, path: PathArg) -> None:
        """Write the configuration to a JSON file."""
        text = json.dumps(self.to_dict(), indent=4, ensure_ascii=False)
        Path(path).write_text(text + "\n", encoding="utf-8")

    def load(self, path: PathArg) -> None:
        """Read the configuration from a JSON file."""
        data = json.loads(Path(path).read_text(encoding="utf-8"))
        if not isinstance(data, dict):
            raise ValueError(f"{path}: configuration is not a JSON object")
        self.load_dict(data)


class DIModule(IOModule):
    """Digital input module."""

    kind = "DI"


class DOModule(IOModule):
    """Digital output module."""

    kind = "DO"