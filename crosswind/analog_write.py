"""PWM output on pins through a pool of sixteen LED-controller channels."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

_CHANNEL_COUNT = 16
_UINT32_MASK = 0xFFFFFFFF


class LedcBackend(ABC):
    """The PWM hardware that channels are configured on."""

    @abstractmethod
    def setup(self, channel: int, frequency: float, resolution: int) -> None:
        """Configure a channel's frequency and duty resolution in bits."""

    @abstractmethod
    def attach_pin(self, pin: int, channel: int) -> None:
        """Route a channel's output to a pin."""

    @abstractmethod
    def write(self, channel: int, duty: int) -> None:
        """Set a channel's duty cycle."""


@dataclass
class AnalogWriteChannel:
    """Configuration of one PWM channel; ``pin`` is -1 while free."""

    pin: int = -1
    frequency: float = 5000.0
    resolution: int = 13


class AnalogWriter:
    """Assigns pins to channels on first use and writes duty cycles."""

    def __init__(self, backend: LedcBackend) -> None:
        self._backend = backend
        self._channels = [AnalogWriteChannel() for _ in range(_CHANNEL_COUNT)]

    @property
    def channels(self) -> tuple[AnalogWriteChannel, ...]:
        return tuple(self._channels)

    def channel(self, pin: int) -> int | None:
        """The channel driving ``pin``, attaching a free one if needed; None if all are taken."""
        for index, entry in enumerate(self._channels):
            if entry.pin == pin:
                return index
        for index, entry in enumerate(self._channels):
            if entry.pin == -1:
                entry.pin = pin
                self._backend.setup(index, entry.frequency, entry.resolution)
                self._backend.attach_pin(pin, index)
                return index
        return None

    def set_frequency(self, frequency: float, pin: int | None = None) -> None:
        """Set the frequency of every channel, or only of the channel for ``pin``."""
        if pin is None:
            for entry in self._channels:
                entry.frequency = frequency
            return
        index = self.channel(pin)
        if index is not None:
            self._channels[index].frequency = frequency

    def set_resolution(self, resolution: int, pin: int | None = None) -> None:
        """Set the resolution of every channel, or only of the channel for ``pin``."""
        if pin is None:
            for entry in self._channels:
                entry.resolution = resolution
            return
        index = self.channel(pin)
        if index is not None:
            self._channels[index].resolution = resolution

    def write(self, pin: int, value: int, value_max: int = 255) -> None:
        """Write ``value`` out of ``value_max`` as a duty cycle; nothing if no channel is free."""
        if value_max <= 0:
            raise ValueError("value_max must be positive")
        index = self.channel(pin)
        if index is None:
            return
        levels = (1 << self._channels[index].resolution) & _UINT32_MASK
        duty = (((levels - 1) & _UINT32_MASK) // value_max) * min(value, value_max)
        self._backend.write(index, duty & _UINT32_MASK)