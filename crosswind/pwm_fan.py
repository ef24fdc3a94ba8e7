"""A fan whose speed is set by a PWM duty cycle."""

from __future__ import annotations

from typing import Any

_PWM_MAX = 255


class PWMFan:
    """A fan on a PWM pin, driven through ``writer.write(pin, value)`` in 0..255.

    RPM and speed readings use whole-number ratios of the duty value, so they
    report zero below full duty.
    """

    MAX_RPM = 0xFFFF

    def __init__(self, pwm_pin: int, max_rpm: int, writer: Any) -> None:
        self._pin = pwm_pin
        self._max_rpm = max_rpm & 0xFFFF
        self._writer = writer
        self._pwm = 0
        self.turn_off()

    @property
    def pwm(self) -> int:
        return self._pwm

    def turn_off(self) -> None:
        self._set_pwm(0)

    def max_rpm(self) -> int:
        return self._max_rpm

    def rpm(self) -> int:
        return ((self._pwm // _PWM_MAX) * self._max_rpm) & 0xFFFF

    def set_rpm(self, rpm: int = MAX_RPM) -> None:
        if rpm == self.MAX_RPM or rpm >= self._max_rpm:
            self._set_pwm(_PWM_MAX)
        else:
            self._set_pwm((rpm // self._max_rpm) * _PWM_MAX)

    def speed(self) -> float:
        """Speed in percent."""
        return float((self._pwm // _PWM_MAX) * 100.0)

    def set_speed(self, speed: float = 100.0) -> None:
        """Set the speed in percent."""
        if speed >= 100.0:
            self._set_pwm(_PWM_MAX)
        else:
            self._set_pwm(int((speed / 100) * _PWM_MAX))

    def _set_pwm(self, pwm: int) -> None:
        self._pwm = max(0, min(_PWM_MAX, pwm))
        self._writer.write(self._pin, self._pwm)