"""Per-device history of sampled metrics, kept in fixed-size rings."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class _Series:
    """One ring: storage plus the start (oldest) and end (next free) positions."""

    data: list[int]
    start: int = 0
    end: int = 0


@dataclass
class RingBuffer:
    """Rings of samples, one per device and per kind of data saved.

    A ring of ``buffer_size`` slots keeps at most ``buffer_size - 1`` samples;
    pushing into a full ring drops the oldest one.
    """

    devices_count: int
    per_device_data: int
    buffer_size: int
    _series: list[list[_Series]] = field(init=False, repr=False)

    def __init__(self, devices_count: int, per_device_data: int, buffer_size: int) -> None:
        if devices_count < 0 or per_device_data < 0:
            raise ValueError("counts must not be negative")
        if buffer_size < 1:
            raise ValueError("buffer size must be at least 1")
        self.devices_count = devices_count
        self.per_device_data = per_device_data
        self.buffer_size = buffer_size
        self._series = [
            [_Series([0] * buffer_size) for _ in range(per_device_data)]
            for _ in range(devices_count)
        ]

    def _get_series(self, device: int, which_data: int) -> _Series:
        if not 0 <= device < self.devices_count:
            raise IndexError(f"device {device} out of range")
        if not 0 <= which_data < self.per_device_data:
            raise IndexError(f"data series {which_data} out of range")
        return self._series[device][which_data]

    def _stored(self, series: _Series) -> int:
        length = series.end - series.start
        if series.end < series.start:
            length += self.buffer_size
        return length

    def data_stored(self, device: int, which_data: int) -> int:
        """Number of samples currently held for one series."""
        return self._stored(self._get_series(device, which_data))

    def get(self, device: int, which_data: int, index: int) -> int:
        """The ``index``-th oldest sample of a series."""
        series = self._get_series(device, which_data)
        if not 0 <= index < self._stored(series):
            raise IndexError(f"sample {index} out of range")
        location = series.start + index
        if location >= self.buffer_size:
            location -= self.buffer_size
        return series.data[location]

    def values(self, device: int, which_data: int) -> list[int]:
        """All samples of a series, oldest first."""
        stored = self.data_stored(device, which_data)
        return [self.get(device, which_data, index) for index in range(stored)]

    def push(self, device: int, which_data: int, value: int) -> None:
        """Append a sample, dropping the oldest one if the ring is full."""
        series = self._get_series(device, which_data)
        series.data[series.end] = value
        series.end = (series.end + 1) % self.buffer_size
        if series.end == series.start:
            series.start = (series.start + 1) % self.buffer_size

    def pop(self, device: int, which_data: int) -> None:
        """Drop the oldest sample, if any."""
        series = self._get_series(device, which_data)
        if series.start != series.end:
            series.start = (series.start + 1) % self.buffer_size

    def clear_series(self, device: int, which_data: int) -> None:
        """Forget every sample of one series."""
        series = self._get_series(device, which_data)
        series.start = 0
        series.end = 0

    def clear_device(self, device: int) -> None:
        """Forget every sample of every series of a device."""
        for which_data in range(self.per_device_data):
            self.clear_series(device, which_data)