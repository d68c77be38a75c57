"""Plot metrics and process-list columns, and the bit sets that select them."""

from __future__ import annotations

from enum import IntEnum

MAX_LINES_PER_PLOT = 4


class PlotInformation(IntEnum):
    """A metric that can be drawn in a device chart."""

    GPU_RATE = 0
    GPU_MEM_RATE = 1
    ENCODER_RATE = 2
    DECODER_RATE = 3
    GPU_TEMPERATURE = 4
    GPU_POWER_DRAW_RATE = 5
    FAN_SPEED = 6
    GPU_CLOCK_RATE = 7
    GPU_MEM_CLOCK_RATE = 8


class ProcessField(IntEnum):
    """A column of the process list."""

    PID = 0
    USER = 1
    GPU_ID = 2
    TYPE = 3
    GPU_RATE = 4
    ENC_RATE = 5
    DEC_RATE = 6
    MEMORY = 7
    CPU_USAGE = 8
    CPU_MEM_USAGE = 9
    COMMAND = 10


# One past the last real member; its bit marks a set as explicitly configured.
PLOT_INFORMATION_COUNT = len(PlotInformation)
PROCESS_FIELD_COUNT = len(ProcessField)

_SORT_PREFERENCE = (
    ProcessField.MEMORY,
    ProcessField.CPU_MEM_USAGE,
    ProcessField.GPU_RATE,
    ProcessField.CPU_USAGE,
    ProcessField.COMMAND,
    ProcessField.TYPE,
    ProcessField.ENC_RATE,
    ProcessField.DEC_RATE,
    ProcessField.USER,
    ProcessField.GPU_ID,
    ProcessField.PID,
)


def plot_is_set(info: int, to_draw: int) -> bool:
    """True if the metric ``info`` is in the set ``to_draw``."""
    return (to_draw & (1 << info)) > 0


def plot_count(to_draw: int) -> int:
    """Number of real metrics in ``to_draw``."""
    return sum(1 for info in PlotInformation if plot_is_set(info, to_draw))


def plot_add(info: int, to_draw: int) -> int:
    """Add ``info`` unless the set already holds the maximum number of metrics."""
    if plot_count(to_draw) < MAX_LINES_PER_PLOT:
        return to_draw | (1 << info)
    return to_draw


def plot_remove(info: int, to_draw: int) -> int:
    """Remove ``info`` from the set."""
    return to_draw & ~(1 << info)


def plot_default() -> int:
    """The metrics drawn when nothing was configured."""
    return (1 << PlotInformation.GPU_RATE) | (1 << PlotInformation.GPU_MEM_RATE)


def process_field_is_displayed(field: int, displayed: int) -> bool:
    """True if the column ``field`` is in the set ``displayed``."""
    return (displayed & (1 << field)) > 0


def process_field_add(field: int, displayed: int) -> int:
    """Add the column ``field`` to the set."""
    return displayed | (1 << field)


def process_field_remove(field: int, displayed: int) -> int:
    """Remove the column ``field`` from the set."""
    return displayed & ~(1 << field)


def process_default_displayed() -> int:
    """Every column except the encoder and decoder rates."""
    displayed = 0
    for field in ProcessField:
        displayed = process_field_add(field, displayed)
    displayed = process_field_remove(ProcessField.ENC_RATE, displayed)
    return process_field_remove(ProcessField.DEC_RATE, displayed)


def process_displayed_count(displayed: int) -> int:
    """Number of real columns in ``displayed``."""
    return sum(1 for field in ProcessField if process_field_is_displayed(field, displayed))


def default_sort_field(displayed: int) -> ProcessField | None:
    """The preferred sort column among those displayed, or None if none is."""
    for field in _SORT_PREFERENCE:
        if process_field_is_displayed(field, displayed):
            return field
    return None