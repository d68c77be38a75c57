import pytest

from gputop import fields
from gputop.fields import PlotInformation, ProcessField


def test_plot_add_then_remove():
    to_draw = fields.plot_add(PlotInformation.FAN_SPEED, 0)
    assert fields.plot_is_set(PlotInformation.FAN_SPEED, to_draw)
    assert not fields.plot_is_set(PlotInformation.GPU_RATE, to_draw)
    to_draw = fields.plot_remove(PlotInformation.FAN_SPEED, to_draw)
    assert not fields.plot_is_set(PlotInformation.FAN_SPEED, to_draw)


def test_plot_add_is_capped():
    to_draw = 0
    for info in PlotInformation:
        to_draw = fields.plot_add(info, to_draw)
    assert fields.plot_count(to_draw) == fields.MAX_LINES_PER_PLOT
    assert not fields.plot_is_set(PlotInformation.GPU_MEM_CLOCK_RATE, to_draw)


def test_plot_default_is_gpu_and_memory_rate():
    default = fields.plot_default()
    selected = [info for info in PlotInformation if fields.plot_is_set(info, default)]
    assert selected == [PlotInformation.GPU_RATE, PlotInformation.GPU_MEM_RATE]


def test_sentinel_bit_not_counted():
    to_draw = fields.plot_add(fields.PLOT_INFORMATION_COUNT, 0)
    assert fields.plot_is_set(fields.PLOT_INFORMATION_COUNT, to_draw)
    assert fields.plot_count(to_draw) == 0


def test_process_add_remove_round_trip():
    displayed = fields.process_field_add(ProcessField.COMMAND, 0)
    assert fields.process_field_is_displayed(ProcessField.COMMAND, displayed)
    assert fields.process_field_remove(ProcessField.COMMAND, displayed) == 0


def test_process_default_displayed():
    displayed = fields.process_default_displayed()
    assert not fields.process_field_is_displayed(ProcessField.ENC_RATE, displayed)
    assert not fields.process_field_is_displayed(ProcessField.DEC_RATE, displayed)
    assert fields.process_displayed_count(displayed) == len(ProcessField) - 2


def test_displayed_count_ignores_sentinel():
    displayed = fields.process_field_add(fields.PROCESS_FIELD_COUNT, 0)
    assert fields.process_displayed_count(displayed) == 0


def test_default_sort_preference_order():
    displayed = 0
    for field in ProcessField:
        displayed = fields.process_field_add(field, displayed)
    order = []
    while (chosen := fields.default_sort_field(displayed)) is not None:
        order.append(chosen)
        displayed = fields.process_field_remove(chosen, displayed)
    assert order == [
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
    ]


@pytest.mark.parametrize("field", list(ProcessField))
def test_default_sort_single_field(field):
    assert fields.default_sort_field(fields.process_field_add(field, 0)) is field


def test_default_sort_nothing_displayed():
    assert fields.default_sort_field(0) is None