import pytest

from gputop.cli import (
    MAX_UPDATE_INTERVAL,
    MIN_UPDATE_INTERVAL,
    CommandLine,
    UsageError,
    apply_to_options,
    help_text,
    parse_arguments,
)
from gputop.options import InterfaceOptions


def _options():
    options = InterfaceOptions.for_devices(["pdev0", "pdev1"], config_location="unused.ini")
    for gpu in options.gpus:
        gpu.to_draw = 3
    return options


def test_no_arguments_gives_defaults():
    assert parse_arguments([]) == CommandLine()


def test_delay_in_tenths_of_seconds():
    assert parse_arguments(["-d", "5"]).update_interval == 500
    assert parse_arguments(["--delay=5"]).update_interval == 500
    assert parse_arguments(["-d5"]).update_interval == 500


def test_delay_is_clamped():
    assert parse_arguments(["-d", "0"]).update_interval == MIN_UPDATE_INTERVAL
    assert parse_arguments(["-d", "100000"]).update_interval == MAX_UPDATE_INTERVAL


def test_delay_accepts_base_prefixes():
    assert parse_arguments(["-d", "0x10"]).update_interval == parse_arguments(["-d", "16"]).update_interval
    assert parse_arguments(["-d", "010"]).update_interval == parse_arguments(["-d", "8"]).update_interval


def test_delay_errors():
    with pytest.raises(UsageError, match="time machine"):
        parse_arguments(["-d", "-3"])
    with pytest.raises(UsageError, match="positive value"):
        parse_arguments(["-d", "abc"])
    with pytest.raises(UsageError, match="delay option"):
        parse_arguments(["-d"])


def test_unknown_option_is_an_error():
    with pytest.raises(UsageError):
        parse_arguments(["-z"])


def test_flags():
    result = parse_arguments(["-C", "-f", "-p", "-r", "-c", "conf.ini"])
    assert result.no_color and result.use_fahrenheit
    assert result.hide_plot and result.reverse_plot
    assert result.config_file == "conf.ini"


def test_long_flags_and_colour_spelling():
    result = parse_arguments(["--no-colour", "--freedom-unit", "--config-file", "a.ini"])
    assert result.no_color is True
    assert result.use_fahrenheit is True
    assert result.config_file == "a.ini"
    assert parse_arguments(["--no-color"]).no_color is True


def test_clustered_short_flags():
    result = parse_arguments(["-Cf"])
    assert (result.no_color, result.use_fahrenheit) == (True, True)


def test_encode_hide_values():
    assert parse_arguments(["-E", "12.5"]).encode_decode_hide_time == 12.5
    assert parse_arguments(["--encode-hide", "-1"]).encode_decode_hide_time == -1.0


def test_encode_hide_unparsable_keeps_previous():
    assert parse_arguments(["-E", "abc"]).encode_decode_hide_time == -1.0
    assert parse_arguments(["-E", "7", "-E", "abc"]).encode_decode_hide_time == 7.0


def test_encode_hide_empty_is_error():
    with pytest.raises(UsageError, match="encode/decode hide time"):
        parse_arguments(["-E", ""])


def test_version_and_help_stop_parsing():
    assert parse_arguments(["-v"]).show_version is True
    result = parse_arguments(["-h", "-C"])
    assert result.show_help is True
    assert result.no_color is False


def test_help_text():
    text = help_text()
    assert text.startswith("gputop version ")
    assert "Available options:\n" in text
    assert "--encode-hide" in text


def test_apply_overrides_options():
    options = _options()
    apply_to_options(parse_arguments(["-C", "-p", "-r", "-f", "-d", "20", "-E", "-4"]), options)
    assert options.use_color is False
    assert [gpu.to_draw for gpu in options.gpus] == [0, 0]
    assert options.plot_left_to_right is True
    assert options.temperature_in_fahrenheit is True
    assert options.update_interval == 2000
    assert options.encode_decode_hiding_timer == 0.0


def test_apply_without_options_keeps_settings():
    options = _options()
    before = (options.use_color, options.update_interval, options.encode_decode_hiding_timer)
    apply_to_options(CommandLine(), options)
    assert (options.use_color, options.update_interval, options.encode_decode_hiding_timer) == before
    assert [gpu.to_draw for gpu in options.gpus] == [3, 3]


def test_apply_positive_hide_time():
    options = _options()
    apply_to_options(parse_arguments(["-E", "12.5"]), options)
    assert options.encode_decode_hiding_timer == 12.5