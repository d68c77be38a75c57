"""Command-line options of the monitor and how they override the saved settings."""

from __future__ import annotations

import getopt
import re
import sys
from collections.abc import Sequence
from dataclasses import dataclass

from gputop.options import InterfaceOptions

VERSION = "1.0.0"
VERSION_STRING = f"gputop version {VERSION}"

MIN_UPDATE_INTERVAL = 100
MAX_UPDATE_INTERVAL = 99900

HELP_STRING = (
    "Available options:\n"
    "  -d --delay        : Select the refresh rate (1 == 0.1s)\n"
    "  -v --version      : Print the version and exit\n"
    "  -c --config-file  : Provide a custom config file location to load/save preferences\n"
    "  -p --no-plot      : Disable bar plot\n"
    "  -r --reverse-abs  : Reverse abscissa: plot the recent data left and older on the right\n"
    "  -C --no-color     : No colors\n"
    "line information\n"
    "  -f --freedom-unit : Use fahrenheit\n"
    "  -E --encode-hide  : Set encode/decode auto hide time in seconds "
    "(default 30s, negative = always on screen)\n"
    "  -h --help         : Print help and exit\n"
)

_SHORT_OPTIONS = "hvd:c:CfE:pr"
_LONG_OPTIONS = {
    "delay": "d",
    "version": "v",
    "help": "h",
    "config-file": "c",
    "no-color": "C",
    "no-colour": "C",
    "freedom-unit": "f",
    "encode-hide": "E",
    "no-plot": "p",
    "reverse-abs": "r",
}
_LONG_WITH_ARGUMENT = {"delay", "config-file", "encode-hide"}

_DELAY_RE = re.compile(r"\s*([+-]?)(0[xX][0-9a-fA-F]+|0[0-7]*|[1-9][0-9]*)")
_FLOAT_RE = re.compile(
    r"\s*([+-]?(?:0[xX](?:[0-9a-fA-F]+\.?[0-9a-fA-F]*|\.[0-9a-fA-F]+)(?:[pP][+-]?\d+)?"
    r"|\d+\.?\d*(?:[eE][+-]?\d+)?|\.\d+(?:[eE][+-]?\d+)?|inf(?:inity)?|nan))",
    re.IGNORECASE,
)


class UsageError(Exception):
    """The command line cannot be used; the message says why."""


@dataclass
class CommandLine:
    """What the command line asked for. None means 'keep the saved setting'."""

    update_interval: int | None = None
    config_file: str | None = None
    no_color: bool = False
    use_fahrenheit: bool = False
    hide_plot: bool = False
    reverse_plot: bool = False
    encode_decode_hide_time: float | None = None
    show_version: bool = False
    show_help: bool = False


def help_text() -> str:
    """The text printed for --help."""
    return f"{VERSION_STRING}\n{HELP_STRING}"


def _parse_delay(text: str) -> int:
    match = _DELAY_RE.match(text)
    if match is None:
        raise UsageError(
            "Error: The delay must be a positive value representing tenths of seconds"
        )
    sign, digits = match.groups()
    if digits[:2].lower() == "0x":
        value = int(digits[2:], 16)
    elif digits.startswith("0"):
        value = int(digits, 8)
    else:
        value = int(digits)
    if sign == "-":
        value = -value
    if value < 0:
        raise UsageError("Error: A negative delay requires a time machine!")
    return min(max(value * 100, MIN_UPDATE_INTERVAL), MAX_UPDATE_INTERVAL)


def _parse_hide_time(text: str, previous: float) -> float:
    if not text.strip():
        raise UsageError(f"Invalid format for encode/decode hide time: {text}")
    match = _FLOAT_RE.match(text)
    if match is None:
        return previous
    number = match.group(1)
    if "x" in number.lower():
        negative = number.startswith("-")
        value = float.fromhex(number.lstrip("+-"))
        return -value if negative else value
    return float(number)


def parse_arguments(argv: Sequence[str] | None = None) -> CommandLine:
    """Read the options (without the program name); raises UsageError on bad input."""
    args = list(sys.argv[1:] if argv is None else argv)
    long_specs = [name + ("=" if name in _LONG_WITH_ARGUMENT else "") for name in _LONG_OPTIONS]
    try:
        parsed, _ = getopt.gnu_getopt(args, _SHORT_OPTIONS, long_specs)
    except getopt.GetoptError as error:
        if error.opt in ("d", "delay"):
            raise UsageError(
                "Error: The delay option takes a positive value representing tenths of seconds"
            ) from error
        raise UsageError("Unhandled error in getopt missing argument") from error

    command_line = CommandLine()
    hide_time = -1.0
    for option, value in parsed:
        letter = _LONG_OPTIONS[option[2:]] if option.startswith("--") else option[1:]
        if letter == "d":
            command_line.update_interval = _parse_delay(value)
        elif letter == "v":
            command_line.show_version = True
            return command_line
        elif letter == "h":
            command_line.show_help = True
            return command_line
        elif letter == "c":
            command_line.config_file = value
        elif letter == "C":
            command_line.no_color = True
        elif letter == "f":
            command_line.use_fahrenheit = True
        elif letter == "E":
            hide_time = _parse_hide_time(value, hide_time)
            command_line.encode_decode_hide_time = hide_time
        elif letter == "p":
            command_line.hide_plot = True
        elif letter == "r":
            command_line.reverse_plot = True
    return command_line


def apply_to_options(command_line: CommandLine, options: InterfaceOptions) -> None:
    """Override the loaded settings with what the command line asked for."""
    if command_line.no_color:
        options.use_color = False
    if command_line.hide_plot:
        for gpu in options.gpus:
            gpu.to_draw = 0
    if command_line.encode_decode_hide_time is not None:
        options.encode_decode_hiding_timer = max(command_line.encode_decode_hide_time, 0.0)
    if command_line.reverse_plot:
        options.plot_left_to_right = True
    if command_line.use_fahrenheit:
        options.temperature_in_fahrenheit = True
    if command_line.update_interval is not None:
        options.update_interval = command_line.update_interval