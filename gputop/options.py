"""Interface options: defaults, the configuration file, and monitored-GPU bookkeeping."""

from __future__ import annotations

import os
import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field

from gputop.fields import (
    PLOT_INFORMATION_COUNT,
    PROCESS_FIELD_COUNT,
    PlotInformation,
    ProcessField,
    default_sort_field,
    plot_add,
    plot_default,
    plot_is_set,
    plot_remove,
    process_default_displayed,
    process_field_add,
    process_field_is_displayed,
    process_field_remove,
)
from gputop.inifile import IniEntry, parse_ini_file

PATH_MAX = 4096
CONFIG_FILE_LOCATION = "gputop/interface.ini"
CONFIG_CONF_PATH = ".config"

DO_NOT_MODIFY_NOTICE = (
    "; Please do not edit this file.\n"
    "; The file is automatically generated and modified by gputop by pressing F12.\n"
    "; If you wish to modify an option, use gputop's setup window (F2) and follow "
    "up by saving the preference (F12).\n"
)

GENERAL_SECTION = "GeneralOption"
GENERAL_USE_COLOR = "UseColor"
GENERAL_UPDATE_INTERVAL = "UpdateInterval"
GENERAL_SHOW_MESSAGES = "ShowInfoMessages"

HEADER_SECTION = "HeaderOption"
HEADER_USE_FAHRENHEIT = "UseFahrenheit"
HEADER_ENCODE_DECODE_TIMER = "EncodeHideTimer"

CHART_SECTION = "ChartOption"
CHART_REVERSE = "ReverseChart"

PROCESS_LIST_SECTION = "ProcessListOption"
PROCESS_HIDE_OWN = "HideGputopProcess"
PROCESS_SORT_BY = "SortBy"
PROCESS_DISPLAY_FIELD = "DisplayField"
PROCESS_SORT_ORDER = "SortOrder"
PROCESS_SORT_DESCENDING = "descending"
PROCESS_SORT_ASCENDING = "ascending"

DEVICE_SECTION = "Device"
DEVICE_PDEV = "Pdev"
DEVICE_MONITOR = "Monitor"
DEVICE_SHOWN_INFO = "ShownInfo"

PROCESS_FIELD_NAMES = (
    "pId", "user", "gpuId", "type", "gpuRate", "encRate",
    "decRate", "memory", "cpuUsage", "cpuMem", "cmdline", "none",
)
PLOT_INFORMATION_NAMES = (
    "gpuRate", "gpuMemRate", "encodeRate", "decodeRate", "temperature",
    "powerDrawRate", "fanSpeed", "gpuClockRate", "gpuMemClockRate", "none",
)

_PROCESS_FIELD_INDEX = {name: index for index, name in enumerate(PROCESS_FIELD_NAMES)}
_PLOT_INFORMATION_INDEX = {name: index for index, name in enumerate(PLOT_INFORMATION_NAMES)}

_INT_RE = re.compile(r"\s*([+-]?\d+)")
_FLOAT_RE = re.compile(
    r"\s*([+-]?(?:\d+\.?\d*(?:[eE][+-]?\d+)?|\.\d+(?:[eE][+-]?\d+)?|inf(?:inity)?|nan))",
    re.IGNORECASE,
)


def default_config_path(environ: Mapping[str, str] | None = None) -> str | None:
    """The default configuration file location, or None if it cannot be built."""
    env = os.environ if environ is None else environ
    base = env.get("XDG_CONFIG_HOME")
    conf_part = ""
    if base is None:
        base = env.get("HOME")
        if base is None:
            return None
        conf_part = CONFIG_CONF_PATH + "/"
    path = f"{base}/{conf_part}{CONFIG_FILE_LOCATION}"
    if len(path) >= PATH_MAX:
        return None
    return path


def _parse_bool(value: str, current: bool) -> bool:
    if value == "true":
        return True
    if value == "false":
        return False
    return current


def _scan_int(value: str) -> int | None:
    match = _INT_RE.match(value)
    return int(match.group(1)) if match else None


def _scan_float(value: str) -> float | None:
    match = _FLOAT_RE.match(value)
    return float(match.group(1)) if match else None


def _bool_string(value: bool) -> str:
    return "true" if value else "false"


def _sort_index(sort_by: ProcessField | None) -> int:
    return PROCESS_FIELD_COUNT if sort_by is None else int(sort_by)


@dataclass
class GpuOptions:
    """Per-device settings, tied to the device by its PCI address."""

    pdev: str
    to_draw: int = 0
    do_not_monitor: bool = False


@dataclass
class InterfaceOptions:
    """All user-facing settings of the interface."""

    gpus: list[GpuOptions] = field(default_factory=list)
    config_file_location: str | None = None
    plot_left_to_right: bool = False
    temperature_in_fahrenheit: bool = False
    use_color: bool = True
    encode_decode_hiding_timer: float = 30.0
    sort_processes_by: ProcessField | None = ProcessField.MEMORY
    sort_descending_order: bool = True
    update_interval: int = 1000
    process_fields_displayed: int = 0
    show_startup_messages: bool = True
    filter_own_pid: bool = True
    has_monitored_set_changed: bool = False
    monitored_count: int = 0

    @classmethod
    def for_devices(
        cls, devices: Iterable[str], config_location: str | None = None
    ) -> InterfaceOptions:
        """Default options for the devices given by their PCI addresses."""
        gpus = [GpuOptions(pdev) for pdev in devices]
        location = config_location if config_location is not None else default_config_path()
        return cls(gpus=gpus, config_file_location=location, monitored_count=len(gpus))

    def apply_entries(self, entries: Iterable[IniEntry]) -> None:
        """Apply the values read from a configuration file."""
        selected: GpuOptions | None = None
        for entry in entries:
            section, name, value = entry.section, entry.name, entry.value
            if section == GENERAL_SECTION:
                if name == GENERAL_USE_COLOR:
                    self.use_color = _parse_bool(value, self.use_color)
                if name == GENERAL_UPDATE_INTERVAL:
                    interval = _scan_int(value)
                    if interval is not None:
                        self.update_interval = interval
                if name == GENERAL_SHOW_MESSAGES:
                    self.show_startup_messages = _parse_bool(value, self.show_startup_messages)
            if section == HEADER_SECTION:
                if name == HEADER_USE_FAHRENHEIT:
                    self.temperature_in_fahrenheit = _parse_bool(
                        value, self.temperature_in_fahrenheit
                    )
                if name == HEADER_ENCODE_DECODE_TIMER:
                    timer = _scan_float(value)
                    if timer is not None:
                        self.encode_decode_hiding_timer = timer
            if section == CHART_SECTION and name == CHART_REVERSE:
                self.plot_left_to_right = _parse_bool(value, self.plot_left_to_right)
            if section == PROCESS_LIST_SECTION:
                self._apply_process_entry(name, value)
            if section == DEVICE_SECTION:
                if name == DEVICE_PDEV:
                    selected = next((gpu for gpu in self.gpus if gpu.pdev == value), None)
                if selected is not None:
                    if name == DEVICE_SHOWN_INFO:
                        index = _PLOT_INFORMATION_INDEX.get(value)
                        if index is not None:
                            selected.to_draw = plot_add(index, selected.to_draw)
                            selected.to_draw = plot_add(PLOT_INFORMATION_COUNT, selected.to_draw)
                    if name == DEVICE_MONITOR:
                        if value == "true":
                            selected.do_not_monitor = False
                        if value == "false":
                            selected.do_not_monitor = True

    def _apply_process_entry(self, name: str, value: str) -> None:
        if name == PROCESS_HIDE_OWN:
            self.filter_own_pid = _parse_bool(value, self.filter_own_pid)
        if name == PROCESS_SORT_BY:
            index = _PROCESS_FIELD_INDEX.get(value)
            if index is not None and index < PROCESS_FIELD_COUNT:
                self.sort_processes_by = ProcessField(index)
        if name == PROCESS_DISPLAY_FIELD:
            index = _PROCESS_FIELD_INDEX.get(value)
            if index is not None:
                displayed = process_field_add(index, self.process_fields_displayed)
                self.process_fields_displayed = process_field_add(PROCESS_FIELD_COUNT, displayed)
        if name == PROCESS_SORT_ORDER:
            if value == PROCESS_SORT_DESCENDING:
                self.sort_descending_order = True
            if value == PROCESS_SORT_ASCENDING:
                self.sort_descending_order = False

    def load(self) -> bool:
        """Read the configuration file; False if there is none to read."""
        if self.config_file_location is None:
            return False
        try:
            result = parse_ini_file(self.config_file_location)
        except OSError:
            return False
        self.apply_entries(result.entries)
        if not process_field_is_displayed(
            _sort_index(self.sort_processes_by), self.process_fields_displayed
        ):
            self.sort_processes_by = default_sort_field(self.process_fields_displayed)
        return True

    def finalize_loaded(self) -> None:
        """Fill in defaults for what the file left unset and drop the 'configured' markers."""
        for gpu in self.gpus:
            if not plot_is_set(PLOT_INFORMATION_COUNT, gpu.to_draw):
                gpu.to_draw = plot_default()
            else:
                gpu.to_draw = plot_remove(PLOT_INFORMATION_COUNT, gpu.to_draw)
        if not process_field_is_displayed(PROCESS_FIELD_COUNT, self.process_fields_displayed):
            self.process_fields_displayed = process_default_displayed()
        else:
            self.process_fields_displayed = process_field_remove(
                PROCESS_FIELD_COUNT, self.process_fields_displayed
            )

    def render(self) -> str:
        """The configuration file contents for the current options."""
        out = [DO_NOT_MODIFY_NOTICE]
        out.append(f"[{GENERAL_SECTION}]\n")
        out.append(f"{GENERAL_USE_COLOR} = {_bool_string(self.use_color)}\n")
        out.append(f"{GENERAL_UPDATE_INTERVAL} = {self.update_interval}\n")
        out.append(f"{GENERAL_SHOW_MESSAGES} = {_bool_string(self.show_startup_messages)}\n")

        out.append(f"\n[{HEADER_SECTION}]\n")
        out.append(f"{HEADER_USE_FAHRENHEIT} = {_bool_string(self.temperature_in_fahrenheit)}\n")
        out.append(f"{HEADER_ENCODE_DECODE_TIMER} = {self.encode_decode_hiding_timer:e}\n")

        out.append(f"\n[{CHART_SECTION}]\n")
        out.append(f"{CHART_REVERSE} = {_bool_string(self.plot_left_to_right)}\n")

        out.append(f"\n[{PROCESS_LIST_SECTION}]\n")
        out.append(f"{PROCESS_HIDE_OWN} = {_bool_string(self.filter_own_pid)}\n")
        order = PROCESS_SORT_DESCENDING if self.sort_descending_order else PROCESS_SORT_ASCENDING
        out.append(f"{PROCESS_SORT_ORDER} = {order}\n")
        out.append(
            f"{PROCESS_SORT_BY} = {PROCESS_FIELD_NAMES[_sort_index(self.sort_processes_by)]}\n"
        )
        shown_fields = [
            f for f in ProcessField if process_field_is_displayed(f, self.process_fields_displayed)
        ]
        for shown in shown_fields or [None]:
            label = PROCESS_FIELD_NAMES[_sort_index(shown)]
            out.append(f"{PROCESS_DISPLAY_FIELD} = {label}\n")

        for gpu in self.gpus:
            out.append(f"\n[{DEVICE_SECTION}]\n")
            out.append(f"{DEVICE_PDEV} = {gpu.pdev}\n")
            out.append(f"{DEVICE_MONITOR} = {_bool_string(not gpu.do_not_monitor)}\n")
            drawn = [info for info in PlotInformation if plot_is_set(info, gpu.to_draw)]
            if drawn:
                for info in drawn:
                    out.append(f"{DEVICE_SHOWN_INFO} = {PLOT_INFORMATION_NAMES[info]}\n")
            else:
                out.append(f"{DEVICE_SHOWN_INFO} = {PLOT_INFORMATION_NAMES[PLOT_INFORMATION_COUNT]}\n")
            out.append("\n")
        return "".join(out)

    def save(self) -> None:
        """Write the configuration file, creating its directory; raises OSError on failure."""
        if self.config_file_location is None:
            raise ValueError("no configuration file location")
        directory = os.path.dirname(self.config_file_location) or "."
        os.makedirs(directory, mode=0o755, exist_ok=True)
        with open(self.config_file_location, "w", encoding="utf-8") as handle:
            handle.write(self.render())


def check_and_fix_monitored_gpus(options: InterfaceOptions) -> int:
    """Put monitored GPUs first, keep at least one monitored, and return how many are."""
    monitored = options.gpus[: options.monitored_count]
    non_monitored = options.gpus[options.monitored_count :]

    kept = [gpu for gpu in monitored if not gpu.do_not_monitor]
    demoted = [gpu for gpu in monitored if gpu.do_not_monitor]
    candidates = non_monitored + demoted
    promoted = [gpu for gpu in candidates if not gpu.do_not_monitor]
    remaining = [gpu for gpu in candidates if gpu.do_not_monitor]

    new_monitored = kept + promoted
    if not new_monitored and remaining:
        first = remaining.pop(0)
        first.do_not_monitor = False
        new_monitored.append(first)

    options.gpus = new_monitored + remaining
    options.monitored_count = len(new_monitored)
    return options.monitored_count