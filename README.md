# gputop

Building blocks for a terminal GPU monitor. The package uses only the
standard library.

## Modules

- `gputop.fields` – the metrics that can be charted for a GPU
  (`PlotInformation`) and the columns of the process list (`ProcessField`).
  Both are kept as integer bit sets. Helpers add, remove, test and count
  members: `plot_add`, `plot_remove`, `plot_is_set`, `plot_count`,
  `process_field_add`, `process_field_remove`, `process_field_is_displayed`
  and `process_displayed_count`. `plot_add` refuses to go beyond four
  metrics. The defaults come from `plot_default()` (GPU rate and GPU memory
  rate) and `process_default_displayed()` (every column except the encoder
  and decoder rates). `default_sort_field` picks the preferred sort column
  among the displayed ones, or returns `None` if none is displayed.
- `gputop.inifile` – a small INI reader: `parse_ini`, `parse_ini_string` and
  `parse_ini_file`. It accepts `[section]` headers, `name = value` and
  `name: value` pairs, `;` and `#` comment lines, inline `;` comments that
  follow whitespace, indented continuation lines and a leading UTF-8 BOM.
  Lines longer than 199 characters are read in 199-character pieces. Parsing
  carries on past malformed lines. The `IniResult` it returns holds the
  `IniEntry` values and the numbers of the lines that failed (`error_lines`,
  `first_error`, `ok`).
- `gputop.options` – `InterfaceOptions` and `GpuOptions`. Per-GPU settings
  are keyed by PCI address.
  - `InterfaceOptions.for_devices` builds the default options for a list of
    devices.
  - `load()` reads the configuration file and returns `False` if there is no
    file to read.
  - `finalize_loaded()` fills in defaults for whatever the file left unset.
  - `render()` returns the file's text. `save()` creates the directory if it
    is missing and then writes the file.
  - `default_config_path()` gives `$XDG_CONFIG_HOME/gputop/interface.ini`.
    When `XDG_CONFIG_HOME` is unset it falls back to
    `$HOME/.config/gputop/interface.ini`, and it returns `None` when neither
    variable is set.
  - `check_and_fix_monitored_gpus` moves the monitored GPUs to the front,
    keeps at least one of them monitored and returns how many there are.
- `gputop.ring_buffer` – `RingBuffer`, a history of integer samples for each
  device and each kind of data. It provides `push`, `pop`, `get`, `values`,
  `data_stored`, `clear_series` and `clear_device`. A ring of `buffer_size`
  slots keeps at most `buffer_size - 1` samples. Pushing into a full ring
  drops the oldest sample.
- `gputop.plot` – a character `Canvas` (`put`, `text`, `lines`) that ignores
  writes outside its bounds. `line_plot` draws up to four interleaved
  percentage series as box-drawing step lines, each with a legend.
  `draw_rectangle` draws a box outline.
- `gputop.timing` – `Timestamp` (seconds plus nanoseconds on the monotonic
  clock), with `now()`, `to_ns()`, `+` and `-`. The module also provides
  `difftime`, `difftime_ns` and `hmns_to_time`.
- `gputop.cli` – `parse_arguments` reads the command-line flags into a
  `CommandLine` and raises `UsageError` on bad input. `apply_to_options`
  makes those flags override the loaded `InterfaceOptions`. `help_text()`
  returns the help text.

## Example

```python
from gputop.options import InterfaceOptions, check_and_fix_monitored_gpus

options = InterfaceOptions.for_devices(["0000:01:00.0"], "/tmp/interface.ini")
options.load()
options.finalize_loaded()
check_and_fix_monitored_gpus(options)
print(options.render())
```

```python
from gputop.cli import apply_to_options, parse_arguments

command_line = parse_arguments(["-d", "5", "--no-color"])
apply_to_options(command_line, options)  # update_interval 500, use_color False
```

## Command-line flags

`parse_arguments` understands these flags:

```
-d --delay        refresh rate in tenths of a second (clamped to 0.1s..99.9s)
-c --config-file  custom configuration file location
-p --no-plot      disable the charts
-r --reverse-abs  plot recent data on the left
-C --no-color     no colours (also --no-colour)
-f --freedom-unit use fahrenheit
-E --encode-hide  encoder/decoder auto-hide time in seconds (negative = always shown)
-v --version      set show_version
-h --help         set show_help
```

## What this package does not do

It does not read anything from GPUs or processes, and it draws no
interactive terminal screen. The setup menu is not included. There is no
installed command: `gputop.cli` parses arguments and applies them to
options, but it does not run a monitor.

## Tests

```
pip install -e ".[test]"
pytest
```