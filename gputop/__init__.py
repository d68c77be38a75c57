"""Options, INI configuration, history buffers, character plots and command-line parsing for a terminal GPU monitor."""

__version__ = "0.1.0"