[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "gputop"
version = "0.1.0"
description = "Interface options, INI configuration handling, history buffers, character plots and command-line parsing for a terminal GPU monitor"
requires-python = ">=3.10"
dependencies = []
keywords = ["gpu", "monitoring", "top", "terminal", "configuration", "ini", "ring-buffer"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Intended Audience :: System Administrators",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Monitoring",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["gputop"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
