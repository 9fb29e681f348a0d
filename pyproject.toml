[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "learnsource"
version = "0.1.0"
description = "Building blocks for MIDI controller sources: control and feedback values, MIDI messages, source addresses and display sys-ex"
requires-python = ">=3.10"
dependencies = []
keywords = ["midi", "controller", "feedback", "sysex", "mackie", "nrpn", "display"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Typing :: Typed",
    "Topic :: Multimedia :: Sound/Audio :: MIDI",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["learnsource"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
