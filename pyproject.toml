[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "midiboard"
version = "0.1.0"
description = "A MIDI-driven soundboard that plays sound effects on chosen audio outputs"
requires-python = ">=3.10"
keywords = ["midi", "soundboard", "audio", "sound effects"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: X11 Applications",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: POSIX :: Linux",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Sound/Audio :: MIDI",
    "Topic :: Multimedia :: Sound/Audio :: Players",
]
dependencies = [
    "mido",
    "pygame",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
midiboard = "midiboard.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["midiboard"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
