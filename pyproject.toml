[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "cplayproto"
version = "0.1.0"
description = "Firmata message handling, infrared remote-control codecs and LPC speech synthesis for microcontroller boards"
requires-python = ">=3.10"
dependencies = []
keywords = ["firmata", "infrared", "ir-remote", "rc5", "necx", "directv", "lpc", "speech", "talkie"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Embedded Systems",
    "Topic :: Multimedia :: Sound/Audio :: Speech",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["cplayproto"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
