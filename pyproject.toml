[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "crossway"
version = "0.1.0"
description = "A step-synchronised crossroads traffic simulation with priority locks, blinkers and small kernel-style data structures"
requires-python = ">=3.10"
dependencies = []
keywords = ["simulation", "crossroads", "synchronization", "threads", "education", "bitmap", "ustar", "printf"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Education",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
crossway = "crossway.crossroads:main"

[tool.hatch.build.targets.wheel]
packages = ["crossway"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
