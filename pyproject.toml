[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "shimectl"
version = "0.1.0"
description = "Command-line control of a running desktop mascot simulator over its local HTTP API, plus mascot environment helpers"
requires-python = ">=3.10"
keywords = ["shimeji", "mascot", "desktop", "cli", "http-api"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment",
]
dependencies = [
    "requests",
]

[project.optional-dependencies]
test = [
    "pytest",
    "responses",
]

[project.scripts]
shimectl = "shimectl.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["shimectl"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
