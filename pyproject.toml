[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "tabgate"
version = "0.1.0"
description = "A terminal dashboard that groups your terminal tabs by git project and lets you switch, open, rename and close them"
requires-python = ">=3.10"
keywords = ["terminal", "tabs", "tui", "git", "ghostty", "macos", "dashboard"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: MacOS",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Terminals :: Terminal Emulators/X Terminals",
    "Topic :: Utilities",
]
dependencies = [
    "blessed",
    "wcwidth",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
tabgate = "tabgate.app:main"

[tool.hatch.build.targets.wheel]
packages = ["tabgate"]

[tool.pytest.ini_options]
addopts = "-ra"
