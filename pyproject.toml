[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "tilebar"
version = "1.1.0"
description = "Status-line field readers for Linux and a model of a dynamic tiling window manager"
requires-python = ">=3.10"
keywords = ["status", "statusbar", "monitoring", "battery", "meminfo", "nl80211", "tiling", "window-manager"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: POSIX :: Linux",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Monitoring",
    "Topic :: Desktop Environment :: Window Managers",
]
dependencies = [
    "psutil",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["tilebar"]

[tool.pytest.ini_options]
addopts = "-ra"
