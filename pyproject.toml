[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "sketchquiz"
version = "0.1.0"
description = "A networked draw-and-guess quiz server and client with optional LED feedback"
requires-python = ">=3.10"
dependencies = []
keywords = ["game", "quiz", "drawing", "multiplayer", "tcp", "ioctl"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: POSIX :: Linux",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
sketchquiz-server = "sketchquiz.server:main"
sketchquiz-client = "sketchquiz.client:main"

[tool.hatch.build.targets.wheel]
packages = ["sketchquiz"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
