[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "pengoslide"
version = "0.1.0"
description = "Game logic for a Pengo-style ice-block pushing arcade game: grid, sliding walls, enemies, scoring, high scores and screen states."
requires-python = ">=3.10"
dependencies = []
keywords = ["pengo", "arcade", "game", "grid", "puzzle", "game-state", "highscores"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment :: Arcade",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["pengoslide"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
