[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "snakearena"
version = "0.1.0"
description = "A snake game engine and a multiplayer snake server over WebSockets"
requires-python = ">=3.10"
keywords = ["snake", "game", "multiplayer", "websocket", "arcade"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Web Environment",
    "Framework :: AsyncIO",
    "Framework :: aiohttp",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment :: Arcade",
]
dependencies = [
    "aiohttp",
]

[project.optional-dependencies]
test = [
    "pytest",
    "pytest-asyncio",
]

[project.scripts]
snakearena = "snakearena.main:main"

[tool.hatch.build.targets.wheel]
packages = ["snakearena"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
