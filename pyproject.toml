[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "platformserver"
version = "0.1.0"
description = "Authoritative TCP game server for a 2D multiplayer platformer"
requires-python = ">=3.10"
dependencies = []
keywords = ["game", "server", "platformer", "multiplayer", "asyncio"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Framework :: AsyncIO",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment :: Side-Scrolling/Arcade Games",
]

[project.optional-dependencies]
test = ["pytest", "pytest-asyncio"]

[project.scripts]
platformserver = "platformserver.server:main"

[tool.hatch.build.targets.wheel]
packages = ["platformserver"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
