[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "pokervm"
version = "0.1.0"
description = "Compile Tiled map script layers into compact VM bytecode and a C++ header"
requires-python = ">=3.10"
dependencies = []
keywords = ["tiled", "bytecode", "vm", "compiler", "game", "scripting"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Compilers",
    "Topic :: Games/Entertainment",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
pokervm = "pokervm.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["pokervm"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
