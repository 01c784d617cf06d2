"""Compile Tiled script layers into VM bytecode, a binary blob and a C++ header."""

__version__ = "0.1.0"
__all__ = ["__version__"]