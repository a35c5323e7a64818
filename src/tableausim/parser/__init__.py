# src/tableausim/parser/__init__.py
from .parser import NetlistParser
from .exceptions import ParsingError, MalformedNetlistError

__all__ = [
    "NetlistParser",
    "ParsingError",
    "MalformedNetlistError",
]
