"""
Core type definitions for the LightCmd command pipeline.

This module contains fundamental type aliases used throughout the package
for type safety and consistency.
"""

from collections.abc import Callable
from typing import Any

# Number | Text | Boolean. bool is checked before int/float at every
# validation site because bool subclasses int.
ParamValue = int | float | str | bool

CommandString = str

# Host "print a line" function
DiagnosticSink = Callable[[str], None]

# Opaque handle passed through to the host runtime
Handle = Any
