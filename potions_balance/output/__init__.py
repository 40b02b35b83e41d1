"""
Override plugin assembly.
"""

from .assembler import (
    assemble,
    build_header,
    derive_output_time,
    describe_output,
    output_time_for,
    write_plugin,
)

__all__ = [
    "assemble",
    "build_header",
    "derive_output_time",
    "describe_output",
    "output_time_for",
    "write_plugin",
]
