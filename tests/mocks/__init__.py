"""
Mock implementations for testing steptools components.

This package provides fakes for external process execution so tool facades
can be tested deterministically.
"""

from .runner import RecordingRunner

__all__ = [
    "RecordingRunner",
]
