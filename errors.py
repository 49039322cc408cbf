"""
Error taxonomy for puzzle generation, solving, validation and classification.
"""

from __future__ import annotations

from typing import Optional


class DominoError(Exception):
    """Base class for every error raised by the puzzle core."""

    default_message = "Domino puzzle error"

    def __init__(self, message: Optional[str] = None, *, context: Optional[str] = None) -> None:
        super().__init__(message or self.default_message)
        self.message = message or self.default_message
        self.context = context

    @property
    def kind(self) -> str:
        return type(self).__name__


class InvalidLengthError(DominoError):
    """Puzzle length maps to no tileset order, or the puzzle has no holes."""

    default_message = "The puzzle length is not correct"


class EmptyPuzzleError(DominoError):
    default_message = "The puzzle has no tiles placed"


class InvalidClassError(DominoError):
    default_message = "The complexity class is not valid"


class UnsolvablePuzzleError(DominoError):
    default_message = "The puzzle has no solutions"


class NotValidPuzzleError(DominoError):
    default_message = "The puzzle is not valid/unique, it has multiple solutions"


class GenerationError(DominoError):
    default_message = "Could not generate a puzzle with the requested complexity"


class ModelError(DominoError):
    """The ILP oracle failed to run or returned an unusable result."""

    default_message = "Model failed execution"
