"""Data models for move verification."""

from enum import Enum
from typing import List, Optional, NamedTuple
from pydantic import BaseModel, Field


class Location(NamedTuple):
    """An immutable board coordinate."""
    row: int
    col: int


class Direction(Enum):
    """Directions of travel on the board as (row, col) steps."""
    NORTH = (-1, 0)
    SOUTH = (1, 0)
    EAST = (0, 1)
    WEST = (0, -1)

    @property
    def drow(self) -> int:
        return self.value[0]

    @property
    def dcol(self) -> int:
        return self.value[1]


class OutOfBoundsError(IndexError):
    """Raised when a cell outside the board is accessed."""

    def __init__(self, row: int, col: int, size: int):
        super().__init__(f"Cell ({row}, {col}) is outside the {size}x{size} board")
        self.row = row
        self.col = col


class ValidationError(BaseModel):
    """A single rule violation."""
    code: str
    message: str
    word: Optional[str] = None
    location: Optional[Location] = None


class ValidationResult(BaseModel):
    """Result of validating a staged move."""
    valid: bool
    errors: List[ValidationError] = Field(default_factory=list)
    words: List[str] = Field(default_factory=list)

    @classmethod
    def ok(cls, words: Optional[List[str]] = None) -> "ValidationResult":
        return cls(valid=True, words=words or [])

    @classmethod
    def fail(cls, code: str, message: str, **kwargs) -> "ValidationResult":
        return cls(valid=False, errors=[ValidationError(code=code, message=message, **kwargs)])

    @property
    def codes(self) -> List[str]:
        """Error codes in the order they were reported."""
        return [e.code for e in self.errors]
