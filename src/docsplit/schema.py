"""Pydantic models for everything that crosses a module boundary.

Cells, split options and the LaTeX vocabulary are frozen models: they are
created fresh by every segmentation call, compared by value in tests, and
never mutated in place.
"""

import logging
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator

from docsplit.config import (
    EXTRA_SECTION_COMMANDS_VAR,
    EXTRA_STANDALONE_COMMANDS_VAR,
    EXTRA_TRACKED_ENVIRONMENTS_VAR,
    SECTION_COMMANDS,
    STANDALONE_COMMANDS,
    TRACKED_ENVIRONMENTS,
    env_list,
)

logger = logging.getLogger(__name__)


class SyntaxMode(str, Enum):
    """The four document syntaxes the engine knows how to segment."""

    PLAIN = "plain"
    MARKDOWN = "markdown"
    LATEX = "latex"
    CODE = "code"

    @classmethod
    def coerce(cls, value) -> "SyntaxMode":
        """Return the matching mode for an enum member or a case-insensitive name.

        Unknown values fall back to PLAIN, the one mode that can split anything.
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            logger.warning("Unknown syntax mode %r -- falling back to plain", value)
            return cls.PLAIN


class CellKind(str, Enum):
    """Role of a cell within the document."""

    BODY = "body"
    HEADING = "heading"


class Cell(BaseModel):
    """A contiguous span of document text: one editable unit."""

    model_config = ConfigDict(frozen=True)

    content: str
    kind: CellKind = CellKind.BODY


class SplitOptions(BaseModel):
    """Per-call segmentation settings."""

    model_config = ConfigDict(frozen=True)

    mode: SyntaxMode = SyntaxMode.PLAIN
    preserve_empty_cells: bool = False

    @field_validator("mode", mode="before")
    @classmethod
    def coerce_mode(cls, value) -> SyntaxMode:
        """Accept any string; unsupported modes degrade to plain splitting."""
        return SyntaxMode.coerce(value)


class LatexVocabulary(BaseModel):
    """The command and environment tables that drive the LaTeX state machine."""

    model_config = ConfigDict(frozen=True)

    tracked_environments: frozenset[str] = TRACKED_ENVIRONMENTS
    section_commands: tuple[str, ...] = SECTION_COMMANDS
    standalone_commands: tuple[str, ...] = STANDALONE_COMMANDS

    def is_tracked(self, environment: str) -> bool:
        """Return True for a tracked environment name or its starred variant (``figure*``)."""
        return environment in self.tracked_environments or environment.rstrip("*") in self.tracked_environments

    def extended(self, environments=(), section_commands=(), standalone_commands=()) -> "LatexVocabulary":
        """Return a copy with extra entries added to each table."""
        return LatexVocabulary(
            tracked_environments=self.tracked_environments | frozenset(environments),
            section_commands=self.section_commands + tuple(c for c in section_commands if c not in self.section_commands),
            standalone_commands=self.standalone_commands + tuple(c for c in standalone_commands if c not in self.standalone_commands),
        )

    @classmethod
    def from_env(cls) -> "LatexVocabulary":
        """Build the default vocabulary plus any additions listed in the environment."""
        vocabulary = cls().extended(
            environments=env_list(EXTRA_TRACKED_ENVIRONMENTS_VAR),
            section_commands=env_list(EXTRA_SECTION_COMMANDS_VAR),
            standalone_commands=env_list(EXTRA_STANDALONE_COMMANDS_VAR),
        )
        if vocabulary != cls():
            logger.info(
                "LaTeX vocabulary extended from environment: %d environments, %d section commands, %d standalone commands",
                len(vocabulary.tracked_environments),
                len(vocabulary.section_commands),
                len(vocabulary.standalone_commands),
            )
        return vocabulary


class CellRecord(BaseModel):
    """A cell with the positional identity the editor stores it under."""

    id: str
    index: int = Field(ge=0)
    content: str
    kind: CellKind = CellKind.BODY
