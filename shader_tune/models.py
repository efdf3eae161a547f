"""
Value types shared by the completion, diagnostics and compile modules.

All of them are frozen: completion items are built once at import time and
compile state is replaced wholesale on every settlement, never mutated.
"""

import re
from dataclasses import dataclass, field
from typing import Any, Optional

from shader_tune.config import CompletionKind, Severity

PLACEHOLDER_RE = re.compile(r"\$\d+")
PLACEHOLDER_GLYPH = "•"


@dataclass(frozen=True)
class CompletionItem:
    """A single completion candidate from the keyword database."""
    text: str
    kind: CompletionKind
    description: str
    snippet: Optional[str] = None

    @property
    def insertion_text(self):
        """The text to insert when this completion is selected."""
        return self.snippet if self.snippet is not None else self.text

    @property
    def placeholder_text(self):
        """Snippet with its ordered $N slots drawn as bullets, e.g. clamp(•, •, •)."""
        return PLACEHOLDER_RE.sub(PLACEHOLDER_GLYPH, self.insertion_text)


@dataclass(frozen=True)
class CompilationDiagnostic:
    """A single compiler error, warning or info message."""
    line: int
    column: Optional[int]
    severity: Severity
    message: str

    @property
    def display_text(self):
        if self.column is not None:
            return f"Line {self.line}:{self.column} - {self.severity.value}: {self.message}"
        return f"Line {self.line} - {self.severity.value}: {self.message}"


@dataclass(frozen=True)
class CompileResult:
    """Outcome of one backend compile: exactly one of artifact or error is set."""
    artifact: Any = None
    error: Optional[str] = None

    def __post_init__(self):
        if (self.artifact is None) == (self.error is None):
            raise ValueError("CompileResult needs exactly one of artifact or error")

    @classmethod
    def success(cls, artifact):
        return cls(artifact=artifact)

    @classmethod
    def failure(cls, error):
        return cls(error=str(error))

    @property
    def ok(self):
        return self.error is None


@dataclass(frozen=True)
class CompileState:
    """
    Snapshot of the coordinator's compile state as seen by observers.

    The artifact is only ever present while diagnostics is empty.
    """
    is_compiling: bool = False
    diagnostics: tuple = field(default_factory=tuple)
    artifact: Any = None
    sequence: int = 0

    def __post_init__(self):
        if self.artifact is not None and self.diagnostics:
            raise ValueError("compiled artifact cannot coexist with diagnostics")

    @property
    def has_errors(self):
        return any(d.severity == Severity.ERROR for d in self.diagnostics)
