"""
Turns raw compiler error text into line/column addressed diagnostics.

The pattern is per backend: Metal reports `program_source:12:5: error: ...`
while Mesa's GLSL compiler reports `0:12(5): error: ...`. Both patterns use
the same named groups so the parser does not care which one it is given.
"""

import logging
import re

from shader_tune.config import Severity
from shader_tune.models import CompilationDiagnostic

log = logging.getLogger(__name__)

METAL_DIAGNOSTIC_PATTERN = re.compile(
    r"program_source:(?P<line>\d+)(?::(?P<column>\d+))?:\s*(?P<severity>error|warning):\s*(?P<message>.+)",
    re.IGNORECASE,
)

GLSL_DIAGNOSTIC_PATTERN = re.compile(
    r"\d+:(?P<line>\d+)(?:\((?P<column>\d+)\))?:\s*(?P<severity>error|warning):\s*(?P<message>.+)",
    re.IGNORECASE,
)


def _positive_int(value):
    if not value:
        return None
    number = int(value)
    return number if number > 0 else None


def parse_diagnostics(raw_message, pattern=METAL_DIAGNOSTIC_PATTERN):
    """
    Parses every diagnostic embedded in raw_message, left to right.

    Severity is WARNING only when the keyword is "warning", otherwise ERROR.
    When nothing matches, a single ERROR diagnostic on line 1 carrying the
    whole message is returned, so the result is never empty.
    """
    if isinstance(pattern, str):
        pattern = re.compile(pattern, re.IGNORECASE)

    diagnostics = []
    for match in pattern.finditer(raw_message):
        line = _positive_int(match.group("line"))
        if line is None:
            continue
        severity = Severity.WARNING if match.group("severity").lower() == "warning" else Severity.ERROR
        diagnostics.append(CompilationDiagnostic(
            line=line,
            column=_positive_int(match.group("column")),
            severity=severity,
            message=match.group("message").rstrip("\r"),
        ))

    if not diagnostics:
        log.debug("Compiler message did not match the diagnostic pattern, using fallback")
        diagnostics.append(CompilationDiagnostic(line=1, column=None, severity=Severity.ERROR, message=raw_message))

    return diagnostics
