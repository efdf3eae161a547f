import logging
from enum import Enum, StrEnum, auto

"""Module to store global enums and constants"""

# Quiet period after the last edit before an automatic compile starts
DEBOUNCE_INTERVAL = 1.0

# Partial words shorter than this never open the completion list
MIN_COMPLETION_PREFIX = 2

DEFAULT_LOG_LEVEL = logging.INFO
DEFAULT_SETTINGS_FILE = "shader_tune.yaml"
DEFAULT_LANGUAGE = "glsl"

# Shader files shown in the file tree
SHADER_EXTENSIONS = (".frag", ".glsl", ".metal")

WIDTH = 640
HEIGHT = 480

DEFAULT_API_HOST = "127.0.0.1"
DEFAULT_API_PORT = 8000


class CompletionKind(StrEnum):
    """Kind of token a completion candidate inserts."""
    KEYWORD = auto()
    TYPE = auto()
    FUNCTION = auto()
    ATTRIBUTE = auto()
    VARIABLE = auto()


class Severity(StrEnum):
    """Severity of a compiler diagnostic. INFO is display only, the parser never produces it."""
    ERROR = auto()
    WARNING = auto()
    INFO = auto()


class CompileStatus(Enum):
    """Observable phase of the compile coordinator."""
    IDLE = 0
    PENDING = 1
    COMPILING = 2


class FileErrorKind(StrEnum):
    NOT_FOUND = auto()
    PERMISSION_DENIED = auto()
    MALFORMED = auto()
    SCAN_FAILED = auto()


class TemplateCategory(StrEnum):
    FRAGMENT = "Fragment Shaders"
    PATTERN = "Patterns"
    COMPLETE = "Complete Scenes"


LOG_LEVELS = ['CRITICAL', 'ERROR', 'WARNING', 'INFO', 'DEBUG']
