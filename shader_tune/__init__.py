from shader_tune.compiler import CompileCoordinator, PendingCompilation
from shader_tune.completion import CompletionEngine
from shader_tune.config import CompileStatus, CompletionKind, Severity
from shader_tune.diagnostics import GLSL_DIAGNOSTIC_PATTERN, METAL_DIAGNOSTIC_PATTERN, parse_diagnostics
from shader_tune.files import FileNode, FileStore, FileStoreError
from shader_tune.keywords import GLSL_COMPLETIONS, METAL_COMPLETIONS, completions_for
from shader_tune.models import CompilationDiagnostic, CompileResult, CompileState, CompletionItem
from shader_tune.session import EditorSession
from shader_tune.settings import EditorSettings, SettingsError

__all__ = [
    "CompileCoordinator",
    "PendingCompilation",
    "CompletionEngine",
    "CompileStatus",
    "CompletionKind",
    "Severity",
    "GLSL_DIAGNOSTIC_PATTERN",
    "METAL_DIAGNOSTIC_PATTERN",
    "parse_diagnostics",
    "FileNode",
    "FileStore",
    "FileStoreError",
    "GLSL_COMPLETIONS",
    "METAL_COMPLETIONS",
    "completions_for",
    "CompilationDiagnostic",
    "CompileResult",
    "CompileState",
    "CompletionItem",
    "EditorSession",
    "EditorSettings",
    "SettingsError",
]
