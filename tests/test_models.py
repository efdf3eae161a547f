import pytest

from shader_tune.config import CompletionKind, Severity, TemplateCategory
from shader_tune.models import CompilationDiagnostic, CompileResult, CompileState, CompletionItem
from shader_tune.templates import ALL_TEMPLATES, GRADIENT, get_template, templates_by_category


def test_placeholder_text_marks_snippet_slots():
    item = CompletionItem("clamp", CompletionKind.FUNCTION, "Clamp", "clamp($0, $1, $2)")
    assert item.insertion_text == "clamp($0, $1, $2)"
    assert item.placeholder_text == "clamp(•, •, •)"


def test_insertion_text_without_snippet():
    item = CompletionItem("float4", CompletionKind.TYPE, "vector")
    assert item.insertion_text == "float4"
    assert item.placeholder_text == "float4"


def test_diagnostic_display_text():
    with_column = CompilationDiagnostic(12, 5, Severity.ERROR, "use of undeclared identifier")
    without = CompilationDiagnostic(18, None, Severity.WARNING, "unused variable")
    assert with_column.display_text == "Line 12:5 - error: use of undeclared identifier"
    assert without.display_text == "Line 18 - warning: unused variable"


def test_compile_result_needs_exactly_one_outcome():
    with pytest.raises(ValueError):
        CompileResult()
    with pytest.raises(ValueError):
        CompileResult(artifact=object(), error="bad")
    assert CompileResult.success("prog").ok
    assert not CompileResult.failure(RuntimeError("bad")).ok


def test_state_rejects_artifact_with_diagnostics():
    diagnostic = CompilationDiagnostic(1, None, Severity.WARNING, "w")
    with pytest.raises(ValueError):
        CompileState(diagnostics=(diagnostic,), artifact="prog")


def test_state_has_errors_only_for_error_severity():
    warning = CompilationDiagnostic(1, None, Severity.WARNING, "w")
    error = CompilationDiagnostic(2, None, Severity.ERROR, "e")
    assert not CompileState(diagnostics=(warning,)).has_errors
    assert CompileState(diagnostics=(warning, error)).has_errors


def test_templates_are_grouped_and_found_by_name():
    grouped = templates_by_category()
    assert sum(len(group) for group in grouped.values()) == len(ALL_TEMPLATES)
    assert GRADIENT in grouped[TemplateCategory.FRAGMENT]
    assert get_template("GRADIENT") is GRADIENT
    with pytest.raises(KeyError):
        get_template("missing")


@pytest.mark.parametrize("template", ALL_TEMPLATES, ids=lambda t: t.name)
def test_template_sources_are_glsl_330(template):
    assert template.source.startswith("#version 330")
    assert "f_color" in template.source
