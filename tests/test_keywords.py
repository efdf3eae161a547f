import dataclasses

import pytest

from shader_tune.config import CompletionKind
from shader_tune.keywords import DATABASES, METAL_COMPLETIONS, completions_for


@pytest.mark.parametrize("language", sorted(DATABASES))
def test_item_text_is_unique(language):
    texts = [item.text for item in DATABASES[language]]
    assert len(texts) == len(set(texts))


@pytest.mark.parametrize("language", sorted(DATABASES))
def test_every_category_is_present(language):
    kinds = {item.kind for item in DATABASES[language]}
    assert {CompletionKind.KEYWORD, CompletionKind.TYPE, CompletionKind.FUNCTION, CompletionKind.ATTRIBUTE} <= kinds


@pytest.mark.parametrize("language", sorted(DATABASES))
def test_functions_carry_snippets(language):
    functions = [item for item in DATABASES[language] if item.kind == CompletionKind.FUNCTION]
    assert functions
    assert all(item.snippet and item.snippet.startswith(item.text + "(") for item in functions)


def test_metal_entries():
    by_text = {item.text: item for item in METAL_COMPLETIONS}
    assert by_text["clamp"].snippet == "clamp($0, $1, $2)"
    assert by_text["clamp"].placeholder_text == "clamp(•, •, •)"
    assert by_text["[[buffer(0)]]"].kind == CompletionKind.ATTRIBUTE
    assert by_text["float4x4"].kind == CompletionKind.TYPE
    assert by_text["kernel"].insertion_text == "kernel"


def test_items_are_immutable():
    with pytest.raises(dataclasses.FrozenInstanceError):
        METAL_COMPLETIONS[0].text = "changed"


def test_completions_for_language_name():
    assert completions_for("Metal") is METAL_COMPLETIONS
    with pytest.raises(ValueError):
        completions_for("hlsl")
