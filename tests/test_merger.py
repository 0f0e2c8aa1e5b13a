#!/usr/bin/env python3
"""
JACKSONPATCH MERGER SUITE
-------------------------
Properties of the embedded-config merge:
1. Idempotence
2. Existing configuration is never overwritten (byte-identical output)
3. Empty input is synthesized
4. Injection is selective and keeps key order
5. Non-mapping values on the path are left alone
"""

import pytest
from ruamel.yaml import YAML

from jacksonpatch.core.errors import EmbeddedParseError
from jacksonpatch.patching.merger import EmbeddedConfigMerger, merge_jackson_config

SYNTHETIC = "spring:\n  jackson:\n    default-property-inclusion: non_null\n"


def load(text):
    return YAML(typ='safe').load(text)


def inclusion(text):
    return load(text)["spring"]["jackson"]["default-property-inclusion"]


SAMPLES = [
    "",
    "server:\n  port: 8080\n",
    "spring:\n  other: 1\n",
    "spring:\n  jackson:\n    serialization:\n      indent-output: true\n",
    "# header\nmanagement:\n  endpoints:\n    - health\n    - info\n",
    "spring:\n  jackson:\n    default-property-inclusion: always\n",
    "# only a comment\n",
]


@pytest.mark.parametrize("text", SAMPLES)
@pytest.mark.parametrize("leading_newline", [False, True])
def test_merge_is_idempotent(text, leading_newline):
    merger = EmbeddedConfigMerger(leading_newline=leading_newline)
    first = merger.merge_jackson_config(text)
    second = merger.merge_jackson_config(first.text)
    assert second.changed is False
    assert second.text == first.text


@pytest.mark.parametrize("value", ["always", "non_empty", "NON_NULL", "''", "~", "{x: 1}"])
def test_existing_inclusion_is_never_overwritten(value):
    text = f"spring:\n  jackson:\n    default-property-inclusion: {value}   # keep\n"
    result = merge_jackson_config(text)
    assert result.changed is False
    assert result.text == text


@pytest.mark.parametrize("text", ["", "   \n", "\n \n"])
def test_empty_input_is_synthesized(text):
    result = merge_jackson_config(text)
    assert result.changed is True
    assert result.text == SYNTHETIC
    assert inclusion(result.text) == "non_null"


def test_empty_input_with_leading_newline():
    result = merge_jackson_config("", leading_newline=True)
    assert result.changed is True
    assert result.text == "\n" + SYNTHETIC


def test_missing_spring_is_appended_at_the_end():
    result = merge_jackson_config("server:\n  port: 8080\n")
    assert result.changed is True
    assert result.text == "server:\n  port: 8080\n" + SYNTHETIC


def test_selective_injection_keeps_siblings_and_order():
    result = merge_jackson_config("spring:\n  other: 1\n")
    assert result.changed is True
    data = load(result.text)
    assert data["spring"]["other"] == 1
    assert data["spring"]["jackson"]["default-property-inclusion"] == "non_null"
    assert list(data["spring"]) == ["other", "jackson"]
    assert result.text.index("other") < result.text.index("jackson")


def test_inclusion_added_under_existing_jackson():
    text = "spring:\n  jackson:\n    serialization:\n      indent-output: true\n"
    result = merge_jackson_config(text)
    assert result.changed is True
    jackson = load(result.text)["spring"]["jackson"]
    assert list(jackson) == ["serialization", "default-property-inclusion"]
    assert jackson["serialization"] == {"indent-output": True}


@pytest.mark.parametrize("text", [
    "spring: notamapping\n",
    "spring:\n  - a\n  - b\n",
    "spring:\n  jackson: enabled\n",
    "spring:\n  jackson: ~\n",
])
def test_non_mapping_on_path_is_left_alone(text):
    result = merge_jackson_config(text)
    assert result.changed is False
    assert result.text == text


@pytest.mark.parametrize("text", ["just a string\n", "- a\n- b\n", "42\n", "~\n"])
def test_non_mapping_root_is_left_alone(text):
    result = merge_jackson_config(text)
    assert result.changed is False
    assert result.text == text


def test_lookup_is_case_sensitive():
    result = merge_jackson_config("Spring:\n  jackson: {}\n")
    assert result.changed is True
    data = load(result.text)
    assert data["Spring"] == {"jackson": {}}
    assert data["spring"]["jackson"]["default-property-inclusion"] == "non_null"


def test_comments_survive_injection():
    text = "# service config\nserver:\n  port: 8080  # http port\n"
    result = merge_jackson_config(text)
    assert result.changed is True
    assert "# service config" in result.text
    assert "# http port" in result.text
    assert inclusion(result.text) == "non_null"


def test_block_literal_values_survive_injection():
    text = "banner: |\n  hello\n  world\n"
    result = merge_jackson_config(text)
    assert result.text.startswith("banner: |\n  hello\n  world\n")


def test_leading_newline_on_changed_blob():
    result = merge_jackson_config("server:\n  port: 1\n", leading_newline=True)
    assert result.text.startswith("\nserver:")
    assert inclusion(result.text) == "non_null"


def test_unchanged_blob_gets_no_leading_newline():
    text = "spring:\n  jackson:\n    default-property-inclusion: always\n"
    assert merge_jackson_config(text, leading_newline=True).text == text


@pytest.mark.parametrize("text", ["a: [1, 2\n", "key: 'unterminated\n", "a: 1\na: 2\n"])
def test_unparseable_input_raises(text):
    with pytest.raises(EmbeddedParseError):
        merge_jackson_config(text)


def test_comment_only_input_keeps_its_comments():
    text = "# filled in per environment\n# see runbook\n"
    result = merge_jackson_config(text)
    assert result.changed is True
    assert result.text == text + SYNTHETIC
    assert inclusion(result.text) == "non_null"
    again = merge_jackson_config(result.text)
    assert again.changed is False
    assert again.text == result.text


def test_comment_only_input_with_leading_newline():
    result = merge_jackson_config("# placeholder", leading_newline=True)
    assert result.text == "\n# placeholder\n" + SYNTHETIC


@pytest.mark.parametrize("text", [
    "base: &b\n  x: 1\nspring: *b\n",
    "shared: &j\n  serialization: {}\nspring:\n  jackson: *j\n",
])
def test_aliased_mapping_on_path_is_left_alone(text):
    result = merge_jackson_config(text)
    assert result.changed is False
    assert result.text == text


def test_anchored_definition_is_extended():
    text = "spring: &s\n  other: 1\ncopy: *s\n"
    result = merge_jackson_config(text)
    assert result.changed is True
    data = load(result.text)
    assert data["spring"]["jackson"]["default-property-inclusion"] == "non_null"
    assert "&s" in result.text
    assert "*s" in result.text


def test_duplicate_keys_are_named_in_the_error():
    with pytest.raises(EmbeddedParseError, match="duplicate key"):
        merge_jackson_config("spring:\n  a: 1\n  a: 2\n")
