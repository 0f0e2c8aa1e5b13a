#!/usr/bin/env python3
"""
JACKSONPATCH TREE SUITE
-----------------------
The node model must round-trip untouched documents, keep styles and
tags visible, and tell "no document" apart from an empty mapping.
"""

import pytest

from jacksonpatch.core.errors import TreeParseError
from jacksonpatch.core.models import (
    BOOL_TAG, INT_TAG, NULL_TAG, STR_TAG, Node, NodeKind, ScalarStyle,
)
from jacksonpatch.patching.tree import YamlTree


@pytest.fixture
def tree():
    return YamlTree()


def test_unmodified_tree_round_trips(tree):
    text = (
        "# service settings\n"
        "server:\n"
        "  port: 8080  # http\n"
        "logging:\n"
        "  level: INFO\n"
        "banner: |\n"
        "  line one\n"
        "  line two\n"
    )
    assert tree.serialize(tree.parse(text)) == text


@pytest.mark.parametrize("text", ["", "   \n", "\n\n"])
def test_blank_input_is_empty_document(tree, text):
    doc = tree.parse(text)
    assert doc.is_empty
    assert doc.root.kind is NodeKind.EMPTY
    assert tree.serialize(doc) == ""


def test_empty_mapping_is_not_empty_document(tree):
    doc = tree.parse("{}\n")
    assert not doc.is_empty
    assert doc.root.kind is NodeKind.MAPPING
    assert doc.root.items() == []


def test_null_scalar_is_not_empty_document(tree):
    doc = tree.parse("~\n")
    assert not doc.is_empty
    assert doc.root.kind is NodeKind.SCALAR
    assert doc.root.tag == NULL_TAG


def test_scalar_styles_and_tags(tree):
    doc = tree.parse(
        "lit: |\n  a\n"
        "fold: >\n  b\n"
        "quoted: 'c'\n"
        "plain: d\n"
        "num: 3\n"
        "flag: true\n"
    )
    root = doc.root
    assert root.get("lit").style is ScalarStyle.LITERAL
    assert root.get("fold").style is ScalarStyle.FOLDED
    assert root.get("quoted").style is ScalarStyle.QUOTED
    assert root.get("plain").style is ScalarStyle.PLAIN
    assert root.get("plain").tag == STR_TAG
    assert root.get("plain").is_string
    assert root.get("num").tag == INT_TAG
    assert not root.get("num").is_string
    assert root.get("flag").tag == BOOL_TAG


def test_lookup_is_literal_and_case_sensitive(tree):
    root = tree.parse("Spring: 1\nspring : 2\n").root
    assert root.get("spring").value == 2
    assert root.get("SPRING") is None


def test_append_goes_to_the_end(tree):
    doc = tree.parse("b: 1\na: 2\n")
    doc.root.append("c", Node.scalar("3"))
    assert tree.serialize(doc) == "b: 1\na: 2\nc: '3'\n"


def test_replace_keeps_position(tree):
    doc = tree.parse("a: x\nb: y\nc: z\n")
    doc.root.replace("b", Node.scalar("line1\nline2\n", ScalarStyle.LITERAL))
    out = tree.serialize(doc)
    assert out.index("a:") < out.index("b:") < out.index("c:")
    assert "b: |\n  line1\n  line2\n" in out


def test_explicit_start_is_kept(tree):
    doc = tree.parse("---\na: 1\n")
    assert doc.explicit_start
    assert tree.serialize(doc).startswith("---")


@pytest.mark.parametrize("text", [
    "a: [1, 2\n",            # unterminated flow sequence
    "a: 1\na: 2\n",          # duplicate key
    "a: 1\n---\nb: 2\n",     # more than one document
])
def test_malformed_input_raises(tree, text):
    with pytest.raises(TreeParseError):
        tree.parse(text)


def test_duplicate_key_error_says_why(tree):
    with pytest.raises(TreeParseError, match="duplicate key"):
        tree.parse("a: 1\na: 2\n")


def test_alias_targets_are_marked(tree):
    root = tree.parse(
        "base: &b\n"
        "  x: 1\n"
        "spring: *b\n"
        "list:\n"
        "  - *b\n"
    ).root
    assert not root.get("base").is_alias
    assert root.get("spring").is_alias
    assert root.get("spring").get("x").is_alias
    assert root.get("list").children()[0].is_alias
    assert not root.get("list").is_alias


def test_comment_only_text_has_no_nodes(tree):
    doc = tree.parse("# only a comment\n")
    assert doc.is_empty
