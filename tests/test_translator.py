"""End-to-end tests for parse and translate."""

from __future__ import annotations

import textwrap

import pytest

from bulloak import parse, translate
from bulloak.config import Config
from bulloak.errors import (
    CombineError,
    ConfigError,
    LexError,
    ParseError,
    SemanticError,
)
from bulloak.hir import FunctionEntry, Hir
from bulloak.syntax import translate_one
from tests.helpers import parse_tree

HASH_PAIR = textwrap.dedent("""\
    HashPairTest
    ├── It should never revert.
    ├── When first arg is smaller than second arg
    │   └── It should match the result of `keccak256(abi.encodePacked(a,b))`.
    └── When first arg is bigger than second arg
        └── It should match the result of `keccak256(abi.encodePacked(b,a))`.
""")


def count_actions(node) -> int:
    children = getattr(node, "children", None)
    if children is None:
        return 1
    return sum(count_actions(c) for c in children)


class TestParse:
    def test_single_tree(self):
        forest = parse(HASH_PAIR)
        assert len(forest) == 1
        assert forest[0].contract_name == "HashPairTest"

    def test_crlf_multi_root(self):
        text = "Contract::one\r\n└── it should pass\r\n\r\nContract::two\r\n└── it should pass"
        forest = parse(text)
        assert [root.contract_name for root in forest] == ["Contract::one", "Contract::two"]

    def test_spans_are_absolute(self):
        text = "Foo::a\n└── It works\n\nFoo::b\n└── It"
        with pytest.raises(SemanticError) as info:
            parse(text, "x.tree")
        span = info.value.span
        assert (span.file, span.start_line) == ("x.tree", 5)

    def test_first_tree_error_surfaces(self):
        text = "Foo::a\n└── It\n\nFoo::b\n\t└── It works"
        with pytest.raises(SemanticError):
            parse(text)

    def test_lex_error_in_later_tree(self):
        text = "Foo::a\n└── It works\n\nFoo::b\n\t└── It works"
        with pytest.raises(LexError):
            parse(text)

    def test_comment_header_block(self):
        forest = parse("// SPDX-License-Identifier: MIT\n// notes\n\nFoo\n└── It works")
        assert [root.contract_name for root in forest] == ["Foo"]
        assert forest[0].span.start_line == 4

    def test_comment_block_between_trees(self):
        text = "Foo::a\n└── It a\n\n// about b\n\nFoo::b\n└── It b"
        hir = translate(text)
        assert list(hir.contexts()) == ["a", "b"]

    def test_empty_input(self):
        with pytest.raises(ParseError):
            parse("\n\n")


class TestTranslateSingle:
    def test_minimal(self):
        hir = translate("Contract\n└── it should pass")
        assert hir.module == "Contract"
        assert hir.submodule is None
        assert len(hir.groups) == 1
        group = hir.groups[0]
        assert group.preconditions == ()
        assert group.is_unconditional
        assert group.functions == [FunctionEntry("it should pass", ())]

    def test_function_count_matches_actions(self):
        hir = translate(HASH_PAIR)
        assert hir.function_count == count_actions(parse_tree(HASH_PAIR)) == 3

    def test_groups_follow_chains(self):
        hir = translate(HASH_PAIR)
        assert [g.preconditions for g in hir.groups] == [
            (),
            ("When first arg is smaller than second arg",),
            ("When first arg is bigger than second arg",),
        ]
        fn = hir.groups[1].functions[0]
        assert fn.chain_text == "When first arg is smaller than second arg"

    def test_submodule(self):
        hir = translate("Contract::transfer\n└── It works")
        assert (hir.module, hir.submodule) == ("Contract", "transfer")
        assert hir.groups[0].submodule == "transfer"

    def test_config_passed_through(self):
        cfg = Config(backend="noir", options={"skip_setup": True})
        hir = translate("Contract\n└── It works", cfg)
        assert hir.config is cfg

    def test_default_config(self):
        assert translate("Contract\n└── It works").config == Config()

    def test_idempotent(self):
        assert translate(HASH_PAIR) == translate(HASH_PAIR)

    def test_translate_one(self):
        hir = translate_one(parse(HASH_PAIR)[0], Config())
        assert isinstance(hir, Hir)
        assert hir.function_count == 3


class TestSeparators:
    def test_single_root_with_too_many_separators(self):
        with pytest.raises(ConfigError) as info:
            translate("Contract::Function::Extra\n└── It should fail.")
        assert "too many separators at tree root #1" in str(info.value)
        assert info.value.root_index == 1

    def test_multi_root_reports_index(self):
        text = "Contract::a\n└── It a\n\nContract::b\n└── It b\n\nContract::c::d\n└── It c"
        with pytest.raises(ConfigError) as info:
            translate(text)
        assert info.value.root_index == 3
        assert "tree root #3" in str(info.value)

    def test_extra_separator_with_empty_name(self):
        with pytest.raises(ConfigError) as info:
            translate("Contract::Function::\n└── It should fail.")
        assert info.value.root_index == 1

    def test_leading_separators(self):
        with pytest.raises(ConfigError) as info:
            translate("::A::B\n└── It should fail.")
        assert info.value.root_index == 1

    def test_doubled_separator_in_later_root(self):
        text = "Foo::a\n└── It a\n\nFoo::::b\n└── It b"
        with pytest.raises(ConfigError) as info:
            translate(text)
        assert info.value.root_index == 2
        assert "tree root #2" in str(info.value)

    def test_checked_before_combining(self):
        text = "Foo::a\n└── It a\n\nBar::b::c\n└── It b"
        with pytest.raises(ConfigError):
            translate(text)


class TestTranslateMulti:
    def test_combines_submodules(self):
        text = "Contract::one\n└── it should pass\n\nContract::two\n└── it should pass"
        hir = translate(text)
        assert hir.module == "Contract"
        contexts = hir.contexts()
        assert list(contexts) == ["one", "two"]
        for groups in contexts.values():
            assert sum(len(g.functions) for g in groups) == 1

    def test_module_mismatch(self):
        text = "Foo::X\n└── It a\n\nBar::Y\n└── It b"
        with pytest.raises(CombineError) as info:
            translate(text)
        assert (info.value.expected, info.value.found) == ("Foo", "Bar")
        assert info.value.root_index == 2

    def test_module_names_sanitized_before_comparison(self):
        hir = translate("Foo Bar::a\n└── It a\n\nFoo_Bar!::b\n└── It b")
        assert hir.module == "Foo_Bar"
        assert list(hir.contexts()) == ["a", "b"]

    def test_root_order_decides_group_order(self):
        a = "Contract::a\n└── When x\n    └── It a"
        b = "Contract::b\n└── When y\n    └── It b"
        ab = translate(f"{a}\n\n{b}")
        ba = translate(f"{b}\n\n{a}")
        assert ab.groups == list(reversed(ba.groups))
        assert ab.module == ba.module

    def test_idempotent(self):
        text = "Contract::one\n└── It a\n\nContract::two\n└── When b\n    └── It c"
        assert translate(text) == translate(text)
