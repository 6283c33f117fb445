#!/usr/bin/env python3
"""Tests for the mapping table and request rewriting."""

import dataclasses

import pytest

from pathalias.config import PathsConfig
from pathalias.errors import AliasPatternError
from pathalias.mapping import MappingTable, build_mapping_table, is_typing
from pathalias.patterns import ExactMatch, PrefixCapture
from pathalias.rewriter import describe_rewrite, rewrite_specifier


def make_table(paths, base_url=None, config_file="/proj/tsconfig.json"):
    return build_mapping_table(PathsConfig(config_file, base_url, paths))


class TestIsTyping:
    """Tests for typings detection."""

    @pytest.mark.parametrize(
        "target",
        ["node_modules/@types/node", "typings/lib.d.ts", "@types/*"],
    )
    def test_typing_targets(self, target):
        assert is_typing(target)

    @pytest.mark.parametrize("target", ["src/*", "./lib/index", "lodash-es", "types/*"])
    def test_runtime_targets(self, target):
        assert not is_typing(target)


class TestBuildMappingTable:
    """Tests for build_mapping_table."""

    def test_one_mapping_per_target(self):
        """Test multiple targets produce one mapping each, sharing the pattern."""
        table = make_table({"@shared/*": ["src/shared/*", "lib/shared/*"]})
        assert [m.target for m in table.mappings] == ["src/shared/*", "lib/shared/*"]
        assert table.mappings[0].pattern is table.mappings[1].pattern
        assert all(m.alias == "@shared/*" for m in table.mappings)

    def test_preserves_configuration_order(self):
        table = make_table(
            {"@z": ["z"], "@a/*": ["a/*", "a2/*"], "@m/*": ["m/*"]}
        )
        assert [(m.alias, m.target) for m in table.mappings] == [
            ("@z", "z"),
            ("@a/*", "a/*"),
            ("@a/*", "a2/*"),
            ("@m/*", "m/*"),
        ]

    def test_only_module_flag(self):
        table = make_table({"@config": ["config"], "@app/*": ["app/*"]})
        exact, wildcard = table.mappings
        assert exact.only_module and isinstance(exact.pattern, ExactMatch)
        assert not wildcard.only_module and isinstance(wildcard.pattern, PrefixCapture)

    def test_base_directory_from_base_url(self):
        assert make_table({}, base_url="src").base_directory == "/proj/src"

    def test_base_directory_absolute_base_url(self):
        assert make_table({}, base_url="/elsewhere/root").base_directory == "/elsewhere/root"

    def test_base_directory_defaults_to_config_dir(self):
        table = make_table({})
        assert table.base_directory == "/proj"
        assert table.base_url is None

    def test_typings_excluded_from_active(self):
        table = make_table(
            {"@app/*": ["app/*"], "node": ["node_modules/@types/node"], "@lib": ["lib.d.ts"]}
        )
        assert len(table.mappings) == 3
        assert [m.alias for m in table.active_mappings] == ["@app/*"]

    def test_multiple_wildcards_rejected(self):
        with pytest.raises(AliasPatternError):
            make_table({"@a/*/b/*": ["x/*"]})

    def test_table_is_immutable(self):
        table = make_table({"@app/*": ["app/*"]})
        with pytest.raises(dataclasses.FrozenInstanceError):
            table.base_directory = "/tmp"
        assert isinstance(table.mappings, tuple)


class TestMatch:
    """Tests for MappingTable.match."""

    def test_exact_alias(self):
        table = make_table({"@config": ["./config/index"]})
        match = table.match("@config")
        assert match.mapping.alias == "@config"
        assert match.captured == ""
        assert table.match("@config/dev") is None

    def test_wildcard_alias(self):
        match = make_table({"@app/*": ["app/*"]}).match("@app/widgets/button")
        assert match.captured == "widgets/button"
        assert match.specifier == "@app/widgets/button"

    def test_first_match_wins(self):
        """Test the earliest declared mapping wins over a later exact one."""
        table = make_table({"@x/*": ["a/*"], "@x/y": ["b"]})
        match = table.match("@x/y")
        assert match.mapping.alias == "@x/*"
        assert match.mapping.target == "a/*"

    def test_first_target_wins(self):
        table = make_table({"@shared/*": ["src/shared/*", "lib/shared/*"]})
        assert table.match("@shared/util").mapping.target == "src/shared/*"

    def test_typings_never_match(self):
        table = make_table({"node": ["node_modules/@types/node"]})
        assert table.match("node") is None

    def test_typings_skipped_for_later_mapping(self):
        table = make_table({"@lib/*": ["types/*.d.ts"], "@lib/core": ["core/index"]})
        assert table.match("@lib/core").mapping.target == "core/index"

    @pytest.mark.parametrize("specifier", ["", None])
    def test_empty_specifier(self, specifier):
        table = make_table({"*": ["src/*"]})
        assert table.match(specifier) is None

    def test_no_match(self):
        assert make_table({"@app/*": ["app/*"]}).match("react") is None

    def test_empty_table(self):
        table = MappingTable(mappings=(), base_directory="/proj")
        assert table.active_mappings == ()
        assert table.match("anything") is None


class TestRewriteSpecifier:
    """Tests for rewrite_specifier."""

    def test_exact_target_verbatim(self):
        table = make_table({"@lib": ["lodash-es"]})
        assert rewrite_specifier(table.match("@lib"), table.base_directory) == "lodash-es"

    def test_wildcard_substitution(self):
        table = make_table({"@app/*": ["src/app/*"]})
        match = table.match("@app/foo/bar")
        assert rewrite_specifier(match, table.base_directory) == "src/app/foo/bar"

    def test_relative_target_anchored(self):
        table = make_table({"@app/*": ["./app/*"]}, base_url="src")
        match = table.match("@app/widgets/button")
        assert rewrite_specifier(match, table.base_directory) == "/proj/src/app/widgets/button"

    def test_parent_relative_target(self):
        table = make_table({"@shared/*": ["../shared/*"]}, base_url="src")
        match = table.match("@shared/types")
        assert rewrite_specifier(match, table.base_directory) == "/proj/shared/types"

    def test_relative_exact_without_base_url(self):
        """Test relative targets anchor at the config directory without baseUrl."""
        table = make_table({"@config": ["./config/index"]})
        assert rewrite_specifier(table.match("@config"), table.base_directory) == (
            "/proj/config/index"
        )

    def test_absolute_target_unchanged(self):
        table = make_table({"@vendor/*": ["/opt/vendor/*"]}, base_url="src")
        match = table.match("@vendor/lib")
        assert rewrite_specifier(match, table.base_directory) == "/opt/vendor/lib"

    def test_only_first_wildcard_replaced(self):
        table = make_table({"@x/*": ["x/*/*"]})
        assert rewrite_specifier(table.match("@x/a"), table.base_directory) == "x/a/*"

    def test_wildcard_alias_target_without_wildcard(self):
        table = make_table({"@all/*": ["src/index"]})
        assert rewrite_specifier(table.match("@all/foo"), table.base_directory) == "src/index"


class TestDescribeRewrite:
    """Tests for describe_rewrite."""

    def test_message(self):
        table = make_table({"@app/*": ["app/*"]})
        match = table.match("@app/x")
        assert describe_rewrite(match, "app/x") == "aliased with mapping '@app/x': '@app/*' to 'app/x'"
