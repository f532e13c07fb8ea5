"""Tests for rules-file loading and directive collection."""
import pytest

from dynrename.core.config import collect_directives, load_rules_file
from dynrename.core.exceptions import ConfigError


@pytest.fixture
def rules_file(tmp_path):
    def write(content):
        path = tmp_path / "rules.yaml"
        path.write_text(content, encoding="utf-8")
        return path
    return write


class TestLoadRulesFile:
    """Tests for load_rules_file."""

    def test_plain_list(self, rules_file):
        path = rules_file('- "a>b"\n- "*x.c>*x.d"\n')
        assert load_rules_file(path) == ["a>b", "*x.c>*x.d"]

    def test_mapping_with_replace_key(self, rules_file):
        path = rules_file("replace:\n  - profile.tel>profile.phone\n")
        assert load_rules_file(path) == ["profile.tel>profile.phone"]

    def test_empty_file(self, rules_file):
        assert load_rules_file(rules_file("")) == []

    def test_not_a_list(self, rules_file):
        with pytest.raises(ConfigError, match="list of directives"):
            load_rules_file(rules_file("a>b\n"))

    def test_non_string_directive(self, rules_file):
        with pytest.raises(ConfigError, match="non-string"):
            load_rules_file(rules_file("- 12\n"))

    def test_invalid_yaml(self, rules_file):
        with pytest.raises(ConfigError, match="Invalid YAML"):
            load_rules_file(rules_file("- [unclosed\n"))

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError, match="Cannot read"):
            load_rules_file(tmp_path / "absent.yaml")


class TestCollectDirectives:
    """Tests for collect_directives."""

    def test_file_directives_come_first(self, rules_file):
        path = rules_file("- a>b\n")
        assert collect_directives(("c>d",), path) == ["a>b", "c>d"]

    def test_command_line_only(self):
        assert collect_directives(("a>b", "b>c")) == ["a>b", "b>c"]

    def test_nothing_given(self):
        with pytest.raises(ConfigError, match="No rename directives"):
            collect_directives(())
