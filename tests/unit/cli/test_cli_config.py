"""Unit tests for findinfile CLI configuration management.

This module tests config file discovery, loading, priority handling and how
loaded values fill in unset command-line flags.
"""

import argparse
import json
from pathlib import Path
from unittest.mock import patch

import pytest

from findinfile.cli import apply_config_defaults, create_parser
from findinfile.cli.config import (
    discover_config_file,
    find_config_in_parents,
    load_config_file,
    load_config_with_priority,
)


@pytest.mark.unit
@pytest.mark.cli
class TestConfigDiscovery:
    """Test configuration file discovery functionality."""

    def test_discover_config_in_cwd(self, tmp_path: Path):
        config_file = tmp_path / ".findinfile.toml"
        config_file.write_text("ignore_case = true\n")

        with patch("pathlib.Path.cwd", return_value=tmp_path):
            discovered = discover_config_file()

        assert discovered is not None
        assert discovered.resolve() == config_file.resolve()

    def test_discover_config_in_parent(self, tmp_path: Path):
        config_file = tmp_path / ".findinfile.yaml"
        config_file.write_text("verbose: true\n")
        nested = tmp_path / "a" / "b"
        nested.mkdir(parents=True)

        assert find_config_in_parents(nested).resolve() == config_file.resolve()

    def test_dedicated_file_preferred_over_pyproject(self, tmp_path: Path):
        (tmp_path / "pyproject.toml").write_text("[tool.findinfile]\njobs = 2\n")
        config_file = tmp_path / ".findinfile.json"
        config_file.write_text("{}")

        assert find_config_in_parents(tmp_path).name == ".findinfile.json"

    def test_pyproject_with_section_is_discovered(self, tmp_path: Path):
        (tmp_path / "pyproject.toml").write_text("[tool.findinfile]\njobs = 2\n")

        assert find_config_in_parents(tmp_path).name == "pyproject.toml"

    def test_pyproject_without_section_is_ignored(self, tmp_path: Path):
        (tmp_path / "pyproject.toml").write_text("[project]\nname = 'x'\n")
        home = tmp_path / "home"
        home.mkdir()

        with patch("pathlib.Path.cwd", return_value=tmp_path), patch("pathlib.Path.home", return_value=home):
            assert discover_config_file() is None

    def test_discover_config_in_home(self, tmp_path: Path):
        work = tmp_path / "work"
        work.mkdir()
        home = tmp_path / "home"
        home.mkdir()
        config_file = home / ".findinfile.json"
        config_file.write_text('{"verbose": true}')

        with patch("pathlib.Path.cwd", return_value=work), patch("pathlib.Path.home", return_value=home):
            discovered = discover_config_file()

        assert discovered == config_file


@pytest.mark.unit
@pytest.mark.cli
class TestConfigLoading:
    """Test loading each supported format."""

    def test_load_toml(self, tmp_path: Path):
        path = tmp_path / "c.toml"
        path.write_text('extensions = [".py", "txt"]\nignore_case = true\n')

        assert load_config_file(path) == {"extensions": [".py", "txt"], "ignore_case": True}

    def test_load_yaml(self, tmp_path: Path):
        path = tmp_path / "c.yml"
        path.write_text("jobs: 4\nexclude_binary: false\n")

        assert load_config_file(path) == {"jobs": 4, "exclude_binary": False}

    def test_load_empty_yaml(self, tmp_path: Path):
        path = tmp_path / "c.yaml"
        path.write_text("")

        assert load_config_file(path) == {}

    def test_load_json(self, tmp_path: Path):
        path = tmp_path / "c.json"
        path.write_text(json.dumps({"output_format": "plain"}))

        assert load_config_file(str(path)) == {"output_format": "plain"}

    def test_load_pyproject_section(self, tmp_path: Path):
        path = tmp_path / "pyproject.toml"
        path.write_text("[tool.findinfile]\nfull_path = true\n")

        assert load_config_file(path) == {"full_path": True}

    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(argparse.ArgumentTypeError, match="does not exist"):
            load_config_file(tmp_path / "none.toml")

    def test_directory_path(self, tmp_path: Path):
        with pytest.raises(argparse.ArgumentTypeError, match="not a file"):
            load_config_file(tmp_path)

    def test_unsupported_extension(self, tmp_path: Path):
        path = tmp_path / "c.ini"
        path.write_text("[x]")

        with pytest.raises(argparse.ArgumentTypeError, match="Unsupported config file format"):
            load_config_file(path)

    @pytest.mark.parametrize(
        "name, content, message",
        [
            ("bad.toml", "x = [", "Invalid TOML"),
            ("bad.yaml", "a: [1, 2", "Invalid YAML"),
            ("bad.json", "{", "Invalid JSON"),
        ],
    )
    def test_malformed_files(self, tmp_path: Path, name, content, message):
        path = tmp_path / name
        path.write_text(content)

        with pytest.raises(argparse.ArgumentTypeError, match=message):
            load_config_file(path)

    def test_non_mapping_root(self, tmp_path: Path):
        path = tmp_path / "list.json"
        path.write_text("[1, 2]")

        with pytest.raises(argparse.ArgumentTypeError, match="must contain a table/mapping"):
            load_config_file(path)

    def test_pyproject_section_must_be_table(self, tmp_path: Path):
        path = tmp_path / "pyproject.toml"
        path.write_text('[tool]\nfindinfile = "yes"\n')

        with pytest.raises(argparse.ArgumentTypeError, match="must be a table"):
            load_config_file(path)


@pytest.mark.unit
@pytest.mark.cli
class TestConfigPriority:
    """Test explicit, environment and discovered config priority."""

    def test_explicit_path_wins(self, tmp_path: Path):
        explicit = tmp_path / "explicit.json"
        explicit.write_text('{"jobs": 1}')
        env = tmp_path / "env.json"
        env.write_text('{"jobs": 2}')

        assert load_config_with_priority(str(explicit), str(env)) == {"jobs": 1}

    def test_env_path_used_without_explicit(self, tmp_path: Path):
        env = tmp_path / "env.json"
        env.write_text('{"jobs": 2}')

        assert load_config_with_priority(None, str(env)) == {"jobs": 2}

    def test_discovered_config_last(self, tmp_path: Path):
        (tmp_path / ".findinfile.json").write_text('{"jobs": 3}')

        with patch("pathlib.Path.cwd", return_value=tmp_path):
            assert load_config_with_priority() == {"jobs": 3}

    def test_nothing_found(self, tmp_path: Path):
        with patch("pathlib.Path.cwd", return_value=tmp_path), patch("pathlib.Path.home", return_value=tmp_path):
            assert load_config_with_priority() == {}


@pytest.mark.unit
@pytest.mark.cli
class TestApplyConfigDefaults:
    """Test merging config values into parsed arguments."""

    def test_fills_only_unset_flags(self):
        parsed = create_parser().parse_args(["-s", "x", "-d", ".", "--no-exclude-binary"])

        apply_config_defaults(parsed, {"exclude_binary": True, "ignore_case": True, "jobs": 3})

        assert parsed.exclude_binary is False
        assert parsed.ignore_case is True
        assert parsed.jobs == 3

    def test_extension_list_is_joined(self):
        parsed = create_parser().parse_args(["-s", "x", "-d", "."])

        apply_config_defaults(parsed, {"extensions": ["py", ".txt"]})

        assert parsed.extensions == "py,.txt"

    def test_unknown_and_required_keys_ignored(self):
        parsed = create_parser().parse_args(["-s", "x", "-d", "."])

        apply_config_defaults(parsed, {"search_string": "other", "directory": "/", "colour": "red"})

        assert parsed.search_string == "x"
        assert parsed.directory == "."
        assert not hasattr(parsed, "colour")

    @pytest.mark.parametrize(
        "key, value",
        [
            ("jobs", "4"),
            ("jobs", True),
            ("jobs", 2.5),
            ("ignore_case", "false"),
            ("exclude_binary", 0),
            ("extensions", 5),
            ("extensions", ["py", 3]),
            ("encoding", ["utf-8"]),
            ("output_format", "xml"),
        ],
    )
    def test_mistyped_value_rejected(self, key, value):
        parsed = create_parser().parse_args(["-s", "x", "-d", "."])

        with pytest.raises(argparse.ArgumentTypeError, match=f"Config value for '{key}'"):
            apply_config_defaults(parsed, {key: value})

    def test_mistyped_value_ignored_when_flag_given(self):
        parsed = create_parser().parse_args(["-s", "x", "-d", ".", "-j", "2"])

        apply_config_defaults(parsed, {"jobs": "four"})

        assert parsed.jobs == 2

    def test_well_typed_values_accepted(self):
        parsed = create_parser().parse_args(["-s", "x", "-d", "."])

        apply_config_defaults(
            parsed,
            {"jobs": 4, "ignore_case": False, "extensions": "py", "encoding": "latin-1", "output_format": "json"},
        )

        assert (parsed.jobs, parsed.ignore_case, parsed.extensions) == (4, False, "py")
        assert (parsed.encoding, parsed.output_format) == ("latin-1", "json")
