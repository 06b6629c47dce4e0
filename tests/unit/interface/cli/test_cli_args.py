from __future__ import annotations

"""
Unit tests for CLI Argument Parsing.

Verifies:
1. Mapping of CLI options to configuration keys.
2. Unset options map to None so saved settings survive the merge.
"""

from repostruct.interface.cli.app import _merge_config, _persistable_config
from repostruct.interface.cli.args import args_to_overrides, build_parser


def parse_args(arg_list):
    """Helper to simulate CLI argument parsing."""
    parser = build_parser()
    return parser.parse_args(arg_list)


def test_positional_names_and_paths():
    args = parse_args(["C# course", "Python 101", "-r", "/data/repos", "-s", "s.xml"])
    overrides = args_to_overrides(args)

    assert args.names == ["C# course", "Python 101"]
    assert overrides["repos_root"] == "/data/repos"
    assert overrides["schema_file"] == "s.xml"


def test_list_and_execution_options():
    args = parse_args(["--list", "repos.csv", "--column", "2", "--start", "1", "-j", "4", "--save-reports"])
    overrides = args_to_overrides(args)

    assert overrides["list_file"] == "repos.csv"
    assert overrides["list_column"] == 2
    assert overrides["list_start"] == 1
    assert overrides["max_workers"] == 4
    assert overrides["save_reports"] is True


def test_unset_options_do_not_override_saved_settings():
    base = {"repos_root": "/saved", "max_workers": 3, "save_reports": True}

    merged = _merge_config(base, args_to_overrides(parse_args([])))

    assert merged == base


def test_diagnostic_flags():
    args = parse_args(["--debug", "--json", "-q", "--log-file", "run.log", "--dump-config"])

    assert args.debug is True
    assert args.json_output is True
    assert args.quiet is True
    assert args.log_file == "run.log"
    assert args.dump_config is True


def test_saved_settings_keep_locations_relative():
    raw = {"repos_root": "repos", "schema_file": " rules.xml ", "list_file": "", "report_dir": "out", "max_workers": 2}
    validated = {
        "repos_root": "/abs/repos",
        "schema_file": "/abs/repos/rules.xml",
        "list_file": "",
        "report_dir": "/abs/repos/out",
        "max_workers": 2,
    }

    persisted = _persistable_config(raw, validated)

    assert persisted["repos_root"] == "/abs/repos"
    assert persisted["schema_file"] == "rules.xml"
    assert persisted["report_dir"] == "out"
    assert persisted["max_workers"] == 2
