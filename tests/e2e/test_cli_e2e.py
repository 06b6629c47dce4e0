from __future__ import annotations

"""
End-to-End (E2E) CLI Tests.

Invokes the entry point script via subprocess and validates exit codes,
stream output and report files.
"""

import json
import os
import subprocess
import sys
from pathlib import Path
from typing import List

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
SRC_DIR = PROJECT_ROOT / "src"
ENTRY_POINT = SRC_DIR / "repostruct" / "main.py"


def run_cli(args: List[str], home: Path) -> subprocess.CompletedProcess[str]:
    """
    Execute the CLI in a separate process.

    'home' isolates the persisted configuration from the developer's own.
    """
    env = os.environ.copy()
    env["PYTHONPATH"] = str(SRC_DIR) + os.pathsep + env.get("PYTHONPATH", "")
    env["HOME"] = str(home)
    env["LOCALAPPDATA"] = str(home)

    cmd = [sys.executable, str(ENTRY_POINT)] + args

    return subprocess.run(
        cmd,
        env=env,
        capture_output=True,
        text=True,
        encoding="utf-8",
    )


def test_all_repositories_pass(tmp_path: Path, repos_root: Path) -> None:
    result = run_cli(["good", "-r", str(repos_root), "--use-defaults"], tmp_path)

    assert result.returncode == 0, result.stderr
    assert "good: OK" in result.stdout
    assert "All repositories are OK." in result.stdout


def test_failing_repository_exit_code_and_report(tmp_path: Path, repos_root: Path) -> None:
    result = run_cli(["good", "bad", "-r", str(repos_root), "--use-defaults"], tmp_path)

    assert result.returncode == 1
    assert "### Repository not OK ###" in result.stdout
    assert "Missing directory: Data" in result.stdout
    assert "extra.txt" in result.stdout
    assert "Some repositories failed, see reports." in result.stdout


def test_json_output(tmp_path: Path, repos_root: Path) -> None:
    result = run_cli(["good", "missing", "-r", str(repos_root), "--use-defaults", "--json"], tmp_path)

    assert result.returncode == 1
    data = json.loads(result.stdout)
    assert data["checked"] == 2
    assert [r["ok"] for r in data["reports"]] == [True, False]
    assert data["reports"][1]["messages"][0].endswith("directory does not exist")


def test_list_file_and_report_dir(tmp_path: Path, repos_root: Path) -> None:
    (repos_root / "repos.txt").write_text("good\nbad\n\nmissing\n", encoding="utf-8")
    reports = tmp_path / "reports"

    result = run_cli(
        ["-r", str(repos_root), "-l", "repos.txt", "--report-dir", str(reports), "--use-defaults", "-q"],
        tmp_path,
    )

    assert result.returncode == 1
    assert "good: OK" not in result.stdout
    assert (reports / "bad.report.txt").exists()
    assert not (reports / "good.report.txt").exists()
    assert not (reports / "missing.report.txt").exists()


def test_invalid_schema_aborts_without_report(tmp_path: Path, repos_root: Path) -> None:
    (repos_root / "broken.xml").write_text("<wrongRoot/>", encoding="utf-8")

    result = run_cli(["good", "-r", str(repos_root), "-s", "broken.xml", "--use-defaults"], tmp_path)

    assert result.returncode == 2
    assert "Invalid structure definition" in result.stderr
    assert "good" not in result.stdout


def test_missing_list_file_is_a_configuration_error(tmp_path: Path, repos_root: Path) -> None:
    result = run_cli(["-r", str(repos_root), "-l", "nope.txt", "--use-defaults"], tmp_path)

    assert result.returncode == 2
    assert "Cannot read repository list" in result.stderr


def test_no_repositories_is_a_configuration_error(tmp_path: Path, repos_root: Path) -> None:
    result = run_cli(["-r", str(repos_root), "--use-defaults"], tmp_path)

    assert result.returncode == 2


def test_dump_config(tmp_path: Path, repos_root: Path) -> None:
    result = run_cli(["-r", str(repos_root), "-j", "3", "--use-defaults", "--dump-config"], tmp_path)

    assert result.returncode == 0
    data = json.loads(result.stdout)
    assert data["max_workers"] == 3
    assert data["schema_file"] == str(repos_root / "repository_structure.xml")


def test_saved_config_resolves_schema_in_new_root(tmp_path: Path, repos_root: Path) -> None:
    saved = run_cli(["good", "-r", str(repos_root), "--save-config"], tmp_path)
    assert saved.returncode == 0, saved.stderr

    other = tmp_path / "other_root"
    (other / "repo" / "only").mkdir(parents=True)
    (other / "repository_structure.xml").write_text(
        '<repoRoot><directory name="only"/></repoRoot>', encoding="utf-8"
    )

    result = run_cli(["repo", "-r", str(other)], tmp_path)

    assert result.returncode == 0, result.stdout + result.stderr
    assert "repo: OK" in result.stdout


def test_undecodable_list_file_is_a_configuration_error(tmp_path: Path, repos_root: Path) -> None:
    (repos_root / "repos.txt").write_bytes(b"good\n\xff\xfe bad\n")

    result = run_cli(["-r", str(repos_root), "-l", "repos.txt", "--use-defaults"], tmp_path)

    assert result.returncode == 2
    assert "Cannot read repository list" in result.stderr
    assert "Traceback" not in result.stderr
