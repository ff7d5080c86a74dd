from __future__ import annotations

"""
End-to-End (E2E) CLI Tests.

Invokes the entry point script via subprocess and validates exit codes,
stream output and file system side effects.
"""

import json
import os
import subprocess
import sys
from pathlib import Path
from typing import List

import pytest

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
SRC_DIR = PROJECT_ROOT / "src"
ENTRY_POINT = SRC_DIR / "vsdeploy" / "main.py"


def run_cli(args: List[str], home: Path) -> subprocess.CompletedProcess[str]:
    """
    Execute the CLI in a separate process with an isolated user data directory.
    """
    env = os.environ.copy()
    env["PYTHONPATH"] = str(SRC_DIR) + os.pathsep + env.get("PYTHONPATH", "")
    env["HOME"] = str(home)
    env["USERPROFILE"] = str(home)
    env["LOCALAPPDATA"] = str(home)

    cmd = [sys.executable, str(ENTRY_POINT), "--use-defaults"] + args
    return subprocess.run(cmd, env=env, capture_output=True, text=True, encoding="utf-8")


@pytest.fixture
def home(tmp_path: Path) -> Path:
    path = tmp_path / "home"
    path.mkdir()
    return path


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    path = tmp_path / "project"
    path.mkdir()
    (path / "Program.cs").write_text("class Program {}", encoding="utf-8")
    return path


def test_add_then_remove_files(package_dir: Path, project_dir: Path, home: Path) -> None:
    result = run_cli(["--json", "add-files", str(project_dir), str(package_dir), "-f", "*.dll"], home)

    assert result.returncode == 0, result.stderr
    payload = json.loads(result.stdout)
    assert payload["ok"] is True
    assert len(payload["added"]) == 3
    assert (project_dir / "a" / "deep" / "c.dll").exists()

    result = run_cli(["remove-files", str(project_dir), str(package_dir), "-f", "*.dll"], home)

    assert result.returncode == 0, result.stderr
    assert "Removed: 3" in result.stdout
    assert sorted(p.name for p in project_dir.iterdir()) == ["Program.cs"]


def test_dry_run_leaves_disk_untouched(package_dir: Path, project_dir: Path, home: Path) -> None:
    result = run_cli(["--json", "add-files", "--dry-run", str(project_dir), str(package_dir)], home)

    assert result.returncode == 0, result.stderr
    payload = json.loads(result.stdout)
    assert payload["dry_run"] is True
    assert len(payload["added"]) == 5
    assert sorted(p.name for p in project_dir.iterdir()) == ["Program.cs"]


def test_missing_source_exits_with_invalid_input(project_dir: Path, home: Path, tmp_path: Path) -> None:
    result = run_cli(["add-files", str(project_dir), str(tmp_path / "nope")], home)

    assert result.returncode == 2
    assert "does not exist" in result.stderr


def test_copy_step_prints_fragment(home: Path) -> None:
    result = run_cli([
        "copy-step",
        "--install-root", "C:\\sln\\pkg\\tools",
        "--solution-root", "C:\\sln",
        "--source", "native",
        "--target", "bin",
    ], home)

    assert result.returncode == 0, result.stderr
    lines = result.stdout.splitlines()
    assert lines[0] == 'if not exist "$(TargetDir)bin" md "$(TargetDir)bin"'
    assert lines[1] == 'xcopy /s /y "$(SolutionDir)pkg\\tools\\native\\*.*" "$(TargetDir)bin"'


def test_copy_step_into_project_is_idempotent(tmp_path: Path, home: Path) -> None:
    project = tmp_path / "App.csproj"
    project.write_text('<Project Sdk="Microsoft.NET.Sdk"></Project>', encoding="utf-8")
    args = [
        "--json", "copy-step",
        "--install-root", "C:\\sln\\pkg", "--solution-root", "C:\\sln",
        "--source", "native", "--target", "bin",
        "--project", str(project),
    ]

    first = run_cli(args, home)
    second = run_cli(args, home)

    assert json.loads(first.stdout)["changed"] is True
    assert json.loads(second.stdout)["changed"] is False
    assert project.read_text(encoding="utf-8").count("xcopy") == 1


def test_add_and_remove_step(tmp_path: Path, home: Path) -> None:
    project = tmp_path / "App.csproj"
    project.write_text('<Project Sdk="Microsoft.NET.Sdk"></Project>', encoding="utf-8")

    result = run_cli(["add-step", str(project), "Pre", "echo hello"], home)
    assert result.returncode == 0, result.stderr
    assert "echo hello" in project.read_text(encoding="utf-8")

    result = run_cli(["remove-step", str(project), "pre", "echo hello"], home)
    assert result.returncode == 0, result.stderr
    assert "echo hello" not in project.read_text(encoding="utf-8")


def test_broken_project_reports_failure(tmp_path: Path, home: Path) -> None:
    project = tmp_path / "Broken.csproj"
    project.write_text("<Project>", encoding="utf-8")

    result = run_cli(["add-step", str(project), "post", "echo hi"], home)

    assert result.returncode == 1
    assert "ERROR" in result.stderr


def test_dump_config(home: Path) -> None:
    result = run_cli(["dump-config"], home)

    assert result.returncode == 0, result.stderr
    conf = json.loads(result.stdout)
    assert conf["default_pattern"] == "*"
    assert conf["target_dir_token"] == "$(TargetDir)"
