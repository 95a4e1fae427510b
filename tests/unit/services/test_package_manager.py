"""Tests for package manager detection."""

import json

import pytest

from ember_mcp.models.enums import DetectionConfidence
from ember_mcp.services.package_manager import (
    command_for_scenario,
    detect_package_manager,
    format_detection_result,
    runner_for,
)


@pytest.mark.parametrize(
    "lockfile,manager,runner",
    [
        ("pnpm-lock.yaml", "pnpm", "pnpm"),
        ("yarn.lock", "yarn", "yarn"),
        ("package-lock.json", "npm", "npx"),
        ("bun.lockb", "bun", "bunx"),
    ],
)
def test_lockfile_detection(tmp_path, lockfile, manager, runner):
    (tmp_path / lockfile).write_text("")

    info = detect_package_manager(tmp_path)

    assert info.manager == manager
    assert info.lockfile == lockfile
    assert info.runner == runner
    assert info.detection_method == "lockfile"
    assert info.confidence == DetectionConfidence.HIGH


def test_pnpm_lockfile_wins_over_npm(tmp_path):
    (tmp_path / "package-lock.json").write_text("{}")
    (tmp_path / "pnpm-lock.yaml").write_text("")

    assert detect_package_manager(tmp_path).manager == "pnpm"


def test_package_manager_field(tmp_path):
    (tmp_path / "package.json").write_text(json.dumps({"packageManager": "yarn@4.1.0"}))

    info = detect_package_manager(str(tmp_path))

    assert info.manager == "yarn"
    assert info.lockfile is None
    assert info.detection_method == "packageManager field"
    assert info.confidence == DetectionConfidence.HIGH


def test_invalid_package_json_falls_back(tmp_path):
    (tmp_path / "package.json").write_text("{not json")

    info = detect_package_manager(tmp_path)

    assert info.manager == "npm"
    assert info.confidence == DetectionConfidence.LOW


def test_empty_workspace_defaults_to_npm(tmp_path):
    info = detect_package_manager(tmp_path)

    assert info.manager == "npm"
    assert info.runner == "npx"
    assert info.detection_method == "default fallback"
    assert info.confidence == DetectionConfidence.LOW


def test_runner_for():
    assert runner_for("npm") == "npx"
    assert runner_for("bun") == "bunx"
    assert runner_for("pnpm") == "pnpm"


def test_commands_for_npm_and_pnpm(tmp_path):
    npm = detect_package_manager(tmp_path)
    (tmp_path / "pnpm-lock.yaml").write_text("")
    pnpm = detect_package_manager(tmp_path)

    assert command_for_scenario(npm, "add") == "npm install"
    assert command_for_scenario(npm, "remove") == "npm uninstall"
    assert command_for_scenario(pnpm, "add") == "pnpm add"
    assert command_for_scenario(pnpm, "execute") == "pnpm"
    assert command_for_scenario(pnpm, "unknown") == "pnpm"


def test_format_detection_result_low_confidence(tmp_path):
    text = format_detection_result(detect_package_manager(tmp_path))

    assert text.startswith("# Package Manager: npm")
    assert "Execute binary: `npx <command>`" in text
    assert "npm-specific notes" in text
    assert "No lockfile found" in text


def test_format_detection_result_lockfile(tmp_path):
    (tmp_path / "yarn.lock").write_text("")

    text = format_detection_result(detect_package_manager(tmp_path))

    assert "Detected via **yarn.lock** (high confidence)" in text
    assert "Add package: `yarn add <pkg>`" in text
    assert "Warning" not in text
