"""Package manager detection for a JavaScript workspace."""

import json
import logging
import re
from pathlib import Path

from ..models.enums import DetectionConfidence
from ..models.results import PackageManagerInfo

logger = logging.getLogger(__name__)

# Checked in order; the first lockfile present wins
LOCKFILES = (
    ("pnpm-lock.yaml", "pnpm"),
    ("yarn.lock", "yarn"),
    ("package-lock.json", "npm"),
    ("bun.lockb", "bun"),
)

_PACKAGE_MANAGER_FIELD_RE = re.compile(r"^([a-z]+)@")


def runner_for(manager: str) -> str:
    """Binary runner for a manager (``npx`` for npm, ``bunx`` for bun)."""
    if manager == "npm":
        return "npx"
    if manager == "bun":
        return "bunx"
    return manager


def _from_package_json(path: Path) -> str | None:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        logger.debug(f"Could not read {path}: {e}")
        return None
    if not isinstance(data, dict):
        return None
    field = data.get("packageManager")
    if not isinstance(field, str):
        return None
    match = _PACKAGE_MANAGER_FIELD_RE.match(field)
    return match.group(1) if match else None


def detect_package_manager(workspace_path: str | Path) -> PackageManagerInfo:
    """Detect the package manager used in a workspace.

    Detection order: lockfiles (pnpm, yarn, npm, bun), then the
    ``packageManager`` field of ``package.json``, then npm with low
    confidence.

    Args:
        workspace_path: Workspace directory.

    Returns:
        The detected manager with its runner and how it was detected.
    """
    root = Path(workspace_path).expanduser().resolve()

    for lockfile, manager in LOCKFILES:
        if (root / lockfile).is_file():
            return PackageManagerInfo(
                manager=manager,
                lockfile=lockfile,
                runner=runner_for(manager),
                detection_method="lockfile",
                confidence=DetectionConfidence.HIGH,
            )

    package_json = root / "package.json"
    if package_json.is_file():
        manager = _from_package_json(package_json)
        if manager:
            return PackageManagerInfo(
                manager=manager,
                lockfile=None,
                runner=runner_for(manager),
                detection_method="packageManager field",
                confidence=DetectionConfidence.HIGH,
            )

    return PackageManagerInfo(
        manager="npm",
        lockfile=None,
        runner="npx",
        detection_method="default fallback",
        confidence=DetectionConfidence.LOW,
    )


def command_for_scenario(info: PackageManagerInfo, scenario: str) -> str:
    """Command prefix for a scenario (install, add, remove, run, execute).

    Unknown scenarios return the bare manager name.
    """
    manager = info.manager
    commands = {
        "install": f"{manager} install",
        "add": f"{manager} {'install' if manager == 'npm' else 'add'}",
        "remove": f"{manager} {'uninstall' if manager == 'npm' else 'remove'}",
        "run": f"{manager} run",
        "execute": info.runner,
    }
    return commands.get(scenario, manager)


def format_detection_result(info: PackageManagerInfo) -> str:
    """Render a detection result as Markdown with the commands to use."""
    lines = [f"# Package Manager: {info.manager}", ""]

    via = info.lockfile or info.detection_method
    lines.append(f"Detected via **{via}** ({info.confidence} confidence)")
    lines.append("")

    lines.append("## Commands to use:")
    lines.append("")
    lines.append(f"- Install: `{command_for_scenario(info, 'install')}`")
    lines.append(f"- Add package: `{command_for_scenario(info, 'add')} <pkg>`")
    lines.append(f"- Remove package: `{command_for_scenario(info, 'remove')} <pkg>`")
    lines.append(f"- Run script: `{command_for_scenario(info, 'run')} <script>`")
    lines.append(f"- Execute binary: `{command_for_scenario(info, 'execute')} <command>`")

    if info.manager == "npm":
        lines.append("")
        lines.append("**npm-specific notes:**")
        lines.append("- Scripts require `npm run <script>` (can't omit `run`)")
        lines.append("- Binaries use `npx <command>` (not `npm exec`)")
        lines.append("- Pass args to scripts with `--`: `npm run test -- --watch`")

    if info.confidence == DetectionConfidence.LOW:
        lines.append("")
        lines.append(
            "**Warning:** No lockfile found. Defaulting to npm. Consider committing your lockfile."
        )

    return "\n".join(lines) + "\n"
