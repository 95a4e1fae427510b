"""npm and package manager tool handlers.

Handles:
- get_npm_package_info: Registry metadata for a package
- compare_npm_versions: Current version vs. latest on npm
- detect_package_manager: Which package manager a workspace uses

Registry failures are reported as error results rather than raised, so the
client sees the reason (e.g. an unknown package name).
"""

import logging
from typing import Any

from ...errors import RegistryError
from ...formatters import format_package_info, format_version_comparison
from ...models import (
    CompareVersionsParams,
    DetectPackageManagerParams,
    NpmPackageParams,
    ToolResult,
)
from ...services.npm import summarize_package
from ...services.package_manager import detect_package_manager, format_detection_result
from .base import HandlerContext, make_result

logger = logging.getLogger(__name__)


async def handle_get_npm_package_info(
    params: dict[str, Any],
    ctx: HandlerContext,
) -> ToolResult:
    """Fetch and summarize a package from the npm registry.

    Args:
        params: Dict containing:
            - packageName: npm package name, scoped names included

    Returns:
        ToolResult with package details, or an error result
    """
    args = NpmPackageParams.model_validate(params)

    try:
        raw = await ctx.npm.get_package_info(args.package_name)
    except RegistryError as e:
        logger.warning(f"npm lookup failed for {args.package_name}: {e}")
        return make_result(params, f"Error fetching package information: {e}", is_error=True)

    info = summarize_package(raw)
    return make_result(params, format_package_info(info), data=info.model_dump())


async def handle_compare_npm_versions(
    params: dict[str, Any],
    ctx: HandlerContext,
) -> ToolResult:
    """Compare the version in use against the latest published one."""
    args = CompareVersionsParams.model_validate(params)

    try:
        comparison = await ctx.npm.get_version_comparison(args.package_name, args.current_version)
    except RegistryError as e:
        logger.warning(f"npm comparison failed for {args.package_name}: {e}")
        return make_result(params, f"Error comparing versions: {e}", is_error=True)

    return make_result(params, format_version_comparison(comparison), data=comparison.model_dump())


async def handle_detect_package_manager(
    params: dict[str, Any],
    ctx: HandlerContext,
) -> ToolResult:
    args = DetectPackageManagerParams.model_validate(params)

    try:
        info = detect_package_manager(args.workspace_path)
    except OSError as e:
        return make_result(params, f"Error detecting package manager: {e}", is_error=True)

    return make_result(params, format_detection_result(info), data=info.model_dump())
