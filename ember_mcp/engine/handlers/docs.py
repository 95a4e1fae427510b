"""Documentation tool handlers.

Handles:
- search_ember_docs: Hybrid keyword + semantic search over the corpus
- get_api_reference: Structured API reference for a class or module
- get_best_practices: Community guidance for a topic
- get_ember_version_info: Release notes for a version (latest by default)
"""

from typing import Any

from ...formatters import (
    format_api_reference,
    format_best_practices,
    format_search_results,
    format_version_info,
)
from ...models import (
    ApiReferenceParams,
    BestPracticesParams,
    SearchDocsParams,
    ToolResult,
    VersionInfoParams,
)
from .base import HandlerContext, make_result


async def handle_search_docs(
    params: dict[str, Any],
    ctx: HandlerContext,
) -> ToolResult:
    """Search the documentation.

    Args:
        params: Dict containing:
            - query: Search query
            - category: all, api, guides or community (default: all)
            - limit: Maximum results (default: 5)

    Returns:
        ToolResult with formatted results, or a hint when nothing matched
    """
    args = SearchDocsParams.model_validate(params)
    results = await ctx.docs.search(args.query, args.category, args.limit)

    if not results:
        return make_result(
            params,
            f'No results found for "{args.query}". '
            "Try different keywords or broader search terms.",
            data=[],
        )

    return make_result(
        params,
        format_search_results(results, args.query),
        data=[r.model_dump() for r in results],
    )


async def handle_get_api_reference(
    params: dict[str, Any],
    ctx: HandlerContext,
) -> ToolResult:
    """Look up API reference documentation by name."""
    args = ApiReferenceParams.model_validate(params)
    reference = await ctx.docs.get_api_reference(args.name, args.type)

    if reference is None:
        return make_result(
            params,
            f'No API documentation found for "{args.name}". '
            "Try searching with search_ember_docs first.",
        )

    return make_result(params, format_api_reference(reference), data=reference.model_dump())


async def handle_get_best_practices(
    params: dict[str, Any],
    ctx: HandlerContext,
) -> ToolResult:
    """Best practices for a topic."""
    args = BestPracticesParams.model_validate(params)
    practices = await ctx.docs.get_best_practices(args.topic)

    if not practices:
        return make_result(
            params,
            f'No best practices found for "{args.topic}". '
            "Try searching with search_ember_docs for general information.",
            data=[],
        )

    return make_result(
        params,
        format_best_practices(practices, args.topic),
        data=[p.model_dump() for p in practices],
    )


async def handle_get_version_info(
    params: dict[str, Any],
    ctx: HandlerContext,
) -> ToolResult:
    args = VersionInfoParams.model_validate(params)
    info = await ctx.docs.get_version_info(args.version)
    return make_result(params, format_version_info(info), data=info.model_dump())
