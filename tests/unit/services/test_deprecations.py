"""Tests for deprecation detection."""

from ember_mcp.engine.core.document import Item
from ember_mcp.services.deprecations import DeprecationManager


def test_analyze_content_extracts_versions_and_replacement():
    manager = DeprecationManager()

    info = manager.analyze_content(
        "Ember.ObjectProxy",
        "Proxies objects. Deprecated since 5.4 and removed in 6.0. Use `tracked` instead.",
    )

    assert info is not None
    assert info.since == "5.4"
    assert info.until == "6.0"
    assert info.replacement == "tracked"
    assert info.message.startswith("Deprecated since 5.4")


def test_analyze_content_without_marker():
    manager = DeprecationManager()
    assert manager.analyze_content("Ember.Component", "A view with a template.") is None
    assert manager.analyze_content("Ember.Component", "") is None


def test_marker_without_details():
    info = DeprecationManager().analyze_content("foo", "This API will be removed.")

    assert info is not None
    assert info.since is None
    assert info.until is None
    assert info.replacement is None


def test_registry_is_case_insensitive():
    manager = DeprecationManager()
    info = manager.analyze_content("Ember.Mixin", "@deprecated")
    manager.register("Ember.Mixin", info)

    assert manager.get("ember.mixin") is info
    assert len(manager) == 1
    manager.clear()
    assert manager.get("Ember.Mixin") is None


def test_check_search_result_matches_contained_name():
    manager = DeprecationManager()
    info = manager.analyze_content("Ember.ObjectProxy", "Deprecated since 5.4.")
    manager.register("Ember.ObjectProxy", info)

    assert manager.check_search_result("Ember.ObjectProxy") is info
    assert manager.check_search_result("Migrating from Ember.ObjectProxy") is info
    assert manager.check_search_result("Routing") is None


def test_analyze_documentation_registers_header_names():
    sections = {
        "guides": (
            Item(
                content="## Deprecation of `Ember.Mixin`\nMixins are deprecated since 5.0.",
                start_line=0,
            ),
            Item(content="## Routing\nNothing deprecated here.", start_line=3),
        ),
        "api-docs": (Item(content="## Deprecation of `Ember.Other`", start_line=0),),
    }
    manager = DeprecationManager()

    assert manager.analyze_documentation(sections) == 1
    assert manager.get("Ember.Mixin").since == "5.0"
    assert manager.get("Ember.Other") is None
