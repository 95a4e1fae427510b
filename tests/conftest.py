"""Shared fixtures: a small corpus covering every section kind."""

import json

import pytest

from ember_mcp.errors import CorpusLoadError
from ember_mcp.services.corpus import StaticCorpus
from ember_mcp.services.documentation import DocumentationService
from ember_mcp.services.embeddings import DisabledEmbeddings

COMPONENT_RECORD = {
    "data": {
        "id": "Ember.Component",
        "type": "class",
        "attributes": {
            "name": "Ember.Component",
            "module": "@ember/component",
            "description": "A component is an isolated piece of UI, represented by a template.",
            "file": "packages/@ember/-internals/glimmer/lib/component.ts",
            "line": 42,
            "extends": "Ember.CoreView",
            "methods": [
                {
                    "name": "didInsertElement",
                    "description": "Called when the element of the view has been inserted.",
                    "params": [],
                    "return": {"type": "void"},
                },
                {
                    "name": "trigger",
                    "description": "Triggers a named event.",
                    "params": [
                        {"name": "name", "type": "String", "description": "Event name"},
                        {"name": "args", "type": "Array", "optional": True},
                    ],
                },
            ],
            "properties": [
                {"name": "tagName", "type": "String", "description": "The HTML tag name."}
            ],
        },
    }
}

GLIMMER_RECORD = {
    "data": {
        "id": "@glimmer/component",
        "type": "module",
        "attributes": {
            "name": "@glimmer/component",
            "description": "Glimmer components are the modern component base class.",
        },
    }
}

PROXY_RECORD = {
    "data": {
        "id": "Ember.ObjectProxy",
        "type": "class",
        "attributes": {
            "name": "Ember.ObjectProxy",
            "module": "@ember/object/proxy",
            "description": (
                "ObjectProxy forwards all properties to a content object. "
                "Deprecated since 5.4 and removed in 6.0. Use `tracked` instead."
            ),
        },
    }
}

SAMPLE_CORPUS = "\n".join(
    [
        "# api-docs",
        json.dumps(COMPONENT_RECORD),
        "----------",
        json.dumps(GLIMMER_RECORD),
        "----------",
        json.dumps(PROXY_RECORD),
        "----------",
        '{"data": {"id": "Broken", "attributes": ',
        "# community-bloggers",
        "## Component testing best practices",
        "When testing components, prefer rendering tests over unit tests.",
        "This is the recommended approach for modern apps.",
        "```js",
        "test('it renders', async function (assert) {",
        "  await render(hbs`<MyComponent />`);",
        "});",
        "```",
        "Avoid testing private component internals; assert on rendered output.",
        "----------",
        "## Writing helpers",
        "Helpers are plain functions that can be called from templates.",
        "# guides",
        "# For all components",
        "## Understanding Tracked Properties",
        "Tracked properties replace computed properties in modern Ember.",
        "Mark state with @tracked and the template updates automatically.",
        "----------",
        "## Proxy deprecation",
        "The proxy deprecation has a modern replacement: tracked properties.",
        "Replace ObjectProxy with a class whose fields are tracked.",
        "----------",
        "## Routing",
        "The router maps URLs to route handlers. Each route loads a model.",
        "----------",
        "## Deprecation of `Ember.Mixin`",
        "Mixins are deprecated since 5.0 and will be removed in 6.0.",
        "Use `class` instead.",
        "",
    ]
)


class FailingSource:
    """Corpus source whose every fetch fails."""

    def __init__(self):
        self.calls = 0

    async def fetch(self) -> str:
        self.calls += 1
        raise CorpusLoadError("Failed to fetch documentation: HTTP 503")


class FakeEmbeddings:
    """Deterministic bag-of-words embeddings over a tiny vocabulary."""

    VOCABULARY = ("component", "tracked", "proxy", "route", "test")

    def __init__(self, enabled: bool = True):
        self._enabled = enabled
        self.initialized = False
        self.calls = 0

    @property
    def is_enabled(self) -> bool:
        return self._enabled

    async def initialize(self) -> None:
        self.initialized = True

    async def embed(self, text: str) -> list[float] | None:
        if not self._enabled:
            return None
        self.calls += 1
        lowered = text.lower()
        return [float(lowered.count(word)) for word in self.VOCABULARY]


@pytest.fixture
def sample_corpus() -> str:
    return SAMPLE_CORPUS


@pytest.fixture
def docs_service() -> DocumentationService:
    """Keyword-only service over the sample corpus (not loaded yet)."""
    return DocumentationService(StaticCorpus(SAMPLE_CORPUS), embeddings=DisabledEmbeddings())


@pytest.fixture
def doc_index(docs_service):
    """Index built synchronously from the sample corpus."""
    return docs_service.build_index(SAMPLE_CORPUS)
