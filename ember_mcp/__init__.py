"""Ember Docs MCP Server - documentation search over the Ember.js corpus."""

__version__ = "1.0.0"
