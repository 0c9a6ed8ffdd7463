"""i18nexus tools: wrap hardcoded Korean UI text in t() calls and extract translation keys."""

__version__ = "0.1.0"
