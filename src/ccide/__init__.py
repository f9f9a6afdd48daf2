"""ccide: provider-agnostic LLM client layer."""

__version__ = "0.1.0"
