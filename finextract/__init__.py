"""Financial document extraction: upload, extract via an LLM, aggregate, export."""

__version__ = "0.1.0"
