"""Adapters for external inference and HTTP capabilities."""

from disaster_intel.adapters.inference.http_probe import HttpImageProbe
from disaster_intel.adapters.inference.huggingface_client import HuggingFaceClient

__all__ = ["HttpImageProbe", "HuggingFaceClient"]
