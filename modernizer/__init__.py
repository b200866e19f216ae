"""Code modernization analyzer service."""

__version__ = "0.1.0"
