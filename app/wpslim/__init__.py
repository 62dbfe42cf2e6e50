"""wpslim - WordPress uploads cleanup and AVIF optimization toolkit."""

__version__ = "0.1.0"
