"""Grade sheet ingestion: published block-structured CSV -> typed grade records."""

__version__ = "0.1.0"
