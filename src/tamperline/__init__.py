"""
Tamperline: configuration-driven value rewriting for ingestion pipelines.

Tampers are small plugins that rewrite a single field value of an item
as it flows from a source to its destination.
"""

__version__ = "0.1.0"
