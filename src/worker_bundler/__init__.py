"""Assemble deployable worker bundles from wrangler-js builds."""

__version__ = "0.1.0"
