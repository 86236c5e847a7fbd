"""Batch scheduling framework: YAML policy, scheduling loop, node helpers and plugins."""

__version__ = "0.5.0"