"""Postboard: a social posting demo backed by a remote REST object store."""

__version__ = "0.1.0"
