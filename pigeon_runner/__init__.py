"""Pigeon Runner — batch code generation across configured groups."""

__version__ = "0.1.0"
