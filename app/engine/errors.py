"""Errors raised by the derivation engine."""


class InvalidArgumentError(ValueError):
    """Structurally invalid configuration passed to an engine function."""
