"""Namespace for pluggable pdfdirmerge tools."""

from __future__ import annotations

from .common.pipeline import registry


def load_builtin_plugins() -> None:
    from .merger import commands  # noqa: F401  # register the directory commands


__all__ = ["registry", "load_builtin_plugins"]
