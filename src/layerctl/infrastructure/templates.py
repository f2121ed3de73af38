"""Shared Jinja2 template loading with user override support."""

from __future__ import annotations

from pathlib import Path

from jinja2 import BaseLoader, ChoiceLoader, Environment, FileSystemLoader, PackageLoader


def build_template_environment(group: str, *, template_dir: Path | None = None) -> Environment:
    """Build a Jinja2 environment with user overrides before packaged defaults.

    Both a namespaced directory (for example ``<template_dir>/report/``)
    and the override root itself are searched, so a single flat directory
    of templates works as well as an organized one.
    """

    loaders: list[BaseLoader] = []
    if template_dir is not None:
        loaders.append(FileSystemLoader([str(template_dir / group), str(template_dir)]))

    loaders.append(PackageLoader("layerctl", f"templates/{group}"))
    return Environment(
        loader=ChoiceLoader(loaders),
        keep_trailing_newline=True,
        trim_blocks=True,
        lstrip_blocks=True,
    )
