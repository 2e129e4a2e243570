"""Jinja2 template utilities for reports and replies."""

from jinja2 import Environment, PackageLoader, select_autoescape

from intellinlp.domain.services.attachment_analysis import (
    format_file_size,
    round_half_up,
)


def create_jinja_env() -> Environment:
    """Create the Jinja2 environment for report and reply templates.

    Templates are loaded from the
    ``intellinlp.infrastructure.rendering.templates`` package. The
    ``file_size`` filter formats byte counts and ``round_half_up`` rounds
    halves up.

    Returns:
        Configured Jinja2 environment.
    """
    env = Environment(
        loader=PackageLoader("intellinlp.infrastructure.rendering", "templates"),
        autoescape=select_autoescape(),
        trim_blocks=True,
        lstrip_blocks=True,
    )
    env.filters["file_size"] = format_file_size
    env.filters["round_half_up"] = round_half_up
    return env
