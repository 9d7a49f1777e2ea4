"""Type and field rendering for builtin-godoc."""

from render.types import (
    render_field,
    render_interface,
    render_signature,
    render_type,
)

__all__ = ["render_field", "render_interface", "render_signature", "render_type"]
