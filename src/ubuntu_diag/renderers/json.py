"""JSON renderer for ubuntu-diag output."""

from __future__ import annotations

import json
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import BaseModel

from ubuntu_diag.renderers.base import BaseRenderer, OutputFormat, RenderContext


class JSONRenderer(BaseRenderer):
    """Renderer for JSON output format.

    Field order follows the model definitions, so output is stable for
    the same report.

    Example:
        renderer = JSONRenderer()
        json_str = renderer.render(report, RenderContext(indent=4))
    """

    @property
    def format(self) -> OutputFormat:
        """The output format this renderer produces."""
        return OutputFormat.JSON

    def render(self, data: Any, context: RenderContext | None = None) -> str:
        """Render data to a JSON string.

        Args:
            data: A Pydantic model or a list of them
            context: Rendering context with options

        Returns:
            JSON string
        """
        context = context or RenderContext(format=OutputFormat.JSON)

        return json.dumps(
            self._to_jsonable(data),
            indent=context.indent if context.indent else None,
            default=self._json_serializer,
            ensure_ascii=False,
        )

    @classmethod
    def _to_jsonable(cls, data: Any) -> Any:
        if isinstance(data, BaseModel):
            return data.model_dump(mode="json")
        if isinstance(data, (list, tuple)):
            return [cls._to_jsonable(item) for item in data]
        return data

    @staticmethod
    def _json_serializer(obj: Any) -> Any:
        """Custom JSON serializer for non-standard types."""
        if isinstance(obj, datetime):
            return obj.isoformat()
        if isinstance(obj, Enum):
            return obj.value
        if isinstance(obj, Path):
            return str(obj)
        raise TypeError(f"Object of type {type(obj).__name__} is not JSON serializable")


def render_json(data: Any, indent: int = 2) -> str:
    """Render a report, or one section of it, as JSON."""
    return JSONRenderer().render(data, RenderContext(format=OutputFormat.JSON, indent=indent))
