"""Core interfaces and context objects shared by pdfdirmerge tools."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from ...core.model import CommandResult
from ...core.utils import resolve_path


@dataclass
class ToolContext:
    """Holds shared execution state for a tool invocation."""

    input_path: Path | None = None
    config: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if isinstance(self.input_path, (str, Path)):
            self.input_path = resolve_path(self.input_path)

    def require_input(self) -> Path:
        if self.input_path is None:
            raise ValueError("ToolContext requires an input_path")
        return self.input_path


class BaseTool:
    """Base class for all pluggable pdfdirmerge tools."""

    name: str

    def __init__(self, context: ToolContext) -> None:
        self.context = context

    def run(self) -> CommandResult:  # pragma: no cover - to be implemented by subclasses
        raise NotImplementedError

