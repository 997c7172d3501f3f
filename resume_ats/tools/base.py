"""Base classes for the file-facing tools."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional, Union


@dataclass
class ToolResult:
    """Result from a tool execution."""
    success: bool
    output: str
    error: Optional[str] = None
    data: Dict[str, Any] = field(default_factory=dict)

    def to_message(self) -> str:
        if self.success:
            return self.output
        return f"Error: {self.error}\n{self.output}" if self.output else f"Error: {self.error}"


class BaseTool(ABC):
    """Base class for all tools."""

    name: str
    description: str

    @abstractmethod
    async def execute(self, **kwargs) -> ToolResult:
        """Execute the tool with given parameters."""
        pass


class WorkspaceTool(BaseTool):
    """A tool that reads its inputs from files under a workspace directory."""

    def __init__(self, workspace_dir: Union[str, Path] = "."):
        self.workspace_dir = Path(workspace_dir).resolve()

    def _resolve_path(self, path: str) -> Path:
        p = Path(path)
        if p.is_absolute():
            return p
        return self.workspace_dir / p

    def _read_text(self, path: str, label: str = "File") -> str:
        """Read a UTF-8 file, raising ``FileNotFoundError``/``ValueError`` with a readable message."""
        file_path = self._resolve_path(path)
        if not file_path.is_file():
            raise FileNotFoundError(f"{label} not found: {path}")
        content = file_path.read_text(encoding="utf-8")
        if not content.strip():
            raise ValueError(f"{label} is empty: {path}")
        return content
