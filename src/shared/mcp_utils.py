"""Shared utilities for MCP tool definitions."""

from pathlib import Path
from typing import Any

import yaml


def load_tool_descriptions(directory: Path) -> dict[str, Any]:
    """Load tool descriptions from tools.yaml, stripping YAML block-scalar whitespace."""
    with (directory / "tools.yaml").open(encoding="utf-8") as f:
        data = yaml.safe_load(f)
    for tool in data.values():
        if isinstance(tool.get("description"), str):
            tool["description"] = tool["description"].strip()
        params = tool.get("parameters", {})
        for key in params:
            if isinstance(params[key], str):
                params[key] = params[key].strip()
    return data
