"""Helpers shared by the MCP tool layer."""
