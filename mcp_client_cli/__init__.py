"""
Interactive client bridging OpenAI-compatible chat models with MCP tool servers.
"""

__version__ = "1.0.0"
