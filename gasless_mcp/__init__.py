"""
MCP stdio server exposing gasless smart-wallet operations as tools.
"""

__version__ = "0.1.0"
