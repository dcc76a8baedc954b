"""Expose the Gemini CLI over a tool-calling server and an HTTP/SSE API."""

__version__ = "0.2.0"
