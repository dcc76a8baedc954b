"""HTTP/SSE and tool-calling adapters over GeminiService."""
