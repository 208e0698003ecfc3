"""
Prompt Builder package.

Provides:
- A FastAPI relay that forwards prompt generation requests to an
  OpenAI-compatible chat-completion provider and serves the browser page
- An asyncio client controller with a terminal view and CLI
"""
