"""
LLM integration layer.

Responsibilities:
- Manage Groq API configuration and credentials.
- Expose a single-method text generation client for prompt -> text.
- Normalise every upstream failure into ``LLMServiceError``.
"""
