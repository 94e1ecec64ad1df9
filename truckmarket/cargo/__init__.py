"""
Cargo matching and recommendation pipeline.

Responsibilities:
- Parse free-text shipping requests into structured filter hints.
- Narrow the listing set to candidates that satisfy every filter.
- Ask the LLM to recommend among the candidates, with a deterministic
  rating/price fallback when the model is unavailable.
"""
