"""PromptJSON: turn natural-language prompts into structured JSON with Gemini."""

__version__ = "0.1.0"
