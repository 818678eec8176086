"""Chat with a plain-text document using Gemini and Qdrant."""

__version__ = "0.1.0"
