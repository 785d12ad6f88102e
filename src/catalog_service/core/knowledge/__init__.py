"""Text extraction, tokenization, classification and keyword extraction."""
