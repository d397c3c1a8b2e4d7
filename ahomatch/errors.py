# errors.py


class InvalidInput(ValueError):
    """Keyword set rejected at construction (empty list or empty keyword)."""
