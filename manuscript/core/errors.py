"""Exception types raised inside the parsing pipeline."""


class DocumentParseError(ValueError):
    """Expected, input-caused parse failure (corrupt container, missing content)."""


class EnhancementError(RuntimeError):
    """The content enhancer could not produce an EnhancedDocument."""
