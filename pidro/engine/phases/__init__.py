"""Phase components of a hand."""
