"""Core rules engine."""
