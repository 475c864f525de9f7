"""Bots that play through the public engine API."""
