"""Configuration, error taxonomy and session handling."""
