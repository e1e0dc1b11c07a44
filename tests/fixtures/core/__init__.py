"""Core model fixtures."""
