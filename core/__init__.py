"""Core of the translation client library."""
