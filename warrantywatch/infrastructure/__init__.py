"""Process environment loading."""
