"""Shared helpers for sender addresses, HTML, and log redaction."""
