"""Gmail API adapters."""

from warrantywatch.gmail.parser import GmailParsingError, raw_email_from_gmail

__all__ = ["GmailParsingError", "raw_email_from_gmail"]
