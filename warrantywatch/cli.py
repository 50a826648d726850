#!/usr/bin/env python3
"""
Preview purchase-email parsing from the command line.

Usage:
    warrantywatch-preview emails.json              # candidates as API dicts
    warrantywatch-preview emails.json --triage     # purchase/not-purchase per email
    warrantywatch-preview messages.json --gmail    # input is Gmail API messages

Input is a JSON list (or a single object) of raw emails with
id/subject/from/date/body keys, or Gmail API messages with --gmail.
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any

from warrantywatch.config import APP_VERSION
from warrantywatch.gmail.parser import GmailParsingError, raw_email_from_gmail
from warrantywatch.observability.logging import get_logger
from warrantywatch.parsing.models import RawEmail
from warrantywatch.parsing.parser import PurchaseEmailParser

logger = get_logger(__name__)


def load_emails(path: Path, gmail: bool = False) -> list[RawEmail]:
    """
    Read raw emails from a JSON file.

    Raises:
        OSError: If the file cannot be read
        ValueError: If the content is not JSON or not a list/object of emails
    """
    data: Any = json.loads(path.read_text(encoding="utf-8"))
    if isinstance(data, dict):
        data = [data]
    if not isinstance(data, list):
        raise ValueError("expected a JSON list of emails")

    emails: list[RawEmail] = []
    for index, item in enumerate(data):
        if gmail:
            try:
                emails.append(raw_email_from_gmail(item))
            except GmailParsingError as e:
                logger.warning("Skipping Gmail message #%d: %s", index, e)
            continue
        if not isinstance(item, dict):
            logger.warning("Skipping entry #%d: not an object", index)
            continue
        emails.append(RawEmail.coerce(item))
    return emails


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="warrantywatch-preview",
        description="Preview warranty candidates parsed from purchase emails",
    )
    parser.add_argument("path", type=Path, help="JSON file with emails")
    parser.add_argument("--gmail", action="store_true", help="Input holds Gmail API messages")
    parser.add_argument(
        "--triage",
        action="store_true",
        help="Only classify: print purchase/not-purchase and the signals that fired",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {APP_VERSION}")
    args = parser.parse_args(argv)

    try:
        emails = load_emails(args.path, gmail=args.gmail)
    except (OSError, ValueError) as e:
        print(f"error: cannot read {args.path}: {e}", file=sys.stderr)
        return 2

    email_parser = PurchaseEmailParser()
    output: list[dict[str, Any]] = []

    for email in emails:
        if args.triage:
            result = email_parser.classifier.classify(email)
            output.append(
                {
                    "id": email.id,
                    "isPurchase": result.is_purchase,
                    "signals": [s.value for s in result.signals],
                }
            )
            continue

        candidate = email_parser.parse_email(email)
        if candidate is not None:
            output.append(candidate.to_api_dict())

    print(json.dumps(output, indent=2, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    sys.exit(main())
