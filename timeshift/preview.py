#!/usr/bin/env python3
# -*- coding: utf-8 -*-

import sys
import json
from typing import List, Optional

from timeshift.config import default_context, get_testing_mode
from timeshift.detector import detect
from timeshift.errors import NoMatchingFormat
from timeshift.logger import setup_logger
from timeshift.patterns import compile_pattern
from timeshift.provider import Context, render

logger = setup_logger('preview', testing=get_testing_mode())

PREVIEW_FORMATS = [
    ('12-hour', '%-I:%M:%S %p'),
    ('24-hour', '%H:%M:%S'),
    ('ISO 8601', '%Y-%m-%dT%H:%M:%S'),
    ('Long', '%A, %B %-d %Y at %-I:%M %p'),
]


class FormatPreview:
    def __init__(self, context: Optional[Context] = None):
        logger.debug("Initializing FormatPreview")
        self.context = context or default_context()

    def generate_items(self, text: str) -> List[dict]:
        """Generate script filter items for a date/time string"""
        logger.debug(f"Generating preview for: {text}")
        try:
            pattern, value = detect(text, self.context)
        except NoMatchingFormat:
            return [{
                "title": "Unrecognized date/time",
                "subtitle": f"No known format matches '{text}'",
                "valid": False,
                "icon": {"path": "icon.png"}
            }]

        items = [{
            "title": pattern.template,
            "subtitle": "Detected format",
            "arg": pattern.template,
            "valid": True,
            "icon": {"path": "icon.png"}
        }]
        for label, template in PREVIEW_FORMATS:
            rendered = render(value, compile_pattern(template))
            items.append({
                "title": rendered,
                "subtitle": label,
                "arg": rendered,
                "valid": True,
                "icon": {"path": "icon.png"}
            })
        return items


def main(argv: Optional[List[str]] = None) -> int:
    argv = sys.argv[1:] if argv is None else argv
    if not argv:
        print(json.dumps({
            "items": [{
                "title": "Type a date or time...",
                "subtitle": "Any layout: 2024-06-27 14:34:56, 27 June 2024, 02:34:56 PM",
                "valid": False,
                "icon": {"path": "icon.png"}
            }]
        }))
        return 0

    query = " ".join(argv)
    preview = FormatPreview()
    print(json.dumps({"items": preview.generate_items(query)}))
    return 0


if __name__ == "__main__":
    sys.exit(main())
