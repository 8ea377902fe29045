#!/usr/bin/env python3
# -*- coding: utf-8 -*-

import sys
import json
from typing import Dict, List, Optional

from timeshift.config import default_context, get_testing_mode, load_config
from timeshift.converter import current_time, modify, reformat, to_12h, to_24h
from timeshift.detector import detect_format
from timeshift.difference import diff
from timeshift.errors import Result, attempt
from timeshift.logger import setup_logger
from timeshift.provider import Context

logger = setup_logger('cli', testing=get_testing_mode())

USAGE = "Usage: timeshift detect|format|to12h|to24h|modify|diff|now ..."


def workflow_output(arg: str, variables: Optional[Dict] = None) -> str:
    return json.dumps({
        "alfredworkflow": {
            "arg": arg,
            "variables": variables or {}
        }
    })


def _detect(args: List[str], context: Context, config: Dict) -> Result:
    return attempt(lambda: str(detect_format(args[0], context)))


def _format(args: List[str], context: Context, config: Dict) -> Result:
    return attempt(reformat, args[0], args[1], context)


def _to12h(args: List[str], context: Context, config: Dict) -> Result:
    if len(args) > 1:
        return attempt(to_12h, args[0], args[1], context)
    return attempt(to_12h, args[0], context=context)


def _to24h(args: List[str], context: Context, config: Dict) -> Result:
    if len(args) > 1:
        return attempt(to_24h, args[0], args[1], context)
    return attempt(to_24h, args[0], context=context)


def _modify(args: List[str], context: Context, config: Dict) -> Result:
    output = args[2] if len(args) > 2 else config['output_format']
    return attempt(modify, args[0], args[1], output, context)


def _diff(args: List[str], context: Context, config: Dict) -> Result:
    second = args[1] if len(args) > 1 else None
    result = attempt(diff, args[0], second, context)
    if result.ok:
        return Result.success(json.dumps(result.value.as_dict()))
    return result


def _now(args: List[str], context: Context, config: Dict) -> Result:
    output = args[0] if args else config['output_format']
    return attempt(current_time, output, context)


# command -> (handler, minimum number of arguments)
COMMANDS: Dict[str, tuple] = {
    'detect': (_detect, 1),
    'format': (_format, 2),
    'to12h': (_to12h, 1),
    'to24h': (_to24h, 1),
    'modify': (_modify, 2),
    'diff': (_diff, 1),
    'now': (_now, 0),
}


def run(argv: List[str]) -> int:
    if not argv:
        print(workflow_output("No input provided", {"error": "no_input"}))
        return 1

    command, args = argv[0], argv[1:]
    if command not in COMMANDS:
        print(workflow_output(f"Unknown command: {command}. {USAGE}",
                              {"notificationTitle": "Error"}))
        return 1

    handler, required = COMMANDS[command]
    if len(args) < required:
        print(workflow_output(USAGE, {"error": "no_input"}))
        return 1

    config = load_config()
    try:
        context = default_context()
    except ValueError as e:
        print(workflow_output(f"Error: {e}", {"notificationTitle": "Error"}))
        return 1

    logger.debug(f"Running {command} with {args}")
    result: Result = handler(args, context, config)
    if not result.ok:
        logger.debug(f"{command} failed: {result.error}")
        print(workflow_output(f"Error: {result.error}", {
            "notificationTitle": "Error",
            "error": type(result.error).__name__
        }))
        return 1

    print(workflow_output(result.value, {"notificationTitle": f"timeshift {command}"}))
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    return run(sys.argv[1:] if argv is None else argv)


if __name__ == "__main__":
    sys.exit(main())
