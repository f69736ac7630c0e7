#!/usr/bin/env python3
"""
Example demonstrating option values loaded from a configuration file.

Values resolve with the precedence: declared default < config file < command
line. Run with e.g.:

    python config_file_example.py --config settings.yaml --port 9000
"""

import sys

from specargs import SpecArgParser


def main() -> int:
    parser = SpecArgParser(
        {
            "opts": {
                "host": {"default": "127.0.0.1"},
                "port": {"short": "p", "parse": int, "default": 8080},
                "token": {"required": True},
                "debug": {"switch": True, "short": "d"},
            }
        },
        config_flag=["-c", "--config"],
    )

    outcome = parser.safe_parse()
    if outcome.is_err():
        print(f"error: {outcome.err_value}", file=sys.stderr)
        return 2

    result = outcome.ok_value
    print(f"Serving on {result.opts['host']}:{result.opts['port']}")
    print(f"Debug: {result.opts['debug']}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
