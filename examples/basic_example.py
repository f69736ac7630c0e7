#!/usr/bin/env python3
"""
Example script demonstrating the usage of SpecArgParser.

This script declares a few switches and value-bearing options and resolves
the script's own command line against them, e.g.:

    python basic_example.py -vq --workers 8 --temperature=30.5 input.dat -- -raw
"""

from specargs import SpecArgParser, Switch, Valued


def main() -> None:
    """Main function demonstrating the parser."""
    parser = SpecArgParser(
        {
            "opts": {
                "name": {"default": "simulation"},
                "temperature": {"parse": float, "default": 27.0},
                "workers": Valued(short="w", parse=int, default=4),
                "output": {"short": "o"},
                "verbose": Switch(short="v"),
                "quiet": {"switch": True, "short": "q"},
            }
        }
    )

    print("SpecArgParser Example")
    print("=" * 50)
    print()

    result = parser.parse()

    print("Parsed Options:")
    print("-" * 30)
    for name, value in result.opts.items():
        print(f"{name}: {value!r}")
    print()
    print(f"Positionals: {result.args}")


if __name__ == "__main__":
    main()
