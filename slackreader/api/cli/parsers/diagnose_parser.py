"""Diagnose command argument parser for slackreader CLI."""

import argparse
from typing import Any, cast


def add_diagnose_subparser(subparsers: Any) -> argparse.ArgumentParser:
    parser = subparsers.add_parser(
        "diagnose",
        help="Check Slack credential configuration and list registered tools",
        description=(
            "Report whether the Slack tokens in the environment are present and "
            "well formed, and list the tools the server exposes. Does not "
            "contact Slack."
        ),
    )

    parser.add_argument(
        "--json",
        action="store_true",
        help="Output JSON report",
    )

    return cast(argparse.ArgumentParser, parser)


__all__: list[str] = ["add_diagnose_subparser"]
