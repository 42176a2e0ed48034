"""Diagnose command: report credential configuration and the tool registry."""

from __future__ import annotations

import argparse
import json
import os
from collections.abc import Mapping
from typing import Any

from slackreader.core.config.server_config import ServerConfig
from slackreader.core.config.slack_config import (
    BOT_TOKEN_ENV,
    USER_TOKEN_ENV,
    SlackCredentials,
    resolve_credentials,
)
from slackreader.core.errors import CredentialFailure
from slackreader.mcp_server.tools import TOOL_REGISTRY


def _credential_report(environ: Mapping[str, str]) -> dict[str, Any]:
    report: dict[str, Any] = {
        "user_token_set": bool(environ.get(USER_TOKEN_ENV, "").strip()),
        "bot_token_set": bool(environ.get(BOT_TOKEN_ENV, "").strip()),
        "token_kind": None,
        "valid": False,
        "error": None,
    }
    try:
        credentials: SlackCredentials = resolve_credentials(environ)
    except CredentialFailure as e:
        report["error"] = e.message
        return report
    report["token_kind"] = credentials.token_kind
    report["valid"] = True
    return report


def build_report(
    config: ServerConfig, environ: Mapping[str, str] | None = None
) -> dict[str, Any]:
    env = os.environ if environ is None else environ
    return {
        "credentials": _credential_report(env),
        "config": {
            "debug": config.debug,
            "debug_file": config.debug_file.as_posix(),
            "request_timeout": config.request_timeout,
        },
        "tools": sorted(TOOL_REGISTRY),
    }


async def diagnose_command(args: argparse.Namespace, config: ServerConfig) -> int:
    report = build_report(config)
    if getattr(args, "json", False):
        print(json.dumps(report, indent=2))
    else:
        creds = report["credentials"]
        print(f"{USER_TOKEN_ENV}: {'set' if creds['user_token_set'] else 'not set'}")
        print(f"{BOT_TOKEN_ENV}: {'set' if creds['bot_token_set'] else 'not set'}")
        if creds["valid"]:
            print(f"Token kind: {creds['token_kind']}")
        else:
            print(f"Credential error: {creds['error']}")
        print(f"Request timeout: {report['config']['request_timeout']}s")
        print(f"Tools: {len(report['tools'])}")
        for name in report["tools"]:
            print(f" - {name}")
    return 0 if report["credentials"]["valid"] else 1
