# file: opencnam/cli.py
"""
opencnam CLI.

Commands:
  - lookup: query OpenCNAM for a number and print the raw response body
  - url: print the URL a lookup would request, without any network I/O
"""

from __future__ import annotations

import logging
from pathlib import Path

import click
import httpx
from pydantic import ValidationError

from opencnam import __version__
from opencnam.config import OpenCNAMSettings, load_settings
from opencnam.errors import OpenCNAMError
from opencnam.logging_config import configure_logging
from opencnam.net.http import HttpxTransport, Transport, build_client
from opencnam.request import LookupRequest, OutputFormat

logger = logging.getLogger(__name__)

_FORMAT_CHOICES = [f.value for f in OutputFormat]


def _load(config_path: Path | None) -> OpenCNAMSettings:
    try:
        settings = load_settings(yaml_path=config_path)
    except ValidationError as exc:
        raise click.ClickException(f"Invalid configuration: {exc}") from exc
    configure_logging(level=settings.log_level, json_logging=settings.json_logging)
    return settings


def _configure_request(
    request: LookupRequest,
    number: str,
    *,
    settings: OpenCNAMSettings,
    fmt: str | None,
    account_sid: str | None,
    auth_token: str | None,
) -> None:
    request.set_phone_number(number)
    request.set_format(fmt.lower() if fmt else settings.default_format)
    request.set_account_sid(account_sid or settings.account_sid)
    request.set_auth_token(auth_token or settings.auth_token)


def lookup(
    number: str,
    *,
    settings: OpenCNAMSettings,
    fmt: str | None = None,
    account_sid: str | None = None,
    auth_token: str | None = None,
    transport: Transport | None = None,
) -> str:
    """
    Run one lookup using `settings` for anything not passed explicitly.

    When `transport` is None an httpx client is built from the settings (with
    the configured CA bundle, if any) and closed afterwards.
    """

    def _run(t: Transport) -> str:
        request = LookupRequest(t)
        _configure_request(
            request,
            number,
            settings=settings,
            fmt=fmt,
            account_sid=account_sid,
            auth_token=auth_token,
        )
        return request.execute()

    if transport is not None:
        return _run(transport)

    with build_client(settings.http_config()) as client:
        return _run(HttpxTransport(client))


_format_option = click.option(
    "--format",
    "fmt",
    type=click.Choice(_FORMAT_CHOICES, case_sensitive=False),
    default=None,
    help="Response format (default: from config, else text).",
)
_account_sid_option = click.option(
    "--account-sid", default=None, help="Account SID (overrides OPENCNAM_ACCOUNT_SID)."
)
_auth_token_option = click.option(
    "--auth-token", default=None, help="Auth token (overrides OPENCNAM_AUTH_TOKEN)."
)
_config_option = click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="YAML config path.",
)


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(__version__)
def main() -> None:
    """OpenCNAM caller ID name (CNAM) lookups."""


@main.command("lookup")
@click.argument("number", type=str)
@_format_option
@_account_sid_option
@_auth_token_option
@_config_option
@click.option(
    "--output",
    "output_path",
    type=click.Path(path_type=Path),
    default=None,
    help="Write the response body to a file instead of stdout.",
)
def lookup_cmd(
    number: str,
    fmt: str | None,
    account_sid: str | None,
    auth_token: str | None,
    config_path: Path | None,
    output_path: Path | None,
) -> None:
    """
    Look up the caller ID name for NUMBER and print the raw response.
    """

    settings = _load(config_path)

    try:
        body = lookup(
            number,
            settings=settings,
            fmt=fmt,
            account_sid=account_sid,
            auth_token=auth_token,
        )
    except OpenCNAMError as exc:
        raise click.ClickException(str(exc)) from exc
    except httpx.HTTPStatusError as exc:
        raise click.ClickException(
            f"OpenCNAM returned HTTP {exc.response.status_code}"
        ) from exc
    except httpx.HTTPError as exc:
        raise click.ClickException(f"{type(exc).__name__}: {exc}") from exc

    if output_path is not None:
        output_path.write_text(body, encoding="utf-8")
        click.echo(str(output_path))
    else:
        click.echo(body, nl=not body.endswith("\n"))


@main.command("url")
@click.argument("number", type=str)
@_format_option
@_account_sid_option
@_auth_token_option
@_config_option
def url_cmd(
    number: str,
    fmt: str | None,
    account_sid: str | None,
    auth_token: str | None,
    config_path: Path | None,
) -> None:
    """Print the request URL for NUMBER without contacting the API."""

    settings = _load(config_path)

    # Nothing is sent, so any transport will do.
    request = LookupRequest(_NoNetworkTransport())
    try:
        _configure_request(
            request,
            number,
            settings=settings,
            fmt=fmt,
            account_sid=account_sid,
            auth_token=auth_token,
        )
        click.echo(request.build_request_url())
    except OpenCNAMError as exc:
        raise click.ClickException(str(exc)) from exc


class _NoNetworkTransport:
    def execute(self, url: str) -> str:
        raise RuntimeError("url command does not perform requests")
