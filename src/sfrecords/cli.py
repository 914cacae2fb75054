from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Tuple, cast

import click

from . import __version__
from .api import SalesforceClient
from .config import default_config_path, load_config, write_default_config
from .exceptions import MissingCredentialsError, NotAuthorizedError, SalesforceError
from .logging_config import configure_logging, mask_secret
from .session import AuthSession

_logger = logging.getLogger(__name__)

DEMO_OBJECT = "Case"
DEMO_FIELDS = {"Subject": "Test case", "Priority": "High"}
DEMO_QUERY = "SELECT Id, Subject FROM Case LIMIT 10"


@click.group(
    context_settings={"help_option_names": ["-h", "--help"]},
    invoke_without_command=True,
)
@click.version_option(__version__, "--version", prog_name="sfrecords")
@click.option(
    "-v",
    "--verbose",
    "loglevel",
    flag_value=logging.INFO,
    default=None,
    help="Enable INFO logs.",
)
@click.option(
    "-vv",
    "--very-verbose",
    "loglevel",
    flag_value=logging.DEBUG,
    help="Enable DEBUG logs.",
)
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="INI file with the [Salesforce] section (default: ./salesforce_config.ini).",
)
@click.pass_context
def cli(ctx: click.Context, loglevel: Optional[int], config_path: Optional[Path]) -> None:
    """Salesforce records CLI. Use subcommands like 'login', 'insert' or 'query'."""
    configure_logging(loglevel)
    _logger.debug("CLI start, version=%s", __version__)
    ctx.obj = {"config_path": config_path}
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


def _credentials_help(e: MissingCredentialsError) -> click.ClickException:
    needed = ", ".join(e.missing)
    msg = (
        f"Missing Salesforce credentials: {needed}\n\n"
        f"Edit {e.source or default_config_path()} and fill in the [Salesforce] section:\n"
        "  CONSUMER_KEY=...      # Connected App Consumer Key\n"
        "  CONSUMER_SECRET=...   # Connected App Consumer Secret\n"
        "  USERNAME=...          # login username\n"
        "  PASSWORD=...          # login password\n"
        "  TOKEN=...             # security token (appended to the password)\n"
        "  ENDPOINT=https://login.salesforce.com\n\n"
        "SF_CONSUMER_KEY, SF_PASSWORD etc. in the environment or a .env file override the file."
    )
    return click.ClickException(msg)


def _connect(ctx: click.Context) -> SalesforceClient:
    """Load config, log in, and turn failures into friendly CLI errors."""
    path = ctx.obj.get("config_path") if ctx.obj else None
    try:
        client = SalesforceClient(load_config(path))
    except MissingCredentialsError as e:
        raise _credentials_help(e) from e

    try:
        client.authorize()
    except MissingCredentialsError as e:
        client.close()
        raise _credentials_help(e) from e
    except SalesforceError as e:
        client.close()
        raise click.ClickException(f"Authorization failed: {e}") from e
    return client


@cli.command("init")
@click.pass_context
def cmd_init(ctx: click.Context) -> None:
    """Create the config file with placeholder values if it is missing."""
    path = ctx.obj.get("config_path") or default_config_path()
    if write_default_config(path):
        click.echo(f"Config file '{path}' has been created!")
        click.echo("Replace the placeholder values before running 'login'.")
    else:
        click.echo(f"Config file '{path}' already exists.")


@cli.command("login")
@click.pass_context
def cmd_login(ctx: click.Context) -> None:
    """Authorize with the configured credentials."""
    with _connect(ctx) as client:
        session = cast(AuthSession, client.session)
        click.echo("✅  Connected to Salesforce.")
        click.echo(f"Instance URL: {session.instance_url}")
        click.echo(f"API Version: v{session.api_version.lstrip('vV')}")
        click.echo(f"Token preview: {mask_secret(session.access_token)}")


def _parse_fields(pairs: Tuple[str, ...], raw_json: Optional[str]) -> Dict[str, Any]:
    fields: Dict[str, Any] = {}
    if raw_json:
        try:
            loaded = json.loads(raw_json)
        except ValueError as e:
            raise click.BadParameter(f"invalid JSON: {e}", param_hint="--json") from e
        if not isinstance(loaded, dict):
            raise click.BadParameter("must be a JSON object", param_hint="--json")
        fields.update(loaded)
    for pair in pairs:
        name, sep, value = pair.partition("=")
        if not sep or not name:
            raise click.BadParameter(f"expected Field=Value, got {pair!r}", param_hint="--field")
        fields[name.strip()] = value
    return fields


@cli.command("insert")
@click.argument("object_type")
@click.option("-f", "--field", "pairs", multiple=True, help="Field=Value (repeatable).")
@click.option("--json", "raw_json", default=None, help="Fields as a JSON object.")
@click.pass_context
def cmd_insert(ctx: click.Context, object_type: str, pairs: Tuple[str, ...], raw_json: Optional[str]) -> None:
    """Create one OBJECT_TYPE record and print its Id."""
    fields = _parse_fields(pairs, raw_json)
    if not fields:
        raise click.UsageError("Provide at least one --field or --json.")
    with _connect(ctx) as client:
        try:
            record_id = client.insert_record(object_type, fields)
        except (SalesforceError, NotAuthorizedError) as e:
            raise click.ClickException(f"Insert record failed: {e}") from e
    click.echo(record_id)


@cli.command("query")
@click.argument("soql")
@click.option("--pretty", is_flag=True, help="Pretty-print JSON.")
@click.pass_context
def cmd_query(ctx: click.Context, soql: str, pretty: bool) -> None:
    """Run a SOQL query and print the JSON result."""
    with _connect(ctx) as client:
        try:
            res = client.query_records(soql)
        except (SalesforceError, NotAuthorizedError) as e:
            raise click.ClickException(f"Query records failed: {e}") from e
    click.echo(json.dumps(res, indent=2 if pretty else None))


@cli.command("demo")
@click.pass_context
def cmd_demo(ctx: click.Context) -> None:
    """Create an example Case, then list recent Cases."""
    failed = False
    with _connect(ctx) as client:
        try:
            record_id = client.insert_record(DEMO_OBJECT, DEMO_FIELDS)
            click.echo(f"Record created with ID: {record_id}")
        except SalesforceError as e:
            failed = True
            click.echo(f"Insert record failed: {e}", err=True)

        try:
            res = client.query_records(DEMO_QUERY)
            click.echo(f"Query result: {json.dumps(res)}")
        except SalesforceError as e:
            failed = True
            click.echo(f"Query records failed: {e}", err=True)

    if failed:
        ctx.exit(1)
