"""
Upload, sign and keygen commands
"""
import asyncio
import json
import sys
import typer
from pathlib import Path
from typing import Optional, Dict, Any

from rich.panel import Panel
from rich.table import Table

from ...core.config import ConnectionConfig
from ...core.exceptions import SnipsError, ConfigError
from ...core.interfaces import SessionTransport
from ...core.keys import generate_private_key, write_private_key
from ...core.logging import get_logger, get_stdout_console, get_stderr_console
from ...domain.snip import Snip, SnipsClient, sign_id, strip_ansi
from ..config.loader import ConfigLoader, build_connection_config

logger = get_logger(__name__)
stdout_console = get_stdout_console()
stderr_console = get_stderr_console()


# asyncssh when None
session_transport: Optional[SessionTransport] = None


def register_commands(app: typer.Typer) -> None:
    """Register snips commands on the main app"""
    app.command(name="upload")(upload_command)
    app.command(name="sign")(sign_command)
    app.command(name="keygen")(keygen_command)


# ============================================================
# Helpers
# ============================================================

def _load_config(
    config_file: Optional[Path],
    host: Optional[str],
    port: Optional[int],
    user: Optional[str],
    key: Optional[Path],
    timeout: Optional[float],
) -> ConnectionConfig:
    cli_overrides: Dict[str, Any] = {
        "host": host,
        "port": port,
        "user": user,
        "key": str(key) if key else None,
        "timeout": timeout,
    }
    params = ConfigLoader().load(toml_path=config_file, cli_overrides=cli_overrides)
    return build_connection_config(params)


def _read_content(file: Optional[Path]) -> bytes:
    if file is None or str(file) == "-":
        return sys.stdin.buffer.read()
    try:
        return file.read_bytes()
    except OSError as e:
        raise ConfigError(f"Cannot read {file}: {e}") from e


def _render_snip(snip: Snip) -> None:
    table = Table(show_header=False, box=None, padding=(0, 1))
    table.add_column(style="dim")
    table.add_column()
    table.add_row("id", snip.id)
    table.add_row("size", str(snip.size))
    table.add_row("type", snip.type)
    table.add_row("visibility", snip.visibility.value)
    if snip.remote_shell_command:
        table.add_row("ssh", f"ssh {snip.remote_shell_command}")

    stdout_console.print(Panel(table, title="File Uploaded", border_style="green", expand=False))
    if snip.url:
        stdout_console.print(snip.url, soft_wrap=True, highlight=False)


def _fail(e: Exception) -> None:
    stderr_console.print(f"[red]Error:[/red] {e}", highlight=False)
    raise typer.Exit(1)


# ============================================================
# Commands
# ============================================================

def upload_command(
    file: Optional[Path] = typer.Argument(None, help="File to upload (stdin when omitted or '-')"),
    private: bool = typer.Option(False, "--private", "-p", help="Create a private snip"),
    sign: bool = typer.Option(False, "--sign", "-s", help="Also print a 5 minute signed link"),
    as_json: bool = typer.Option(False, "--json", help="Print the result as JSON"),
    save_key: Optional[Path] = typer.Option(
        None, "--save-key", help="Write the generated key here to keep ownership of the snip"
    ),
    key: Optional[Path] = typer.Option(None, "--key", "-k", help="Private key file"),
    host: Optional[str] = typer.Option(None, "--host", "-H", help="snips host (default: snips.sh)"),
    port: Optional[int] = typer.Option(None, "--port", "-P", help="SSH port (default: 22)"),
    user: Optional[str] = typer.Option(None, "--user", "-u", help="SSH username (default: ubuntu)"),
    timeout: Optional[float] = typer.Option(None, "--timeout", "-t", help="Seconds to wait for the service"),
    config_file: Optional[Path] = typer.Option(None, "--config", "-c", help="Configuration file path (TOML)"),
):
    """
    Upload a file, or stdin, as a snip

    Examples:
        echo 'hello' | snips upload
        snips upload notes.md --private --sign --key ~/.ssh/snips
    """
    try:
        config = _load_config(config_file, host, port, user, key, timeout)
        content = _read_content(file)
        generated = config.private_key is None

        async def _run():
            client = SnipsClient(config, transport=session_transport)
            snip = await client.upload(content, private=private)
            signed = await client.sign(snip) if sign else None
            return client, snip, signed

        client, snip, signed = asyncio.run(_run())
    except SnipsError as e:
        _fail(e)

    if as_json:
        data = snip.to_dict()
        if signed is not None:
            data["signed"] = strip_ansi(signed).strip()
        typer.echo(json.dumps(data, indent=2))
    else:
        _render_snip(snip)
        if signed is not None:
            stdout_console.print(strip_ansi(signed).strip(), soft_wrap=True, highlight=False, markup=False)

    if generated:
        if save_key:
            private_path, _ = write_private_key(client.config.private_key, save_key)
            stderr_console.print(f"[green]✓[/green] Saved key to [cyan]{private_path}[/cyan]")
        else:
            stderr_console.print(
                "[yellow]Uploaded with a throwaway key.[/yellow] "
                "Pass --save-key or use [cyan]snips keygen[/cyan] to manage snips later."
            )


def sign_command(
    snip_id: str = typer.Argument(..., help="Id of the snip to sign"),
    key: Optional[Path] = typer.Option(None, "--key", "-k", help="Private key the snip was uploaded with"),
    host: Optional[str] = typer.Option(None, "--host", "-H", help="snips host (default: snips.sh)"),
    port: Optional[int] = typer.Option(None, "--port", "-P", help="SSH port (default: 22)"),
    timeout: Optional[float] = typer.Option(None, "--timeout", "-t", help="Seconds to wait for the service"),
    raw: bool = typer.Option(False, "--raw", help="Print the reply with its terminal styling"),
    config_file: Optional[Path] = typer.Option(None, "--config", "-c", help="Configuration file path (TOML)"),
):
    """
    Get a 5 minute signed link to one of your snips
    """
    try:
        config = _load_config(config_file, host, port, None, key, timeout)
        if config.private_key is None:
            raise ConfigError("Signing needs the key the snip was uploaded with (--key or SNIPS_KEY)")
        reply = asyncio.run(sign_id(snip_id, config, session_transport))
    except SnipsError as e:
        _fail(e)

    if raw:
        sys.stdout.write(reply)
        sys.stdout.flush()
    else:
        stdout_console.print(strip_ansi(reply).strip(), soft_wrap=True, highlight=False, markup=False)


def keygen_command(
    path: Path = typer.Argument(..., help="Where to write the private key (public key gets .pub)"),
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite an existing key"),
):
    """
    Create a 4096-bit RSA key for uploading under a stable identity
    """
    path = path.expanduser()
    if path.exists() and not force:
        _fail(ConfigError(f"{path} already exists (use --force to overwrite)"))

    with stderr_console.status("Generating 4096-bit RSA key..."):
        pem = generate_private_key()
    private_path, public_path = write_private_key(pem, path)

    stdout_console.print(f"[green]✓[/green] Private key: [cyan]{private_path}[/cyan]")
    stdout_console.print(f"[green]✓[/green] Public key:  [cyan]{public_path}[/cyan]")
