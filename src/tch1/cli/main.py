"""Typer CLI entrypoint and command definitions for tch1."""

import json
import logging
from enum import StrEnum
from pathlib import Path

import typer

from tch1.core.defaults import DEFAULT_CONFIG_PATH, HASH_LENGTH

app = typer.Typer()


class OutputFormat(StrEnum):
    """How hash output is written to stdout.

    TCH1 output is mostly control and Latin-1 characters, so ``escaped``
    is the default.
    """

    ESCAPED = "escaped"
    RAW = "raw"
    HEX = "hex"
    CODEPOINTS = "codepoints"


def render(value: str, fmt: OutputFormat) -> str:
    if fmt == OutputFormat.RAW:
        return value
    if fmt == OutputFormat.HEX:
        return value.encode("utf-8", errors="surrogatepass").hex()
    if fmt == OutputFormat.CODEPOINTS:
        return json.dumps([ord(c) for c in value])
    return value.encode("unicode_escape").decode("ascii")


def _resolve_config(config: str | None):
    """Load *config* if given, else return ``None`` (process defaults apply)."""
    from pydantic import ValidationError

    from tch1.core.config import load_hash_config

    if config is None:
        return None

    path = Path(config)
    if not path.exists():
        typer.echo(f"Config file not found: {path}", err=True)
        raise typer.Exit(code=1)
    try:
        return load_hash_config(path)
    except (ValueError, ValidationError) as exc:
        typer.echo(f"Invalid config {path}: {exc}", err=True)
        raise typer.Exit(code=1)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """TCH1 transform-and-stretch hashing (obfuscation only, not cryptographic)."""
    from tch1.core.logging import install_sanitizing_filter

    # no-op once the root logger has handlers; the tch1 level is set every run
    logging.basicConfig(format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    logging.getLogger("tch1").setLevel(logging.DEBUG if verbose else logging.WARNING)
    install_sanitizing_filter(handler_level=True)


# -- hashing ------------------------------------------------------------------


@app.command("hash")
def hash_cmd(
    text: str = typer.Argument(..., help="Input string to hash"),
    salt: str | None = typer.Option(None, "--salt", help="Salt prepended to the input (default: configured salt)"),
    rounds: int | None = typer.Option(None, "--rounds", help="Number of transform rounds (default: configured rounds)"),
    config: str | None = typer.Option(None, "--config", help="Path to a tch1 YAML config"),
    fmt: OutputFormat = typer.Option(OutputFormat.ESCAPED, "--format", help="Output rendering"),
) -> None:
    """Hash TEXT and print the fixed-length result."""
    from tch1.core.hashing import hash as tch1_hash

    cfg = _resolve_config(config)
    typer.echo(render(tch1_hash(text, salt, rounds, config=cfg), fmt))


@app.command("transform")
def transform_cmd(
    text: str = typer.Argument(..., help="Input string"),
    fmt: OutputFormat = typer.Option(OutputFormat.ESCAPED, "--format", help="Output rendering"),
) -> None:
    """Apply a single transform round to TEXT."""
    from tch1.core.hashing import transform

    typer.echo(render(transform(text), fmt))


@app.command("pad")
def pad_cmd(
    text: str = typer.Argument(..., help="Input string"),
    length: int = typer.Option(HASH_LENGTH, "--length", min=0, help="Target length"),
) -> None:
    """Pad TEXT with '0' or truncate it to LENGTH characters."""
    from tch1.core.hashing import pad

    typer.echo(pad(text, length))


@app.command("verify")
def verify_cmd(
    text: str = typer.Argument(..., help="Input string to check"),
    expected: str = typer.Argument(..., help="Expected hash, hex-encoded UTF-8 (as printed by --format hex)"),
    salt: str | None = typer.Option(None, "--salt", help="Salt used for the expected hash"),
    rounds: int | None = typer.Option(None, "--rounds", help="Rounds used for the expected hash"),
    config: str | None = typer.Option(None, "--config", help="Path to a tch1 YAML config"),
) -> None:
    """Check that TEXT hashes to EXPECTED.  Exits 1 on mismatch."""
    from tch1.core.hashing import verify

    try:
        expected_text = bytes.fromhex(expected).decode("utf-8", errors="surrogatepass")
    except ValueError:
        typer.echo(f"Expected hash is not valid hex-encoded UTF-8: {expected!r}", err=True)
        raise typer.Exit(code=1)

    cfg = _resolve_config(config)
    if verify(text, expected_text, salt, rounds, config=cfg):
        typer.echo("match")
        return
    typer.echo("mismatch", err=True)
    raise typer.Exit(code=1)


# -- config -------------------------------------------------------------------
config_app = typer.Typer()
app.add_typer(config_app, name="config")


@config_app.command("show")
def config_show_cmd(
    config: str | None = typer.Option(None, "--config", help="Path to a tch1 YAML config"),
) -> None:
    """Print the effective configuration as YAML."""
    import yaml

    from tch1.core.config import get_defaults

    cfg = _resolve_config(config)
    if cfg is None:
        cfg = get_defaults()
    typer.echo(yaml.safe_dump(cfg.model_dump(mode="json"), sort_keys=False, allow_unicode=True).rstrip())


@config_app.command("init")
def config_init_cmd(
    path: str = typer.Argument(DEFAULT_CONFIG_PATH, help="Where to write the config"),
    force: bool = typer.Option(False, "--force", help="Overwrite an existing file"),
) -> None:
    """Write the built-in defaults to a YAML config file."""
    from tch1.core.config import HashConfig, save_hash_config

    out_path = Path(path)
    if out_path.exists() and not force:
        typer.echo(f"Config already exists: {out_path} (use --force to overwrite)", err=True)
        raise typer.Exit(code=1)

    save_hash_config(HashConfig(), out_path)
    typer.echo(f"Wrote config to {out_path}")


if __name__ == "__main__":
    app()
