"""pullpreview-license: issue, inspect and enforce PullPreview licenses."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import click
from pydantic import ValidationError

from ..config import Settings, get_settings
from ..encryption import EncryptionError
from ..licensing import LicenseCheckResult, LicenseCodec, LicenseError, check_license
from ..licensing.factory import create_license_codec
from ..utils.logging_security import sanitize_for_log

logger = logging.getLogger(__name__)

LICENSE_EXPIRED_EXIT_CODE = 1


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def enforce_license(
    command: str,
    settings: Settings | None = None,
    codec: LicenseCodec | None = None,
) -> LicenseCheckResult:
    """
    Run the license check for ``command`` and exit the process if it expired.

    Every other outcome returns normally; a missing or unreadable license is
    logged by the check but does not stop the command.
    """
    settings = settings or get_settings()
    codec = codec or create_license_codec(settings)

    result = check_license(command, codec, settings.license, settings.enforced_commands)
    if result.is_expired:
        logger.error("License expired")
        sys.exit(LICENSE_EXPIRED_EXIT_CODE)

    logger.debug(
        "License check for %s: %s", sanitize_for_log(command), result.outcome.value
    )
    return result


def _settings_from(ctx: click.Context) -> Settings:
    return ctx.obj["settings"]


@click.group()
@click.option("--key-dir", type=click.Path(file_okay=False, path_type=Path), help="Directory holding license_key / license_key.pub.")
@click.option("--log-level", default=None, help="Override PULLPREVIEW_LOG_LEVEL.")
@click.pass_context
def main(ctx: click.Context, key_dir: Path | None, log_level: str | None):
    """Issue, inspect and enforce PullPreview licenses."""
    try:
        settings = get_settings()
    except ValidationError as e:
        # Field names and messages only; input values may hold license text
        problems = "; ".join(
            f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}" for error in e.errors()
        )
        raise click.ClickException(f"Invalid PULLPREVIEW_* settings: {problems}") from e

    if key_dir is not None:
        settings = settings.model_copy(update={"key_dir": key_dir})

    configure_logging((log_level or settings.log_level).upper())
    ctx.ensure_object(dict)
    ctx.obj["settings"] = settings


@main.command("export")
@click.option("--type", "license_type", default="trial", show_default=True, help="License type.")
@click.option("--expires-at", required=True, type=click.DateTime(formats=["%Y-%m-%d"]), help="Expiration date (YYYY-MM-DD).")
@click.option("--boundary", default=None, help="Boundary label (defaults to PULLPREVIEW_BOUNDARY_LABEL).")
@click.option("--no-boundary", is_flag=True, help="Print a bare base64 blob.")
@click.pass_context
def export_command(ctx: click.Context, license_type: str, expires_at, boundary: str | None, no_boundary: bool):
    """Encrypt a new license with the private key and print it."""
    settings = _settings_from(ctx)
    codec = create_license_codec(settings)

    record = codec.build({"type": license_type, "expires_at": expires_at.date()})
    label = None if no_boundary else (boundary or settings.boundary_label)

    try:
        text = codec.export_license(record, boundary=label)
    except (LicenseError, EncryptionError) as e:
        raise click.ClickException(str(e)) from e

    click.echo(text, nl=not text.endswith("\n"))


@main.command("import")
@click.option("--data", default=None, help="License text (defaults to PULLPREVIEW_LICENSE).")
@click.pass_context
def import_command(ctx: click.Context, data: str | None):
    """Decrypt a license with the public key and describe it."""
    settings = _settings_from(ctx)
    codec = create_license_codec(settings)

    try:
        record = codec.import_license(data or settings.license)
        expired = record.is_expired()
    except (LicenseError, EncryptionError) as e:
        raise click.ClickException(str(e)) from e

    click.echo(str(record))
    reason = record.validation_error()
    click.echo(f"valid: {'yes' if reason is None else 'no (' + reason + ')'}")
    click.echo(f"expired: {'yes' if expired else 'no'}")


@main.command("check")
@click.argument("command_name")
@click.pass_context
def check_command(ctx: click.Context, command_name: str):
    """Exit non-zero if COMMAND_NAME requires a license and it has expired."""
    result = enforce_license(command_name, settings=_settings_from(ctx))
    click.echo(result.outcome.value)


if __name__ == "__main__":
    main()
