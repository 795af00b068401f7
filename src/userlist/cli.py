import logging
import sys

import click

from . import __version__
from .analysis import analyze_uids
from .collector import collect_fleet
from .config import DEFAULT_CONFIG_PATH, load_config
from .errors import ConfigError, UserlistError
from .hosts import load_hosts
from .remote import SSHRunner, parse_timeout
from .report import build_collision_rows, build_uid_map_rows, build_user_rows, export_csv

logger = logging.getLogger("userlist")

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# No TRACE level in stdlib logging; trace output is logged at DEBUG.
_LOG_LEVELS = {
    "trace": logging.DEBUG,
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}


def configure_logging(loglevel: str, logfile: str | None = None) -> None:
    level = _LOG_LEVELS.get(loglevel.lower())
    if level is None:
        click.echo(f'Unknown loglevel: {loglevel}.  Assuming "info".', err=True)
        level = logging.INFO
    kwargs: dict[str, object] = {"level": level, "format": LOG_FORMAT, "force": True}
    if logfile:
        kwargs["filename"] = logfile
        kwargs["filemode"] = "a"
    else:
        kwargs["stream"] = sys.stderr
    try:
        logging.basicConfig(**kwargs)  # type: ignore[arg-type]
    except OSError as exc:
        raise click.ClickException(f"Error opening logfile: {exc}") from exc


def build_runner(ssh_user: str, private_keys: list[str], ssh_timeout: str) -> SSHRunner:
    runner = SSHRunner(ssh_user, timeout=parse_timeout(ssh_timeout))
    for key in private_keys:
        try:
            runner.add_key(key)
        except ConfigError as exc:
            logger.warning("%s", exc)
    if not runner.keys:
        raise ConfigError("No valid private keys found")
    return runner


@click.command()
@click.version_option(version=__version__)
@click.option(
    "--config",
    "-c",
    "config_path",
    default=DEFAULT_CONFIG_PATH,
    show_default=True,
    type=click.Path(dir_okay=False),
    help="Path to userlist configuration file.",
)
@click.option(
    "--password-only",
    is_flag=True,
    default=False,
    help="Only list accounts that have a usable password hash.",
)
def main(config_path: str, password_only: bool) -> None:
    """Inventory local accounts across a fleet and report UID collisions."""
    try:
        cfg = load_config(config_path)
    except ConfigError as exc:
        raise click.ClickException(str(exc)) from exc
    configure_logging(cfg.loglevel, cfg.logfile)

    try:
        runner = build_runner(cfg.ssh_user, cfg.private_keys, cfg.ssh_timeout)
        hostnames = load_hosts(cfg.server_list, timeout=runner.timeout)
    except UserlistError as exc:
        logger.error("%s", exc)
        raise click.ClickException(str(exc)) from exc

    store, summary = collect_fleet(
        hostnames,
        runner,
        default_domain=cfg.default_domain,
        workers=cfg.workers,
    )
    analysis = analyze_uids(store)

    outputs = (
        (cfg.out_file, build_user_rows(store, password_only=password_only)),
        (cfg.collisions_file, build_collision_rows(analysis)),
        (cfg.uidmap_file, build_uid_map_rows(analysis)),
    )
    for path, rows in outputs:
        try:
            export_csv(rows, path)
        except OSError as exc:
            logger.error("Unable to write output %s: %s", path, exc)
            raise click.ClickException(f"Unable to write output {path}: {exc}") from exc

    click.echo(f"Parsed {summary.parsed} of {len(hostnames)} hosts")
    for host in summary.failed:
        click.echo(f"  failed: {host}")
    click.echo(f"Users: {cfg.out_file}")
    click.echo(f"UID collisions ({len(analysis.collisions)}): {cfg.collisions_file}")
    click.echo(f"UID map: {cfg.uidmap_file}")


if __name__ == "__main__":
    main()
