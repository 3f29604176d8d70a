"""Command-line interface for backup check."""

import logging
import sys
import click
from typing import Optional, Tuple

from .config.config_manager import ConfigManager
from .core.disk import get_disk_probe
from .core.exceptions import BackupCheckError
from .core.models import Severity
from .core.monitor import AnalysisEngine
from .reporters.nagios_reporter import NagiosReporter

logger = logging.getLogger(__name__)


def setup_logging(level: str, log_file: Optional[str] = None):
    """Set up logging configuration.

    Log records go to stderr; stdout carries only the plugin output.
    """
    # Convert string level to logging constant
    numeric_level = getattr(logging, str(level).upper(), None)
    if not isinstance(numeric_level, int):
        raise ValueError(f'Invalid log level: {level}')

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)

    # Clear existing handlers
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if log_file:
        try:
            file_handler = logging.FileHandler(log_file)
            file_handler.setFormatter(formatter)
            root_logger.addHandler(file_handler)
        except OSError as e:
            click.echo(f"Warning: Could not set up file logging: {e}", err=True)


def _unknown(message: str):
    """Print an UNKNOWN plugin line and exit."""
    click.echo(f"{Severity.UNKNOWN.name}: {message}")
    sys.exit(Severity.UNKNOWN.exit_code)


def _load_config_manager(ctx) -> ConfigManager:
    """Load the config file and set up logging from it and the CLI options."""
    config_manager = ConfigManager(ctx.obj.get('config_path'))
    config_manager.load_config()

    logging_config = config_manager.get_logging_config()
    setup_logging(ctx.obj.get('log_level') or logging_config.get('level', 'WARNING'),
                  ctx.obj.get('log_file') or logging_config.get('file'))
    return config_manager


@click.group()
@click.option('--config', 'config_path',
              help='Path to configuration file')
@click.option('--log-level', default=None,
              type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR'], case_sensitive=False),
              help='Logging level (default from config, else WARNING)')
@click.option('--log-file',
              help='Log file path')
@click.pass_context
def cli(ctx, config_path: Optional[str], log_level: Optional[str], log_file: Optional[str]):
    """Backup Check - monitoring plugin for backup freshness, size and disk space."""
    ctx.ensure_object(dict)
    ctx.obj['config_path'] = config_path
    ctx.obj['log_level'] = log_level
    ctx.obj['log_file'] = log_file


@cli.command()
@click.option('--directories', '-d', 'directories', multiple=True,
              help='Backup directory; repeat or comma-separate for several')
@click.option('--pattern', '-p', default=None,
              help='Glob pattern for backup files; plain text matches as a substring')
@click.option('--max-age', '-c', 'max_age_seconds', type=int, default=None,
              help='CRITICAL if the newest backup is older than N seconds')
@click.option('--min-size', '-s', 'min_size_bytes', type=int, default=None,
              help='CRITICAL if the newest backup is N bytes or smaller')
@click.option('--sample-size', '-n', type=int, default=None,
              help='How many recent backups to average over (default 10)')
@click.option('--warning', '-w', 'warning_disk_percent', type=float, default=None,
              help='WARNING when the disk is at least this percent full (default 80)')
@click.option('--critical', '-C', 'critical_disk_percent', type=float, default=None,
              help='CRITICAL when the disk is at least this percent full (default 90)')
@click.option('--disk-probe', type=click.Choice(['auto', 'statvfs', 'df', 'shutil']), default=None,
              help='How to query disk capacity (default auto)')
@click.option('--output', '-o', type=click.Choice(['text', 'json']), default='text',
              help='Output format')
@click.option('--details/--no-details', default=True,
              help='Include the human-readable section in text output')
@click.pass_context
def check(ctx, directories: Tuple[str, ...], pattern: Optional[str], max_age_seconds: Optional[int],
          min_size_bytes: Optional[int], sample_size: Optional[int],
          warning_disk_percent: Optional[float], critical_disk_percent: Optional[float],
          disk_probe: Optional[str], output: str, details: bool):
    """Check backup directories and exit with the plugin status code."""
    try:
        config_manager = _load_config_manager(ctx)
        config = config_manager.build_check_config({
            'directories': ','.join(directories) if directories else None,
            'pattern': pattern,
            'max_age_seconds': max_age_seconds,
            'min_size_bytes': min_size_bytes,
            'sample_size': sample_size,
            'warning_disk_percent': warning_disk_percent,
            'critical_disk_percent': critical_disk_percent,
            'disk_probe': disk_probe
        })
        engine = AnalysisEngine(config, probe=get_disk_probe(config.disk_probe))
    except (BackupCheckError, ValueError) as e:
        _unknown(str(e))

    try:
        verdict, results = engine.analyze_all()
    except Exception as e:
        logger.exception("Backup check failed")
        _unknown(f"check failed: {e}")

    reporter = NagiosReporter(details=details)
    if output == 'json':
        click.echo(reporter.render_json(verdict, results))
    else:
        click.echo(reporter.render(verdict, results))

    sys.exit(verdict.severity.exit_code)


@cli.command()
@click.pass_context
def validate_config(ctx):
    """Validate configuration file."""
    try:
        config_manager = _load_config_manager(ctx)
        config = config_manager.build_check_config()
    except (BackupCheckError, ValueError) as e:
        click.echo(f"❌ Configuration validation failed: {e}", err=True)
        sys.exit(Severity.UNKNOWN.exit_code)

    click.echo("✅ Configuration loaded successfully")
    click.echo("\n📊 Configuration Summary:")
    click.echo(f"   Config file: {config_manager.config_file or '(none, defaults only)'}")
    click.echo(f"   Backup directories: {len(config.directories)}")
    for i, directory in enumerate(config.directories, 1):
        click.echo(f"     {i}. {directory}")
    click.echo(f"   Pattern: {config.pattern}")
    click.echo(f"   Max age: {config.max_age_seconds} s")
    click.echo(f"   Min size: {config.min_size_bytes} bytes")
    click.echo(f"   Sample size: {config.sample_size}")
    click.echo(f"   Disk thresholds: warning {config.warning_disk_percent}%, "
               f"critical {config.critical_disk_percent}%")
    click.echo(f"   Disk probe: {config.disk_probe}")


def main():
    """Main CLI entry point."""
    cli()


if __name__ == '__main__':
    main()
