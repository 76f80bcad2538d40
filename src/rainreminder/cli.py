from __future__ import annotations

import json

import click

from .config import LOCATIONS, load_settings
from .pipeline import run_pipeline
from .util.logging import setup_logging


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.option("--location", type=click.Choice(sorted(LOCATIONS), case_sensitive=False), help="Named location preset")
@click.option("--lat", type=float, help="Latitude override")
@click.option("--lon", type=float, help="Longitude override")
@click.option("--threshold", type=click.IntRange(0, 100), help="Send email when the chance exceeds this percentage")
@click.option("--user-agent", type=str, help="Custom user agent")
@click.option("--logs-dir", type=click.Path(path_type=str), help="Also write logs to this directory")
@click.option("--dry-run", is_flag=True, help="Check the forecast but never send email")
def main(**kwargs):
    """Run one rain reminder check locally."""
    settings = load_settings(kwargs)
    setup_logging(settings.logs_dir, settings.log_level)
    summary = run_pipeline(settings)
    click.echo(json.dumps(summary.as_dict(), indent=2))


if __name__ == "__main__":  # pragma: no cover
    main()
