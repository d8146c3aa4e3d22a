# campaign/cli.py
import click
from flask import current_app
from flask.cli import with_appcontext

from campaign.errors import GenerationError
from campaign.generator import generate_site


@click.command("generate")
@click.option("--output-dir", default=None, help="Override OUTPUT_DIR for this build.")
@with_appcontext
def generate_cmd(output_dir):
    """🔨 Render the static site (home, about, blog) into OUTPUT_DIR."""
    cfg = dict(current_app.config)
    if output_dir:
        cfg["OUTPUT_DIR"] = output_dir

    try:
        written = generate_site(cfg)
    except GenerationError as e:
        click.secho(f"❌ {e}", fg="red", bold=True)
        raise SystemExit(1)

    click.secho(f"✅ Static site generation complete! ({len(written)} files)", fg="bright_green", bold=True)
