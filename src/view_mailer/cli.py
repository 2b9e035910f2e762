"""CLI commands for previewing mail views."""

import json
import logging
import sys
from typing import Any, Optional, Tuple

import click
import jinja2
import yaml

from .config import MailerSettings, load_settings
from .exceptions import MailerError
from .logging import setup_logging
from .mailer import MailerBase
from .senders import MemoryMailSender
from .view_engines import JinjaViewEngine, ViewEngineCollection

logger = logging.getLogger(__name__)


class PreviewMailer(MailerBase):
    """Mailer used to render a view outside of an application."""

    def __init__(self, controller: str, area: Optional[str] = None, **kwargs):
        self.controller_name = controller
        self.area = area
        super().__init__(**kwargs)


def load_model(path: Optional[str]) -> Any:
    """Load a model from a JSON or YAML file."""
    if not path:
        return None

    with open(path, "r", encoding="utf-8") as f:
        if path.endswith(".json"):
            return json.load(f)
        return yaml.safe_load(f)


def parse_assignments(assignments: Tuple[str, ...]) -> dict:
    values = {}
    for assignment in assignments:
        key, sep, value = assignment.partition("=")
        if not sep or not key:
            raise click.BadParameter(f"Expected KEY=VALUE, got {assignment!r}", param_hint="--set")
        values[key] = value
    return values


@click.group()
@click.option("--config", type=click.Path(exists=True), help="Config file path (YAML/JSON)")
@click.option("--env-file", type=click.Path(exists=True), help=".env file path")
@click.pass_context
def main(ctx: click.Context, config: Optional[str], env_file: Optional[str]):
    """Render and preview mail views."""
    try:
        settings = load_settings(config_file=config, env_file=env_file)
    except MailerError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    setup_logging(settings=settings)
    ctx.obj = settings


def _views_dir(settings: MailerSettings, views_dir: Optional[str]) -> str:
    views_dir = views_dir or settings.views_dir
    if not views_dir:
        raise click.UsageError("No views directory given (use --views-dir or set views_dir)")
    return views_dir


@main.command("list-views")
@click.option("--views-dir", type=click.Path(file_okay=False), help="Path to views directory")
@click.pass_obj
def list_views(settings: MailerSettings, views_dir: Optional[str]):
    """List all available views."""
    try:
        engine = JinjaViewEngine(_views_dir(settings, views_dir))
        views = engine.list_views()

        if not views:
            click.echo("No views found")
            return

        click.echo(f"Available views ({len(views)}):")
        for name, formats in views.items():
            click.echo(f"  - {name} ({', '.join(formats)})")

    except MailerError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


@main.command()
@click.argument("view")
@click.option("--views-dir", type=click.Path(file_okay=False), help="Path to views directory")
@click.option("--controller", required=True, help="Controller (mailer) the view belongs to")
@click.option("--area", help="Area the mailer belongs to")
@click.option("--master", help="Layout to render the view with")
@click.option("--model", "model_file", type=click.Path(exists=True), help="Model data (JSON/YAML)")
@click.option("--set", "assignments", multiple=True, help="View bag value as KEY=VALUE")
@click.option("--encoding", help="Message encoding (defaults to settings)")
@click.option("--from", "from_address", help="Sender address")
@click.option("--to", "recipients", multiple=True, help="Recipient address")
@click.option("--subject", default="", help="Message subject")
@click.option("--raw", is_flag=True, help="Print the MIME message instead of the bodies")
@click.pass_obj
def preview(
    settings: MailerSettings,
    view: str,
    views_dir: Optional[str],
    controller: str,
    area: Optional[str],
    master: Optional[str],
    model_file: Optional[str],
    assignments: Tuple[str, ...],
    encoding: Optional[str],
    from_address: Optional[str],
    recipients: Tuple[str, ...],
    subject: str,
    raw: bool,
):
    """Compose VIEW and print the rendered bodies."""
    try:
        mailer = PreviewMailer(
            controller,
            area=area,
            mail_sender=MemoryMailSender(),
            settings=settings,
            view_engines=ViewEngineCollection(
                [JinjaViewEngine(_views_dir(settings, views_dir))]
            ),
        )
        mailer.from_address = from_address
        mailer.to.extend(recipients)
        mailer.subject = subject
        if encoding:
            mailer.message_encoding = encoding
        mailer.view_data.update(parse_assignments(assignments))

        result = mailer.email(view, load_model(model_file), master_name=master)

        if raw:
            click.echo(result.mail.to_mime().as_string())
            return

        click.echo(f"View: {result.view_name}")
        click.echo(f"Encoding: {result.message_encoding}")
        for media_type, body in result.render_bodies().items():
            click.echo(f"\n{media_type}:")
            click.echo("-" * 50)
            click.echo(body)
            click.echo("-" * 50)

    except (MailerError, jinja2.TemplateError, LookupError, ValueError) as e:
        logger.debug("Preview failed", exc_info=True)
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
