"""CLI main entry point."""

import json
import logging
import os

import click
import tomlkit

from .config import Config
from .db import close_db
from .engine import RequestContext
from .errors import SettingsGenException
from .i18n import initialize
from .log import setup as setup_log
from .registry import PageRegistry
from .stores import get_store

logger = logging.getLogger(__name__)


def load_registry(config_path: str) -> tuple[Config, PageRegistry]:
    """Load configuration and build the registry of configured pages."""
    logger.info(f"Loading configuration file: {config_path}")
    cfg = Config.load_from_file(config_path)
    setup_log(cfg.log.file)
    initialize(ui_language=cfg.language)

    store = get_store(cfg.store)
    return cfg, PageRegistry.from_config(cfg, store)


def parse_assignments(assignments: tuple[str, ...]) -> dict[str, str | list[str]]:
    """Turn ``KEY=VALUE`` pairs into submitted values.

    A key given more than once collects its values into a list.
    """
    values: dict[str, str | list[str]] = {}
    for assignment in assignments:
        key, sep, value = assignment.partition("=")
        if not sep or not key:
            raise click.BadParameter(f"Expected KEY=VALUE, got '{assignment}'")

        if key in values:
            previous = values[key]
            values[key] = [*previous, value] if isinstance(previous, list) else [previous, value]
        else:
            values[key] = value
    return values


def _drop_none(value):
    if isinstance(value, dict):
        return {k: _drop_none(v) for k, v in value.items() if v is not None}
    if isinstance(value, list):
        return [_drop_none(item) for item in value if item is not None]
    return value


def schema_to_toml(engine) -> str:
    """Dump a page schema as a ``[[pages]]`` table that config.toml accepts."""
    schema = engine.schema
    page = schema.page.model_dump(mode="json")
    page["default_tab"] = schema.default_tab
    page["tabs"] = [tab.model_dump(mode="json") for tab in schema.tabs]
    page["fields"] = [field.model_dump(mode="json", by_alias=True) for field in schema.fields]

    doc = tomlkit.document()
    pages = tomlkit.aot()
    pages.append(tomlkit.item(_drop_none(page)))
    doc.append("pages", pages)
    return tomlkit.dumps(doc)


@click.group()
@click.option("--config", "-c", default="config.toml", help="Configuration file path")
@click.pass_context
def cli(ctx, config: str):
    """Settings pages generated from declarative field schemas."""
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config
    setup_log()


@cli.command(name="pages")
@click.pass_context
def list_pages(ctx):
    """List configured settings pages in menu order."""
    try:
        _, registry = load_registry(ctx.obj["config_path"])
        click.echo("id\ttype\tparent\tcapability\ttitle")
        for entry in registry.menu():
            capability = registry.get(entry.page_id).schema.page.capability
            click.echo(
                f"{entry.page_id}\t{entry.type.value}\t{entry.parent or '-'}\t{capability}\t{entry.title}"
            )
    except SettingsGenException as e:
        raise click.ClickException(str(e))
    finally:
        close_db()


@cli.command(name="schema")
@click.argument("page_id")
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["json", "toml"], case_sensitive=False),
    default="json",
)
@click.pass_context
def show_schema(ctx, page_id: str, output_format: str):
    """Print the field schema of a page."""
    try:
        _, registry = load_registry(ctx.obj["config_path"])
        engine = registry.get(page_id)
        if output_format.lower() == "toml":
            click.echo(schema_to_toml(engine), nl=False)
        else:
            click.echo(engine.schema.model_dump_json(indent=2, by_alias=True))
    except SettingsGenException as e:
        raise click.ClickException(str(e))
    finally:
        close_db()


@cli.command(name="show")
@click.argument("page_id")
@click.pass_context
def show_settings(ctx, page_id: str):
    """Print the stored settings record of a page."""
    try:
        _, registry = load_registry(ctx.obj["config_path"])
        record = registry.get(page_id).get_record()
        if record is None:
            click.echo(f"No settings saved for '{page_id}'", err=True)
            record = {}
        click.echo(json.dumps(record, indent=2, ensure_ascii=False))
    except SettingsGenException as e:
        raise click.ClickException(str(e))
    finally:
        close_db()


@cli.command(name="set")
@click.argument("page_id")
@click.argument("assignments", nargs=-1, required=True)
@click.pass_context
def set_settings(ctx, page_id: str, assignments: tuple[str, ...]):
    """Submit KEY=VALUE pairs to a page, as its form would."""
    try:
        _, registry = load_registry(ctx.obj["config_path"])
        record = registry.get(page_id).save(parse_assignments(assignments))
        click.echo(json.dumps(record, indent=2, ensure_ascii=False))
    except SettingsGenException as e:
        logger.error(f"Failed to save settings: {e}")
        raise click.ClickException(str(e))
    finally:
        close_db()


@cli.command(name="render")
@click.argument("page_id")
@click.option("--tab", default=None, help="Tab to render; defaults to the page's default tab")
@click.pass_context
def render_page(ctx, page_id: str, tab: str | None):
    """Print the HTML of a settings page."""
    try:
        _, registry = load_registry(ctx.obj["config_path"])
        engine = registry.get(page_id)
        context = RequestContext(tab=tab)
        click.echo(engine.render_page(context, form_action=f"/pages/{page_id}"))
    except SettingsGenException as e:
        raise click.ClickException(str(e))
    finally:
        close_db()


@cli.command()
@click.option("--host", "-h", default=None, help="Override host from config")
@click.option("--port", "-p", default=None, type=int, help="Override port from config")
@click.pass_context
def serve(ctx, host, port):
    """Start the settings web service."""
    config_path = ctx.obj["config_path"]

    try:
        cfg = Config.load_from_file(config_path)
    except SettingsGenException as e:
        raise click.ClickException(str(e))

    setup_log(cfg.log.file)
    host = host or cfg.web.host
    port = port or cfg.web.port

    os.environ["CONFIG_FILE"] = config_path

    import uvicorn

    logger.info(f"Starting web service on http://{host}:{port}")
    uvicorn.run(
        "settingsgen.api:create_app",
        host=host,
        port=port,
        factory=True,
        reload=cfg.web.reload,
    )


def main():
    cli(obj={})


if __name__ == "__main__":
    main()
