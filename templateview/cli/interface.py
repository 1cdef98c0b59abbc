# templateview/cli/interface.py
import sys
import json
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import click
from click_option_group import optgroup
from rich.console import Console as RichConsole
from rich.table import Table
import structlog

from templateview import __version__ as app_version
from templateview.config.loader import load_config
from templateview.config.settings import ViewConfig
from templateview.core import TemplateView
from templateview.core.resolution import candidate_paths
from templateview.exceptions import TemplateViewError
from templateview.logging_setup import configure_logging
from templateview.output import write_to_file, write_to_stdout

log = structlog.get_logger(__name__)

def _parse_user_vars(raw_vars: Tuple[str, ...]) -> Dict[str, str]:
    user_vars: Dict[str, str] = {}
    for item in raw_vars:
        if "=" not in item:
            raise click.BadParameter(f"expected KEY=VALUE, got '{item}'", param_hint="--var")
        key, value = item.split("=", 1)
        user_vars[key.strip()] = value
    return user_vars

def _load_data_file(data_file: Optional[Path]) -> Dict[str, Any]:
    if data_file is None:
        return {}
    try:
        loaded = json.loads(data_file.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise click.BadParameter(f"{data_file} is not valid JSON: {e}", param_hint="--data-file")
    if not isinstance(loaded, dict):
        raise click.BadParameter(f"{data_file} must contain a JSON object", param_hint="--data-file")
    return loaded

def _config_from_obj(ctx: click.Context, template_root: Optional[Path]) -> ViewConfig:
    return load_config(
        profile=ctx.obj.get("profile"),
        overrides={"template_root": template_root},
    )


@click.group(context_settings=dict(help_option_names=["-h", "--help"]))
@optgroup.group("Application Behavior", help="Configuration profiles and logging.")
@optgroup.option("--config-profile", "active_config_profile_name", default=None, help="Load a profile from config file(s).")
@optgroup.option("--verbose", "-v", "verbosity_level", count=True, help="Verbosity: -v info, -vv debug.")
@optgroup.option("--force-json-logs", "force_json_logs_cli", is_flag=True, default=False, help="Force JSON logs.")
@click.version_option(version=app_version, package_name="templateview", prog_name="templateview", help="Show version and exit.")
@click.pass_context
def main_cli_group(ctx: click.Context, active_config_profile_name: Optional[str], verbosity_level: int, force_json_logs_cli: bool):
    """templateview: render named templates through Jinja2 or legacy raw-script files."""
    log_level = "warning"
    if verbosity_level == 1: log_level = "info"
    elif verbosity_level >= 2: log_level = "debug"
    configure_logging(log_level_str=log_level, force_json_logs=force_json_logs_cli)
    ctx.ensure_object(dict)
    ctx.obj["profile"] = active_config_profile_name


@main_cli_group.command("render")
@click.argument("name")
@optgroup.group("Template Source", help="Where templates are looked up.")
@optgroup.option("-r", "--root", "template_root", type=click.Path(file_okay=False, path_type=Path), default=None, help="Template root directory. Default: from config, else ./templates.")
@optgroup.group("Template Data", help="Variables made available to the template.")
@optgroup.option("--var", "user_vars", multiple=True, metavar="KEY=VALUE", help="Template variable; may be repeated.")
@optgroup.option("--data-file", "data_file", type=click.Path(exists=True, dir_okay=False, readable=True, path_type=Path), default=None, help="JSON object file merged into the template data before --var values.")
@optgroup.group("Output", help="Where rendered text goes.")
@optgroup.option("-o", "--output", "output_file", type=click.Path(dir_okay=False, writable=True, path_type=Path), default=None, help="Path to write the output to.")
@click.pass_context
def render_command(ctx: click.Context, name: str, template_root: Optional[Path], user_vars: Tuple[str, ...],
                   data_file: Optional[Path], output_file: Optional[Path]):
    """Render template NAME (relative to the root, without extension)."""
    data = _load_data_file(data_file)
    data.update(_parse_user_vars(user_vars))
    log.debug("cli_render_invoked", name=name, data_keys=sorted(data))
    try:
        config = _config_from_obj(ctx, template_root)
        rendered = TemplateView.get(name, config=config).render(data)
        if output_file:
            write_to_file(output_file, rendered)
            click.echo(f"Info: Output written to: {output_file}", err=True)
        else:
            write_to_stdout(rendered)
    except TemplateViewError as e:
        log.error("handled_application_error_in_cli", error_type=type(e).__name__, message=str(e))
        click.secho(f"Error: {e}", fg="red", err=True)
        sys.exit(1)


@main_cli_group.command("resolve")
@click.argument("name")
@click.option("-r", "--root", "template_root", type=click.Path(file_okay=False, path_type=Path), default=None, help="Template root directory.")
@click.pass_context
def resolve_command(ctx: click.Context, name: str, template_root: Optional[Path]):
    """Show which engine owns template NAME and the files that were probed."""
    try:
        config = _config_from_obj(ctx, template_root)
        candidates = candidate_paths(config.template_root, name, config.compiled_extension, config.raw_extension)
    except TemplateViewError as e:
        click.secho(f"Error: {e}", fg="red", err=True)
        sys.exit(1)

    table = Table(title=f"template '{name}'")
    table.add_column("engine")
    table.add_column("path")
    table.add_column("exists")
    owner = None
    for kind, path in candidates:
        exists = path.is_file()
        if exists and owner is None:
            owner = kind
        table.add_row(kind.value, str(path), "yes" if exists else "no")

    console = RichConsole(file=sys.stdout, width=120)
    console.print(table)
    console.print(f"cache dir: {config.cache_dir}")
    if owner is None:
        click.secho(f"Error: no template found for '{name}'", fg="red", err=True)
        sys.exit(1)
    console.print(f"owner: {owner.value}")
