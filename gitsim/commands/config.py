"""
Config command group for gitsim.
"""

import json

import click

from gitsim.config import load_config, save_config, get_config_path, get_default_config
from gitsim.exit_codes import ConfigError


@click.group("config")
def config_cmd():
    """Configuration management commands."""
    pass


@config_cmd.command("init")
@click.option("--force", is_flag=True, help="Overwrite an existing configuration file")
def init_config(force):
    """Write the default configuration to ~/.gitsim/config.json."""
    config_path = get_config_path()
    if config_path.exists() and not force:
        click.echo(f"Configuration already exists at {config_path}. Use --force to overwrite.")
        return
    saved = save_config(get_default_config())
    click.echo(f"Default configuration written to {saved}")


@config_cmd.command("show")
@click.argument("section", required=False)
@click.option("--pretty", is_flag=True, help="Indent the JSON instead of printing one line")
@click.option("--path", is_flag=True, help="Print which config file is in effect")
def show_config(section, pretty, path):
    """Print the effective configuration.

    Defaults, the config file and GITSIM_* environment overrides are
    merged first. SECTION limits the output to one top-level key.

    \b
    Examples:
        gitsim config show
        gitsim config show prompt --pretty
        gitsim config show --path
    """
    if path:
        click.echo(json.dumps({"config_path": str(get_config_path())}))
        return

    data = load_config()
    if section:
        if section not in data:
            raise ConfigError(f"Unknown config section '{section}'. Known: {', '.join(sorted(data))}")
        data = {section: data[section]}

    click.echo(json.dumps(data, indent=2 if pretty else None, ensure_ascii=False))
