"""Typer CLI entrypoint and command definitions for navpolicy."""

import json
from pathlib import Path

import typer

from navpolicy.core.defaults import DEFAULT_CONFIG_PATH

app = typer.Typer()


def _load_or_default(config: str | None):
    """Load *config* if given, else the built-in defaults; exit 1 on failure."""
    from pydantic import ValidationError
    import yaml

    from navpolicy.core.config import default_config, load_config

    if config is None:
        return default_config()

    path = Path(config)
    if not path.exists():
        typer.echo(f"Config file not found: {path}", err=True)
        raise typer.Exit(code=1)
    try:
        return load_config(path)
    except (ValidationError, yaml.YAMLError) as exc:
        typer.echo(f"Invalid config {path}:\n{exc}", err=True)
        raise typer.Exit(code=1)


# -- check --------------------------------------------------------------------


@app.command("check")
def check_cmd(
    url: str = typer.Argument(..., help="Candidate URL to classify"),
    config: str | None = typer.Option(None, "--config", help="Path to a shell config YAML (defaults to built-in policy)"),
    as_json: bool = typer.Option(False, "--json", help="Print the decision as JSON"),
) -> None:
    """Classify a URL as render_inline, delegate_external, or block."""
    from navpolicy.policy.router import decide

    shell = _load_or_default(config)
    decision = decide(shell.policy, url)

    if as_json:
        typer.echo(json.dumps(decision.model_dump(mode="json", exclude_none=True)))
        return

    detail = decision.url or decision.reason
    typer.echo(f"{decision.kind.value}: {detail}" if detail else decision.kind.value)


# -- config -------------------------------------------------------------------
config_app = typer.Typer()
app.add_typer(config_app, name="config")


@config_app.command("init")
def config_init_cmd(
    out: str = typer.Option(DEFAULT_CONFIG_PATH, "--out", help="Where to write the default config"),
    force: bool = typer.Option(False, "--force", help="Overwrite an existing file"),
) -> None:
    """Write the default shell config as YAML."""
    from navpolicy.core.config import default_config, save_config

    path = Path(out)
    if path.exists() and not force:
        typer.echo(f"Refusing to overwrite {path} (use --force)", err=True)
        raise typer.Exit(code=1)

    save_config(default_config(), path)
    typer.echo(f"Wrote default config to {path}")


@config_app.command("show")
def config_show_cmd(
    config: str | None = typer.Option(None, "--config", help="Path to a shell config YAML (defaults to built-in policy)"),
) -> None:
    """Print the normalized navigation policy and its fingerprint."""
    shell = _load_or_default(config)
    policy = shell.policy

    typer.echo(f"App:         {shell.app_name}")
    typer.echo(f"Base URL:    {policy.base_url}")
    typer.echo("Domains:")
    for rule in policy.allowed_domains:
        kind = "wildcard" if rule.is_wildcard else "exact"
        typer.echo(f"  - {rule.pattern} ({kind})")
    typer.echo(f"Schemes:     {', '.join(sorted(policy.allowed_schemes))}")
    typer.echo(f"Fingerprint: {policy.fingerprint}")


@config_app.command("validate")
def config_validate_cmd(
    config: str = typer.Option(..., "--config", help="Path to a shell config YAML"),
) -> None:
    """Validate a shell config file."""
    shell = _load_or_default(config)
    typer.echo(
        f"Valid: {len(shell.policy.allowed_domains)} domain rule(s), "
        f"{len(shell.policy.allowed_schemes)} scheme(s), "
        f"fingerprint {shell.policy.fingerprint}"
    )


if __name__ == "__main__":
    app()
