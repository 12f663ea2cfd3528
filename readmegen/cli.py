"""CLI entry point for readmegen."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Annotated

import typer
import yaml
from rich import print as rprint
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table

from readmegen.config import ReadmegenConfig, load_config
from readmegen.config.loader import DEFAULT_CONFIG_TEMPLATE
from readmegen.digest import DigestBuilder
from readmegen.generator import GenerationError, GenerationOrchestrator
from readmegen.llm import create_llm_provider
from readmegen.logging import configure_logging
from readmegen.output import PublishError, ReadmePublisher, ReadmeWriter
from readmegen.quota import JsonFileStorage, QuotaLedger
from readmegen.vcs import AuthError, RepoMetadata, RepoRef, create_provider
from readmegen.vcs.auth import TOKEN_KEY, build_authorize_url, exchange_code

app = typer.Typer(
    name="readmegen",
    help="Generate README.md files for your GitHub repositories with Gemini.",
)

config_app = typer.Typer(help="Manage readmegen configuration.")
app.add_typer(config_app, name="config")

# Global state
_config: ReadmegenConfig | None = None


def _get_config() -> ReadmegenConfig:
    if _config is None:
        return load_config()
    return _config


def _get_storage(cfg: ReadmegenConfig) -> JsonFileStorage:
    return JsonFileStorage(cfg.state_path)


def _get_ledger(cfg: ReadmegenConfig) -> QuotaLedger:
    return QuotaLedger(_get_storage(cfg), cfg.llm.daily_limits)


@app.callback()
def main(
    config: Annotated[
        str | None, typer.Option("--config", "-c", help="Path to readmegen.yaml")
    ] = None,
) -> None:
    """Global options."""
    global _config
    try:
        _config = load_config(config)
    except ValueError as e:
        rprint(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)
    configure_logging(_config.log_level, _config.log_format)


def _parse_repo(repo: str) -> RepoRef:
    try:
        return RepoRef.parse(repo)
    except ValueError as e:
        rprint(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)


def _display_repo_list(repos: list[RepoMetadata]) -> None:
    table = Table(title=f"Repositories ({len(repos)})")
    table.add_column("Name", style="cyan")
    table.add_column("Language", style="green")
    table.add_column("Stars", justify="right")
    table.add_column("Forks", justify="right")
    table.add_column("Visibility")
    table.add_column("Updated", style="dim")
    for r in repos:
        table.add_row(
            r.full_name,
            r.language or "-",
            str(r.stars),
            str(r.forks),
            "private" if r.private else "public",
            (r.updated_at or "-")[:10],
        )
    rprint(table)


@app.command()
def login(
    code: str | None = typer.Option(
        None, "--code", help="OAuth code from the GitHub callback"
    ),
) -> None:
    """Authorize with GitHub and save the access token."""
    cfg = _get_config()
    try:
        if code is None:
            url = build_authorize_url(cfg.github)
            rprint("Open this URL, approve access, then rerun with --code:")
            rprint(f"[link={url}]{url}[/link]")
            return
        token = asyncio.run(exchange_code(cfg.github, code))
    except AuthError as e:
        rprint(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    _get_storage(cfg).set(TOKEN_KEY, token)
    rprint("[green]GitHub token saved.[/green]")


@app.command()
def repos() -> None:
    """List repositories visible to the authenticated user."""
    cfg = _get_config()
    try:
        provider = create_provider(cfg.github, _get_storage(cfg))
        repo_list = asyncio.run(provider.list_user_repos())
    except AuthError as e:
        rprint(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)
    except Exception as e:
        rprint(f"[red]Failed to fetch repositories:[/red] {e}")
        raise typer.Exit(1)

    if not repo_list:
        rprint("[yellow]No repositories found.[/yellow]")
        raise typer.Exit(0)
    _display_repo_list(repo_list)


@app.command()
def digest(
    repo: str = typer.Argument(..., help="Repository as owner/repo"),
) -> None:
    """Print the repository digest that would be sent to the model."""
    cfg = _get_config()
    ref = _parse_repo(repo)
    try:
        provider = create_provider(cfg.github, _get_storage(cfg))
        result = asyncio.run(DigestBuilder(provider, cfg.digest).build(ref))
    except AuthError as e:
        rprint(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)
    except Exception as e:
        rprint(f"[red]Failed to fetch repository content:[/red] {e}")
        raise typer.Exit(1)

    typer.echo(result.text)


@app.command()
def generate(
    repo: str = typer.Argument(..., help="Repository as owner/repo"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Preview without writing"),
    commit: bool = typer.Option(
        False, "--commit", help="Commit the README back to the repository"
    ),
    output: Annotated[
        str | None, typer.Option("--output", "-o", help="Override output directory")
    ] = None,
) -> None:
    """Generate a README.md for a repository."""
    cfg = _get_config()
    ref = _parse_repo(repo)
    storage = _get_storage(cfg)

    # 1. Providers
    try:
        vcs_provider = create_provider(cfg.github, storage)
        llm = create_llm_provider(cfg.llm)
    except (AuthError, ValueError) as e:
        rprint(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    # 2. Digest
    rprint(f"[bold]Analyzing[/bold] {ref}...")
    try:
        repo_digest = asyncio.run(DigestBuilder(vcs_provider, cfg.digest).build(ref))
    except Exception as e:
        rprint(f"[red]Failed to fetch repository content:[/red] {e}")
        raise typer.Exit(1)

    # 3. Generate
    orchestrator = GenerationOrchestrator.from_settings(
        llm, QuotaLedger(storage, cfg.llm.daily_limits), cfg.llm
    )
    rprint(f"[bold]Generating[/bold] README (models: {', '.join(cfg.llm.model_names)})...")
    try:
        result = asyncio.run(orchestrator.generate(repo_digest.text))
    except GenerationError as e:
        rprint(f"[red]Generation failed:[/red] {e}")
        raise typer.Exit(1)

    # 4. Write, preview or commit
    if dry_run:
        rprint(Syntax(result.text, "markdown", theme="monokai"))
    else:
        out_cfg = cfg.output
        if output:
            out_cfg = out_cfg.model_copy(update={"base_dir": output})
        dest = ReadmeWriter(out_cfg).write(ref, result.text)
        rprint(Panel(
            f"[dim]File:[/dim]     {dest}\n"
            f"[dim]Model:[/dim]    {result.model}\n"
            f"[dim]Size:[/dim]     {len(result.text)} bytes",
            title="README Generated",
            border_style="green",
        ))

    if commit and dry_run:
        rprint(f"[dim]dry-run:[/dim] would commit README.md to {ref}")
    elif commit:
        try:
            updated = asyncio.run(ReadmePublisher(vcs_provider).commit_readme(ref, result.text))
        except PublishError as e:
            rprint(f"[red]Commit failed:[/red] {e}")
            raise typer.Exit(1)
        verb = "Updated" if updated else "Created"
        rprint(f"[green]{verb}[/green] README.md in {ref}")


@app.command()
def quota() -> None:
    """Show today's per-model usage and remaining quota."""
    cfg = _get_config()
    ledger = _get_ledger(cfg)

    table = Table(title="Daily Model Quota")
    table.add_column("Model", style="cyan")
    table.add_column("Used", justify="right")
    table.add_column("Limit", justify="right")
    table.add_column("Remaining", justify="right", style="green")
    table.add_column("Resets", style="dim")
    for q in ledger.snapshot():
        remaining = f"[red]{q.remaining}[/red]" if q.exhausted else str(q.remaining)
        table.add_row(
            q.model,
            str(q.used),
            str(q.daily_limit),
            remaining,
            q.reset_at.strftime("%Y-%m-%d %H:%M"),
        )
    rprint(table)

    best = ledger.recommended_model()
    if best:
        rprint(f"[dim]Recommended model:[/dim] {best}")
    else:
        rprint("[yellow]All models have used up today's quota.[/yellow]")


@config_app.command("show")
def config_show() -> None:
    """Show current resolved configuration."""
    cfg = _get_config()
    rprint(Syntax(yaml.dump(cfg.model_dump(), default_flow_style=False), "yaml"))


@config_app.command("init")
def config_init(
    force: bool = typer.Option(False, "--force", help="Overwrite existing config"),
) -> None:
    """Create default readmegen.yaml in current directory."""
    target = Path("readmegen.yaml")
    if target.exists() and not force:
        rprint("[yellow]readmegen.yaml already exists.[/yellow] Use --force to overwrite.")
        raise typer.Exit(1)
    target.write_text(DEFAULT_CONFIG_TEMPLATE)
    rprint(f"[green]Created[/green] {target}")


if __name__ == "__main__":
    app()
