#!/usr/bin/env python3
"""BuildNow CLI - serve the API or run generation from the terminal.

Usage:
    # Start the HTTP API
    python main.py serve --port 5050

    # Generate project ideas directly
    python main.py generate --concept Recursion --level Beginner --domain Coding

    # Cost tooling
    python main.py estimate-cost --concept Recursion --level Beginner --domain Coding --prerequisites
    python main.py cost-comparison
"""

import json
import logging
from typing import Optional

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

from config import settings
from contracts import (
    CostEstimateRequest,
    Domain,
    GenerationRequest,
    ProjectStatus,
    SearchQuery,
    SkillLevel,
    UserIdentity,
)
from errors import CollaboratorError
from orchestrator import GenerationService, build_cost_comparison, estimate_request_cost
from providers import list_providers as get_available_providers
from tracking import (
    JsonFileProjectStore,
    ProjectTracker,
    StaticIdentityProvider,
    next_step,
    percent_complete,
)


console = Console()

SKILL_LEVELS = [level.value for level in SkillLevel]
DOMAINS = [domain.value for domain in Domain]


def local_tracker() -> ProjectTracker:
    """Tracker over the JSON store, acting as the configured local user."""
    identity = StaticIdentityProvider(UserIdentity(uid=settings.local_user_id))
    return ProjectTracker(identity, JsonFileProjectStore(settings.store_path))


def _run_tracker(action):
    try:
        return action(local_tracker())
    except CollaboratorError as e:
        raise click.ClickException(str(e)) from e


def configure_logging(verbose: bool = False) -> None:
    """Route all log records through rich."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True)],
        force=True,
    )


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Verbose output")
def cli(verbose: bool):
    """BuildNow: turn what you just learned into projects you can build."""
    configure_logging(verbose)


@cli.command()
@click.option("--host", default=None, help=f"Bind address (default: {settings.host})")
@click.option("--port", type=int, default=None, help=f"Port (default: {settings.port})")
@click.option("--reload", is_flag=True, help="Reload on code changes")
def serve(host: Optional[str], port: Optional[int], reload: bool):
    """Run the HTTP API with uvicorn."""
    import uvicorn

    host = host or settings.host
    port = port or settings.port
    console.print(Panel.fit(f"[bold]BuildNow API[/bold]\nhttp://{host}:{port}/", border_style="blue"))
    if not (settings.openai_api_key or get_available_providers().get("openai")):
        console.print("[yellow]OpenAI API key not found. Generation will serve fallback data; "
                      "use /api/generate-projects/mock for testing.[/yellow]")
    uvicorn.run("api.app:create_app", factory=True, host=host, port=port, reload=reload, log_config=None)


@cli.command()
@click.option("--concept", "-c", required=True, help="Concept you just learned")
@click.option("--level", "-l", "skill_level", type=click.Choice(SKILL_LEVELS), default="Beginner")
@click.option("--domain", "-d", type=click.Choice(DOMAINS), default="Coding")
@click.option("--num-ideas", "-n", type=int, default=None, help="Number of ideas")
@click.option("--json", "as_json", is_flag=True, help="Print raw JSON instead of a table")
@click.option("--save", is_flag=True, help="Bookmark every generated idea in the local store")
def generate(
    concept: str,
    skill_level: str,
    domain: str,
    num_ideas: Optional[int],
    as_json: bool,
    save: bool,
):
    """Generate project ideas for a concept."""
    num_ideas = num_ideas or settings.default_num_ideas
    if not 1 <= num_ideas <= settings.max_ideas_per_request:
        raise click.BadParameter(
            f"must be between 1 and {settings.max_ideas_per_request}", param_hint="--num-ideas"
        )

    service = GenerationService()
    request = GenerationRequest(concept=concept, skill_level=skill_level, domain=domain, num_ideas=num_ideas)
    with console.status(f"Generating {num_ideas} {concept} projects..."):
        result = service.generate_projects(request)

    if save:
        query = SearchQuery(concept=concept, skill_level=skill_level, domain=domain)
        _run_tracker(lambda tracker: [tracker.save_project(p, query) for p in result.payload])

    if as_json:
        click.echo(json.dumps([p.to_wire() for p in result.payload], indent=2))
        return

    if result.is_fallback:
        console.print(f"[yellow]Fallback data[/yellow] [dim]({result.cause})[/dim]")
    for i, project in enumerate(result.payload, 1):
        body = [project.description, ""]
        body.extend(f"  {n}. {step}" for n, step in enumerate(project.steps, 1))
        if project.motivational_tip:
            body.extend(["", f"[italic]{project.motivational_tip}[/italic]"])
        console.print(Panel(
            "\n".join(body),
            title=f"{i}. {project.title}",
            subtitle=f"{project.time_estimate} | difficulty {project.difficulty} | {', '.join(project.tools)}",
        ))
    console.print(
        f"[dim]{result.provider} - {result.usage.total_tokens} tokens, "
        f"~${result.usage.total_cost} (estimate)[/dim]"
    )


@cli.command("estimate-cost")
@click.option("--concept", "-c", required=True)
@click.option("--level", "-l", "skill_level", type=click.Choice(SKILL_LEVELS), default="Beginner")
@click.option("--domain", "-d", type=click.Choice(DOMAINS), default="Coding")
@click.option("--prerequisites", is_flag=True, help="Include one prerequisite call")
@click.option("--step-help", is_flag=True, help="Include one step-help question")
def estimate_cost(concept: str, skill_level: str, domain: str, prerequisites: bool, step_help: bool):
    """Print an advisory cost estimate."""
    if not concept:
        raise click.BadParameter("must not be empty", param_hint="--concept")
    request = CostEstimateRequest(
        concept=concept,
        skill_level=skill_level,
        domain=domain,
        include_prerequisites=prerequisites,
        include_step_help=step_help,
    )
    estimate = estimate_request_cost(request)

    table = Table(title="Estimated cost (USD)")
    table.add_column("Service")
    table.add_column("Tokens", justify="right")
    table.add_column("Cost", justify="right")
    for item in estimate.breakdown:
        table.add_row(item.service, str(item.total_tokens), item.total_cost)
    table.add_row("[bold]Total[/bold]", "", f"[bold]{estimate.estimated_cost}[/bold]")
    console.print(table)
    console.print(f"[dim]{estimate.note}[/dim]")


@cli.command("cost-comparison")
def cost_comparison():
    """Show the before/after prompt optimisation comparison."""
    comparison = build_cost_comparison().comparison
    before, after, savings = comparison["before"], comparison["after"], comparison["savings"]

    table = Table(title="Cost comparison (5 requests)")
    table.add_column("")
    table.add_column("Before", justify="right")
    table.add_column("After", justify="right")
    table.add_row("Model", before["model"], after["model"])
    table.add_row("Total tokens", str(before["totalTokens"]), str(after["totalTokens"]))
    table.add_row("Total cost", before["totalCost"], after["totalCost"])
    console.print(table)
    console.print(
        f"Saved {savings['tokensSaved']} tokens ({savings['tokenReductionPercent']}), "
        f"${savings['costSaved']} ({savings['costReductionPercent']})"
    )


@cli.command()
def providers():
    """List LLM providers and whether they are configured."""
    console.print("[bold]Available LLM Providers:[/bold]\n")
    for name, available in get_available_providers().items():
        status = "[green]available[/green]" if available else "[red]not configured[/red]"
        console.print(f"  {name:12} {status}")
    console.print("\n[dim]Set OPENAI_API_KEY (or BUILDNOW_OPENAI_API_KEY) to enable live generation.[/dim]")


@cli.group()
def projects():
    """Saved and active projects in the local store."""


@projects.command("list")
@click.option("--status", type=click.Choice([s.value for s in ProjectStatus]), default=None)
def list_projects(status: Optional[str]):
    """List saved bookmarks and active projects."""
    def show(tracker: ProjectTracker):
        saved = Table(title="Saved projects")
        saved.add_column("ID")
        saved.add_column("Title")
        saved.add_column("Concept")
        saved.add_column("Favorite")
        for project in tracker.list_saved():
            saved.add_row(project.id, project.title, project.search_query.concept,
                          "yes" if project.is_favorite else "")
        console.print(saved)

        active = Table(title="Active projects")
        active.add_column("ID")
        active.add_column("Title")
        active.add_column("Status")
        active.add_column("Progress", justify="right")
        for project in tracker.list_active(ProjectStatus(status) if status else None):
            done = len(project.progress.completed_steps)
            active.add_row(
                project.id,
                project.title,
                project.status.value,
                f"{done}/{len(project.steps)} ({percent_complete(project.progress.completed_steps, len(project.steps))}%)",
            )
        console.print(active)

    _run_tracker(show)


@projects.command("start")
@click.argument("saved_id")
def start_project(saved_id: str):
    """Start working on a saved project."""
    project_id = _run_tracker(lambda tracker: tracker.move_to_active(saved_id))
    console.print(f"Started active project [bold]{project_id}[/bold]")


@projects.command("progress")
@click.argument("project_id")
@click.option("--done", "-d", "done_steps", type=int, multiple=True, help="Completed step index (repeatable)")
@click.option("--notes", default=None, help="Replace the project's notes")
def update_progress(project_id: str, done_steps: tuple, notes: Optional[str]):
    """Set the completed steps of an active project."""
    completed = sorted(set(done_steps))
    current = next_step(completed)
    project = _run_tracker(
        lambda tracker: tracker.update_progress(project_id, completed, current, user_notes=notes)
    )
    console.print(
        f"{project.title}: {len(project.progress.completed_steps)}/{len(project.steps)} steps, "
        f"status [bold]{project.status.value}[/bold]"
    )


@projects.command("pause")
@click.argument("project_id")
def pause_project(project_id: str):
    _run_tracker(lambda tracker: tracker.pause_project(project_id))
    console.print(f"Paused {project_id}")


@projects.command("resume")
@click.argument("project_id")
def resume_project(project_id: str):
    status = _run_tracker(lambda tracker: tracker.resume_project(project_id))
    console.print(f"Resumed {project_id} as [bold]{status.value}[/bold]")


@projects.command("favorite")
@click.argument("saved_id")
@click.option("--off", is_flag=True, help="Remove the favorite flag")
def favorite_project(saved_id: str, off: bool):
    _run_tracker(lambda tracker: tracker.toggle_favorite(saved_id, not off))
    console.print(f"{'Unfavorited' if off else 'Favorited'} {saved_id}")


@projects.command("delete")
@click.argument("project_id")
@click.option("--saved", "collection", flag_value="saved", default=True, help="Delete a saved bookmark")
@click.option("--active", "collection", flag_value="active", help="Delete an active project")
def delete_project(project_id: str, collection: str):
    if collection == "active":
        _run_tracker(lambda tracker: tracker.delete_active(project_id))
    else:
        _run_tracker(lambda tracker: tracker.delete_saved(project_id))
    console.print(f"Deleted {collection} project {project_id}")


@projects.command("stats")
def project_stats():
    stats = _run_tracker(lambda tracker: tracker.get_stats())
    console.print(
        f"Saved: {stats.total_saved}  Active: {stats.total_active}  "
        f"Completed: {stats.completed}  In progress: {stats.in_progress}  "
        f"Paused: {stats.paused}  Completion rate: {stats.completion_rate}%"
    )


if __name__ == "__main__":
    cli()
