import logging

import typer
import uvicorn
from typing_extensions import Annotated
from rich.console import Console
from rich.table import Table

from feedback_hub.client.feedback_hub import FeedbackHub
from feedback_hub.errors import FeedbackHubError
from feedback_hub.services.analysis import LocalClassifier

# --- Basic Logging Configuration ---
logging.basicConfig(level=logging.INFO, format="%(levelname)s:%(name)s:%(message)s")
# --- End Logging Configuration ---

app = typer.Typer()
console = Console()


def load_hub(config: str) -> FeedbackHub:
    """Build the hub or exit with a readable error."""
    try:
        with console.status("[bold green]Initializing Feedback Hub...", spinner="dots"):
            return FeedbackHub.from_config(config_path=config)
    except FileNotFoundError:
        console.print(
            f"[bold red]Error:[/bold red] Configuration file not found at '{config}'"
        )
        raise typer.Exit(code=1)
    except ValueError as e:
        console.print(f"[bold red]Error loading configuration:[/bold red] {e}")
        raise typer.Exit(code=1)


@app.command()
def serve(
    config: Annotated[
        str, typer.Option(help="Path to the configuration JSON file.")
    ] = "config.json",
    host: Annotated[str, typer.Option(help="Interface to bind.")] = "0.0.0.0",
    port: Annotated[int, typer.Option(help="Port to listen on.")] = 5000,
):
    """
    Run the HTTP API and dashboard WebSocket server.
    """
    from feedback_hub.api import create_app

    hub = load_hub(config)
    ai_state = "enabled" if hub.insights_service.status().ai_enabled else "disabled"
    console.print(f"[green]Serving on {host}:{port} (AI analysis {ai_state})[/green]")
    uvicorn.run(create_app(hub), host=host, port=port)


@app.command("create-user")
def create_user(
    name: Annotated[str, typer.Option(help="Display name.")],
    email: Annotated[str, typer.Option(help="Email address.")],
    role: Annotated[str, typer.Option(help="user or admin.")] = "user",
    config: Annotated[
        str, typer.Option(help="Path to the configuration JSON file.")
    ] = "config.json",
):
    """
    Register a user and print its bearer token.
    The token is shown only once.
    """
    hub = load_hub(config)
    try:
        user, token = hub.user_service.create_user(name=name, email=email, role=role)
    except FeedbackHubError as e:
        console.print(f"[bold red]Error:[/bold red] {e.message}")
        raise typer.Exit(code=1)

    console.print(f"[green]Created {user.role} {user.name} <{user.email}>[/green]")
    console.print(f"ID: {user.id}")
    console.print(f"Token: [bold]{token}[/bold]")


@app.command()
def classify(
    message: Annotated[str, typer.Argument(help="Feedback message to analyze.")],
):
    """
    Analyze a message with the local keyword classifier.
    """
    result = LocalClassifier().classify(message)

    table = Table(show_header=False)
    table.add_row("Summary", result.summary)
    table.add_row("Sentiment", result.sentiment)
    table.add_row("Keywords", ", ".join(result.keywords) or "-")
    table.add_row("Suggested actions", "\n".join(result.suggested_actions))
    table.add_row("Confidence", f"{result.confidence_score:.2f}")
    console.print(table)


if __name__ == "__main__":
    app()
