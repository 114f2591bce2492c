"""
Command Line Interface for the Espresso API.
"""

from typing import Optional

import typer
import uvicorn
from rich.console import Console
from rich.table import Table
from rich.tree import Tree

from ..artifacts import build_artifact_oracle
from ..config import get_settings
from ..db.base import create_database_engine, init_database
from ..errors import ArtifactLookupError
from ..hierarchy.services import HierarchyService
from ..store import build_document_store

app = typer.Typer(help="Espresso API - companies, widgets and branches")
console = Console()


@app.command()
def serve(
    port: Optional[int] = typer.Option(None, help="Port to run the API server on"),
    host: Optional[str] = typer.Option(None, help="Host to bind the server to"),
    reload: bool = typer.Option(False, help="Reload on code changes"),
):
    """Start the API server."""
    settings = get_settings()
    uvicorn.run(
        "espresso_api.main:app",
        host=host or settings.api_host,
        port=port or settings.api_port,
        reload=reload or settings.debug,
    )


@app.command("init-db")
def init_db(
    database_url: Optional[str] = typer.Option(
        None, help="Database URL (defaults to DATABASE_URL)"
    ),
):
    """Create the SQL document table."""
    settings = get_settings()
    engine = create_database_engine(database_url or settings.database_url)
    init_database(engine)
    console.print(f"✅ Database initialized at {engine.url}")
    engine.dispose()


@app.command()
def artifacts():
    """List the deployment artifacts branches may point at."""
    oracle = build_artifact_oracle(get_settings())
    try:
        folders = oracle.list_folders()
    except ArtifactLookupError as e:
        console.print(f"❌ Could not list artifacts: {e}")
        raise typer.Exit(code=1)

    table = Table(title="Deployment Artifacts", show_header=True, header_style="bold magenta")
    table.add_column("Artifact", style="cyan")
    table.add_column("Created")
    table.add_column("Files", justify="right")
    table.add_column("URI")

    for artifact_id, folder in sorted(folders.items()):
        created = folder.created_at.isoformat() if folder.created_at else "-"
        table.add_row(artifact_id, created, str(len(folder.files)), oracle.uri_for(artifact_id))

    console.print(table)


@app.command()
def tree():
    """Print every company with its widgets and branches."""
    settings = get_settings()
    store = build_document_store(settings)
    try:
        service = HierarchyService(store, build_artifact_oracle(settings))
        companies = service.get_companies()
    finally:
        store.close()

    root = Tree("🏢 Companies")
    for company in companies:
        company_node = root.add(f"[bold]{company.company_name}[/bold] ({company.id})")
        for widget in company.widgets:
            widget_node = company_node.add(f"{widget.widget_name} ({widget.id})")
            for branch in widget.branches:
                widget_node.add(
                    f"{branch.branch_name} → [cyan]{branch.deployment_artifact_id}[/cyan]"
                )

    console.print(root)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
