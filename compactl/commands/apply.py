import asyncio
from pathlib import Path
from typing import Optional

import requests
import typer

from compactl.config import Config
from compactl.modules import (
    AmbariClusterState, CompactlError, ComponentActionsByConfigs, HttpSubmitter, StackCatalog,
    StaticClusterState, load_change_set,
)
from compactl.modules.models import ConfirmRule
from compactl.modules.requests_builder import RequestBuilder
from compactl.commands.plan import print_batches

app = typer.Typer()


@app.command("actions")
def apply_actions(
    changes: Path = typer.Option(..., help="Change set YAML with the configs being saved"),
    catalog: Path = typer.Option(..., help="Stack catalog YAML"),
    state: Optional[Path] = typer.Option(None, help="Cluster state snapshot YAML (default: read the live cluster)"),
    cluster: str = typer.Option(Config.CLUSTER_NAME, help="Cluster name"),
    api_url: str = typer.Option(Config.API_URL, help="Management API URL, e.g. http://ambari:8080/api/v1"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Accept confirmation prompts"),
):
    """Submit the component batches implied by a change set."""
    Config.API_URL = api_url
    Config.CLUSTER_NAME = cluster
    try:
        Config.validate()
    except ValueError as e:
        typer.secho(f"❌ {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    def prompt(rule: ConfirmRule) -> bool:
        if yes:
            return True
        return typer.confirm(f"{rule.body}\n{rule.button_label}?", default=False)

    def alert(title: str, message: str) -> None:
        typer.secho(f"⚠️  {title}\n{message}", fg=typer.colors.YELLOW, err=True)

    try:
        configs = load_change_set(changes)
        cluster_state = (
            StaticClusterState.load(state) if state
            else AmbariClusterState(api_url=api_url, cluster_name=cluster)
        )
        orchestrator = ComponentActionsByConfigs(
            StackCatalog.load(catalog),
            cluster_state,
            submitter=HttpSubmitter(api_url=api_url),
            builder=RequestBuilder(cluster_name=cluster),
        )
        result = asyncio.run(orchestrator.do_config_actions(configs, prompt=prompt, alert=alert))
    except CompactlError as e:
        typer.secho(f"❌ {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)
    except requests.RequestException as e:
        typer.secho(f"❌ Could not read cluster state: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    print_batches(result)
    failed = [submission for submission in result.submissions if not submission.ok]
    if failed:
        for submission in failed:
            typer.secho(f"❌ Batch rejected: {submission.message() or submission.error or submission.status_code}",
                        fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)
    print(f"✅ Submitted {len(result.submissions)} batch(es).")
