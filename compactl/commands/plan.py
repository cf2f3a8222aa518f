import json
from pathlib import Path

import typer

from compactl.config import Config
from compactl.modules import (
    CompactlError, ComponentActionsByConfigs, ConfigActionsResult, StackCatalog, StaticClusterState,
    load_change_set,
)
from compactl.modules.requests_builder import RequestBuilder

app = typer.Typer()


def print_batches(result: ConfigActionsResult) -> None:
    if not result.batches:
        print("✅ No components to add or delete.")
    for batch in result.batches:
        target = f" on {batch.host_name}" if batch.host_name else ""
        print(f"📦 {batch.kind.value} batch{target}")
        for op in batch.operations:
            context = (op.body or {}).get("RequestInfo", {}).get("context", "")
            print(f"   {op.order_id}. {op.method:<6} {op.uri}" + (f"  ({context})" if context else ""))


@app.command("actions")
def plan_actions(
    changes: Path = typer.Option(..., help="Change set YAML with the configs being saved"),
    catalog: Path = typer.Option(..., help="Stack catalog YAML"),
    state: Path = typer.Option(..., help="Cluster state snapshot YAML"),
    cluster: str = typer.Option(Config.CLUSTER_NAME or "cluster", help="Cluster name used in request URIs"),
    as_json: bool = typer.Option(False, "--json", help="Print the plan as JSON"),
):
    """Show the batches that saving a change set would submit, without sending them."""
    try:
        configs = load_change_set(changes)
        orchestrator = ComponentActionsByConfigs(
            StackCatalog.load(catalog),
            StaticClusterState.load(state),
            builder=RequestBuilder(cluster_name=cluster),
        )
        result = orchestrator.plan(configs)
    except CompactlError as e:
        typer.secho(f"❌ {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    if as_json:
        print(json.dumps(result.to_dict(), indent=2))
        return

    print_batches(result)
    if result.refresh_state.refresh_already_queued:
        print("🔄 Scheduler queues will be refreshed inline.")
    for rule in result.pending_confirmations:
        print(f"❓ Would ask to confirm: {rule.button_label or rule.command} ({rule.file_name} changed)")
