import json
from pathlib import Path
import typer
from rich import print as rprint
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from typing import Any, Optional

from . import tools
from .config import log_level_from_env
from .errors import Plan2N8nError
from .generator import load_plan, load_workflow, plan_skeleton, save_plan_yaml, save_workflow_json
from .logger import init_logger
from .renderer import render
from .validator import check_plan, validate_workflow
from .visualize import ascii_plan

app = typer.Typer(no_args_is_help=True, help="plan2n8n CLI: high-level plans → n8n workflows")


@app.callback()
def main(log_level: Optional[str] = typer.Option(None, help="Override PLAN2N8N_LOG_LEVEL.")):
    init_logger(log_level or log_level_from_env())


def _emit(data: Any):
    print(json.dumps(data, indent=2, ensure_ascii=False))


def _call(name: str, args: Optional[dict] = None) -> Any:
    try:
        return tools.call_tool(name, args)
    except Plan2N8nError as exc:
        rprint(f"[bold red]{escape(str(exc))}[/]")
        raise typer.Exit(code=1)


@app.command()
def nodes():
    """List the node display names the catalog knows."""
    table = Table(title="Node Catalog")
    table.add_column("Name", style="bold")
    table.add_column("n8n type", style="cyan")
    for spec in tools.list_node_specs():
        table.add_row(spec["name"], spec["type"])
    rprint(table)


@app.command()
def plan(goal: str = typer.Option(..., help="What the workflow should automate."),
         name: str = typer.Option("workflow", help="Workflow name and output filename (without .yaml)."),
         trigger: str = typer.Option("manual", help="manual | cron | webhook"),
         cron: Optional[str] = typer.Option(None, help="CRON expression when trigger=cron."),
         outdir: Path = typer.Option(Path("plans"), help="Where to place the YAML")):
    """Write a plan skeleton to edit before rendering."""
    skeleton = plan_skeleton(goal, name=name, trigger=trigger, cron=cron)
    tools.plan_workflow(skeleton)  # validates trigger and shape
    outdir.mkdir(exist_ok=True, parents=True)
    outfile = outdir / f"{name}.yaml"
    save_plan_yaml(skeleton, outfile)
    rprint(Panel.fit(f"Saved plan [bold]{name}[/] to [cyan]{outfile}[/]"))


@app.command("render")
def render_cmd(file: Path,
               out: Optional[Path] = typer.Option(None, help="Write the JSON here instead of stdout.")):
    """Render a plan file (YAML or JSON) into n8n JSON."""
    workflow = render(load_plan(file))
    if out is None:
        _emit(workflow.to_wire())
    else:
        save_workflow_json(workflow, out)
        rprint(Panel.fit(f"Rendered [bold]{file}[/] to [cyan]{out}[/]"))


@app.command()
def explain(file: Path):
    """Print an ASCII plan of the rendered graph."""
    print(ascii_plan(render(load_plan(file))))


@app.command()
def validate(file: Path):
    """Check a plan for dangling dependencies and its rendered graph for structure."""
    if file.suffix == ".json" and "nodes" in json.loads(file.read_text()):
        ok, messages = validate_workflow(load_workflow(file))
    else:
        plan_spec = load_plan(file)
        plan_ok, plan_messages = check_plan(plan_spec)
        graph_ok, graph_messages = validate_workflow(render(plan_spec))
        ok, messages = plan_ok and graph_ok, plan_messages + graph_messages
    table = Table(title="Validation Report", show_lines=True)
    table.add_column("Status", justify="center", style="bold")
    table.add_column("Message")
    for m in messages:
        status, _, text = m.partition(": ")
        table.add_row(status, text)
    rprint(table)
    if not ok:
        raise typer.Exit(code=1)


@app.command()
def create(file: Path,
           name: str = typer.Option(..., help="Workflow name in n8n."),
           activate: bool = typer.Option(False, help="Activate right after creating.")):
    """Create a workflow from an n8n JSON file."""
    _emit(_call("create_workflow", {"name": name, "workflow": file.read_text(), "activate": activate}))


@app.command()
def compose(file: Path):
    """Render a plan file, create it in n8n and activate it."""
    _emit(_call("compose_workflow", load_plan(file).model_dump(by_alias=True)))


@app.command()
def activate(workflow_id: str):
    """Activate a workflow by id."""
    _emit(_call("activate_workflow", {"id": workflow_id}))


@app.command()
def deactivate(workflow_id: str):
    """Deactivate a workflow by id."""
    _emit(_call("deactivate_workflow", {"id": workflow_id}))


@app.command()
def get(workflow_id: str):
    """Fetch a workflow by id."""
    _emit(_call("get_workflow", {"id": workflow_id}))


@app.command("list")
def list_cmd(limit: int = typer.Option(20, help="Page size (1-100)."),
             offset: int = typer.Option(0, help="Items to skip.")):
    """List workflows."""
    _emit(_call("list_workflows", {"limit": limit, "offset": offset}))


@app.command()
def delete(workflow_id: str):
    """Delete a workflow by id."""
    _emit(_call("delete_workflow", {"id": workflow_id}))


@app.command()
def serve(host: str = typer.Option("127.0.0.1"), port: int = typer.Option(8000)):
    """Serve the tools over HTTP."""
    import uvicorn
    uvicorn.run("plan2n8n.server:app", host=host, port=port)


if __name__ == "__main__":
    app()
