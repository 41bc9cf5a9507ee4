from __future__ import annotations
import json
from pathlib import Path
from typing import Any, Dict, Optional
import yaml
from .ir import PlanSpec, Workflow

def load_plan(path: Path) -> PlanSpec:
    """Read a plan from YAML or JSON (JSON is valid YAML, so one loader covers both)."""
    data = yaml.safe_load(Path(path).read_text()) or {}
    return PlanSpec.model_validate(data)

def load_workflow(path: Path) -> Workflow:
    data = json.loads(Path(path).read_text())
    return Workflow.model_validate(data)

def plan_skeleton(goal: str, name: str = "workflow", trigger: str = "manual",
                  cron: Optional[str] = None) -> Dict[str, Any]:
    """A plan document with one example step, ready to be edited."""
    plan: Dict[str, Any] = {"name": name, "goal": goal, "trigger": trigger}
    if cron:
        plan["cron"] = cron
    plan["steps"] = [
        {"id": "fetch", "type": "HTTP Request", "parameters": {"url": "https://example.com"}},
    ]
    return plan

def save_plan_yaml(plan: Dict[str, Any], path: Path):
    path.write_text(yaml.safe_dump(plan, sort_keys=False))

def save_workflow_json(workflow: Workflow, path: Path):
    path.write_text(json.dumps(workflow.to_wire(), indent=2) + "\n")
