from typing import Any, Dict

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field

from compactl.config import Config
from compactl.modules import (
    CompactlError, ComponentActionsByConfigs, StackCatalog, StaticClusterState, parse_change_set,
)
from compactl.modules.requests_builder import RequestBuilder

router = APIRouter()

class PlanRequest(BaseModel):
    changes: Dict[str, Any]
    catalog: Dict[str, Any]
    state: Dict[str, Any] = Field(default_factory=dict)
    cluster: str = Config.CLUSTER_NAME or "cluster"

@router.post("/config-actions/plan")
def plan_config_actions(req: PlanRequest):
    try:
        orchestrator = ComponentActionsByConfigs(
            StackCatalog.from_dict(req.catalog),
            StaticClusterState.from_dict(req.state),
            builder=RequestBuilder(cluster_name=req.cluster),
        )
        result = orchestrator.plan(parse_change_set(req.changes))
    except CompactlError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return result.to_dict()
