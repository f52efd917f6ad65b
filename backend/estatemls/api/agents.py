# backend/estatemls/api/agents.py
from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from estatemls.api.deps import get_identity
from estatemls.db.db_connection import get_db
from estatemls.schemas.agent import AgentDetail, AgentDirectory
from estatemls.services import agents
from estatemls.services.identity import Identity

router = APIRouter(prefix="/api/agents", tags=["agents"])


@router.get("", response_model=AgentDirectory)
def list_agents(db: Session = Depends(get_db)):
    """Public agent directory with listing counts and totals."""
    rows, stats = agents.list_agents(db)
    return {"agents": rows, "stats": stats}


@router.get("/{agent_id}", response_model=AgentDetail)
def get_agent(
    agent_id: int,
    identity: Identity = Depends(get_identity),
    db: Session = Depends(get_db),
):
    return agents.get_agent(db, agent_id)
