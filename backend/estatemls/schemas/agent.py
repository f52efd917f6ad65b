# backend/estatemls/schemas/agent.py
from __future__ import annotations

from typing import List, Optional

from estatemls.schemas.common import ApiModel
from estatemls.schemas.property import PropertyCard


class AgentCard(ApiModel):
    id: int
    name: str
    email: str
    phone: Optional[str] = None
    agency: Optional[str] = None
    bio: Optional[str] = None
    location: Optional[str] = None
    specialization: Optional[str] = None
    rating: Optional[float] = None
    performance: str
    property_count: int
    sold_property_count: int


class AgentStats(ApiModel):
    total_agents: int
    average_rating: float
    total_properties: int
    total_sold_properties: int


class AgentDirectory(ApiModel):
    agents: List[AgentCard]
    stats: AgentStats


class AgentDetail(AgentCard):
    license_number: Optional[str] = None
    experience_years: Optional[int] = None
    listings: List[PropertyCard] = []
