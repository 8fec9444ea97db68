from datetime import datetime
from typing import Any, Dict, List, Literal, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

RecommendationType = Literal["restock", "sales_opportunity", "optimization"]
RecommendationPriority = Literal["low", "medium", "high", "critical"]


class RecommendationDraft(BaseModel):
    type: RecommendationType
    title: str = Field(min_length=1)
    description: str = Field(min_length=1)
    priority: RecommendationPriority = "medium"
    actionable: bool = True
    metadata: Optional[Dict[str, Any]] = None


class RecommendationRead(BaseModel):
    id: int
    user_id: int
    type: str
    title: str
    description: str
    priority: str
    actionable: bool
    metadata: Optional[Dict[str, Any]] = Field(
        default=None,
        validation_alias=AliasChoices("details", "metadata"),
    )
    created_at: datetime
    is_read: bool

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)


class RecommendationBatch(BaseModel):
    recommendations: List[RecommendationRead]
