from datetime import datetime
from typing import Any, Dict, List
from uuid import UUID
from pydantic import BaseModel, ConfigDict, Field

from src.quality.models import IssueSeverity, IssueType


class QualityIssueData(BaseModel):
    type: IssueType
    severity: IssueSeverity
    message: str
    metadata: Dict[str, Any] = Field(default_factory=dict, description="At least a 'location' pointer")


class QualityIssueResponse(BaseModel):
    id: UUID
    type: IssueType
    severity: IssueSeverity
    message: str
    metadata: Dict[str, Any] = Field(validation_alias="issue_metadata")
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class QualityCheckResponse(BaseModel):
    issues: List[QualityIssueData]
