from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class JobStatus(str, Enum):
    PROCESSING = "processing"
    COMPLETED = "completed"
    FAILED = "failed"


class AnalyzeRequest(BaseModel):
    image: Optional[str] = None


class JobCreated(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    job_id: str = Field(alias="jobId")


class JobRecord(BaseModel):
    status: JobStatus
    result: Optional[dict] = None
    error: Optional[str] = None


class ProfileAttribute(BaseModel):
    name: str
    score: int = Field(ge=1, le=5)
