import logging
from typing import Any

from fastapi import APIRouter, BackgroundTasks, Body, HTTPException
from pydantic import ValidationError

from app.models import AnalyzeRequest, JobCreated, JobRecord
from app.utils.analysis_utils import analyze_image, create_job, get_job

logger = logging.getLogger(__name__)

router = APIRouter()


def _image_from_body(body: Any):
    # Absent, non-object and mistyped bodies all count as a missing image
    if not isinstance(body, dict):
        return None
    try:
        return AnalyzeRequest.model_validate(body).image
    except ValidationError:
        return None


@router.post("/analyze", response_model=JobCreated)
async def submit_analysis(background_tasks: BackgroundTasks, body: Any = Body(None)):
    image = _image_from_body(body)
    if not image:
        raise HTTPException(status_code=400, detail="Missing image data")

    job_id = create_job()
    logger.info("Job %s: Received image (%.0fKB base64)", job_id, len(image) / 1024)
    background_tasks.add_task(analyze_image, job_id, image)  # Runs after the response
    return JobCreated(job_id=job_id)


@router.get("/analyze/{job_id}", response_model=JobRecord, response_model_exclude_none=True)
async def get_analysis(job_id: str):
    job = get_job(job_id)
    if not job:
        raise HTTPException(status_code=404, detail="Job not found")
    return job
