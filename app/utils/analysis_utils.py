import asyncio
import base64
import binascii
import json
import logging
import re
import uuid

import cv2
import numpy as np
from anthropic import AsyncAnthropic
from fastapi.concurrency import run_in_threadpool

from app.core.config import settings
from app.core.prompts import SYSTEM_PROMPT, USER_INSTRUCTION
from app.models import JobStatus, ProfileAttribute

logger = logging.getLogger(__name__)

# In-memory job storage, shared by every request on the event loop
storage = {}

DEFAULT_PROFILE = ("Heritage", "Structure", "Formality", "Ornamentation", "Spirituality")

_DATA_URL_PREFIX = re.compile(r"^data:[\w/+.-]+;base64,")
_OPENING_FENCE = re.compile(r"^```(?:json)?\n?")
_CLOSING_FENCE = re.compile(r"\n?```$")

_client = None


class AnalysisError(Exception):
    """Raised when an image cannot be turned into an analysis document."""


def create_job():
    job_id = str(uuid.uuid4())
    storage[job_id] = {"status": JobStatus.PROCESSING.value}
    return job_id


def get_job(job_id: str):
    return storage.get(job_id)


def _finish_job(job_id: str, record: dict):
    current = storage.get(job_id)
    if current is None or current["status"] != JobStatus.PROCESSING.value:
        # Terminal states are final; an evicted job stays gone
        return False
    storage[job_id] = record
    return True


def complete_job(job_id: str, result: dict):
    return _finish_job(job_id, {"status": JobStatus.COMPLETED.value, "result": result})


def fail_job(job_id: str, message: str):
    return _finish_job(job_id, {"status": JobStatus.FAILED.value, "error": message})


def schedule_job_cleanup(job_id: str, delay: float = None):
    if delay is None:
        delay = settings.JOB_TTL_SECONDS
    loop = asyncio.get_running_loop()
    return loop.call_later(delay, storage.pop, job_id, None)


def decode_image_payload(image_b64: str):
    payload = _DATA_URL_PREFIX.sub("", image_b64.strip())
    try:
        return base64.b64decode(payload)
    except (binascii.Error, ValueError) as exc:
        raise AnalysisError(f"Invalid base64 image data: {exc}") from exc


def compress_image(raw: bytes, max_dimension: int = None, quality: int = None):
    """Shrink an encoded image to fit inside ``max_dimension`` and re-encode it as JPEG.

    Smaller images are never enlarged. Returns the JPEG bytes.
    """
    max_dimension = max_dimension or settings.IMAGE_MAX_DIMENSION
    quality = quality or settings.JPEG_QUALITY

    img = cv2.imdecode(np.frombuffer(raw, np.uint8), cv2.IMREAD_COLOR)
    if img is None:
        raise AnalysisError("Unable to decode image data")

    height, width, _ = img.shape
    scale = min(max_dimension / width, max_dimension / height, 1.0)
    if scale < 1.0:
        size = (max(1, round(width * scale)), max(1, round(height * scale)))
        img = cv2.resize(img, size, interpolation=cv2.INTER_AREA)

    ok, encoded = cv2.imencode(".jpg", img, [int(cv2.IMWRITE_JPEG_QUALITY), quality])
    if not ok:
        raise AnalysisError("Unable to encode image as JPEG")
    return encoded.tobytes()


def get_client():
    global _client
    if _client is None:
        _client = AsyncAnthropic(
            api_key=settings.ANTHROPIC_API_KEY,
            timeout=settings.ANTHROPIC_TIMEOUT,
        )
    return _client


async def request_analysis(jpeg: bytes):
    """Send the image to the model and return the text of its first text block."""
    response = await get_client().messages.create(
        model=settings.ANTHROPIC_MODEL,
        max_tokens=settings.ANTHROPIC_MAX_TOKENS,
        system=SYSTEM_PROMPT,
        messages=[
            {
                "role": "user",
                "content": [
                    {
                        "type": "image",
                        "source": {
                            "type": "base64",
                            "media_type": "image/jpeg",
                            "data": base64.b64encode(jpeg).decode("ascii"),
                        },
                    },
                    {"type": "text", "text": USER_INSTRUCTION},
                ],
            }
        ],
    )

    text_block = next((block for block in response.content if block.type == "text"), None)
    if text_block is None or not text_block.text:
        raise AnalysisError("No text content in response")
    return text_block.text


def parse_analysis(text: str):
    json_text = text.strip()
    if json_text.startswith("```"):
        json_text = _CLOSING_FENCE.sub("", _OPENING_FENCE.sub("", json_text))

    try:
        analysis = json.loads(json_text)
    except json.JSONDecodeError as exc:
        raise AnalysisError(f"Model returned invalid JSON: {exc}") from exc
    if not isinstance(analysis, dict):
        raise AnalysisError("Model returned JSON that is not an object")
    return analysis


def _section(analysis: dict, name: str):
    section = analysis.get(name)
    return section if isinstance(section, dict) else {}


def backfill_analysis(analysis: dict, job_id: str = None):
    """Guarantee ``cultural_shifts`` and ``pattern_profile`` are present.

    Missing shifts are assembled from the history and contemporary sections;
    a missing or empty profile falls back to five neutral attributes.
    """
    if not analysis.get("cultural_shifts"):
        logger.info("Job %s: Adding fallback cultural_shifts", job_id)
        history = _section(analysis, "history_and_origins")
        contemporary = _section(analysis, "contemporary_relevance")
        analysis["cultural_shifts"] = {
            "summary": contemporary.get("summary") or history.get("summary") or "",
            "revival_cycles": history.get("revival_moments") or [],
            "synthesis": contemporary.get("why_it_resonates_now") or "",
        }

    profile = analysis.get("pattern_profile")
    if not isinstance(profile, list) or not profile:
        logger.info("Job %s: Adding fallback pattern_profile", job_id)
        analysis["pattern_profile"] = [
            ProfileAttribute(name=name, score=3).model_dump() for name in DEFAULT_PROFILE
        ]
    return analysis


async def analyze_image(job_id: str, image_b64: str):
    try:
        raw = decode_image_payload(image_b64)
        jpeg = await run_in_threadpool(compress_image, raw)
        logger.info(
            "Job %s: Image %.0fKB -> %.0fKB", job_id, len(raw) / 1024, len(jpeg) / 1024
        )

        analysis = parse_analysis(await request_analysis(jpeg))
        profile = analysis.get("pattern_profile")
        logger.info(
            "Job %s: Complete - %s | Keys: %s",
            job_id,
            analysis.get("pattern_name"),
            ", ".join(analysis.keys()),
        )
        logger.info(
            "Job %s: cultural_shifts: %s, pattern_profile: %s",
            job_id,
            "YES" if analysis.get("cultural_shifts") else "MISSING",
            f"YES ({len(profile)} items)" if isinstance(profile, list) else "MISSING",
        )
        complete_job(job_id, backfill_analysis(analysis, job_id))
    except Exception as exc:
        logger.error("Job %s: Analysis failed: %s", job_id, exc)
        fail_job(job_id, str(exc) or exc.__class__.__name__)
    finally:
        schedule_job_cleanup(job_id)
