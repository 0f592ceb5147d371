import os


def _optional(name):
    value = os.getenv(name, "").strip()
    return value or None


class Settings:
    ANTHROPIC_API_KEY = _optional("ANTHROPIC_API_KEY")
    ANTHROPIC_MODEL = os.getenv("ANTHROPIC_MODEL", "claude-sonnet-4-5-20250929")
    ANTHROPIC_MAX_TOKENS = int(os.getenv("ANTHROPIC_MAX_TOKENS", "8192"))
    ANTHROPIC_TIMEOUT = float(os.getenv("ANTHROPIC_TIMEOUT", str(3 * 60)))

    # Images are shrunk to fit inside a square of this size before upload
    IMAGE_MAX_DIMENSION = int(os.getenv("IMAGE_MAX_DIMENSION", "800"))
    JPEG_QUALITY = int(os.getenv("JPEG_QUALITY", "50"))

    JOB_TTL_SECONDS = float(os.getenv("JOB_TTL_SECONDS", str(10 * 60)))

    EUROPEANA_API_KEY = _optional("EUROPEANA_API_KEY")
    EUROPEANA_SEARCH_URL = os.getenv(
        "EUROPEANA_SEARCH_URL", "https://api.europeana.eu/record/v2/search.json"
    )
    MET_MUSEUM_BASE_URL = os.getenv(
        "MET_MUSEUM_BASE_URL", "https://collectionapi.metmuseum.org/public/collection/v1"
    )
    ENRICHMENT_MAX_RESULTS = int(os.getenv("ENRICHMENT_MAX_RESULTS", "5"))
    ENRICHMENT_TIMEOUT = float(os.getenv("ENRICHMENT_TIMEOUT", "15"))

    HOST = os.getenv("HOST", "0.0.0.0")
    PORT = int(os.getenv("PORT", "3000"))
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

settings = Settings()
