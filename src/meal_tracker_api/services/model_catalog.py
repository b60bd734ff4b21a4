"""HTTP client listing the Gemini models a user can pick."""

import logging
from functools import lru_cache

import httpx
from pydantic import BaseModel, Field

from meal_tracker_api.agents.llm import GENKIT_PREFIX
from meal_tracker_api.core.config import get_settings

logger = logging.getLogger(__name__)

GENERATE_CONTENT = "generateContent"


class ModelInfo(BaseModel):
    """A selectable model."""

    name: str
    display_name: str = Field(..., serialization_alias="displayName")
    description: str = ""
    supported_generation_methods: list[str] = Field(
        default_factory=list, serialization_alias="supportedGenerationMethods"
    )


FALLBACK_MODELS: tuple[ModelInfo, ...] = (
    ModelInfo(
        name="gemini-2.5-flash",
        display_name="Gemini 2.5 Flash (Recommended)",
        description="Stable version of Gemini 2.5 Flash, our mid-size multimodal model",
        supported_generation_methods=[GENERATE_CONTENT],
    ),
    ModelInfo(
        name="gemini-2.5-flash-lite",
        display_name="Gemini 2.5 Flash-Lite",
        description="Lighter, faster version for high-volume tasks",
        supported_generation_methods=[GENERATE_CONTENT],
    ),
    ModelInfo(
        name="gemini-2.5-pro",
        display_name="Gemini 2.5 Pro",
        description="Most capable model for complex reasoning tasks",
        supported_generation_methods=[GENERATE_CONTENT],
    ),
    ModelInfo(
        name="gemini-2.0-flash",
        display_name="Gemini 2.0 Flash",
        description="Fast and versatile multimodal model",
        supported_generation_methods=[GENERATE_CONTENT],
    ),
    ModelInfo(
        name="gemini-flash-latest",
        display_name="Gemini Flash (Auto-Latest)",
        description="Automatically uses the latest Flash model version",
        supported_generation_methods=[GENERATE_CONTENT],
    ),
)

# Best balance first, then accuracy, then speed
RECOMMENDED_MODELS: tuple[str, ...] = ("gemini-2.5-flash", "gemini-2.5-pro", "gemini-2.0-flash")


def fallback_models() -> list[ModelInfo]:
    """Static list used when the models API is unavailable."""
    return [model.model_copy() for model in FALLBACK_MODELS]


def recommended_models() -> list[str]:
    """Models recommended for food analysis."""
    return list(RECOMMENDED_MODELS)


def format_model_for_genkit(name: str) -> str:
    """Add the ``googleai/`` prefix if missing."""
    return name if name.startswith(GENKIT_PREFIX) else f"{GENKIT_PREFIX}{name}"


def extract_model_name(name: str) -> str:
    """Remove the ``googleai/`` prefix."""
    return name.replace(GENKIT_PREFIX, "", 1)


class ModelCatalog:
    """Client for the Gemini models listing endpoint."""

    def __init__(self, api_url: str, api_key: str, timeout: float = 10.0) -> None:
        """
        Initialize the catalog.

        Args:
            api_url: Models endpoint URL
            api_key: Google API key (empty string disables the remote call)
            timeout: Request timeout in seconds
        """
        self.api_url = api_url
        self.api_key = api_key
        self.timeout = timeout
        self._client: httpx.AsyncClient | None = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(timeout=httpx.Timeout(self.timeout))
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def list_models(self) -> list[ModelInfo]:
        """
        List models that support content generation.

        Returns:
            Models from the API, or the fallback list when the key is
            missing, the request fails or nothing usable comes back
        """
        if not self.api_key:
            logger.warning("Google API key not configured; using fallback model list")
            return fallback_models()

        try:
            client = await self._get_client()
            response = await client.get(self.api_url, params={"key": self.api_key})
            response.raise_for_status()
            data = response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"Failed to fetch models: {e}")
            return fallback_models()

        models = []
        for raw in data.get("models") or []:
            methods = raw.get("supportedGenerationMethods") or []
            if GENERATE_CONTENT not in methods:
                continue
            name = raw.get("name", "").replace("models/", "")
            models.append(
                ModelInfo(
                    name=name,
                    display_name=raw.get("displayName") or name,
                    description=raw.get("description") or "",
                    supported_generation_methods=methods,
                )
            )

        logger.info(f"Fetched {len(models)} generateContent models")
        return models or fallback_models()


@lru_cache
def get_model_catalog() -> ModelCatalog:
    """
    Get a cached model catalog instance.

    Returns:
        ModelCatalog configured from settings
    """
    settings = get_settings()
    return ModelCatalog(api_url=settings.models_api_url, api_key=settings.google_api_key)
