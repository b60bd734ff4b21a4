"""LLM factory for multi-provider support."""

from langchain_core.language_models import BaseChatModel

from meal_tracker_api.core.config import LLMProvider, Settings, get_settings

GENKIT_PREFIX = "googleai/"


def normalize_model_name(model: str) -> str:
    """Strip a ``googleai/`` or ``models/`` prefix from a model identifier."""
    for prefix in (GENKIT_PREFIX, "models/"):
        if model.startswith(prefix):
            return model[len(prefix):]
    return model


def get_llm(
    settings: Settings | None = None,
    model: str | None = None,
    temperature: float | None = None,
) -> BaseChatModel:
    """
    Get configured LLM instance based on settings.

    Supports Google Gemini and OpenAI providers.

    Args:
        settings: Application settings (uses default if not provided)
        model: Model identifier overriding the configured default,
            e.g. a user's chosen model
        temperature: Sampling temperature override

    Returns:
        Configured chat model instance

    Raises:
        ValueError: If provider is not configured or unsupported
    """
    if settings is None:
        settings = get_settings()

    match settings.llm_provider:
        case LLMProvider.GEMINI:
            return _get_gemini(settings, model, temperature)
        case LLMProvider.OPENAI:
            return _get_openai(settings, model, temperature)
        case _:
            raise ValueError(f"Unsupported LLM provider: {settings.llm_provider}")


def _get_gemini(settings: Settings, model: str | None, temperature: float | None) -> BaseChatModel:
    """Get Google Gemini chat model."""
    from langchain_google_genai import ChatGoogleGenerativeAI

    if not settings.google_api_key:
        raise ValueError(
            "Google API key not configured. "
            "Set GOOGLE_API_KEY in your .env file."
        )

    return ChatGoogleGenerativeAI(
        model=normalize_model_name(model or settings.gemini_model),
        google_api_key=settings.google_api_key,
        temperature=settings.llm_temperature if temperature is None else temperature,
    )


def _get_openai(settings: Settings, model: str | None, temperature: float | None) -> BaseChatModel:
    """Get OpenAI chat model."""
    from langchain_openai import ChatOpenAI

    if not settings.openai_api_key:
        raise ValueError(
            "OpenAI API key not configured. "
            "Set OPENAI_API_KEY in your .env file."
        )

    return ChatOpenAI(
        model=model or settings.openai_model,
        api_key=settings.openai_api_key,
        temperature=settings.llm_temperature if temperature is None else temperature,
    )


def get_llm_info(settings: Settings | None = None) -> dict:
    """
    Get information about the configured LLM.

    Args:
        settings: Application settings

    Returns:
        Dict with provider info
    """
    if settings is None:
        settings = get_settings()

    return {
        "provider": settings.llm_provider.value,
        "model": settings.default_model,
        "configured": settings.is_llm_configured,
        "temperature": settings.llm_temperature,
        "timeout_seconds": settings.llm_timeout_seconds,
    }
