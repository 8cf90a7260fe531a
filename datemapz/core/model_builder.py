from langchain_core.language_models.chat_models import BaseChatModel

from datemapz.core.config import ApiSettings
from datemapz.core.errors import ConfigurationError

DEFAULT_MODELS = {
    "google": "gemini-1.5-flash",
    "openai": "gpt-4o-mini",
}


def build_chat_model(settings: ApiSettings) -> BaseChatModel:
    """Instantiate the chat model for the configured provider."""

    provider = settings.llm_provider
    if provider not in DEFAULT_MODELS:
        raise ConfigurationError(f"Unsupported LLM provider '{provider}'")

    model = settings.llm_model or DEFAULT_MODELS[provider]

    if provider == "openai":
        from langchain_openai import ChatOpenAI

        return ChatOpenAI(
            model=model,
            temperature=settings.llm_temperature,
            api_key=settings.ensure("openai_api_key"),
        )

    from langchain_google_genai import ChatGoogleGenerativeAI

    return ChatGoogleGenerativeAI(
        model=model,
        temperature=settings.llm_temperature,
        google_api_key=settings.ensure("gemini_api_key"),
    )
