"""Access to the suggestion language model."""

from langchain_groq import ChatGroq

from resumatch.config import GROQ_API_KEY, GROQ_MODEL, LLM_TEMPERATURE
from resumatch.errors import ConfigurationError

_llm_instance: ChatGroq | None = None


def check_llm_configured() -> None:
    """Fail fast when suggestions cannot be generated.

    Raises:
        ConfigurationError: If GROQ_API_KEY is empty or unset.
    """
    if not GROQ_API_KEY:
        raise ConfigurationError(
            "GROQ_API_KEY is not set; resume suggestions need a Groq API key "
            f"for model {GROQ_MODEL}. Run `resumatch info` to check settings.",
            config_key="GROQ_API_KEY",
        )


def get_llm() -> ChatGroq:
    """Return the shared chat model used to compose suggestions.

    Temperature defaults to 0 so the same prompt gives stable output.
    """
    global _llm_instance
    if _llm_instance is None:
        check_llm_configured()
        _llm_instance = ChatGroq(
            model=GROQ_MODEL,
            temperature=LLM_TEMPERATURE,
            api_key=GROQ_API_KEY,
        )
    return _llm_instance
