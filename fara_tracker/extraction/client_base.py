from abc import ABC, abstractmethod


class BaseExtractionClient(ABC):
    """One chat round-trip against a language-model provider.

    Implementations return the raw assistant message. Transport problems
    surface as ``ExtractionNetworkError`` and any other provider failure
    as ``ExtractionError``; parsing the JSON payload is left to the caller.
    """

    @abstractmethod
    def create_chat_completion(
        self,
        *,
        model: str,
        temperature: float,
        max_tokens: int,
        system_prompt: str,
        user_prompt: str,
    ) -> str: ...
