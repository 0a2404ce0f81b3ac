from abc import ABC, abstractmethod
from dataclasses import dataclass, field


@dataclass(frozen=True)
class CompletionRequest:
    """One structured-output request sent to an AI provider."""

    model: str
    system_prompt: str
    user_prompt: str
    temperature: float = 0.1
    json_schema: dict[str, object] = field(default_factory=dict)
    schema_name: str = "extraction_result"


class BaseExtractionClient(ABC):
    """Contract for AI providers that answer with a JSON document."""

    @abstractmethod
    def complete(self, request: CompletionRequest) -> str:
        """Return the raw response text (expected to be JSON)."""
