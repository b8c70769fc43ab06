"""Base class for LLM prompts.

Provides a standardized interface for defining prompts with:
- Typed input variables
- Structured output schemas
- Model-specific configuration
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, ClassVar

from pydantic import BaseModel


class BasePrompt[T: BaseModel](ABC):
    """Base class for all LLM prompts.

    Example:
        ```python
        class TastingNotePrompt(BasePrompt[TastingNote]):
            output_schema = TastingNote
            system_prompt = "You are a sommelier."

            def format(self, wine_name: str) -> str:
                return f"Describe {wine_name} in one sentence."
        ```
    """

    # Override in subclasses
    output_schema: ClassVar[type[BaseModel]]
    """Pydantic model the completion text is parsed into."""

    system_prompt: ClassVar[str | None] = None
    """Optional system prompt to set context for the LLM."""

    temperature: ClassVar[float] = 0.3
    """Temperature for generation (low = more consistent)."""

    max_tokens: ClassVar[int | None] = None
    """Maximum tokens to generate (None = model default)."""

    @abstractmethod
    def format(self, **kwargs: Any) -> str:
        """Format the prompt template with input variables.

        Returns:
            Formatted prompt string ready for the LLM.

        Raises:
            ValueError: If required variables are missing.
        """
        ...

    @property
    def name(self) -> str:
        """Prompt identifier for logging."""
        return self.__class__.__name__

    def get_options(self) -> dict[str, Any]:
        """Get the completion options for this prompt."""
        options: dict[str, Any] = {"temperature": self.temperature}
        if self.max_tokens is not None:
            options["max_tokens"] = self.max_tokens
        return options

    def parse(self, text: str) -> T:
        """Parse completion text strictly into ``output_schema``.

        Raises:
            pydantic.ValidationError: If the text is not a JSON document
                matching the schema.
        """
        return self.output_schema.model_validate_json(text)  # type: ignore[return-value]
