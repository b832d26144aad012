"""
MemoPad Backend — Abstract Summary Provider Interface
=======================================================

What:  Abstract base class defining the contract for AI summary providers.
How:   Concrete implementations inherit from SummaryProvider and implement
       summarize() and health_check().
Who:   The summarize route receives a provider through the `get_summarizer`
       dependency; tests override that dependency with a fake.
"""

from abc import ABC, abstractmethod


class SummaryProvider(ABC):
    """
    Abstract interface for AI-powered memo summarization.

    Contract:
        - summarize() accepts raw memo text and returns a trimmed summary
        - Missing input raises ValidationError before any network call
        - A missing credential raises ConfigurationError before any network call
        - Every provider-specific failure is wrapped in LLMServiceError
    """

    @abstractmethod
    async def summarize(self, content: str) -> str:
        """
        Summarize memo text in 3-5 sentences.

        Args:
            content: The memo text. May contain Markdown.

        Returns:
            str: The summary with surrounding whitespace removed. Never empty.

        Raises:
            ValidationError: `content` is missing or empty.
            ConfigurationError: No API credential is configured.
            LLMServiceError: The provider failed or produced no text.
        """
        ...

    @abstractmethod
    async def health_check(self) -> bool:
        """
        Check if the provider is reachable and operational.

        Lightweight connectivity test; must not consume generation quota.
        Returns True if reachable, False otherwise.
        """
        ...
