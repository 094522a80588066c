from langchain_ollama import ChatOllama
from langchain_anthropic import ChatAnthropic
from langchain_core.messages import AIMessage, BaseMessage, HumanMessage, SystemMessage
from typing import List, Optional, Sequence
import logging

from studyhub.config import settings
from studyhub.schemas import ChatTurn

logger = logging.getLogger(__name__)


def get_llm_client():
    """Factory function to return the appropriate LLM client based on config"""
    if settings.ai_provider.lower() == "claude":
        return ClaudeClient()
    else:
        return OllamaClient()


class BaseLLMClient:
    """
    Text-in, text-out access to a chat model.

    Subclasses only decide how the underlying LangChain chat model is built;
    callers depend on generate() and send_message().
    """

    def __init__(self):
        self.llm = None

    def generate(self, prompt: str, system: Optional[str] = None, json_mode: bool = False) -> str:
        """
        Send a single prompt and return the raw model text.

        Args:
            prompt: User prompt
            system: Optional system instruction
            json_mode: Ask the provider for JSON output where it supports it
        """
        messages: List[BaseMessage] = []
        if system:
            messages.append(SystemMessage(content=system))
        messages.append(HumanMessage(content=prompt))
        return self._invoke(messages, json_mode=json_mode)

    def send_message(
        self,
        prompt: str,
        history: Sequence[ChatTurn],
        system_messages: Sequence[str] = ()
    ) -> str:
        """
        Continue a conversation.

        System messages come first, then the history (oldest first), then the
        new prompt as the final user turn.
        """
        messages: List[BaseMessage] = [SystemMessage(content=text) for text in system_messages]
        for turn in history:
            if turn.is_user_message:
                messages.append(HumanMessage(content=turn.content))
            else:
                messages.append(AIMessage(content=turn.content))
        messages.append(HumanMessage(content=prompt))
        return self._invoke(messages)

    def _chat_model(self, json_mode: bool = False):
        return self.llm

    def _invoke(self, messages: List[BaseMessage], json_mode: bool = False) -> str:
        logger.debug(f"Invoking {self.__class__.__name__} with {len(messages)} messages")
        response = self._chat_model(json_mode).invoke(messages)
        return _response_text(response)


class OllamaClient(BaseLLMClient):
    """Client using local Ollama for development"""

    def __init__(self):
        super().__init__()
        self.llm = self._build(json_mode=False)
        self.json_llm = self._build(json_mode=True)

    def _build(self, json_mode: bool) -> ChatOllama:
        params = {
            "model": settings.ollama_model,
            "base_url": settings.ollama_base_url,
            "temperature": settings.llm_temperature,
            "client_kwargs": {"timeout": settings.llm_timeout_seconds}
        }
        if json_mode:
            params["format"] = "json"
        return ChatOllama(**params)

    def _chat_model(self, json_mode: bool = False):
        return self.json_llm if json_mode else self.llm


class ClaudeClient(BaseLLMClient):
    """Client using Claude API for production"""

    def __init__(self):
        super().__init__()
        if not settings.claude_api_key:
            raise ValueError("CLAUDE_API_KEY not set in environment variables")

        self.llm = ChatAnthropic(
            model=settings.claude_model,
            api_key=settings.claude_api_key,
            temperature=settings.llm_temperature,
            timeout=settings.llm_timeout_seconds
        )


def _response_text(response) -> str:
    """Flatten a LangChain response into plain text"""
    if hasattr(response, "content"):
        content = response.content
    else:
        content = str(response)

    # Anthropic may return a list of content blocks
    if isinstance(content, list):
        parts = []
        for block in content:
            if isinstance(block, str):
                parts.append(block)
            elif isinstance(block, dict) and block.get("type") == "text":
                parts.append(block.get("text", ""))
        content = "".join(parts)

    return content or ""
