# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2025-11-22
# Updated: 2026-01-28
# Description: OllamaChat
# -----------------------------------------------------------------------------
from dataclasses import dataclass
from typing import Dict, Any, List, Optional, Iterator

from openai import OpenAI

from config.Config import Config
from utility.logging_utils import get_class_logger

Message = Dict[str, str]  # {"role": "system"|"user"|"assistant", "content": "..."}


@dataclass
class OllamaChat:
    """
    Chat wrapper for a local Ollama runtime, spoken to through its
    OpenAI-compatible /v1 API.

    Expected Config fields:
      cfg.ollama_base_url: str (e.g. "http://localhost:11434")
      cfg.ollama_api_key: str (Ollama ignores it, the SDK requires one)
      cfg.chat_model: str (e.g. "llama3.1:8b")
    """

    cfg: Config
    client: Any = None
    logger: Any = None

    def __post_init__(self) -> None:
        self.logger = self.logger or get_class_logger(self.__class__)

        self.model = self.cfg.chat_model
        if not self.model:
            raise ValueError("Config missing chat_model (OLLAMA_MODEL).")

        if self.client is None:
            self.client = OpenAI(
                base_url=self.cfg.ollama_openai_url,
                api_key=self.cfg.ollama_api_key,
            )

        self.logger.info("OllamaChat initialised (base_url=%s, model=%s)", self.cfg.ollama_base_url, self.model)

    @staticmethod
    def with_system(messages: List[Message], system_text: Optional[str]) -> List[Message]:
        if not system_text:
            return list(messages)
        return [{"role": "system", "content": system_text}, *messages]

    # Standard chat call
    def chat(
            self,
            messages: List[Message],
            temperature: float = 0.7,
            max_tokens: int = 1000,
            top_p: float = 0.9,
            extra_params: Optional[Dict[str, Any]] = None,
    ) -> Any:
        if not messages:
            raise ValueError("messages must be non-empty.")

        params: Dict[str, Any] = {
            "model": self.model,
            "messages": messages,
            "temperature": temperature,
            "max_tokens": max_tokens,
            "top_p": top_p,
        }
        if extra_params:
            params.update(extra_params)

        self.logger.debug(
            "Chat request: model=%s temp=%s max_tokens=%s messages=%d",
            self.model, temperature, max_tokens, len(messages)
        )

        resp = self.client.chat.completions.create(**params)
        self.logger.debug("Raw ChatCompletion response: %r", resp)
        return resp

    # Streaming chat call
    def chat_stream(
            self,
            messages: List[Message],
            temperature: float = 0.7,
            max_tokens: int = 1000,
            top_p: float = 0.9,
            extra_params: Optional[Dict[str, Any]] = None,
    ) -> Iterator[str]:
        if not messages:
            raise ValueError("messages must be non-empty.")

        params: Dict[str, Any] = {
            "model": self.model,
            "messages": messages,
            "temperature": temperature,
            "max_tokens": max_tokens,
            "top_p": top_p,
            "stream": True,
        }
        if extra_params:
            params.update(extra_params)

        stream = self.client.chat.completions.create(**params)

        for event in stream:
            choices = getattr(event, "choices", None) or []
            if not choices:
                continue
            delta = choices[0].delta
            if delta and getattr(delta, "content", None):
                yield delta.content

    def complete(self, messages: List[Message], system_text: Optional[str] = None, **kwargs: Any) -> str:
        """Chat and return only the answer text."""
        resp = self.chat(self.with_system(messages, system_text), **kwargs)
        try:
            return resp.choices[0].message.content or ""
        except (AttributeError, IndexError) as e:
            self.logger.error("Unexpected chat response format: %s", e, exc_info=True)
            raise RuntimeError(f"Unexpected chat response format: {e}") from e

    # Convenience helper functions
    def simple_chat(
            self,
            user_text: str,
            system_text: Optional[str] = None,
            **kwargs: Any,
    ) -> dict:
        resp = self.chat(self.with_system([{"role": "user", "content": user_text}], system_text), **kwargs)

        try:
            content = resp.choices[0].message.content or ""
        except (AttributeError, IndexError) as e:
            self.logger.error("Unexpected chat response format: %s", e, exc_info=True)
            raise RuntimeError(f"Unexpected chat response format: {e}") from e

        self.logger.info("Chat answer generated (model=%s)", getattr(resp, "model", None))

        return {
            "answer": content,
            "usage": getattr(resp, "usage", None),
            "model": getattr(resp, "model", None),
        }

    def available_models(self) -> List[str]:
        """Model tags pulled into the Ollama runtime (e.g. "llama3.1:8b")."""
        return [m.id for m in self.client.models.list()]

    def healthcheck(self) -> bool:
        try:
            models = self.available_models()
            if self.model not in models:
                self.logger.warning(
                    "Chat model '%s' is not pulled (available: %s); run `ollama pull %s`",
                    self.model, ", ".join(models) or "none", self.model,
                )
                return False
            _ = self.simple_chat("ping", max_tokens=5, temperature=0.0)
            return True
        except Exception as e:
            self.logger.warning("Chat healthcheck failed: %s", e)
            return False
