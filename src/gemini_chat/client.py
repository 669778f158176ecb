# gemini_chat/client.py
"""
Gemini client
~~~~~~~~~~~~~
Wraps ``google.genai.Client`` and hands out chat completers.
"""

from __future__ import annotations

import logging

from google import genai

from gemini_chat.chat import ChatCompleter
from gemini_chat.config import ClientConfig
from gemini_chat.core import ChatCompleteModel


class Client:
    """
    Entry point: one authenticated SDK client, many chat completers.

    Args:
        api_key: Google API key; read from the environment when omitted
        config: Full settings, takes precedence over ``api_key``
        log: Logger for this client and its completers
    """

    def __init__(
        self,
        api_key: str | None = None,
        *,
        config: ClientConfig | None = None,
        log: logging.Logger | None = None,
    ) -> None:
        self.config = config or ClientConfig.from_env(api_key=api_key)
        self.log = log or logging.getLogger("gemini_chat")
        if self.config.log_level:
            self.log.setLevel(self.config.log_level)

        self.client = genai.Client(api_key=self.config.api_key)
        self.log.info("Gemini client initialised, default model '%s'", self.config.default_model)

    def new_chat_completer(
        self,
        model: ChatCompleteModel | str | None = None,
        *,
        timeout: float | None = None,
    ) -> ChatCompleter:
        return ChatCompleter(
            self.client,
            model or self.config.default_model,
            timeout=timeout if timeout is not None else self.config.timeout,
            log=self.log,
        )
