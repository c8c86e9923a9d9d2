"""
AI Client Manager

This module manages separate AI client instances for the services that talk to the
local Ollama inference server. Ollama exposes an OpenAI-compatible API, so every
client is an AsyncOpenAI instance pointed at it. Each service type gets its own
dedicated client so a slow doubt explanation never queues behind answer scoring.
"""

import os
from openai import AsyncOpenAI
from loguru import logger
import threading
from typing import Dict, Optional
from dotenv import load_dotenv

# Ensure .env is loaded
load_dotenv()

OLLAMA_BASE_URL = os.getenv("OLLAMA_BASE_URL", "http://localhost:11434/v1")
OLLAMA_API_KEY = os.getenv("OLLAMA_API_KEY", "ollama")  # Ollama ignores the key, the SDK requires one

QUESTION_MODEL = os.getenv("AI_QUESTION_MODEL", "tinyllama")
ANALYSIS_MODEL = os.getenv("AI_ANALYSIS_MODEL", "tinyllama")
DOUBT_MODEL = os.getenv("AI_DOUBT_MODEL", "llama2")

AI_TIMEOUT_SECONDS = float(os.getenv("AI_TIMEOUT_SECONDS", "5"))
AI_DOUBT_TIMEOUT_SECONDS = float(os.getenv("AI_DOUBT_TIMEOUT_SECONDS", "30"))

SERVICE_TIMEOUTS = {
    "question_generation": AI_TIMEOUT_SECONDS,
    "answer_analysis": AI_TIMEOUT_SECONDS,
    "doubt_resolution": AI_DOUBT_TIMEOUT_SECONDS,
}

class AIClientManager:
    """
    Manages dedicated AI client instances for different services.

    Clients are created lazily on first access. Retries are disabled because
    every caller has a deterministic fallback and should reach it quickly when
    the inference server is down.
    """

    _lock = threading.Lock()

    def __init__(self, base_url: str = OLLAMA_BASE_URL, api_key: str = OLLAMA_API_KEY):
        self.base_url = base_url
        self.api_key = api_key
        self._clients: Dict[str, AsyncOpenAI] = {}
        self._initialized = False

    def _initialize_clients(self):
        """Lazy initialization of client instances."""
        if self._initialized:
            return

        with self._lock:
            # Double-check locking for initialization
            if self._initialized:
                return

            try:
                self._clients = {
                    service_type: AsyncOpenAI(
                        base_url=self.base_url,
                        api_key=self.api_key,
                        timeout=timeout,
                        max_retries=0
                    )
                    for service_type, timeout in SERVICE_TIMEOUTS.items()
                }
                self._initialized = True
                logger.info(f"Initialized {len(self._clients)} AI client instances for {self.base_url}")

            except Exception as e:
                logger.error(f"Failed to initialize AI clients: {e}")
                raise RuntimeError(f"Failed to initialize AI clients: {e}") from e

    def get_client(self, service_type: str) -> AsyncOpenAI:
        """
        Get a dedicated client for the specified service type.

        Args:
            service_type (str): Type of service ("question_generation",
                              "answer_analysis", "doubt_resolution")

        Returns:
            AsyncOpenAI: Dedicated client instance for the service

        Raises:
            ValueError: If service_type is not supported
        """
        self._initialize_clients()

        if service_type not in self._clients:
            raise ValueError(f"Unsupported service type: {service_type}. Available: {list(self._clients.keys())}")

        return self._clients[service_type]

    def get_question_generation_client(self) -> AsyncOpenAI:
        """Get dedicated client for question generation."""
        return self.get_client("question_generation")

    def get_answer_analysis_client(self) -> AsyncOpenAI:
        """Get dedicated client for answer analysis."""
        return self.get_client("answer_analysis")

    def get_doubt_resolution_client(self) -> AsyncOpenAI:
        """Get dedicated client for doubt resolution."""
        return self.get_client("doubt_resolution")

# Lazy initialization - no eager instantiation
_ai_manager: Optional[AIClientManager] = None
_manager_lock = threading.Lock()

def get_ai_client_manager() -> AIClientManager:
    """
    Get the singleton AIClientManager instance with lazy initialization.

    Also used as a FastAPI dependency so tests can substitute fake clients.

    Returns:
        AIClientManager: The singleton instance
    """
    global _ai_manager

    if _ai_manager is None:
        with _manager_lock:
            # Double-check locking pattern
            if _ai_manager is None:
                _ai_manager = AIClientManager()

    return _ai_manager
