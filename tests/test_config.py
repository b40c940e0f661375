"""
Unit tests for AppConfig environment variable loading.
"""

import os
import sys

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from sms_relay.config import AppConfig

ENV_VARS = [
    "OPENAI_API_KEY", "LLM_BASE_URL", "LLM_MODEL", "LLM_TIMEOUT", "LLM_MAX_RETRIES",
    "PROMPT_SOURCE", "PROMPT_BASE_URL", "PROMPT_API_KEY", "PROMPT_FILE", "PROMPT_TIMEOUT",
    "PROMPT_MAX_RETRIES",
    "CONTEXT_MAX_TOKENS", "TOKENIZER_ENCODING", "SERVER_HOST", "SERVER_PORT",
    "DEFAULT_AGENT_NAME", "DEFAULT_PROMPT_ID", "LOG_LEVEL",
]


class TestAppConfig:
    """Tests for AppConfig.from_env()."""

    def setup_method(self):
        self._saved = {k: os.environ.pop(k) for k in ENV_VARS if k in os.environ}

    def teardown_method(self):
        for k in ENV_VARS:
            os.environ.pop(k, None)
        os.environ.update(self._saved)

    def test_default_values(self):
        """Config should have sensible defaults without env vars."""
        config = AppConfig()
        assert config.compaction.max_tokens == 4000
        assert config.compaction.encoding == "r50k_base"
        assert config.llm.model == "text-davinci-003"
        assert config.server.port == 8000
        assert config.default_agent_name == "Assistant"

    def test_from_env_llm(self, monkeypatch):
        """LLM config should load from environment variables."""
        monkeypatch.setenv("OPENAI_API_KEY", "test-key-123")
        monkeypatch.setenv("LLM_BASE_URL", "https://api.test.com/v1")
        monkeypatch.setenv("LLM_MODEL", "gpt-3.5-turbo-instruct")
        monkeypatch.setenv("LLM_TIMEOUT", "12.5")
        monkeypatch.setenv("LLM_MAX_RETRIES", "5")
        config = AppConfig.from_env()
        assert config.llm.api_key == "test-key-123"
        assert config.llm.base_url == "https://api.test.com/v1"
        assert config.llm.model == "gpt-3.5-turbo-instruct"
        assert config.llm.timeout == 12.5
        assert config.llm.max_retries == 5

    def test_from_env_prompts(self, monkeypatch):
        """Prompt provider config should load from environment variables."""
        monkeypatch.setenv("PROMPT_SOURCE", "local")
        monkeypatch.setenv("PROMPT_FILE", "/tmp/prompts.json")
        monkeypatch.setenv("PROMPT_TIMEOUT", "4.5")
        monkeypatch.setenv("PROMPT_MAX_RETRIES", "6")
        config = AppConfig.from_env()
        assert config.prompts.source == "local"
        assert config.prompts.local_path == "/tmp/prompts.json"
        assert config.prompts.timeout == 4.5
        assert config.prompts.max_retries == 6

    def test_from_env_compaction(self, monkeypatch):
        """Token budget and vocabulary should be configurable."""
        monkeypatch.setenv("CONTEXT_MAX_TOKENS", "2048")
        monkeypatch.setenv("TOKENIZER_ENCODING", "p50k_base")
        config = AppConfig.from_env()
        assert config.compaction.max_tokens == 2048
        assert config.compaction.encoding == "p50k_base"

    def test_from_env_server(self, monkeypatch):
        """Server config should load from environment variables."""
        monkeypatch.setenv("SERVER_HOST", "127.0.0.1")
        monkeypatch.setenv("SERVER_PORT", "9999")
        config = AppConfig.from_env()
        assert config.server.host == "127.0.0.1"
        assert config.server.port == 9999

    def test_from_env_defaults_for_reset(self, monkeypatch):
        """Default agent and prompt used on bare reset come from env."""
        monkeypatch.setenv("DEFAULT_AGENT_NAME", "Helper")
        monkeypatch.setenv("DEFAULT_PROMPT_ID", "abc123")
        monkeypatch.setenv("LOG_LEVEL", "debug")
        config = AppConfig.from_env()
        assert config.default_agent_name == "Helper"
        assert config.default_prompt_id == "abc123"
        assert config.log_level == "DEBUG"

    def test_from_env_defaults_without_env(self):
        """Without env vars set, from_env should return defaults."""
        config = AppConfig.from_env()
        assert config.llm.api_key == ""
        assert config.server.host == "0.0.0.0"
        assert config.prompts.source == "http"
        assert config.default_prompt_id == "clbilb0kh0008h7eg8jv8owdu"
