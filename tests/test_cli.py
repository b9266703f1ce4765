"""Tests for the command-line interface."""
import pytest
from typer.testing import CliRunner

from colloquy.cli.app import app

runner = CliRunner()


class TestCheckCommand:
    """Tests for `colloquy check`."""

    def test_missing_key_reports_unavailable(self, clean_env):
        result = runner.invoke(app, ["check"])

        assert result.exit_code == 1
        assert "unavailable" in result.output
        assert "gemini" in result.output

    def test_configured_backend_is_available(self, clean_env):
        clean_env.setenv("LLM_PROVIDER", "openai")
        clean_env.setenv("OPENAI_API_KEY", "sk-test")
        clean_env.setenv("OPENAI_CHAT_MODEL", "gpt-4o")

        result = runner.invoke(app, ["check"])

        assert result.exit_code == 0
        assert "available" in result.output
        assert "gpt-4o" in result.output

    def test_invalid_timeout_reports_unavailable(self, clean_env):
        clean_env.setenv("LLM_TIMEOUT", "later")

        result = runner.invoke(app, ["check"])

        assert result.exit_code == 1
        assert "LLM_TIMEOUT" in result.output
        assert "invalid" in result.output
        assert "unavailable" in result.output


class TestChatCommand:
    """Tests for `colloquy chat`."""

    def test_chat_without_backend_answers_unavailable(self, clean_env):
        result = runner.invoke(app, ["chat"], input="hello\nquit\n")

        assert result.exit_code == 0
        assert "currently" in result.output
        assert "Goodbye" in result.output

    @pytest.mark.parametrize("variable, value", [
        ("LLM_TIMEOUT", "later"),
        ("LLM_TEMPERATURE", "7"),
    ])
    def test_chat_with_invalid_setting_answers_unavailable(self, clean_env, variable, value):
        """A bad setting degrades to the unavailable backend instead of exiting."""
        clean_env.setenv("LLM_PROVIDER", "openai")
        clean_env.setenv("OPENAI_API_KEY", "sk-test")
        clean_env.setenv(variable, value)

        result = runner.invoke(app, ["chat"], input="hello\nquit\n")

        assert result.exit_code == 0
        assert variable in result.output
        assert "currently" in result.output
        assert "Goodbye" in result.output

    def test_chat_ends_on_eof(self, clean_env):
        result = runner.invoke(app, ["chat"], input="")

        assert result.exit_code == 0
        assert "Goodbye" in result.output
