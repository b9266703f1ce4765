"""Unit tests for configuration and prompt loading."""
import pytest
from pydantic import ValidationError

from colloquy.config import DEFAULT_TIMEOUT, BackendConfig, load_backend_config
from colloquy.llm import InitializationError
from colloquy.prompts import PROMPTS_DIR_ENV, clear_cache, get_behavior_instruction, load_prompt


class TestLoadBackendConfig:
    """Tests for load_backend_config."""

    def test_defaults(self):
        config = load_backend_config({})

        assert config.provider == "gemini"
        assert config.api_key is None
        assert config.model is None
        assert config.timeout == DEFAULT_TIMEOUT

    def test_provider_specific_variables(self):
        config = load_backend_config({
            "LLM_PROVIDER": "Anthropic",
            "ANTHROPIC_API_KEY": "sk-ant-test",
            "ANTHROPIC_MODEL": "claude-sonnet-4-20250514",
            "GEMINI_API_KEY": "ignored",
        })

        assert config.provider == "anthropic"
        assert config.api_key == "sk-ant-test"
        assert config.model == "claude-sonnet-4-20250514"

    def test_openai_model_variable(self):
        config = load_backend_config({
            "LLM_PROVIDER": "openai",
            "OPENAI_API_KEY": "sk-test",
            "OPENAI_CHAT_MODEL": "gpt-4o",
        })
        assert config.model == "gpt-4o"

    def test_unknown_provider_keeps_name(self):
        """Unknown providers are reported at client initialization, not here."""
        config = load_backend_config({"LLM_PROVIDER": "mystery"})
        assert config.provider == "mystery"
        assert config.api_key is None

    def test_numeric_variables(self):
        config = load_backend_config({"LLM_TIMEOUT": "12.5", "LLM_TEMPERATURE": "0"})
        assert config.timeout == 12.5
        assert config.temperature == 0.0

    def test_invalid_timeout_names_variable(self):
        with pytest.raises(InitializationError, match="LLM_TIMEOUT"):
            load_backend_config({"LLM_TIMEOUT": "soon"})

    @pytest.mark.parametrize("env, variable", [
        ({"LLM_TIMEOUT": "0"}, "LLM_TIMEOUT"),
        ({"LLM_TIMEOUT": "-5"}, "LLM_TIMEOUT"),
        ({"LLM_TEMPERATURE": "7"}, "LLM_TEMPERATURE"),
    ])
    def test_out_of_range_value_is_initialization_error(self, env, variable):
        """Out-of-range values fail like any other initialization problem."""
        with pytest.raises(InitializationError, match=variable) as exc_info:
            load_backend_config(env)
        assert isinstance(exc_info.value.__cause__, ValidationError)

    def test_reads_process_environment(self, clean_env):
        clean_env.setenv("LLM_PROVIDER", "deepseek")
        clean_env.setenv("DEEPSEEK_API_KEY", "ds-key")

        config = load_backend_config()

        assert config.provider == "deepseek"
        assert config.api_key == "ds-key"


class TestBackendConfig:
    """Tests for the BackendConfig model."""

    def test_config_is_frozen(self):
        config = BackendConfig(api_key="k")
        with pytest.raises(ValidationError):
            config.model = "other"  # type: ignore[misc]

    def test_api_key_hidden_from_repr(self):
        assert "secret-key" not in repr(BackendConfig(api_key="secret-key"))


class TestPrompts:
    """Tests for prompt loading."""

    @pytest.fixture(autouse=True)
    def _isolate(self, monkeypatch):
        monkeypatch.delenv(PROMPTS_DIR_ENV, raising=False)
        clear_cache()
        yield
        clear_cache()

    def test_packaged_behavior_instruction(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        instruction = get_behavior_instruction()

        assert instruction
        assert instruction == instruction.strip()

    def test_working_directory_override(self, tmp_path, monkeypatch):
        (tmp_path / "prompts").mkdir()
        (tmp_path / "prompts" / "behavior.txt").write_text("  Be brief.\n", encoding="utf-8")
        monkeypatch.chdir(tmp_path)

        assert get_behavior_instruction() == "Be brief."

    def test_missing_prompt_raises(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        with pytest.raises(FileNotFoundError, match="not-a-prompt"):
            load_prompt("not-a-prompt")

    def test_environment_directory_wins(self, tmp_path, monkeypatch):
        custom = tmp_path / "custom"
        custom.mkdir()
        (custom / "behavior.txt").write_text("From env.", encoding="utf-8")
        (tmp_path / "prompts").mkdir()
        (tmp_path / "prompts" / "behavior.txt").write_text("From cwd.", encoding="utf-8")
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv(PROMPTS_DIR_ENV, str(custom))

        assert get_behavior_instruction() == "From env."

    @pytest.mark.parametrize("content", ["", "  \n\t\n"])
    def test_blank_override_falls_back_to_packaged(self, tmp_path, monkeypatch, content):
        """A blank override file never replaces the packaged instruction."""
        monkeypatch.chdir(tmp_path)
        packaged = get_behavior_instruction()
        clear_cache()

        (tmp_path / "prompts").mkdir()
        (tmp_path / "prompts" / "behavior.txt").write_text(content, encoding="utf-8")
        custom = tmp_path / "custom"
        custom.mkdir()
        (custom / "behavior.txt").write_text(content, encoding="utf-8")
        monkeypatch.setenv(PROMPTS_DIR_ENV, str(custom))

        assert get_behavior_instruction() == packaged

    def test_blank_env_file_skipped_for_cwd_file(self, tmp_path, monkeypatch):
        custom = tmp_path / "custom"
        custom.mkdir()
        (custom / "behavior.txt").write_text("", encoding="utf-8")
        (tmp_path / "prompts").mkdir()
        (tmp_path / "prompts" / "behavior.txt").write_text("From cwd.", encoding="utf-8")
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv(PROMPTS_DIR_ENV, str(custom))

        assert get_behavior_instruction() == "From cwd."
