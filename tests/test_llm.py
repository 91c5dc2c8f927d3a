"""Tests for smartmsg.llm package."""

from unittest.mock import MagicMock

import pytest

from smartmsg.config import Settings
from smartmsg.llm import (
    SYSTEM_PROMPT,
    EmptyResponseError,
    MissingAPIKeyError,
    ScriptedSuggester,
    SuggestionServiceError,
    clean_response,
    get_suggester,
)


def _completion(content):
    response = MagicMock()
    response.choices = [MagicMock()]
    response.choices[0].message.content = content
    return response


class TestCleanResponse:
    """Tests for clean_response function."""

    def test_strips_whitespace_and_fences(self):
        """Test code fence markers and whitespace are removed."""
        assert clean_response("```\nfeat: add x\n```\n") == "feat: add x"

    def test_keeps_inner_content(self):
        """Test only the ends are stripped."""
        assert clean_response("  fix: `foo`\n\n- bar  ") == "fix: `foo`\n\n- bar"

    @pytest.mark.parametrize("raw", ["", "   \n", "``````", None])
    def test_empty_raises(self, raw):
        """Test an empty response is an error."""
        with pytest.raises(EmptyResponseError):
            clean_response(raw)

    def test_empty_response_is_service_error(self):
        """Test EmptyResponseError is a SuggestionServiceError."""
        assert issubclass(EmptyResponseError, SuggestionServiceError)


class TestScriptedSuggester:
    """Tests for ScriptedSuggester."""

    def test_returns_responses_in_order(self):
        """Test scripted responses are returned one by one."""
        suggester = ScriptedSuggester(["feat: one", "fix: two"])

        assert suggester.suggest("m", "diff1", "old1") == "feat: one"
        assert suggester.suggest("m", "diff2", "old2") == "fix: two"

    def test_records_calls(self):
        """Test the prompt sent for each call is recorded."""
        suggester = ScriptedSuggester(["feat: one"])

        suggester.suggest("gpt-5-nano", "diff --git a/x b/x", "wip")

        call = suggester.calls[0]
        assert call.model == "gpt-5-nano"
        assert call.system_prompt == SYSTEM_PROMPT
        assert 'Old message:\n"wip"' in call.user_prompt
        assert "Diff (unified, files & hunks):\ndiff --git a/x b/x" in call.user_prompt

    def test_raises_scripted_exception(self):
        """Test exception entries are raised."""
        suggester = ScriptedSuggester([SuggestionServiceError("timed out")])

        with pytest.raises(SuggestionServiceError):
            suggester.suggest("m", "d", "o")

    def test_exhausted(self):
        """Test running out of responses is an error."""
        with pytest.raises(SuggestionServiceError):
            ScriptedSuggester([]).suggest("m", "d", "o")

    def test_blank_response_is_empty_error(self):
        """Test a blank scripted response goes through clean_response."""
        with pytest.raises(EmptyResponseError):
            ScriptedSuggester(["  "]).suggest("m", "d", "o")


class TestOpenAIProvider:
    """Tests for the OpenAI-backed suggester."""

    def test_missing_api_key(self):
        """Test a missing key is reported with setup instructions."""
        with pytest.raises(MissingAPIKeyError) as exc_info:
            get_suggester(Settings(api_key=None))

        assert "OPENAI_API_KEY" in str(exc_info.value)
        assert "smartmsg config set-key" in str(exc_info.value)

    def test_client_configuration(self, mocker):
        """Test the client is built from settings without retries."""
        mock_openai = mocker.patch("smartmsg.llm.openai_provider.OpenAI")

        get_suggester(Settings(api_key="sk-test", base_url="http://localhost:8080/v1"))

        mock_openai.assert_called_once_with(
            api_key="sk-test", base_url="http://localhost:8080/v1", max_retries=0
        )

    def test_suggest_sends_request(self, mocker):
        """Test the request carries model, token cap, prompts and timeout."""
        mock_openai = mocker.patch("smartmsg.llm.openai_provider.OpenAI")
        create = mock_openai.return_value.chat.completions.create
        create.return_value = _completion("```\nfeat: add export\n```")

        suggester = get_suggester(Settings(api_key="sk-test", timeout=7, max_completion_tokens=123))
        result = suggester.suggest("gpt-5-nano", "diff", "wip")

        assert result == "feat: add export"
        kwargs = create.call_args[1]
        assert kwargs["model"] == "gpt-5-nano"
        assert kwargs["max_completion_tokens"] == 123
        assert kwargs["timeout"] == 7
        assert kwargs["messages"][0] == {"role": "system", "content": SYSTEM_PROMPT}
        assert kwargs["messages"][1]["role"] == "user"

    def test_timeout_becomes_service_error(self, mocker):
        """Test transport failures surface as SuggestionServiceError."""
        mock_openai = mocker.patch("smartmsg.llm.openai_provider.OpenAI")
        mock_openai.return_value.chat.completions.create.side_effect = TimeoutError("timed out")

        suggester = get_suggester(Settings(api_key="sk-test"))

        with pytest.raises(SuggestionServiceError) as exc_info:
            suggester.suggest("gpt-5-nano", "diff", "wip")
        assert "timed out" in str(exc_info.value)
        assert isinstance(exc_info.value.__cause__, TimeoutError)

    def test_no_choices(self, mocker):
        """Test a response without choices is an error."""
        mock_openai = mocker.patch("smartmsg.llm.openai_provider.OpenAI")
        response = MagicMock()
        response.choices = []
        mock_openai.return_value.chat.completions.create.return_value = response

        with pytest.raises(SuggestionServiceError):
            get_suggester(Settings(api_key="sk-test")).suggest("m", "d", "o")

    def test_null_content_is_empty_error(self, mocker):
        """Test a null message content is an empty response."""
        mock_openai = mocker.patch("smartmsg.llm.openai_provider.OpenAI")
        mock_openai.return_value.chat.completions.create.return_value = _completion(None)

        with pytest.raises(EmptyResponseError):
            get_suggester(Settings(api_key="sk-test")).suggest("m", "d", "o")
