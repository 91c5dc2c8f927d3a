"""Scripted suggester for offline runs and tests."""

from dataclasses import dataclass
from typing import Iterable, Union

from smartmsg.llm.base import BaseMessageSuggester
from smartmsg.llm.exceptions import SuggestionServiceError


@dataclass
class SuggestionCall:
    """One recorded call to a ScriptedSuggester."""

    model: str
    system_prompt: str
    user_prompt: str


class ScriptedSuggester(BaseMessageSuggester):
    """Return pre-recorded responses in order.

    A scripted entry that is an exception instance is raised instead of
    returned. Running out of responses is a SuggestionServiceError.
    """

    def __init__(self, responses: Iterable[Union[str, Exception]]):
        self.responses = list(responses)
        self.calls: list[SuggestionCall] = []

    def _complete(self, model: str, system_prompt: str, user_prompt: str) -> str:
        self.calls.append(SuggestionCall(model, system_prompt, user_prompt))
        if not self.responses:
            raise SuggestionServiceError("No scripted response left")
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response
