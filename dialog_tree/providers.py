"""
Response providers.

A response provider is any callable taking a prompt id (the current node id,
or the outcome prompt at a terminus) and returning the response text, or
None when no response is available. Returning None ends the traversal
through the exit node.
"""

from typing import Callable, Dict, List, Mapping, Optional


ResponseProvider = Callable[[str], Optional[str]]


class FixtureResponseProvider:
    """Answers from a fixed mapping prompt id -> response. Records every prompt."""

    def __init__(self, responses: Mapping[str, str]):
        self.responses: Dict[str, str] = dict(responses)
        self.prompts: List[str] = []

    def __call__(self, prompt_id: str) -> Optional[str]:
        self.prompts.append(prompt_id)
        return self.responses.get(prompt_id)


class TerminalResponseProvider:
    """
    Reads responses from a terminal.

    End of input (EOF or Ctrl-C) and blank lines count as no response.
    input_fn / output_fn are injectable for tests.
    """

    def __init__(
        self,
        input_fn: Callable[[str], str] = input,
        output_fn: Callable[[str], None] = print,
        outcome_prompt: str = "Outcome?",
    ):
        self._input = input_fn
        self._output = output_fn
        self.outcome_prompt = outcome_prompt

    def __call__(self, prompt_id: str) -> Optional[str]:
        if prompt_id == self.outcome_prompt:
            prompt = "Was the overall outcome successful? (yes/no): "
        else:
            prompt = "> "

        try:
            text = self._input(prompt)
        except (EOFError, KeyboardInterrupt):
            self._output("")
            return None

        text = text.strip()
        return text or None
