"""StatementAgent: LLM extraction of transactions from PDF statement text.

The agent sends the raw text of a statement to the Groq chat completion API and
parses the JSON array it answers with into validated Transaction objects.
"""

import json
import re

from colorlog.escape_codes import escape_codes
from pydantic import ValidationError

from quincena.agents.base import BaseAgent
from quincena.agents.prompts import SYSTEM_PROMPT, USER_PROMPT_LOG_LABEL, USER_PROMPT_TEMPLATE
from quincena.agents.registry import AgentRegistry
from quincena.core.models import Transaction
from quincena.core.settings import Settings
from quincena.core.utils import get_logger

MAX_OUTPUT_LOG_LEN = 300

logger = get_logger("premios-quincena.agent")

_JSON_ARRAY_RE = re.compile(r"\[.*\]", re.DOTALL)


def _get_color(color: str) -> str:
    return escape_codes.get(color, "")


def _truncate(value: str, limit: int = MAX_OUTPUT_LOG_LEN) -> str:
    return value if len(value) <= limit else value[: limit - 3] + "..."


class StatementAgent(BaseAgent):
    """Agent responsible for LLM-based extraction of statement transactions."""

    def __init__(self, llm_client: object, settings: Settings) -> None:
        """Initialize the StatementAgent with an LLM client and settings."""
        self.llm_client = llm_client
        self.settings = settings

    def extract_transactions(self, text: str) -> list[Transaction]:
        """Ask the LLM for the statement's transactions and validate its answer."""
        if not text or not text.strip():
            msg = "No statement text provided"
            raise ValueError(msg)

        cyan = _get_color("cyan")
        green = _get_color("green")
        yellow = _get_color("yellow")
        reset = _get_color("reset")
        logger.info(f"{cyan}INPUT: {len(text.splitlines())} statement lines{reset}")
        logger.info(f"{yellow}PROMPT: {USER_PROMPT_LOG_LABEL}{reset}")

        system_msg = {"role": "system", "content": SYSTEM_PROMPT}
        user_msg = {"role": "user", "content": USER_PROMPT_TEMPLATE.format(text=text)}
        try:
            logger.info(f"{yellow}AGENT: Calling LLM...{reset}")
            completion = self.llm_client.chat.completions.create(
                model=self.settings.llm_model,
                messages=[system_msg, user_msg],
                temperature=self.settings.llm_temperature,
                max_completion_tokens=self.settings.llm_max_completion_tokens,
                top_p=self.settings.llm_top_p,
                stream=self.settings.llm_stream,
            )
        except Exception as exc:
            msg = f"Groq API call failed: {exc}"
            logger.exception(msg)
            raise RuntimeError(msg) from exc

        raw_output = self._collect_llm_output(completion)
        logger.info(f"{green}OUTPUT: {_truncate(raw_output)}{reset}")
        transactions = self.parse_transactions_json(raw_output)
        logger.info(f"{green}AGENT: Extracted {len(transactions)} transactions{reset}")
        return transactions

    def _collect_llm_output(self, completion: object) -> str:
        """Collect the full output from a streamed or non-streamed completion."""
        if not self.settings.llm_stream:
            return completion.choices[0].message.content or ""
        raw_output = ""
        try:
            for chunk in completion:
                raw_output += chunk.choices[0].delta.content or ""
        except Exception as exc:
            msg = f"Groq streaming error: {exc}"
            logger.exception(msg)
            raise RuntimeError(msg) from exc
        return raw_output

    @staticmethod
    def parse_transactions_json(raw_output: str) -> list[Transaction]:
        """Extract the JSON array from the LLM output, tolerating code fences and chatter."""
        match = _JSON_ARRAY_RE.search(raw_output)
        if not match:
            msg = "No JSON array in LLM response"
            logger.error(f"{msg}: {_truncate(raw_output)}")
            raise ValueError(msg)
        try:
            items = json.loads(match.group(0))
        except json.JSONDecodeError as exc:
            msg = f"Failed to parse JSON array from LLM response: {exc}"
            logger.exception(msg)
            raise ValueError(msg) from exc
        if not isinstance(items, list):
            msg = f"Expected a JSON array, got {type(items).__name__}"
            raise ValueError(msg)

        transactions: list[Transaction] = []
        for idx, item in enumerate(items):
            try:
                transactions.append(Transaction.model_validate(item))
            except ValidationError as exc:
                logger.warning(f"Skipping invalid transaction #{idx} from LLM output: {item} ({exc.error_count()} errors)")
        return transactions


AgentRegistry.register("groq", StatementAgent)
