"""Client for the external question-answering service (OpenAI-compatible chat completions)."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Literal, Sequence

import requests

from .config import QuerySettings

logger = logging.getLogger(__name__)

FALLBACK_ANSWER = "I could not generate a response. Please try rephrasing your question."

STATUS_MESSAGES = {
    429: "Rate limit exceeded. Please try again in a moment.",
    402: "AI usage limit reached. Please add credits to continue.",
}

EXAMPLE_QUESTIONS = [
    "Which party won the most seats in South India?",
    "Compare BJP's 2024 performance with 2019",
    "Who were the top candidates with highest victory margins?",
    "Which states did Congress gain the most seats?",
    "How did Rahul Gandhi and Modi perform in their constituencies?",
    "What was SP's performance in Uttar Pradesh?",
    "Explain the NDA vs INDIA bloc seat distribution",
    "Which parties gained and lost the most seats?",
]


class QueryError(RuntimeError):
    pass


@dataclass(frozen=True)
class Turn:
    role: Literal["user", "assistant"]
    content: str


class ElectionQueryClient:
    def __init__(self, settings: QuerySettings, context: str, session: requests.Session | None = None):
        self.settings = settings
        self.context = context
        self.session = session or requests.Session()

    def build_messages(self, question: str, history: Sequence[Turn] = ()) -> list[dict[str, str]]:
        messages = [{"role": "system", "content": self.context}]
        messages.extend({"role": t.role, "content": t.content} for t in history)
        messages.append({"role": "user", "content": question})
        return messages

    def ask(self, question: str, history: Sequence[Turn] = ()) -> str:
        question = question.strip()
        if not question:
            raise QueryError("Question is required")
        if not self.settings.api_key:
            raise QueryError("ELECTION_QUERY_API_KEY is not configured")

        logger.info("processing election query (%d chars, %d prior turns)", len(question), len(history))
        try:
            resp = self.session.post(
                self.settings.url,
                headers={
                    "Authorization": f"Bearer {self.settings.api_key}",
                    "Content-Type": "application/json",
                },
                json={
                    "model": self.settings.model,
                    "messages": self.build_messages(question, history),
                    "max_tokens": self.settings.max_tokens,
                    "temperature": self.settings.temperature,
                },
                timeout=self.settings.timeout,
            )
        except requests.RequestException as e:
            raise QueryError(f"AI service unreachable: {e}") from e

        if resp.status_code in STATUS_MESSAGES:
            raise QueryError(STATUS_MESSAGES[resp.status_code])
        if not resp.ok:
            logger.error("AI service error %s: %s", resp.status_code, resp.text[:500])
            raise QueryError(f"AI service error: {resp.status_code}")

        try:
            data = resp.json()
        except ValueError as e:
            raise QueryError("AI service returned malformed JSON") from e

        choices = data.get("choices") if isinstance(data, dict) else None
        answer = None
        if choices:
            answer = (choices[0].get("message") or {}).get("content")
        return answer or FALLBACK_ANSWER
