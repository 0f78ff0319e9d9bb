from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence
import logging

import anyio
import groq
import httpx
from groq import Groq

from interview_mentor.config import Settings
from interview_mentor.schemas import ChatMessage


logger = logging.getLogger(__name__)


COACH_SYSTEM_PROMPT = (
	"You are an expert interview coach and software engineering mentor specializing in MAANG "
	"(Meta, Amazon, Apple, Netflix, Google) company interviews. You can help with:\n\n"
	"- Technical interview preparation (DSA, System Design, Coding)\n"
	"- Behavioral interview coaching (STAR method, leadership stories)\n"
	"- Company-specific interview processes and culture\n"
	"- Career advice and growth strategies\n"
	"- Mock interviews and practice sessions\n"
	"- Resume and portfolio optimization\n"
	"- Salary negotiation strategies\n"
	"- General software engineering questions\n\n"
	"Provide detailed, actionable advice with specific examples. Always be encouraging and supportive "
	"while being honest about challenges. If you don't know something specific, acknowledge it and "
	"provide the best guidance you can based on general principles."
)


class CompletionFailure(str, Enum):
	CONFIGURATION_ABSENT = "configuration_absent"
	TRANSPORT_FAILURE = "transport_failure"
	UPSTREAM_ERROR = "upstream_error"
	MALFORMED_RESPONSE = "malformed_response"


@dataclass(frozen=True)
class CompletionResult:
	text: Optional[str] = None
	failure: Optional[CompletionFailure] = None
	detail: str = ""

	@property
	def ok(self) -> bool:
		return self.failure is None

	@classmethod
	def success(cls, text: str) -> "CompletionResult":
		return cls(text=text)

	@classmethod
	def failed(cls, failure: CompletionFailure, detail: str = "") -> "CompletionResult":
		return cls(failure=failure, detail=detail)


class CompletionClient:
	"""Single-attempt chat completion against the configured groq endpoint.

	Never raises for remote problems; every outcome is reported as a
	`CompletionResult` so callers decide how to fall back.
	"""

	def __init__(self, settings: Settings, client: Any = None) -> None:
		self._settings = settings
		self._client = client

	@property
	def enabled(self) -> bool:
		return self._settings.llm_enabled

	def _ensure_client(self):
		if not self.enabled:
			return None
		if self._client is None:
			kwargs: Dict[str, Any] = {
				"api_key": self._settings.groq_api_key.strip(),
				"timeout": self._settings.groq_timeout_seconds,
				"max_retries": 0,
			}
			if self._settings.groq_base_url:
				kwargs["base_url"] = self._settings.groq_base_url
			self._client = Groq(**kwargs)
		return self._client

	def _build_messages(self, transcript: Sequence[ChatMessage]) -> List[Dict[str, str]]:
		messages = [{"role": "system", "content": COACH_SYSTEM_PROMPT}]
		messages.extend({"role": m.role, "content": m.content} for m in transcript)
		return messages

	async def complete(self, transcript: Sequence[ChatMessage]) -> CompletionResult:
		if not transcript:
			raise ValueError("transcript must contain at least one message")
		try:
			client = self._ensure_client()
		except (groq.GroqError, httpx.InvalidURL, ValueError) as e:
			return CompletionResult.failed(CompletionFailure.TRANSPORT_FAILURE, f"could not build groq client: {e}")
		if client is None:
			return CompletionResult.failed(CompletionFailure.CONFIGURATION_ABSENT, "GROQ_API_KEY is not set")

		messages = self._build_messages(transcript)

		def _call():
			return client.chat.completions.create(
				model=self._settings.groq_model,
				messages=messages,
				max_tokens=self._settings.groq_max_tokens,
				temperature=self._settings.answer_temperature,
			)

		try:
			completion = await anyio.to_thread.run_sync(_call, abandon_on_cancel=True)
		except groq.APIStatusError as e:
			return CompletionResult.failed(CompletionFailure.UPSTREAM_ERROR, f"HTTP {e.status_code}: {e.message}")
		except groq.APIConnectionError as e:
			# APITimeoutError is a subclass
			return CompletionResult.failed(CompletionFailure.TRANSPORT_FAILURE, str(e))
		except groq.APIResponseValidationError as e:
			return CompletionResult.failed(CompletionFailure.MALFORMED_RESPONSE, str(e))

		text = _first_choice_text(completion)
		if not text or not text.strip():
			return CompletionResult.failed(CompletionFailure.MALFORMED_RESPONSE, "completion has no choices[0].message.content")
		logger.debug("Completion received (%d chars)", len(text))
		return CompletionResult.success(text)


def _first_choice_text(completion: Any) -> Optional[str]:
	try:
		content = completion.choices[0].message.content
	except (AttributeError, IndexError, TypeError):
		return None
	return content if isinstance(content, str) else None
