from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, Optional, Sequence, TypeVar
import logging
import random

from interview_mentor.config import Settings
from interview_mentor.schemas import AIResponse, ChatMessage, MockInterviewQuestion, MAX_SUGGESTIONS
from interview_mentor.services.completion_client import CompletionClient, CompletionFailure, CompletionResult
from interview_mentor.services.fallback_router import FallbackRouter, default_router, last_user_message
from interview_mentor.services.mock_interview import MockQuestionBank, build_mock_interview_prompt, default_question_bank
from interview_mentor.services.suggestions import FollowUpSuggester, default_suggester


logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class Answered(Generic[T]):
	"""A mentor result plus how it was produced, for the audit trail."""

	value: T
	source: str  # "remote" | "fallback"
	failure: Optional[CompletionFailure] = None

	@property
	def failure_code(self) -> Optional[str]:
		return self.failure.value if self.failure is not None else None


class MentorService:
	"""AI mentor: remote completion first, static topic answers otherwise.

	Both public operations always return a usable result. A missing
	credential, an HTTP error, a transport error or an unusable payload all
	end in the local responder after exactly one remote attempt.
	"""

	def __init__(
		self,
		completion_client: CompletionClient,
		router: Optional[FallbackRouter] = None,
		suggester: Optional[FollowUpSuggester] = None,
		question_bank: Optional[MockQuestionBank] = None,
		rng: Optional[random.Random] = None,
	) -> None:
		self._completion = completion_client
		self._router = router or default_router()
		self._suggester = suggester or default_suggester()
		self._questions = question_bank or default_question_bank()
		self._rng = rng or random.Random()

	@property
	def enabled(self) -> bool:
		return self._completion.enabled

	async def send_message(self, transcript: Sequence[ChatMessage]) -> AIResponse:
		return (await self.answer(transcript)).value

	async def generate_mock_interview(self, interview_type: str, company: Optional[str] = None) -> MockInterviewQuestion:
		return (await self.mock_interview(interview_type, company)).value

	async def answer(self, transcript: Sequence[ChatMessage]) -> Answered[AIResponse]:
		transcript = list(transcript)
		if not transcript:
			return Answered(self._router.respond(""), source="fallback")

		result = await self._completion.complete(transcript)
		if result.ok:
			reply = AIResponse(message=result.text, suggestions=self._suggester.suggest(result.text)[:MAX_SUGGESTIONS])
			return Answered(reply, source="remote")

		self._log_fallback("chat", result)
		return Answered(self._router.respond(last_user_message(transcript)), source="fallback", failure=result.failure)

	async def mock_interview(self, interview_type: str, company: Optional[str] = None) -> Answered[MockInterviewQuestion]:
		prompt = build_mock_interview_prompt(interview_type, company)
		result = await self._completion.complete([ChatMessage(role="user", content=prompt)])
		if result.ok:
			question = MockInterviewQuestion(
				question=result.text,
				type=interview_type,
				company=company,
				hints=self._suggester.suggest(result.text),
			)
			return Answered(question, source="remote")

		self._log_fallback("mock_interview", result)
		question = MockInterviewQuestion(
			question=self._questions.pick(interview_type, self._rng),
			type=interview_type,
			company=company,
			hints=self._questions.hints,
		)
		return Answered(question, source="fallback", failure=result.failure)

	def _log_fallback(self, operation: str, result: CompletionResult) -> None:
		if result.failure is CompletionFailure.CONFIGURATION_ABSENT:
			logger.debug("%s: no LLM credential, answering locally", operation)
			return
		logger.warning("%s: remote completion failed (%s): %s; answering locally", operation, result.failure.value, result.detail)


def build_mentor_service(settings: Settings) -> MentorService:
	rng = random.Random(settings.mock_interview_seed) if settings.mock_interview_seed is not None else random.Random()
	return MentorService(CompletionClient(settings), rng=rng)
