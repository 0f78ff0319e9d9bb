from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Dict, List, Optional, Sequence
import json
import random

from interview_mentor.services.fallback_router import RESOURCES_DIR


_PROMPT_TAILS: Dict[str, str] = {
	"coding": "Include the problem statement, constraints, and expected approach.",
	"system-design": "Include the requirements and key considerations.",
	"behavioral": "Include the question and what the interviewer is looking for.",
}


def build_mock_interview_prompt(interview_type: str, company: Optional[str] = None) -> str:
	company_context = f" for {company}" if company else ""
	tail = _PROMPT_TAILS.get(interview_type)
	if tail is None:
		return f"Generate an interview question{company_context}."
	return f"Generate a {interview_type} interview question{company_context}. {tail}"


class MockQuestionBank:
	"""Canned questions used when no completion is available."""

	def __init__(self, questions: Dict[str, Sequence[str]], hints: Sequence[str], default_type: str = "coding") -> None:
		if default_type not in questions:
			raise ValueError(f"default type {default_type!r} has no questions")
		self._questions = {k: list(v) for k, v in questions.items()}
		self._hints = list(hints)
		self._default_type = default_type

	@property
	def hints(self) -> List[str]:
		return list(self._hints)

	def questions_for(self, interview_type: str) -> List[str]:
		return list(self._questions.get(interview_type) or self._questions[self._default_type])

	def pick(self, interview_type: str, rng: random.Random) -> str:
		return rng.choice(self.questions_for(interview_type))

	@classmethod
	def from_resources(cls, resources_dir: Optional[Path] = None) -> "MockQuestionBank":
		base = resources_dir or RESOURCES_DIR
		with (base / "mock_questions.json").open("r", encoding="utf-8") as f:
			raw = json.load(f)
		return cls(raw["questions"], raw["hints"], raw.get("default_type", "coding"))


@lru_cache(maxsize=1)
def default_question_bank() -> MockQuestionBank:
	return MockQuestionBank.from_resources()
