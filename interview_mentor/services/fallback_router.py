from __future__ import annotations

from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from typing import List, Optional, Sequence, Tuple
import json

from interview_mentor.schemas import AIResponse, ChatMessage, MAX_SUGGESTIONS


RESOURCES_DIR = Path(__file__).resolve().parent.parent / "resources"


@dataclass(frozen=True)
class TopicRoute:
	"""One bucket of the offline mentor: keywords, canned answer and follow-ups."""

	name: str
	keywords: Tuple[str, ...]
	text: str
	suggestions: Tuple[str, ...] = field(default_factory=tuple)

	def matches(self, lowered: str) -> bool:
		return any(k in lowered for k in self.keywords)

	def respond(self) -> AIResponse:
		return AIResponse(message=self.text, suggestions=list(self.suggestions[:MAX_SUGGESTIONS]))


class FallbackRouter:
	"""Answers a message from static topic texts, first matching route wins.

	Matching is a case-insensitive substring test, so the order of `routes`
	decides ties ("salary" beats "resume" when both appear).
	"""

	def __init__(self, routes: Sequence[TopicRoute], default: TopicRoute) -> None:
		self._routes = list(routes)
		self._default = default

	@property
	def routes(self) -> List[TopicRoute]:
		return list(self._routes)

	def select(self, message: str) -> TopicRoute:
		lowered = (message or "").lower()
		for route in self._routes:
			if route.matches(lowered):
				return route
		return self._default

	def respond(self, message: str) -> AIResponse:
		return self.select(message).respond()

	@classmethod
	def from_resources(cls, resources_dir: Optional[Path] = None) -> "FallbackRouter":
		base = resources_dir or RESOURCES_DIR
		with (base / "topics.json").open("r", encoding="utf-8") as f:
			raw = json.load(f)
		routes = [_load_route(base, item) for item in raw["routes"]]
		return cls(routes, _load_route(base, raw["default"]))


def _load_route(base: Path, item: dict) -> TopicRoute:
	text = (base / item["response"]).read_text(encoding="utf-8").strip()
	return TopicRoute(
		name=item["name"],
		keywords=tuple(k.lower() for k in item.get("keywords", [])),
		text=text,
		suggestions=tuple(item.get("suggestions", [])),
	)


@lru_cache(maxsize=1)
def default_router() -> FallbackRouter:
	return FallbackRouter.from_resources()


def last_user_message(transcript: Sequence[ChatMessage]) -> str:
	"""Text the offline router should answer: the newest user turn, else the newest turn."""
	for msg in reversed(transcript):
		if msg.role == "user":
			return msg.content
	if transcript:
		return transcript[-1].content
	return ""
