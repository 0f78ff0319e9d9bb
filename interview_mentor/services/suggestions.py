from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import List, Optional, Sequence, Tuple
import json

from interview_mentor.schemas import MAX_SUGGESTIONS
from interview_mentor.services.fallback_router import RESOURCES_DIR


@dataclass(frozen=True)
class FollowUpFamily:
	name: str
	keywords: Tuple[str, ...]
	suggestions: Tuple[str, ...]


class FollowUpSuggester:
	"""Derives follow-up prompts from a completion's own text."""

	def __init__(self, families: Sequence[FollowUpFamily], default: Sequence[str]) -> None:
		self._families = list(families)
		self._default = list(default)

	def suggest(self, text: str) -> List[str]:
		lowered = (text or "").lower()
		for family in self._families:
			if any(k in lowered for k in family.keywords):
				return list(family.suggestions[:MAX_SUGGESTIONS])
		return self._default[:MAX_SUGGESTIONS]

	@classmethod
	def from_resources(cls, resources_dir: Optional[Path] = None) -> "FollowUpSuggester":
		base = resources_dir or RESOURCES_DIR
		with (base / "follow_ups.json").open("r", encoding="utf-8") as f:
			raw = json.load(f)
		families = [
			FollowUpFamily(
				name=item["name"],
				keywords=tuple(k.lower() for k in item["keywords"]),
				suggestions=tuple(item["suggestions"]),
			)
			for item in raw["families"]
		]
		return cls(families, raw["default"])


@lru_cache(maxsize=1)
def default_suggester() -> FollowUpSuggester:
	return FollowUpSuggester.from_resources()
