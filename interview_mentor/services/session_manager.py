from __future__ import annotations

from dataclasses import dataclass, field, asdict
from datetime import datetime, timezone
from typing import Dict, List, Optional
import uuid
import asyncio
import json
import logging
from pathlib import Path

from interview_mentor.schemas import ChatMessage, Role


logger = logging.getLogger(__name__)

GREETING = "Hello! I'm your AI interview mentor. How can I help you prepare for your MAANG interviews today?"


def _now() -> datetime:
	return datetime.now(timezone.utc)


@dataclass
class SessionState:
	session_id: str
	messages: List[dict] = field(default_factory=list)
	last_update: datetime = field(default_factory=_now)

	def transcript(self) -> List[ChatMessage]:
		return [ChatMessage(role=m["role"], content=m["content"]) for m in self.messages]


def _entry(role: Role, content: str) -> dict:
	return {"role": role, "content": content, "created_at": _now().isoformat()}


class SessionManager:
	"""Chat sessions kept in memory and mirrored to one JSON file each."""

	def __init__(self, data_dir: str | Path = Path("data") / "sessions") -> None:
		self._sessions: Dict[str, SessionState] = {}
		self._lock = asyncio.Lock()
		self._turn_locks: Dict[str, asyncio.Lock] = {}
		self._data_dir = Path(data_dir)
		self._data_dir.mkdir(parents=True, exist_ok=True)
		self._load_all()

	def _session_path(self, session_id: str) -> Path:
		return self._data_dir / f"{session_id}.json"

	def _serialize(self, state: SessionState) -> dict:
		data = asdict(state)
		data["last_update"] = state.last_update.isoformat()
		return data

	def _deserialize(self, data: dict) -> SessionState:
		last_update = data.get("last_update")
		try:
			last_dt = datetime.fromisoformat(last_update) if isinstance(last_update, str) else _now()
		except ValueError:
			last_dt = _now()
		return SessionState(
			session_id=data["session_id"],
			messages=list(data.get("messages", [])),
			last_update=last_dt,
		)

	def _load_all(self) -> None:
		for p in self._data_dir.glob("*.json"):
			try:
				with p.open("r", encoding="utf-8") as f:
					state = self._deserialize(json.load(f))
			except (OSError, ValueError, KeyError) as e:
				logger.warning("Skipping unreadable session file %s: %s", p, e)
				continue
			self._sessions[state.session_id] = state

	def _save(self, state: SessionState) -> None:
		path = self._session_path(state.session_id)
		try:
			with path.open("w", encoding="utf-8") as f:
				json.dump(self._serialize(state), f, ensure_ascii=False, indent=2)
		except OSError as e:
			# Memory stays authoritative; the file catches up on the next write
			logger.warning("Could not persist session %s: %s", state.session_id, e)

	async def create_session(self) -> SessionState:
		async with self._lock:
			session_id = str(uuid.uuid4())
			state = SessionState(session_id=session_id, messages=[_entry("assistant", GREETING)])
			self._sessions[session_id] = state
			self._save(state)
			return state

	def turn(self, session_id: str) -> asyncio.Lock:
		"""Lock held for one whole conversational turn, user message to reply.

		Raises KeyError for unknown sessions.
		"""
		if session_id not in self._sessions:
			raise KeyError("session not found")
		return self._turn_locks.setdefault(session_id, asyncio.Lock())

	async def get(self, session_id: str) -> Optional[SessionState]:
		return self._sessions.get(session_id)

	async def get_required(self, session_id: str) -> SessionState:
		state = await self.get(session_id)
		if state is None:
			raise KeyError("session not found")
		return state

	async def append_message(self, session_id: str, role: Role, content: str) -> dict:
		state = await self.get_required(session_id)
		entry = _entry(role, content)
		state.messages.append(entry)
		state.last_update = _now()
		self._save(state)
		return entry

	async def list_sessions(self) -> List[dict]:
		"""Return lightweight session summaries for frontend lists."""
		items: List[dict] = []
		for s in self._sessions.values():
			items.append({
				"session_id": s.session_id,
				"last_update": s.last_update.isoformat(),
				"message_count": len(s.messages),
			})
		# Newest first
		items.sort(key=lambda x: x["last_update"], reverse=True)
		return items

	async def delete_session(self, session_id: str) -> bool:
		"""Delete an entire session and its persisted file. Returns True if deleted."""
		async with self._lock:
			state = self._sessions.pop(session_id, None)
			self._turn_locks.pop(session_id, None)
			if state is None:
				return False
			self._session_path(session_id).unlink(missing_ok=True)
			return True

	async def clear_history(self, session_id: str) -> None:
		"""Reset a session's transcript to the greeting."""
		state = await self.get_required(session_id)
		state.messages = [_entry("assistant", GREETING)]
		state.last_update = _now()
		self._save(state)
