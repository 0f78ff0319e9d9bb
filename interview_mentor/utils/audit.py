from __future__ import annotations

import json
from pathlib import Path
from datetime import datetime, timezone
from typing import Optional, Dict, Any
import asyncio


class JsonlAuditor:
	"""Append-only JSONL trail of mentor traffic. A no-op until a path is configured."""

	def __init__(self, path: Optional[str] = None) -> None:
		self._path = Path(path) if path else None
		self._lock = asyncio.Lock()

	async def log(self, record: Dict[str, Any]) -> None:
		if not self._path:
			return
		line = json.dumps({"ts": datetime.now(timezone.utc).isoformat(), **record}, ensure_ascii=False)
		async with self._lock:
			self._path.parent.mkdir(parents=True, exist_ok=True)
			with self._path.open("a", encoding="utf-8") as f:
				f.write(line + "\n")
