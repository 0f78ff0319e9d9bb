from __future__ import annotations

from fastapi import Header, HTTPException, Request, status
from typing import Optional


async def verify_api_key(request: Request, authorization: Optional[str] = Header(default=None)) -> None:
	expected = request.app.state.settings.api_key
	if not expected:
		return
	if not authorization or not authorization.startswith("Bearer "):
		raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Missing API key")
	key = authorization.removeprefix("Bearer ")
	if key != expected:
		raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid API key")
