from fastapi import APIRouter, HTTPException, Depends
from datetime import datetime

from interview_mentor.dependencies import get_auditor, get_mentor_service, get_session_manager
from interview_mentor.schemas import (
	AIResponse,
	ChatIn,
	CreateSessionResponse,
	SessionHistory,
	SessionList,
	SessionMessageIn,
	SessionReply,
	SessionSummary,
	TranscriptItem,
)
from interview_mentor.services.fallback_router import last_user_message
from interview_mentor.services.mentor_service import MentorService
from interview_mentor.services.session_manager import SessionManager
from interview_mentor.utils.audit import JsonlAuditor


router = APIRouter()

SESSION_NOT_FOUND = "Session not found. Create one via POST /api/session and reuse its session_id."


@router.post("/chat", response_model=AIResponse)
async def chat(
	payload: ChatIn,
	mentor: MentorService = Depends(get_mentor_service),
	auditor: JsonlAuditor = Depends(get_auditor),
):
	if not payload.messages:
		raise HTTPException(status_code=400, detail="Transcript must contain at least one message")

	answered = await mentor.answer(payload.messages)
	reply = answered.value
	await auditor.log({
		"type": "chat",
		"question": last_user_message(payload.messages),
		"answer": reply.message,
		"source": answered.source,
		"failure": answered.failure_code,
		"llm_enabled": mentor.enabled,
	})
	return reply


@router.post("/session", response_model=CreateSessionResponse)
async def create_session(sessions: SessionManager = Depends(get_session_manager)):
	state = await sessions.create_session()
	return CreateSessionResponse(session_id=state.session_id)


@router.post("/session/{session_id}/message", response_model=SessionReply)
async def send_session_message(
	session_id: str,
	payload: SessionMessageIn,
	mentor: MentorService = Depends(get_mentor_service),
	sessions: SessionManager = Depends(get_session_manager),
	auditor: JsonlAuditor = Depends(get_auditor),
):
	if not payload.message.strip():
		raise HTTPException(status_code=400, detail="Empty message")
	try:
		turn = sessions.turn(session_id)
	except KeyError:
		raise HTTPException(status_code=404, detail=SESSION_NOT_FOUND)

	# One turn at a time per session so user and assistant entries alternate
	async with turn:
		try:
			await sessions.append_message(session_id, "user", payload.message)
			state = await sessions.get_required(session_id)
		except KeyError:
			raise HTTPException(status_code=404, detail=SESSION_NOT_FOUND)
		answered = await mentor.answer(state.transcript())
		reply = answered.value
		try:
			entry = await sessions.append_message(session_id, "assistant", reply.message)
		except KeyError:
			raise HTTPException(status_code=404, detail=SESSION_NOT_FOUND)

	await auditor.log({
		"type": "session_message",
		"session_id": session_id,
		"question": payload.message,
		"answer": reply.message,
		"source": answered.source,
		"failure": answered.failure_code,
		"llm_enabled": mentor.enabled,
	})
	return SessionReply(
		session_id=session_id,
		message=reply.message,
		suggestions=reply.suggestions,
		created_at=datetime.fromisoformat(entry["created_at"]),
	)


@router.get("/history/{session_id}", response_model=SessionHistory)
async def get_history(session_id: str, sessions: SessionManager = Depends(get_session_manager)):
	try:
		state = await sessions.get_required(session_id)
	except KeyError:
		raise HTTPException(status_code=404, detail="Session not found")
	items = [
		TranscriptItem(role=m["role"], content=m["content"], created_at=datetime.fromisoformat(m["created_at"]))
		for m in state.messages
	]
	return SessionHistory(session_id=session_id, items=items)


@router.get("/sessions", response_model=SessionList)
async def list_sessions(sessions: SessionManager = Depends(get_session_manager)):
	items_raw = await sessions.list_sessions()
	items = [
		SessionSummary(
			session_id=i["session_id"],
			last_update=datetime.fromisoformat(i["last_update"]),
			message_count=i["message_count"],
		)
		for i in items_raw
	]
	return SessionList(items=items)


@router.delete("/session/{session_id}")
async def delete_session(session_id: str, sessions: SessionManager = Depends(get_session_manager)):
	deleted = await sessions.delete_session(session_id)
	if not deleted:
		raise HTTPException(status_code=404, detail="Session not found")
	return {"status": "ok", "deleted": True}


@router.delete("/history/{session_id}")
async def clear_history(session_id: str, sessions: SessionManager = Depends(get_session_manager)):
	try:
		await sessions.clear_history(session_id)
	except KeyError:
		raise HTTPException(status_code=404, detail="Session not found")
	return {"status": "ok"}
