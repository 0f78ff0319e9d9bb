from __future__ import annotations

from fastapi import Request

from interview_mentor.services.mentor_service import MentorService
from interview_mentor.services.session_manager import SessionManager
from interview_mentor.utils.audit import JsonlAuditor


def get_mentor_service(request: Request) -> MentorService:
	return request.app.state.mentor_service


def get_session_manager(request: Request) -> SessionManager:
	return request.app.state.session_manager


def get_auditor(request: Request) -> JsonlAuditor:
	return request.app.state.auditor
