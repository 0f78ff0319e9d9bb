from typing import Optional

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from starlette.responses import JSONResponse

from interview_mentor.config import Settings, settings as default_settings
from interview_mentor.utils.logging import configure_logging
from interview_mentor.utils.audit import JsonlAuditor
from interview_mentor.utils.security import verify_api_key
from interview_mentor.routers.chat import router as chat_router
from interview_mentor.routers.mock_interview import router as mock_interview_router
from interview_mentor.services.mentor_service import MentorService, build_mentor_service
from interview_mentor.services.session_manager import SessionManager


def create_app(
	settings: Optional[Settings] = None,
	mentor_service: Optional[MentorService] = None,
) -> FastAPI:
	settings = settings or default_settings
	configure_logging(settings.log_level)

	app = FastAPI(title="Interview Mentor Backend", version="0.1.0")
	app.state.settings = settings
	app.state.mentor_service = mentor_service or build_mentor_service(settings)
	app.state.session_manager = SessionManager(settings.sessions_dir)
	app.state.auditor = JsonlAuditor(settings.analytics_path)

	# CORS
	app.add_middleware(
		CORSMiddleware,
		allow_origins=settings.cors_allow_origins,
		# Wildcard origins require credentials to be False per CORS spec
		allow_credentials=False if settings.cors_allow_origins == ["*"] else True,
		allow_methods=["*"],
		allow_headers=["*"],
		max_age=3600,
	)

	@app.get("/health")
	async def health() -> JSONResponse:
		return JSONResponse({
			"status": "ok",
			"version": app.version,
			"llm": {"provider": "groq", "enabled": app.state.mentor_service.enabled},
		})

	# Routers
	protected = [Depends(verify_api_key)]
	app.include_router(chat_router, prefix="/api", tags=["mentor"], dependencies=protected)
	app.include_router(mock_interview_router, prefix="/api", tags=["mock-interview"], dependencies=protected)
	return app
