import uvicorn

from interview_mentor.config import settings


if __name__ == "__main__":
	uvicorn.run("interview_mentor.main:create_app", factory=True, host=settings.host, port=settings.port)
