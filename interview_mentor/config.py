from pydantic_settings import BaseSettings
from pydantic import field_validator
from typing import List
from urllib.parse import urlparse
from dotenv import load_dotenv


# Ensure .env is loaded eagerly
load_dotenv(dotenv_path=".env")


class Settings(BaseSettings):
	# Server
	host: str = "0.0.0.0"
	port: int = 8000
	cors_allow_origins: List[str] = [
		"http://localhost:3000",
		"http://localhost:5173",
		"http://127.0.0.1:3000",
		"http://127.0.0.1:5173",
	]

	# Auth
	api_key: str | None = None  # simple bearer key if provided

	# Groq (OpenAI-compatible chat completions)
	groq_api_key: str | None = None
	groq_model: str = "llama-3.3-70b-versatile"
	groq_base_url: str | None = None
	answer_temperature: float = 0.7
	groq_max_tokens: int = 1500
	groq_timeout_seconds: float = 20.0

	# Mock interviews
	mock_interview_seed: int | None = None  # fixed seed makes fallback picks repeatable

	# Sessions
	sessions_dir: str = "data/sessions"

	# Logging
	log_level: str = "INFO"
	analytics_path: str | None = None  # e.g., logs/mentor.jsonl

	@field_validator("answer_temperature")
	@classmethod
	def clamp_temperature(cls, v: float) -> float:
		return max(0.0, min(1.0, v))

	@field_validator("groq_timeout_seconds")
	@classmethod
	def positive_timeout(cls, v: float) -> float:
		if v <= 0:
			raise ValueError("groq_timeout_seconds must be positive")
		return v

	@field_validator("groq_base_url")
	@classmethod
	def absolute_base_url(cls, v: str | None) -> str | None:
		if v is None or not v.strip():
			return None
		parsed = urlparse(v.strip())
		if parsed.scheme not in ("http", "https") or not parsed.netloc:
			raise ValueError("groq_base_url must be an absolute http(s) URL")
		return v.strip()

	@field_validator("cors_allow_origins", mode="before")
	@classmethod
	def parse_cors_origins(cls, v):
		# Allow environment variable override
		if isinstance(v, str):
			return [origin.strip() for origin in v.split(",")]
		return v

	@property
	def llm_enabled(self) -> bool:
		return bool(self.groq_api_key and self.groq_api_key.strip())

	class Config:
		env_file = ".env"
		env_file_encoding = "utf-8"


settings = Settings()
