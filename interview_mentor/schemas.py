from pydantic import BaseModel, ConfigDict, Field
from typing import List, Literal, Optional
from datetime import datetime


Role = Literal["system", "user", "assistant"]

MAX_SUGGESTIONS = 4


class ChatMessage(BaseModel):
	model_config = ConfigDict(frozen=True)

	role: Role
	content: str


class AIResponse(BaseModel):
	message: str
	suggestions: List[str] = Field(default_factory=list, max_length=MAX_SUGGESTIONS)


class MockInterviewQuestion(BaseModel):
	question: str
	type: str = Field(..., description="coding|system-design|behavioral; unknown values are echoed back")
	company: Optional[str] = None
	hints: List[str] = Field(default_factory=list)


class ChatIn(BaseModel):
	messages: List[ChatMessage] = Field(..., description="Full ordered transcript, oldest first")


class MockInterviewIn(BaseModel):
	type: str = Field(default="coding", description="Interview type: coding|system-design|behavioral")
	company: Optional[str] = Field(default=None, description="Optional target company, e.g. Amazon")


class CreateSessionResponse(BaseModel):
	session_id: str


class SessionMessageIn(BaseModel):
	message: str = Field(..., min_length=1)


class SessionReply(BaseModel):
	session_id: str
	message: str
	suggestions: List[str]
	created_at: datetime


class TranscriptItem(BaseModel):
	role: Role
	content: str
	created_at: datetime


class SessionHistory(BaseModel):
	session_id: str
	items: List[TranscriptItem]


class SessionSummary(BaseModel):
	session_id: str
	last_update: datetime
	message_count: int


class SessionList(BaseModel):
	items: List[SessionSummary]
