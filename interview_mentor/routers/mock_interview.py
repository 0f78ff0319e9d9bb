from fastapi import APIRouter, Depends

from interview_mentor.dependencies import get_auditor, get_mentor_service
from interview_mentor.schemas import MockInterviewIn, MockInterviewQuestion
from interview_mentor.services.mentor_service import MentorService
from interview_mentor.utils.audit import JsonlAuditor


router = APIRouter()


@router.post("/mock-interview", response_model=MockInterviewQuestion)
async def generate_mock_interview(
	payload: MockInterviewIn,
	mentor: MentorService = Depends(get_mentor_service),
	auditor: JsonlAuditor = Depends(get_auditor),
):
	answered = await mentor.mock_interview(payload.type, payload.company)
	question = answered.value
	await auditor.log({
		"type": "mock_interview",
		"interview_type": payload.type,
		"company": payload.company,
		"question": question.question,
		"source": answered.source,
		"failure": answered.failure_code,
		"llm_enabled": mentor.enabled,
	})
	return question
