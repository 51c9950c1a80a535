"""Send support email use case."""

import logfire
from pydantic import BaseModel, Field

from diary.domain.service import EmailService, UserService
from diary.domain.value import UserId


class SupportEmailRequest(BaseModel):
    """Support form submission."""

    subject: str = Field(min_length=1, max_length=200)
    message: str = Field(min_length=1, max_length=5000)


class SupportEmailResponse(BaseModel):
    message: str


class SendSupportEmailUseCase:
    """Use case for forwarding a signed-in user's message to support."""

    def __init__(self, user_service: UserService, email_service: EmailService) -> None:
        self.user_service = user_service
        self.email_service = email_service

    async def execute(
        self, user_id: UserId, request: SupportEmailRequest
    ) -> SupportEmailResponse:
        """Email the support inbox on behalf of the user.

        Raises:
            DependencyError: If the message could not be delivered
        """
        user = await self.user_service.get_by_id(user_id)
        await self.email_service.send_support_message(
            user.name, user.email, request.subject.strip(), request.message.strip()
        )
        logfire.info("Support message sent", user_id=str(user_id))
        return SupportEmailResponse(message="Your message has been sent")
