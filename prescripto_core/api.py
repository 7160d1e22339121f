"""
OTP and Notification Routes
===========================
FastAPI router exposing OTP issuance, verification and the raw senders.
"""

from typing import Optional

from fastapi import APIRouter
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field

from prescripto_core.notifications import EmailSender, SmsSender
from prescripto_core.otp import IssuanceMode, OTPService


class SendOtpRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    email: Optional[str] = None
    phone_number: Optional[str] = Field(default=None, alias="phoneNumber")


class SendOtpMailRequest(BaseModel):
    email: Optional[str] = None


class VerifyOtpRequest(BaseModel):
    identifier: Optional[str] = None
    code: Optional[str] = Field(default=None, alias="otp")

    model_config = ConfigDict(populate_by_name=True, coerce_numbers_to_str=True)


class SendSmsRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    phone_number: Optional[str] = Field(default=None, alias="phoneNumber")
    message: Optional[str] = None


class SendEmailRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    to: Optional[str] = None
    subject: Optional[str] = None
    html_content: Optional[str] = Field(default=None, alias="htmlContent")


def create_otp_router(
    service: OTPService,
    email_sender: Optional[EmailSender] = None,
    sms_sender: Optional[SmsSender] = None,
) -> APIRouter:
    """
    Create the OTP and notification router.

    Args:
        service: OTP service handling issuance and verification
        email_sender: Sender for /send-email (defaults to the issuer's)
        sms_sender: Sender for /send-sms (defaults to the issuer's)

    Returns:
        FastAPI router with /otp/send, /otp/send-mail, /otp/verify,
        /send-sms and /send-email
    """
    router = APIRouter(tags=["Services"])
    email_sender = email_sender or service.issuer.email_sender
    sms_sender = sms_sender or service.issuer.sms_sender

    @router.post("/otp/send")
    async def send_otp(data: SendOtpRequest):
        """Send one OTP by email and/or SMS."""
        response = await service.issue_otp(
            email=data.email,
            phone=data.phone_number,
            mode=IssuanceMode.DUAL_CHANNEL,
        )
        return JSONResponse(status_code=response.status_code, content=response.body)

    @router.post("/otp/send-mail")
    async def send_otp_mail(data: SendOtpMailRequest):
        """Send an OTP by email only."""
        response = await service.issue_otp(
            email=data.email,
            mode=IssuanceMode.SINGLE_CHANNEL,
        )
        return JSONResponse(status_code=response.status_code, content=response.body)

    @router.post("/otp/verify")
    async def verify_otp(data: VerifyOtpRequest):
        response = await service.verify_otp(data.identifier, data.code)
        return JSONResponse(status_code=response.status_code, content=response.body)

    @router.post("/send-sms")
    async def send_sms(data: SendSmsRequest):
        """Send an arbitrary SMS."""
        if not data.phone_number or not data.message:
            return JSONResponse(status_code=400, content={"error": "Missing parameters"})
        if sms_sender is None:
            return JSONResponse(status_code=500, content={"error": "SMS channel is not configured"})

        result = await sms_sender.send_sms(data.phone_number, data.message)
        return JSONResponse(status_code=200 if result.success else 400, content=result.to_dict())

    @router.post("/send-email")
    async def send_email(data: SendEmailRequest):
        """Send an HTML email; the OTP template is used when no content is given."""
        if not data.to or not data.subject:
            return JSONResponse(
                status_code=400,
                content={"message": "Missing data required to send the email."},
            )
        if email_sender is None:
            return JSONResponse(status_code=500, content={"message": "Email channel is not configured"})

        result = await email_sender.send_email(data.to, data.subject, data.html_content)
        if result.success:
            return JSONResponse(
                status_code=200,
                content={"message": "Email sent successfully", "data": result.data},
            )
        return JSONResponse(
            status_code=500,
            content={"message": result.message, "error": result.error},
        )

    return router
