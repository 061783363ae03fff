# backend/tests/test_notifications_service.py

import logging
from typing import List

import pytest

from fgpe_mail.notifications.schemas import (
    EmailMessage,
    EmailRequestValidationError,
    EmailSendError,
    EmailSendResult,
    RawEmailRequest,
    StatusNotificationRequest,
)
from fgpe_mail.notifications.service import NotificationService
from fgpe_mail.notifications.templates import subject_for


class DummyTransport:
    def __init__(self, result: EmailSendResult | None = None) -> None:
        self.messages: List[EmailMessage] = []
        self.result = result or EmailSendResult(data={"id": "email-1"})

    def send(self, message: EmailMessage) -> EmailSendResult:
        self.messages.append(message)
        return self.result


def _service(transport: DummyTransport) -> NotificationService:
    return NotificationService(
        transport=transport,
        sender_address="noreply@fgpe.test",
        portal_url="https://portal.fgpe.test",
    )


def _status_request(**overrides) -> StatusNotificationRequest:
    body = {
        "email": "a@b.com",
        "requestData": {
            "id": "R1",
            "companyName": "Acme",
            "loanAmount": 5000000,
            "status": "under_review",
        },
        "previousStatus": "submitted",
    }
    body.update(overrides)
    return StatusNotificationRequest.model_validate(body)


def test_send_status_notification_builds_message():
    transport = DummyTransport()
    service = _service(transport)

    result = service.send_status_notification(_status_request())

    assert result.data == {"id": "email-1"}
    assert len(transport.messages) == 1

    message = transport.messages[0]
    assert message.from_address == "noreply@fgpe.test"
    assert message.to == "a@b.com"
    assert message.subject == subject_for("under_review")
    assert "Acme" in message.html
    assert "https://portal.fgpe.test" in message.html


@pytest.mark.parametrize(
    "overrides, expected_message",
    [
        ({"email": None}, "Le paramètre email est requis"),
        ({"email": ""}, "Le paramètre email est requis"),
        ({"requestData": None}, "Le paramètre requestData est requis"),
        (
            {"requestData": {"id": "R1", "companyName": "Acme", "loanAmount": 1}},
            "Le statut de la demande (requestData.status) est requis",
        ),
        (
            {"requestData": {"id": "R1", "status": ""}},
            "Le statut de la demande (requestData.status) est requis",
        ),
    ],
)
def test_send_status_notification_validation(overrides, expected_message):
    transport = DummyTransport()
    service = _service(transport)

    with pytest.raises(EmailRequestValidationError) as excinfo:
        service.send_status_notification(_status_request(**overrides))

    assert str(excinfo.value) == expected_message
    assert transport.messages == []


def test_send_raw_passes_fields_through():
    transport = DummyTransport()
    service = _service(transport)

    service.send_raw(RawEmailRequest(to="a@b.com", subject="Sujet", html="<p>x</p>"))

    message = transport.messages[0]
    assert (message.to, message.subject, message.html) == ("a@b.com", "Sujet", "<p>x</p>")
    assert message.from_address == "noreply@fgpe.test"


def test_send_raw_validation():
    transport = DummyTransport()
    service = _service(transport)

    with pytest.raises(EmailRequestValidationError):
        service.send_raw(RawEmailRequest(to="a@b.com", subject="Sujet"))

    assert transport.messages == []


def test_provider_error_is_returned_and_logged(caplog):
    error = EmailSendError(name="validation_error", message="bad sender", status_code=403)
    transport = DummyTransport(result=EmailSendResult(error=error))
    service = _service(transport)

    with caplog.at_level(logging.INFO, logger="fgpe_mail.notifications.service"):
        result = service.send_status_notification(_status_request())

    assert not result.ok
    assert result.error == error

    err_records = [
        r for r in caplog.records if r.levelno == logging.ERROR and "bad sender" in r.getMessage()
    ]
    assert err_records, "ERROR log should contain the provider message"


def test_success_is_logged_at_info(caplog):
    service = _service(DummyTransport())

    with caplog.at_level(logging.INFO, logger="fgpe_mail.notifications.service"):
        service.send_status_notification(_status_request())

    info_records = [
        r for r in caplog.records if r.levelno == logging.INFO and "email-1" in r.getMessage()
    ]
    assert info_records


def test_transport_factory_is_called_only_when_sending():
    calls: List[int] = []
    transport = DummyTransport()

    def factory() -> DummyTransport:
        calls.append(1)
        return transport

    service = NotificationService(
        sender_address="noreply@fgpe.test",
        transport_factory=factory,
    )

    with pytest.raises(EmailRequestValidationError):
        service.send_status_notification(_status_request(email=None))
    assert calls == []

    service.send_status_notification(_status_request())
    service.send_status_notification(_status_request())

    assert calls == [1]
    assert len(transport.messages) == 2


def test_transport_factory_error_surfaces_on_send():
    def factory() -> DummyTransport:
        raise RuntimeError("transport not configured")

    service = NotificationService(sender_address="noreply@fgpe.test", transport_factory=factory)

    with pytest.raises(RuntimeError, match="transport not configured"):
        service.send_raw(RawEmailRequest(to="a@b.com", subject="Sujet", html="<p>x</p>"))


def test_service_requires_transport_or_factory():
    with pytest.raises(ValueError):
        NotificationService(sender_address="noreply@fgpe.test")
