from smtplib import SMTPException
from unittest import mock

from django.core import mail
from django.db import DatabaseError
from django.test import override_settings
from rest_framework.test import APITestCase

from portfolio.models import ContactSubmission, Profile
from portfolio.tasks import send_contact_email

from .helpers import AdminAPITestCase

MESSAGE = {"name": "A", "email": "visitor@example.com", "subject": "Hello", "message": "Nice site <3"}


class ContactFormTests(APITestCase):
    def test_submission_is_stored_and_mailed(self):
        response = self.client.post("/api/contact", MESSAGE, format="json")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {"success": True})

        submission = ContactSubmission.objects.get()
        self.assertFalse(submission.read)
        self.assertEqual(submission.name, "A")

        self.assertEqual(len(mail.outbox), 1)
        sent = mail.outbox[0]
        self.assertEqual(sent.subject, "Portfolio Contact: Hello")
        self.assertEqual(sent.to, ["owner@example.com"])
        self.assertEqual(sent.reply_to, ["visitor@example.com"])
        html, _ = sent.alternatives[0]
        self.assertIn("Nice site &lt;3", html)

    def test_profile_email_is_preferred_recipient(self):
        Profile.objects.create(name="Ada", email="ada@example.com")
        self.client.post("/api/contact", MESSAGE, format="json")
        self.assertEqual(mail.outbox[0].to, ["ada@example.com"])

    @override_settings(CONTACT_EMAIL="")
    def test_no_recipient_still_stores(self):
        response = self.client.post("/api/contact", MESSAGE, format="json")
        self.assertEqual(response.json(), {"success": True})
        self.assertEqual(ContactSubmission.objects.count(), 1)
        self.assertEqual(mail.outbox, [])

    def test_queue_failure_does_not_fail_the_request(self):
        with mock.patch.object(send_contact_email, "delay", side_effect=ConnectionError("broker down")):
            response = self.client.post("/api/contact", MESSAGE, format="json")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(ContactSubmission.objects.count(), 1)

    def test_mail_failure_does_not_fail_the_request(self):
        with mock.patch("portfolio.tasks.EmailMultiAlternatives.send", side_effect=SMTPException("down")):
            response = self.client.post("/api/contact", MESSAGE, format="json")
        self.assertEqual(response.json(), {"success": True})
        self.assertEqual(ContactSubmission.objects.count(), 1)

    def test_recipient_lookup_failure_falls_back_to_configured_address(self):
        with mock.patch(
            "portfolio.views.ContentStore.contact_recipient", side_effect=DatabaseError("profile read failed")
        ):
            response = self.client.post("/api/contact", dict(MESSAGE, message="0123456789"), format="json")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {"success": True})
        self.assertEqual(ContactSubmission.objects.count(), 1)
        self.assertEqual(mail.outbox[0].to, ["owner@example.com"])

    def test_every_field_is_required(self):
        for field in MESSAGE:
            with self.subTest(field=field):
                body = {k: v for k, v in MESSAGE.items() if k != field}
                response = self.client.post("/api/contact", body, format="json")
                self.assertEqual(response.status_code, 400)
                self.assertIn(field, response.json()["details"])
        self.assertEqual(ContactSubmission.objects.count(), 0)

    def test_email_must_be_well_formed(self):
        response = self.client.post("/api/contact", dict(MESSAGE, email="not-an-email"), format="json")
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["error"], "validation_error")


class ContactInboxTests(AdminAPITestCase):
    def test_submission_shows_up_unread_then_read(self):
        self.client.post("/api/contact", MESSAGE, format="json")
        inbox = self.client.get("/api/admin/contacts").json()
        self.assertEqual(len(inbox), 1)
        self.assertFalse(inbox[0]["read"])
        self.assertIn("createdAt", inbox[0])

        self.client.put("/api/admin/contacts", {"id": inbox[0]["id"], "read": True}, format="json")
        self.assertTrue(ContactSubmission.objects.get().read)

        inbox = self.client.get("/api/admin/contacts").json()
        self.assertEqual(len(inbox), 1)
        self.assertTrue(inbox[0]["read"])
