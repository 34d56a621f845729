"""Shared fixtures: a testing app on in-memory SQLite and a fake LINE gateway."""

import json

import pytest

from app import create_app
from models import db, Reminder, LineLink
from services import link_registry, line_service
from services.signature import compute_signature


class FakeGateway:
    """Records pushes and replies instead of calling LINE."""

    def __init__(self):
        self.pushes = []
        self.replies = []
        self.succeed = True

    def push(self, line_user_id, text):
        self.pushes.append((line_user_id, text))
        return self.succeed

    def reply(self, reply_token, text):
        self.replies.append((reply_token, text))
        return self.succeed


@pytest.fixture
def app():
    link_registry.clear()
    app = create_app("testing")
    with app.app_context():
        yield app
        db.session.remove()
        db.drop_all()
    link_registry.clear()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def gateway(monkeypatch):
    fake = FakeGateway()
    monkeypatch.setattr(line_service, "push", fake.push)
    monkeypatch.setattr(line_service, "reply", fake.reply)
    return fake


@pytest.fixture
def add_reminder(app):
    def _add(owner_key, reminder_id, time_iso, text="dentist", **flags):
        reminder = Reminder(
            owner_key=owner_key,
            reminder_id=reminder_id,
            time_iso=time_iso,
            text=text,
            **flags,
        )
        db.session.add(reminder)
        db.session.commit()
        return reminder

    return _add


@pytest.fixture
def add_link(app):
    def _add(owner_key, line_user_id):
        link = LineLink(owner_key=owner_key, line_user_id=line_user_id)
        db.session.add(link)
        db.session.commit()
        return link

    return _add


@pytest.fixture
def post_webhook(client, app):
    """POST a webhook body signed with the test channel secret."""

    def _post(payload, signature=None):
        body = json.dumps(payload).encode("utf-8")
        if signature is None:
            signature = compute_signature(app.config["LINE_CHANNEL_SECRET"], body)
        return client.post(
            "/webhook",
            data=body,
            headers={"X-Line-Signature": signature},
            content_type="application/json",
        )

    return _post
