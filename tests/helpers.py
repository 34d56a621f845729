"""Test helpers shared across test modules."""

from datetime import datetime

import pytz

TOKYO = pytz.timezone("Asia/Tokyo")


def tokyo(*args):
    """Aware Asia/Tokyo datetime."""
    return TOKYO.localize(datetime(*args))


def text_event(text, user_id="U123", reply_token="reply-token"):
    """A LINE webhook text message event."""
    return {
        "type": "message",
        "replyToken": reply_token,
        "source": {"type": "user", "userId": user_id},
        "message": {"type": "text", "id": "1", "text": text},
    }
