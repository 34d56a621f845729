import logging
import requests

PUSH_URL = 'https://api.line.me/v2/bot/message/push'
REPLY_URL = 'https://api.line.me/v2/bot/message/reply'

class LineService:
    """Service for sending LINE messages

    Failures are logged and reported as False, never raised: one failed
    notification must not abort a reminder sweep or a webhook ack.
    """

    def __init__(self, access_token=None, timeout=10):
        self.access_token = access_token
        self.timeout = timeout

    def init_app(self, app):
        """Pick up credentials from the Flask config"""
        self.access_token = app.config.get('LINE_CHANNEL_ACCESS_TOKEN')
        self.timeout = app.config.get('OUTBOUND_TIMEOUT_SECONDS', 10)

        if not self.access_token:
            logging.warning("WARNING: LINE channel access token not configured. LINE messaging will be disabled.")

    def push(self, line_user_id: str, text: str) -> bool:
        """
        Send a text message to a LINE user outside any reply context

        Args:
            line_user_id: Recipient LINE user ID
            text: Message body

        Returns:
            True if LINE accepted the message, False otherwise
        """
        if not line_user_id:
            return False

        return self._post(PUSH_URL, {
            'to': line_user_id,
            'messages': [{'type': 'text', 'text': text}]
        })

    def reply(self, reply_token: str, text: str) -> bool:
        """
        Answer an inbound message through its one-shot reply token

        Args:
            reply_token: Token from the webhook event
            text: Message body

        Returns:
            True if LINE accepted the reply, False otherwise
        """
        if not reply_token:
            return False

        return self._post(REPLY_URL, {
            'replyToken': reply_token,
            'messages': [{'type': 'text', 'text': text}]
        })

    def _post(self, url, payload) -> bool:
        if not self.access_token:
            return False

        try:
            response = requests.post(
                url,
                json=payload,
                headers={'Authorization': f'Bearer {self.access_token}'},
                timeout=self.timeout
            )

            if response.ok:
                return True

            logging.error(f"LINE API error {response.status_code}: {response.text}")
            return False

        except requests.RequestException as e:
            logging.error(f"Error sending LINE message: {e}")
            return False

# Create singleton instance
line_service = LineService()
