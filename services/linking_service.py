"""
Account linking: web client asks for a code, user sends it to the LINE bot
"""
import re
from flask import current_app
from utils.helpers import sanitize_identity

LINK_COMMAND = re.compile(r'^LINK (.*)$', re.IGNORECASE | re.DOTALL)

LINKED_MESSAGE = "✅ Linked successfully!\nRegistered email: {email}"
INVALID_CODE_MESSAGE = "❌ Invalid or expired code."

class LinkingService:
    """Issues link codes and redeems them from LINE messages"""

    def __init__(self, registry, store, gateway):
        self.registry = registry
        self.store = store
        self.gateway = gateway

    def request_code(self, email):
        """Issue a one-time code for an email

        Raises:
            ValueError: if email is missing or blank
        """
        if not isinstance(email, str) or not email.strip():
            raise ValueError('Email required')

        return self.registry.issue(email.strip())

    def handle_event(self, event):
        """Process one webhook event

        Only text messages are looked at; everything else is acknowledged
        and dropped. Text that is not a LINK command is ignored without a
        reply.

        Returns:
            str: 'ignored', 'linked', 'invalid_code' or 'store_error'
        """
        if not isinstance(event, dict) or event.get('type') != 'message':
            return 'ignored'

        message = event.get('message') or {}
        if message.get('type') != 'text':
            return 'ignored'

        match = LINK_COMMAND.match((message.get('text') or '').strip())
        if not match:
            return 'ignored'

        code = match.group(1).strip()
        reply_token = event.get('replyToken')
        line_user_id = (event.get('source') or {}).get('userId')

        pending = self.registry.get(code) if line_user_id else None
        if pending is None:
            current_app.logger.info(f"Rejected link code {code!r}")
            self.gateway.reply(reply_token, INVALID_CODE_MESSAGE)
            return 'invalid_code'

        email = pending.email

        # The code is only consumed once the link is stored
        try:
            self.store.save_link(sanitize_identity(email), line_user_id)
        except Exception as e:
            current_app.logger.error(f"Could not store LINE link for {email}: {e}")
            self.gateway.reply(reply_token, INVALID_CODE_MESSAGE)
            return 'store_error'

        self.registry.redeem(code)
        current_app.logger.info(f"🔗 Linked {email} to LINE user {line_user_id}")

        self.gateway.reply(reply_token, LINKED_MESSAGE.format(email=email))
        return 'linked'
