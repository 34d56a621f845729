from flask import Blueprint, request, jsonify, current_app
from services import linking_service
from utils.decorators import line_signature_required

webhook_bp = Blueprint('webhook', __name__)

@webhook_bp.route('/webhook', methods=['POST'])
@webhook_bp.route('/line/webhook', methods=['POST'])
@line_signature_required
def line_webhook():
    """Handle the first event of a LINE webhook delivery

    LINE expects a 200 for every signed delivery, so processing errors are
    logged rather than returned.
    """
    update = request.get_json(silent=True)
    events = update.get('events') if isinstance(update, dict) else None
    
    if not events:
        return jsonify({'ok': True})
    
    try:
        outcome = linking_service.handle_event(events[0])
        current_app.logger.debug(f"Webhook event handled: {outcome}")
    except Exception as e:
        current_app.logger.error(f"Error handling webhook: {e}")
    
    return jsonify({'ok': True})
