from flask import Blueprint, request, jsonify, current_app
from services import gemini_service

chat_api = Blueprint('chat_api', __name__)

@chat_api.route('/chat', methods=['POST'])
def chat():
    """Forward the request body to Gemini and return its response as-is"""
    payload = request.get_json(silent=True)
    if payload is None:
        payload = {}
    
    try:
        return jsonify(gemini_service.generate_content(payload))
    except Exception as e:
        current_app.logger.error(f"Gemini passthrough failed: {e}")
        return jsonify({'error': str(e)}), 500
