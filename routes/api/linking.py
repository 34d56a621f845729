from flask import Blueprint, request, jsonify
from services import linking_service
from utils.decorators import validate_json, handle_exceptions

linking_api = Blueprint('linking_api', __name__)

@linking_api.route('/request-code', methods=['POST'])
@linking_api.route('/request-line-token', methods=['POST'])
@validate_json(['email'])
@handle_exceptions
def request_code():
    """Issue a one-time code the user sends to the LINE bot as 'LINK <code>'"""
    data = request.get_json()
    code = linking_service.request_code(data['email'])
    return jsonify({'code': code})
