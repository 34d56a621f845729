from flask import Blueprint
from .linking import linking_api
from .chat import chat_api
from .scheduler import scheduler_api

# Create main API blueprint
api_bp = Blueprint('api', __name__, url_prefix='/api')

# Register all API sub-blueprints
api_bp.register_blueprint(linking_api)
api_bp.register_blueprint(chat_api)
api_bp.register_blueprint(scheduler_api)

__all__ = ['api_bp']
