from .webhook import webhook_bp
from .api import api_bp

def register_blueprints(app):
    """Register all blueprints with the Flask application"""
    
    # LINE webhook (no prefix, the path is registered with LINE)
    app.register_blueprint(webhook_bp)
    
    # Register API routes
    app.register_blueprint(api_bp)

__all__ = ['register_blueprints', 'webhook_bp', 'api_bp']
