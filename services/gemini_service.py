import requests

GEMINI_URL = 'https://generativelanguage.googleapis.com/v1beta/models/{model}:generateContent'

class GeminiService:
    """Thin passthrough to the Gemini generateContent endpoint"""
    
    def __init__(self):
        self.api_key = None
        self.model = 'gemini-2.0-flash'
        self.timeout = 10
    
    def init_app(self, app):
        self.api_key = app.config.get('GEMINI_API_KEY')
        self.model = app.config.get('GEMINI_MODEL', self.model)
        self.timeout = app.config.get('OUTBOUND_TIMEOUT_SECONDS', 10)
        
        if not self.api_key:
            app.logger.warning("WARNING: GEMINI_API_KEY not configured. /api/chat will fail.")
    
    def generate_content(self, payload):
        """Forward a request body and return Gemini's JSON response verbatim
        
        Raises:
            RuntimeError: if no API key is configured
            requests.RequestException: on transport failure
            ValueError: if the response is not JSON
        """
        if not self.api_key:
            raise RuntimeError('Gemini API key not configured')
        
        response = requests.post(
            GEMINI_URL.format(model=self.model),
            params={'key': self.api_key},
            json=payload,
            timeout=self.timeout
        )
        return response.json()

gemini_service = GeminiService()
