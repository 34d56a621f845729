# For WSGI servers (Gunicorn, uWSGI, etc.): gunicorn --workers 1 wsgi:app
# Run a single worker process: every worker builds its own reminder
# scheduler and its own in-memory link code registry.
from app import get_app

app = get_app()
