"""
WSGI entry point for the portfolio CMS (gunicorn ``portfolio_backend.wsgi``).
"""

import os

from django.core.wsgi import get_wsgi_application

# Hosting dashboards sometimes store the value with trailing whitespace
os.environ["DJANGO_SETTINGS_MODULE"] = (
    os.environ.get("DJANGO_SETTINGS_MODULE") or "portfolio_backend.settings"
).strip()

application = get_wsgi_application()
