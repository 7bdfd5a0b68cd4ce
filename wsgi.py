"""
WSGI config for freightdesk project.

It exposes the WSGI callable as a module-level variable named ``application``.
"""

import os

import dotenv
from django.core.wsgi import get_wsgi_application

dotenv.load_dotenv()

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "settings")

application = get_wsgi_application()
