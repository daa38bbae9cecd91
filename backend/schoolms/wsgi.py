"""WSGI config for the schoolms project."""
import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'schoolms.settings')

application = get_wsgi_application()
