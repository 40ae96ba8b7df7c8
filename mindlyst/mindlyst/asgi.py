# mindlyst/mindlyst/asgi.py
import os
os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'mindlyst.settings')
import django
django.setup()
from django.core.asgi import get_asgi_application
from channels.routing import ProtocolTypeRouter, URLRouter
from channels.sessions import CookieMiddleware
from contacts.routing import websocket_urlpatterns as contacts_websocket_urlpatterns


application = ProtocolTypeRouter({
    "http": get_asgi_application(),
    "websocket": CookieMiddleware(
        URLRouter(contacts_websocket_urlpatterns)
    ),
})
