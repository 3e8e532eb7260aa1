"""
Accounts app URL configuration.

All routes are namespaced under ``accounts`` and included in the
project-level ``urls.py`` as::

    path('api/auth/', include('accounts.urls')),

Endpoint Map
------------
    POST   /login     → LoginView   (public)
    POST   /logout    → LogoutView
    GET    /me        → MeView
"""

from django.urls import path

from .views import LoginView, LogoutView, MeView

app_name = "accounts"

urlpatterns = [
    path("login", LoginView.as_view(), name="login"),
    path("logout", LogoutView.as_view(), name="logout"),
    path("me", MeView.as_view(), name="me"),
]
