"""Account URL configuration."""

from __future__ import annotations

from django.urls import path

from modules.accounts.views import LoginView, RegisterView

urlpatterns = [
    path("register", RegisterView.as_view(), name="register"),
    path("login", LoginView.as_view(), name="login"),
]
