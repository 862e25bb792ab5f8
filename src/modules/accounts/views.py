"""Account API views: registration and login (token issuance)."""

from __future__ import annotations

from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from modules.accounts.dtos import CredentialsDTO
from modules.accounts.exceptions import (
    InvalidAccountRequest,
    InvalidCredentials,
    UsernameTaken,
)
from modules.accounts.services import AccountService
from modules.core.exceptions import error_response


class RegisterView(APIView):
    """POST /api/register"""

    authentication_classes: list = []
    permission_classes = [AllowAny]

    def post(self, request: Request) -> Response:
        try:
            dto = CredentialsDTO.from_payload(request.data)
        except InvalidAccountRequest as exc:
            return error_response(str(exc), status.HTTP_400_BAD_REQUEST)

        try:
            AccountService().register(dto)
        except UsernameTaken as exc:
            return error_response(str(exc), status.HTTP_400_BAD_REQUEST)

        return Response(
            {"success": True, "message": "Registration successful. Please log in."}
        )


class LoginView(APIView):
    """POST /api/login"""

    authentication_classes: list = []
    permission_classes = [AllowAny]
    throttle_scope = "login"

    def post(self, request: Request) -> Response:
        try:
            dto = CredentialsDTO.from_payload(request.data)
        except InvalidAccountRequest as exc:
            return error_response(str(exc), status.HTTP_400_BAD_REQUEST)

        try:
            token = AccountService().login(dto)
        except InvalidCredentials as exc:
            return error_response(str(exc), status.HTTP_401_UNAUTHORIZED)

        return Response({"success": True, "token": token})
