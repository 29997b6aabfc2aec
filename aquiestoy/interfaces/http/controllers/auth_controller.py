# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus

from flask import Blueprint, Response, jsonify, request
from pydantic import ValidationError

from aquiestoy.application.use_cases.users.login_user import LoginUserUseCase
from aquiestoy.application.use_cases.users.register_user import RegisterUserUseCase
from aquiestoy.domain.users.entities import AuthenticatedUser
from aquiestoy.interfaces.http.dto.auth import (
    AuthResponseDTO,
    LoginRequestDTO,
    RegisterRequestDTO,
    UserDTO,
)
from aquiestoy.shared.errors.validation import raise_validation_error
from aquiestoy.shared.logging import logger


def _auth_payload(message: str, result: AuthenticatedUser) -> dict:
    user = UserDTO(id=result.id, email=result.email, name=result.name, token=result.token)
    return AuthResponseDTO(message=message, user=user).model_dump()


class AuthController:
    def __init__(
        self,
        *,
        register_use_case: RegisterUserUseCase,
        login_use_case: LoginUserUseCase,
    ) -> None:
        self._register_use_case = register_use_case
        self._login_use_case = login_use_case

    def register(self) -> tuple[Response, int]:
        try:
            dto = RegisterRequestDTO.model_validate(request.get_json(silent=True) or {})
        except ValidationError as exc:
            raise_validation_error(exc)

        result = self._register_use_case.execute(dto.email, dto.password, dto.name)

        logger.info(f"auth.register: ok user_id={result.id}")
        payload = _auth_payload("User registered successfully", result)
        return jsonify(payload), HTTPStatus.CREATED

    def login(self) -> tuple[Response, int]:
        try:
            dto = LoginRequestDTO.model_validate(request.get_json(silent=True) or {})
        except ValidationError as exc:
            raise_validation_error(exc)

        result = self._login_use_case.execute(dto.email, dto.password)

        logger.info(f"auth.login: ok user_id={result.id}")
        payload = _auth_payload("Login successful", result)
        return jsonify(payload), HTTPStatus.OK

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("auth", __name__, url_prefix="/auth")
        bp.add_url_rule("/register", view_func=self.register, methods=["POST"])
        bp.add_url_rule("/login", view_func=self.login, methods=["POST"])
        return bp
