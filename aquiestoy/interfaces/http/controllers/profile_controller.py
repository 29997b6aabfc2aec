# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Blueprint, Response, g, jsonify

from aquiestoy.application.use_cases.users.get_profile import GetProfileUseCase
from aquiestoy.interfaces.http.auth_guard import BearerAuthGuard
from aquiestoy.interfaces.http.dto.auth import ProfileResponseDTO, UserDTO


class ProfileController:
    def __init__(
        self,
        *,
        profile_use_case: GetProfileUseCase,
        auth_guard: BearerAuthGuard,
    ) -> None:
        self._profile_use_case = profile_use_case
        self._auth_guard = auth_guard

    def profile(self) -> Response:
        user = self._profile_use_case.execute(g.user_id)
        payload = ProfileResponseDTO(
            user=UserDTO(id=user.id, email=user.email, name=user.name)
        ).model_dump(exclude_none=True)
        return jsonify(payload)

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("profile", __name__, url_prefix="/api")
        bp.add_url_rule(
            "/profile",
            view_func=self._auth_guard(self.profile),
            methods=["GET"],
            endpoint="profile_get",
        )
        return bp
