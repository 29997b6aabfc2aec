# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Application dependency container."""

from __future__ import annotations

from datetime import timedelta
from functools import cached_property

from aquiestoy.application.services.password_hashing import BcryptPasswordHasher
from aquiestoy.application.services.tokens import JwtTokenService
from aquiestoy.application.use_cases.users.get_profile import GetProfileUseCase
from aquiestoy.application.use_cases.users.login_user import LoginUserUseCase
from aquiestoy.application.use_cases.users.register_user import RegisterUserUseCase
from aquiestoy.infrastructure.db import Database
from aquiestoy.infrastructure.repositories.users.sqlalchemy_user_repository import (
    SqlAlchemyUserRepository,
)
from aquiestoy.interfaces.http.auth_guard import BearerAuthGuard
from aquiestoy.interfaces.http.controllers.auth_controller import AuthController
from aquiestoy.interfaces.http.controllers.misc_controller import MiscController
from aquiestoy.interfaces.http.controllers.profile_controller import ProfileController
from aquiestoy.shared.config import AppConfig


class Container:
    def __init__(self, *, config: AppConfig, database: Database) -> None:
        self.config = config
        self.database = database

    @cached_property
    def password_hasher(self) -> BcryptPasswordHasher:
        return BcryptPasswordHasher(rounds=self.config.auth.bcrypt_rounds)

    @cached_property
    def token_service(self) -> JwtTokenService:
        return JwtTokenService(
            self.config.auth.jwt_secret,
            ttl=timedelta(seconds=self.config.auth.jwt_ttl_seconds),
        )

    @cached_property
    def user_repository(self) -> SqlAlchemyUserRepository:
        return SqlAlchemyUserRepository(self.database)

    @cached_property
    def register_user_use_case(self) -> RegisterUserUseCase:
        return RegisterUserUseCase(
            users=self.user_repository,
            tokens=self.token_service,
            password_hasher=self.password_hasher,
        )

    @cached_property
    def login_user_use_case(self) -> LoginUserUseCase:
        return LoginUserUseCase(
            users=self.user_repository,
            tokens=self.token_service,
            password_hasher=self.password_hasher,
        )

    @cached_property
    def get_profile_use_case(self) -> GetProfileUseCase:
        return GetProfileUseCase(users=self.user_repository)

    @cached_property
    def auth_guard(self) -> BearerAuthGuard:
        return BearerAuthGuard(tokens=self.token_service)

    @cached_property
    def auth_controller(self) -> AuthController:
        return AuthController(
            register_use_case=self.register_user_use_case,
            login_use_case=self.login_user_use_case,
        )

    @cached_property
    def profile_controller(self) -> ProfileController:
        return ProfileController(
            profile_use_case=self.get_profile_use_case,
            auth_guard=self.auth_guard,
        )

    @cached_property
    def misc_controller(self) -> MiscController:
        return MiscController(database=self.database)
