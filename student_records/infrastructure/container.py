# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from datetime import timedelta
from functools import cached_property

from student_records.application.services.password_hashing import BcryptPasswordHasher
from student_records.application.use_cases.students import (
    CreateStudentUseCase,
    DeleteStudentUseCase,
    GetDashboardStatsUseCase,
    GetStudentUseCase,
    ListStudentsUseCase,
    UpdateStudentUseCase,
)
from student_records.application.use_cases.users.login_user import LoginUserUseCase
from student_records.application.use_cases.users.logout_user import LogoutUserUseCase
from student_records.application.use_cases.users.register_user import RegisterUserUseCase
from student_records.infrastructure.auth.session_cookie import SessionCookie
from student_records.infrastructure.repositories.students import SqlAlchemyStudentRepository
from student_records.infrastructure.repositories.users.sqlalchemy_user_repository import (
    SqlAlchemySessionStore,
    SqlAlchemyUserRepository,
)
from student_records.interfaces.http.controllers.auth_controller import AuthController
from student_records.interfaces.http.controllers.dashboard_controller import DashboardController
from student_records.interfaces.http.controllers.students_controller import StudentsController
from student_records.shared.config import AppConfig, load_config


class Container:
    def __init__(self, config: AppConfig | None = None) -> None:
        self._config = config or load_config()

    @property
    def config(self) -> AppConfig:
        return self._config

    @cached_property
    def password_hasher(self) -> BcryptPasswordHasher:
        return BcryptPasswordHasher(rounds=self._config.security.bcrypt_rounds)

    @cached_property
    def user_repository(self) -> SqlAlchemyUserRepository:
        return SqlAlchemyUserRepository(self.password_hasher)

    @cached_property
    def session_store(self) -> SqlAlchemySessionStore:
        return SqlAlchemySessionStore()

    @cached_property
    def session_cookie(self) -> SessionCookie:
        return SessionCookie(self._config)

    @cached_property
    def student_repository(self) -> SqlAlchemyStudentRepository:
        return SqlAlchemyStudentRepository()

    @cached_property
    def register_user_use_case(self) -> RegisterUserUseCase:
        return RegisterUserUseCase(users=self.user_repository)

    @cached_property
    def login_user_use_case(self) -> LoginUserUseCase:
        return LoginUserUseCase(
            users=self.user_repository,
            sessions=self.session_store,
            session_ttl=timedelta(seconds=self._config.security.session_lifetime),
        )

    @cached_property
    def logout_user_use_case(self) -> LogoutUserUseCase:
        return LogoutUserUseCase(sessions=self.session_store)

    @cached_property
    def auth_controller(self) -> AuthController:
        return AuthController(
            register_use_case=self.register_user_use_case,
            login_use_case=self.login_user_use_case,
            logout_use_case=self.logout_user_use_case,
            session_cookie=self.session_cookie,
        )

    # Students

    @cached_property
    def students_controller(self) -> StudentsController:
        students = self.student_repository
        return StudentsController(
            list_students=ListStudentsUseCase(students=students),
            get_student=GetStudentUseCase(students=students),
            create_student=CreateStudentUseCase(students=students),
            update_student=UpdateStudentUseCase(students=students),
            delete_student=DeleteStudentUseCase(students=students),
        )

    @cached_property
    def dashboard_controller(self) -> DashboardController:
        return DashboardController(
            get_dashboard_stats=GetDashboardStatsUseCase(students=self.student_repository)
        )


container = Container()
