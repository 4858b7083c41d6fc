# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .sqlalchemy_student_repository import SqlAlchemyStudentRepository

__all__ = ["SqlAlchemyStudentRepository"]
