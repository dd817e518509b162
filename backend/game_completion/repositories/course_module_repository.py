# backend/game_completion/repositories/course_module_repository.py
"""Repository for course-module placement rows."""

from typing import Optional

from sqlalchemy.orm import Session

from ..core.constants import COMPONENT_NAME
from ..models.course_module import CourseModule
from .base_repository import BaseRepository


class CourseModuleRepository(BaseRepository[CourseModule]):
    def __init__(self, db: Session):
        super().__init__(db, CourseModule)

    def get_by_instance(
        self, instance_id: str, modname: str = COMPONENT_NAME
    ) -> Optional[CourseModule]:
        return self.find_one_by(modname=modname, instance=instance_id)
