from .completion import ActivityConfiguration, GradeRecord

__all__ = ["ActivityConfiguration", "GradeRecord"]
