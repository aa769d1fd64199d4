from workin.models.application import Application
from workin.models.job import Job
from workin.models.user import User

__all__ = ["User", "Job", "Application"]
