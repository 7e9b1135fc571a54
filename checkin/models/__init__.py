"""SQLAlchemy ORM models.

All models are imported here so that ``Base.metadata`` knows every table
before the schema is created at startup.
"""

from checkin.models.caregiver import Caregiver  # noqa: F401
from checkin.models.kid import CaregiverKidLink, Kid  # noqa: F401
from checkin.models.room import Room  # noqa: F401
from checkin.models.sign_event import SignEvent  # noqa: F401
from checkin.models.teacher import Teacher  # noqa: F401

__all__ = [
    "Caregiver",
    "CaregiverKidLink",
    "Kid",
    "Room",
    "SignEvent",
    "Teacher",
]
