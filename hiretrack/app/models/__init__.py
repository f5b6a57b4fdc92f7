from hiretrack.app.models.user import User
from hiretrack.app.models.cv import CV
from hiretrack.app.models.application import Application
from hiretrack.app.models.reminder import Reminder
