from storerate.models.base import Base
from storerate.models.user import User
from storerate.models.store import Store
from storerate.models.rating import Rating
