# Models package
from hotel_ops.models.user import User, UserRole
from hotel_ops.models.room import Room, RoomStatus, OTHER_ROOM_NUMBER, OTHER_ROOM_TYPE
from hotel_ops.models.issue import IssueTitle, Issue
from hotel_ops.models.log import Log, LogAction, LogTarget
