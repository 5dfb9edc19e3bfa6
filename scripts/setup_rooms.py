"""Seed the starter rooms, including the sentinel Other room."""
import sys
import os

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from hotel_ops.database import SessionLocal, engine, Base
from hotel_ops.models.room import OTHER_ROOM_NUMBER, OTHER_ROOM_TYPE, Room, floor_for

INITIAL_ROOMS = [
    {"number": "101", "type": "Standard"},
    {"number": "102", "type": "Deluxe"},
    {"number": "201", "type": "Suite"},
    {"number": OTHER_ROOM_NUMBER, "type": OTHER_ROOM_TYPE},
]


def setup_rooms(rooms=INITIAL_ROOMS) -> int:
    """Create any missing rooms. Returns how many were added."""
    Base.metadata.create_all(bind=engine)
    
    db = SessionLocal()
    created = 0
    try:
        for room_data in rooms:
            if db.query(Room).filter(Room.number == room_data["number"]).first():
                print(f"Room {room_data['number']} already exists")
                continue
            db.add(Room(floor=floor_for(room_data["number"]), **room_data))
            created += 1
            print(f"Created room: {room_data['number']}")
        db.commit()
    finally:
        db.close()
    return created


if __name__ == "__main__":
    setup_rooms()
