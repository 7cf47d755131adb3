"""Walk and cafe session state machines"""

from silverville.sessions.cafe_session import CafeSession, star_rating
from silverville.sessions.walk_session import WalkSession

__all__ = ["CafeSession", "WalkSession", "star_rating"]
