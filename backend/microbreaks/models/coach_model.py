from pydantic import BaseModel
from enum import Enum

class SoundtrackType(str, Enum):
    PLAYLIST = "playlist"
    SOUNDSCAPE = "soundscape"

class SoundtrackSuggestion(BaseModel):
    title: str
    description: str
    type: SoundtrackType
    query: str  # Search string for the user's music app
