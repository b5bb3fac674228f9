from microbreaks.models.coach_model import SoundtrackSuggestion, SoundtrackType

CALM_SET = [
    SoundtrackSuggestion(title="Nature Sounds", description="Sonidos de bosque y lluvia",
                         type=SoundtrackType.SOUNDSCAPE, query="nature sounds"),
    SoundtrackSuggestion(title="Piano Chill", description="Piano suave para desconectar",
                         type=SoundtrackType.PLAYLIST, query="piano chill"),
]

CREATIVE_SET = [
    SoundtrackSuggestion(title="Lofi Beats", description="Ritmos suaves para fluir",
                         type=SoundtrackType.PLAYLIST, query="lofi beats"),
    SoundtrackSuggestion(title="Classical Focus", description="Música clásica estimulante",
                         type=SoundtrackType.PLAYLIST, query="classical focus"),
]

DEFAULT_SET = [
    SoundtrackSuggestion(title="Acoustic Relax", description="Guitarra acústica",
                         type=SoundtrackType.PLAYLIST, query="acoustic relax"),
    SoundtrackSuggestion(title="Ambient Noise", description="Ruido blanco suave",
                         type=SoundtrackType.SOUNDSCAPE, query="ambient noise"),
]

# Checked in order; first match wins
MOOD_RULES = [
    (("calma", "tranquil"), CALM_SET),
    (("creativ", "inspir"), CREATIVE_SET),
]


class SoundtrackService:
    def suggest_soundtrack(self, mood: str) -> list[SoundtrackSuggestion]:
        m = mood.lower()
        for keywords, suggestions in MOOD_RULES:
            if any(keyword in m for keyword in keywords):
                return list(suggestions)
        return list(DEFAULT_SET)
