DEFAULT_NAME = "ahí"

TIRED_TEMPLATE = "{name}, respira profundo. Tómate estos minutos para ti. {experience} te ayudará a resetear."
CALM_TEMPLATE = "Disfruta de la paz, {name}. {experience} es perfecto para mantener esa serenidad."
ENERGETIC_TEMPLATE = "¡Vamos, {name}! Un poco de aire fresco te vendrá genial. Mira: {experience}."


class CoachService:
    def generate_coach_message(self, mood: str, experience_info: str, name: str = None) -> str:
        """
        Picks one of three fixed templates by keyword in the mood text.
        Matching is case sensitive.
        """
        if "agotado" in mood or "bloqueada" in mood:
            template = TIRED_TEMPLATE
        elif "calma" in mood:
            template = CALM_TEMPLATE
        else:
            template = ENERGETIC_TEMPLATE

        return template.format(name=name or DEFAULT_NAME, experience=experience_info)
