"""Helpers for rendering job cards and the detail pane."""

INITIALS_PLACEHOLDER = "?"
CARD_SKILL_LIMIT = 3


def company_initials(name):
    """First letter of the first two words, upper-cased ("Data Flow Systems" -> "DF")."""
    tokens = (name or "").split()
    if not tokens:
        return INITIALS_PLACEHOLDER
    return "".join(token[0] for token in tokens[:2]).upper()


def card_skills(skills, limit=CARD_SKILL_LIMIT):
    """Skills shown on a card, and how many are hidden behind the +N badge."""
    return list(skills[:limit]), max(len(skills) - limit, 0)
