from django import template

from core.presentation import card_skills, company_initials

register = template.Library()


@register.filter
def initials(company):
    return company_initials(company)


@register.inclusion_tag('core/partials/skill_chips.html')
def skill_chips(skills):
    shown, hidden = card_skills(skills)
    return {'shown': shown, 'hidden': hidden}
