from django import forms

from .records import FILTER_OPTIONS


def _choices(category, placeholder=None):
    choices = [(option, option) for option in FILTER_OPTIONS[category]]
    if placeholder:
        choices.insert(0, ('', placeholder))
    return choices


class JobForm(forms.Form):
    # Company and role are the only required fields
    company = forms.ChoiceField(choices=_choices('Company', 'Select Company'))
    role = forms.ChoiceField(choices=_choices('Jobs', 'Select Role'))
    experience = forms.CharField(required=False, widget=forms.TextInput(attrs={'placeholder': 'Experience'}))
    location = forms.ChoiceField(required=False, choices=_choices('Location', 'Select Location'))
    salary = forms.ChoiceField(required=False, choices=_choices('Salary', 'Select Salary'))
    skills = forms.MultipleChoiceField(required=False, choices=_choices('Skills'))

    responsibilities = forms.CharField(required=False, widget=forms.Textarea(attrs={'placeholder': 'Responsibilities'}))
    requirements = forms.CharField(required=False, widget=forms.Textarea(attrs={'placeholder': 'Requirements'}))
    niceToHave = forms.CharField(required=False, widget=forms.Textarea(attrs={'placeholder': 'Nice to have'}))
    about_company = forms.CharField(required=False, widget=forms.Textarea(attrs={'placeholder': 'About Company'}))

    DESCRIPTION_FIELDS = ('responsibilities', 'requirements', 'niceToHave')

    @classmethod
    def initial_from_draft(cls, draft):
        """Form values for an existing draft, so a failed submit re-renders as typed."""
        initial = {
            'company': draft.company,
            'role': draft.role,
            'experience': draft.experience,
            'location': draft.location,
            'salary': draft.salary,
            'skills': draft.skills,
            'about_company': draft.about_company,
        }
        initial.update({name: draft.description.get(name, '') for name in cls.DESCRIPTION_FIELDS})
        return initial

    def apply_to(self, intake):
        """Copy the cleaned values into the intake draft."""
        for name, value in self.cleaned_data.items():
            if name in self.DESCRIPTION_FIELDS:
                intake.set_description(name, value)
            else:
                intake.set_field(name, value)
