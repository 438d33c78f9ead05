"""Forms for the groups app."""

from django import forms

from .models import Group


class GroupForm(forms.ModelForm):
    """Edit a group's name, description and visibility settings."""

    class Meta:
        model = Group
        fields = ["name", "id_number", "description", "visibility", "participation"]

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        if self.instance.pk and self.instance.memberships.exists():
            self.fields["visibility"].disabled = True
            self.fields["visibility"].help_text = (
                "Group visibility cannot be changed once the group has members."
            )

    def clean(self):
        cleaned_data = super().clean()
        visibility = cleaned_data.get("visibility")
        if visibility in Group.NON_PARTICIPATION_VISIBILITIES:
            cleaned_data["participation"] = False
        return cleaned_data

    def clean_id_number(self):
        id_number = self.cleaned_data["id_number"].strip()
        if not id_number:
            return id_number
        duplicates = Group.objects.filter(
            course_id=self.instance.course_id, id_number=id_number
        ).exclude(pk=self.instance.pk)
        if duplicates.exists():
            raise forms.ValidationError("This ID number is already used by another group.")
        return id_number
