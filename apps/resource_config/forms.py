"""
apps.resource_config.forms
~~~~~~~~~~~~~~~~~~~~~~~~~~~
The bulk operations admin form.  It has no visible fields: the two submit
buttons post ``operation=disable`` or ``operation=enable``.
"""
from django import forms

from .services import bulk_ops


class BulkOperationsForm(forms.Form):
    form_id = "jsonapi_bulk_form"

    DISABLE = "disable"
    ENABLE = "enable"

    #: (operation, button label, handler)
    ACTIONS = {
        DISABLE: ("Disable all resources", bulk_ops.disable_all_resources),
        ENABLE: ("Enable all resources", bulk_ops.enable_all_resources),
    }

    operation = forms.ChoiceField(
        choices=[(key, label) for key, (label, _) in ACTIONS.items()],
        widget=forms.HiddenInput,
    )

    def buttons(self) -> list[tuple[str, str]]:
        return [(key, label) for key, (label, _) in self.ACTIONS.items()]

    def submit(self) -> str:
        """Run the chosen bulk operation and return its confirmation message."""
        _, handler = self.ACTIONS[self.cleaned_data["operation"]]
        _, message = handler()
        return message
