"""
Donation form.
Parses form-encoded or JSON bodies; required-field checks live in DonationStore.record().
"""

from flask_wtf import FlaskForm
from wtforms import DecimalField, StringField
from wtforms.validators import Optional


class AmountField(DecimalField):
    """DecimalField that also takes JSON numbers (50, 12.5) without float artefacts."""

    def process_formdata(self, valuelist):
        if valuelist and valuelist[0] is None:
            # JSON null reads as a missing amount
            self.data = None
            return
        if valuelist and not isinstance(valuelist[0], str):
            valuelist = [str(valuelist[0])]
        super().process_formdata(valuelist)


class DonationForm(FlaskForm):
    class Meta:
        csrf = False

    name = StringField("Name", validators=[Optional()])
    email = StringField("Email", validators=[Optional()])
    amount = AmountField("Amount (USD)", validators=[Optional()])
    message = StringField("Message", validators=[Optional()])
