from campaign.forms.donation_form import DonationForm

__all__ = ["DonationForm"]
