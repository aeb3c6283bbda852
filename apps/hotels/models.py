"""Hotel domain models."""

from __future__ import annotations

from django.core.validators import RegexValidator  # type: ignore
from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore

from apps.users.models import PHONE_VALIDATOR

POSTAL_CODE_VALIDATOR = RegexValidator(
    regex=r"^\d{5}$",
    message=_("Postal code must be 5 digits."),
)


class Hotel(models.Model):
    """A hotel that accepts bookings."""

    name = models.CharField(_("name"), max_length=50, unique=True)
    address = models.CharField(_("address"), max_length=255)
    district = models.CharField(_("district"), max_length=100)
    province = models.CharField(_("province"), max_length=100)
    postal_code = models.CharField(_("postal code"), max_length=5, validators=[POSTAL_CODE_VALIDATOR])
    tel = models.CharField(_("telephone"), max_length=20, validators=[PHONE_VALIDATOR])
    picture = models.URLField(_("picture"), blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name = _("hotel")
        verbose_name_plural = _("hotels")
        ordering = ["name"]

    def __str__(self) -> str:
        return self.name
