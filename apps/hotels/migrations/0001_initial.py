import django.core.validators
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Hotel",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=50, unique=True, verbose_name="name")),
                ("address", models.CharField(max_length=255, verbose_name="address")),
                ("district", models.CharField(max_length=100, verbose_name="district")),
                ("province", models.CharField(max_length=100, verbose_name="province")),
                (
                    "postal_code",
                    models.CharField(
                        max_length=5,
                        validators=[
                            django.core.validators.RegexValidator(
                                message="Postal code must be 5 digits.",
                                regex="^\\d{5}$",
                            )
                        ],
                        verbose_name="postal code",
                    ),
                ),
                (
                    "tel",
                    models.CharField(
                        max_length=20,
                        validators=[
                            django.core.validators.RegexValidator(
                                message="Please add a valid telephone number.",
                                regex="^\\s*(?:\\+?(\\d{1,3}))?[-. (]*(\\d{3})[-. )]*(\\d{3})[-. ]*(\\d{4})(?: *x(\\d+))?\\s*$",
                            )
                        ],
                        verbose_name="telephone",
                    ),
                ),
                ("picture", models.URLField(blank=True, verbose_name="picture")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
            ],
            options={
                "verbose_name": "hotel",
                "verbose_name_plural": "hotels",
                "ordering": ["name"],
            },
        ),
    ]
