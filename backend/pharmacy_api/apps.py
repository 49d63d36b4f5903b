from django.apps import AppConfig


class PharmacyApiConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "pharmacy_api"
    verbose_name = "Pharmacy route matching API"
