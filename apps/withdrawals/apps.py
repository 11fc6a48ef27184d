from django.apps import AppConfig


class WithdrawalsConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'apps.withdrawals'
    label = 'withdrawals'
    verbose_name = 'Withdrawals'
