# Generated manually for the referrals app

import uuid
from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='CommissionCredit',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('plan', models.CharField(max_length=20)),
                ('field', models.CharField(choices=[('earnings', 'Direct referral earnings'), ('downline_earnings', 'Downline earnings')], max_length=20)),
                ('amount', models.BigIntegerField(validators=[MinValueValidator(1)])),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('beneficiary', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='commission_credits', to=settings.AUTH_USER_MODEL)),
                ('source_account', models.ForeignKey(null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='commissions_generated', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'commission_credits',
                'ordering': ['-created_at'],
                'indexes': [
                    models.Index(fields=['beneficiary', 'created_at'], name='commission__benefic_8f1a2c_idx'),
                    models.Index(fields=['source_account'], name='commission__source__5b7d3e_idx'),
                ],
            },
        ),
    ]
