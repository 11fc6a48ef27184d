# Generated manually for the subscriptions app

import uuid
from django.conf import settings
from django.db import migrations, models
import django.db.models.deletion
import django.utils.timezone


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Subscription',
            fields=[
                ('account', models.OneToOneField(on_delete=django.db.models.deletion.CASCADE, primary_key=True, related_name='subscription', serialize=False, to=settings.AUTH_USER_MODEL)),
                ('plan', models.CharField(choices=[('free', 'Free'), ('growth', 'Growth'), ('enterprise', 'Enterprise')], default='free', max_length=20)),
                ('status', models.CharField(choices=[('active', 'Active'), ('pending_approval', 'Pending approval')], default='active', max_length=20)),
                ('started_at', models.DateTimeField(blank=True, null=True)),
                ('cycle_started_at', models.DateTimeField(default=django.utils.timezone.now)),
                ('usage', models.JSONField(blank=True, default=dict)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'db_table': 'subscriptions',
                'indexes': [
                    models.Index(fields=['plan', 'status'], name='subscriptio_plan_2c91d4_idx'),
                ],
            },
        ),
        migrations.CreateModel(
            name='SubscriptionRequest',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('requested_plan', models.CharField(choices=[('free', 'Free'), ('growth', 'Growth'), ('enterprise', 'Enterprise')], max_length=20)),
                ('proof_reference', models.CharField(blank=True, max_length=255)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('account', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='subscription_requests', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'subscription_requests',
                'ordering': ['created_at'],
                'constraints': [
                    models.UniqueConstraint(fields=('account',), name='unique_pending_subscription_request'),
                ],
            },
        ),
    ]
