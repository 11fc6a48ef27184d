"""
Management command to create sample data for testing the API.

Usage:
    python manage.py create_sample_data

This creates:
- 4 users (admin, alice, bob, charlie) where charlie was referred by bob
  and bob by alice
- an approved growth upgrade for charlie, which pays bob and alice
  their referral commissions
- a pending withdrawal for bob
- a pending enterprise upgrade request for alice
"""

from django.core.management.base import BaseCommand
from django.db import transaction

from apps.accounts.models import User
from apps.referrals.models import CommissionCredit
from apps.referrals.services import generate_referral_code
from apps.subscriptions.models import Subscription, SubscriptionRequest
from apps.subscriptions.services import (
    ensure_subscription,
    submit_subscription_request,
    approve_subscription,
)
from apps.withdrawals.models import WithdrawalRequest
from apps.withdrawals.services import request_withdrawal

SAMPLE_EMAILS = [
    'admin@example.com',
    'alice@example.com',
    'bob@example.com',
    'charlie@example.com',
]


class Command(BaseCommand):
    help = 'Create sample data for testing the API'

    def add_arguments(self, parser):
        parser.add_argument(
            '--clear',
            action='store_true',
            help='Clear existing sample data before creating new sample data',
        )

    @transaction.atomic
    def handle(self, *args, **options):
        if options['clear']:
            self.stdout.write('Clearing existing data...')
            self.clear_data()

        if User.objects.filter(email__in=SAMPLE_EMAILS).exists():
            self.stdout.write(self.style.WARNING(
                'Sample users already exist, run with --clear to recreate them.'
            ))
            return

        self.stdout.write('Creating sample data...')

        users = self.create_users()
        self.create_upgrades(users)
        self.create_withdrawals(users)

        self.stdout.write(self.style.SUCCESS('Sample data created successfully!'))
        self.stdout.write('')
        self.stdout.write('Test accounts:')
        self.stdout.write('  admin@example.com / admin123 (superuser)')
        self.stdout.write('  alice@example.com / password123')
        self.stdout.write('  bob@example.com / password123 (referred by alice)')
        self.stdout.write('  charlie@example.com / password123 (referred by bob)')

    def clear_data(self):
        """Clear sample accounts and everything hanging off them."""
        sample_users = User.objects.filter(email__in=SAMPLE_EMAILS)
        WithdrawalRequest.objects.filter(account__in=sample_users).delete()
        SubscriptionRequest.objects.filter(account__in=sample_users).delete()
        CommissionCredit.objects.filter(beneficiary__in=sample_users).delete()
        Subscription.objects.filter(account__in=sample_users).delete()
        sample_users.delete()

    def create_users(self):
        """Create the admin and a three-level referral chain."""
        self.stdout.write('  Creating users...')

        admin = User.objects.create_superuser(
            email='admin@example.com',
            password='admin123',
            display_name='Admin User',
        )

        alice = User.objects.create_user(
            email='alice@example.com',
            password='password123',
            display_name='Alice Adeyemi',
        )
        generate_referral_code(account=alice)

        bob = User.objects.create_user(
            email='bob@example.com',
            password='password123',
            display_name='Bob Bello',
            referred_by=alice,
        )
        generate_referral_code(account=bob)

        charlie = User.objects.create_user(
            email='charlie@example.com',
            password='password123',
            display_name='Charlie Chukwu',
            referred_by=bob,
        )

        for account in (admin, alice, bob, charlie):
            ensure_subscription(account=account)

        return {
            'admin': admin,
            'alice': alice,
            'bob': bob,
            'charlie': charlie,
        }

    def create_upgrades(self, users):
        """Approve charlie's upgrade and leave alice's pending."""
        self.stdout.write('  Creating subscription upgrades...')

        sub_request = submit_subscription_request(
            account=users['charlie'],
            plan='growth',
            proof_reference='SAMPLE-TRANSFER-001',
        )
        result = approve_subscription(request_id=sub_request.pk, admin=users['admin'])
        for entry in result.commissions_credited:
            self.stdout.write(f'    credited {entry.amount} ({entry.field}) to {entry.account_id}')

        submit_subscription_request(
            account=users['alice'],
            plan='enterprise',
            proof_reference='SAMPLE-TRANSFER-002',
        )

    def create_withdrawals(self, users):
        """Bob asks to withdraw part of his commission."""
        self.stdout.write('  Creating withdrawals...')

        bob = users['bob']
        bob.refresh_from_db()
        request_withdrawal(
            account=bob,
            amount=bob.wallet_balance // 2,
            destination='Sample Bank 0123456789',
        )
