"""
Service layer tests for subscription approval.

Tests cover:
- Two-tier commission payout
- Transaction safety (all-or-nothing approval)
- Authorization
- Concurrent approvals sharing an upline
"""

import pytest
import threading
from uuid import uuid4
from unittest.mock import patch
from django.db import DatabaseError, connection
from django.test import TransactionTestCase

from apps.accounts.models import User
from apps.referrals.models import CommissionCredit
from apps.referrals.services import credit
from apps.subscriptions.models import Subscription, SubscriptionRequest
from apps.subscriptions.services import (
    ensure_subscription,
    submit_subscription_request,
    approve_subscription,
    reject_subscription,
    consume_quota,
    # Exceptions
    SubscriptionRequestNotFoundError,
    InsufficientPermissionsError,
    UnknownPlanError,
    DuplicateSubscriptionRequestError,
)
from .conftest import make_account

LEDGER_FIELDS = ('wallet_balance', 'total_earnings', 'earnings', 'downline_earnings')


def ledger_snapshot(*accounts):
    return {
        account.pk: User.objects.filter(pk=account.pk).values(*LEDGER_FIELDS).get()
        for account in accounts
    }


# =============================================================================
# Submit Tests
# =============================================================================

@pytest.mark.django_db
class TestSubmitSubscriptionRequest:

    def test_submit_marks_subscription_pending(self, subscriber):
        sub_request = submit_subscription_request(
            account=subscriber,
            plan='enterprise',
            proof_reference='  TRF-9  ',
        )

        assert sub_request.requested_plan == 'enterprise'
        assert sub_request.proof_reference == 'TRF-9'
        subscription = Subscription.objects.get(account=subscriber)
        assert subscription.status == 'pending_approval'
        assert subscription.plan == 'free'

    @pytest.mark.parametrize('plan', ['free', 'platinum', ''])
    def test_only_paid_plans_can_be_requested(self, subscriber, plan):
        with pytest.raises(UnknownPlanError):
            submit_subscription_request(account=subscriber, plan=plan)

        assert not SubscriptionRequest.objects.filter(account=subscriber).exists()

    def test_duplicate_request(self, growth_request, subscriber):
        with pytest.raises(DuplicateSubscriptionRequestError):
            submit_subscription_request(account=subscriber, plan='enterprise')

        assert SubscriptionRequest.objects.filter(account=subscriber).count() == 1

    def test_creates_missing_subscription(self, db):
        account = User.objects.create_user(email='nosub@example.com', password='TestPass123!')

        submit_subscription_request(account=account, plan='growth')

        assert Subscription.objects.get(account=account).status == 'pending_approval'


# =============================================================================
# Approval Tests
# =============================================================================

@pytest.mark.django_db
class TestApproveSubscription:

    def test_two_tier_commission(self, growth_request, staff_user, subscriber, referrer, upline):
        result = approve_subscription(request_id=growth_request.id, admin=staff_user)

        referrer.refresh_from_db()
        upline.refresh_from_db()
        assert referrer.earnings == 300_000
        assert referrer.total_earnings == 300_000
        assert referrer.wallet_balance == 300_000
        assert referrer.downline_earnings == 0
        assert upline.downline_earnings == 75_000
        assert upline.total_earnings == 75_000
        assert upline.wallet_balance == 75_000
        assert upline.earnings == 0

        subscription = Subscription.objects.get(account=subscriber)
        assert subscription.plan == 'growth'
        assert subscription.status == 'active'
        assert subscription.started_at is not None

        assert result.account_id == subscriber.id
        assert result.plan == 'growth'
        assert [(c.account_id, c.field, c.amount) for c in result.commissions_credited] == [
            (referrer.id, 'earnings', 300_000),
            (upline.id, 'downline_earnings', 75_000),
        ]

    def test_enterprise_commission(self, subscriber, staff_user, referrer, upline):
        sub_request = submit_subscription_request(account=subscriber, plan='enterprise')

        approve_subscription(request_id=sub_request.id, admin=staff_user)

        referrer.refresh_from_db()
        upline.refresh_from_db()
        assert referrer.earnings == 500_000
        assert upline.downline_earnings == 125_000

    def test_subscriber_and_bystanders_unchanged(self, growth_request, staff_user, subscriber, loner):
        before = ledger_snapshot(subscriber, loner, staff_user)

        approve_subscription(request_id=growth_request.id, admin=staff_user)

        assert ledger_snapshot(subscriber, loner, staff_user) == before

    def test_no_referrer_credits_nothing(self, loner, staff_user):
        sub_request = submit_subscription_request(account=loner, plan='growth')

        result = approve_subscription(request_id=sub_request.id, admin=staff_user)

        assert result.commissions_credited == []
        assert not CommissionCredit.objects.exists()
        assert Subscription.objects.get(account=loner).plan == 'growth'

    def test_direct_referrer_without_upline(self, upline, staff_user):
        direct = make_account('direct@example.com', referred_by=upline)
        sub_request = submit_subscription_request(account=direct, plan='growth')

        result = approve_subscription(request_id=sub_request.id, admin=staff_user)

        upline.refresh_from_db()
        assert upline.earnings == 300_000
        assert upline.downline_earnings == 0
        assert len(result.commissions_credited) == 1

    def test_request_deleted_and_audit_written(self, growth_request, staff_user, subscriber, referrer, upline):
        approve_subscription(request_id=growth_request.id, admin=staff_user)

        assert not SubscriptionRequest.objects.filter(pk=growth_request.id).exists()
        credits = CommissionCredit.objects.filter(source_account=subscriber)
        assert {(c.beneficiary_id, c.field, c.amount, c.plan) for c in credits} == {
            (referrer.id, 'earnings', 300_000, 'growth'),
            (upline.id, 'downline_earnings', 75_000, 'growth'),
        }

    def test_approval_resets_usage_cycle(self, growth_request, staff_user, subscriber):
        consume_quota(account=subscriber, feature='blog_posts')

        approve_subscription(request_id=growth_request.id, admin=staff_user)

        subscription = Subscription.objects.get(account=subscriber)
        assert subscription.usage['blog_posts'] == 0

    def test_second_approval_not_found(self, growth_request, staff_user, referrer):
        approve_subscription(request_id=growth_request.id, admin=staff_user)

        with pytest.raises(SubscriptionRequestNotFoundError):
            approve_subscription(request_id=growth_request.id, admin=staff_user)

        referrer.refresh_from_db()
        assert referrer.earnings == 300_000

    def test_unknown_request(self, staff_user):
        with pytest.raises(SubscriptionRequestNotFoundError):
            approve_subscription(request_id=uuid4(), admin=staff_user)

    def test_non_staff_cannot_approve(self, growth_request, referrer, subscriber):
        before = ledger_snapshot(referrer)

        with pytest.raises(InsufficientPermissionsError):
            approve_subscription(request_id=growth_request.id, admin=referrer)

        assert ledger_snapshot(referrer) == before
        assert SubscriptionRequest.objects.filter(pk=growth_request.id).exists()
        assert Subscription.objects.get(account=subscriber).status == 'pending_approval'

    def test_missing_admin(self, growth_request):
        with pytest.raises(InsufficientPermissionsError):
            approve_subscription(request_id=growth_request.id, admin=None)

    def test_unpriced_plan_pays_nothing(self, settings, growth_request, staff_user, subscriber, referrer):
        settings.SUBSCRIPTION_PLAN_PRICES = {'enterprise': 2_500_000}

        with patch('apps.referrals.commission.logger') as mock_logger:
            result = approve_subscription(request_id=growth_request.id, admin=staff_user)

        mock_logger.warning.assert_called_once()
        assert result.commissions_credited == []
        referrer.refresh_from_db()
        assert referrer.earnings == 0
        assert Subscription.objects.get(account=subscriber).plan == 'growth'

    def test_failure_rolls_back_everything(self, growth_request, staff_user, subscriber, referrer, upline):
        """If the upline credit fails, the referrer credit is undone too."""
        before = ledger_snapshot(referrer, upline)

        with patch(
            'apps.subscriptions.services.approval.credit',
            side_effect=[None, DatabaseError('disk full')],
        ):
            with pytest.raises(DatabaseError):
                approve_subscription(request_id=growth_request.id, admin=staff_user)

        assert ledger_snapshot(referrer, upline) == before
        assert SubscriptionRequest.objects.filter(pk=growth_request.id).exists()
        assert Subscription.objects.get(account=subscriber).status == 'pending_approval'
        assert not CommissionCredit.objects.exists()

    def test_rollback_undoes_real_credit(self, growth_request, staff_user, referrer, upline):
        """Same as above but the first credit really hits the database."""

        def credit_then_fail(*, account_id, field, amount):
            if field == 'downline_earnings':
                raise DatabaseError('connection lost')
            credit(account_id=account_id, field=field, amount=amount)

        with patch('apps.subscriptions.services.approval.credit', side_effect=credit_then_fail):
            with pytest.raises(DatabaseError):
                approve_subscription(request_id=growth_request.id, admin=staff_user)

        referrer.refresh_from_db()
        assert referrer.earnings == 0
        assert referrer.wallet_balance == 0


# =============================================================================
# Rejection Tests
# =============================================================================

@pytest.mark.django_db
class TestRejectSubscription:

    def test_reject_returns_account_to_free(self, growth_request, staff_user, subscriber):
        subscription = reject_subscription(request_id=growth_request.id, admin=staff_user)

        assert subscription.plan == 'free'
        assert subscription.status == 'active'
        assert not SubscriptionRequest.objects.filter(pk=growth_request.id).exists()

    def test_reject_never_touches_ledger(self, growth_request, staff_user, subscriber, referrer, upline):
        before = ledger_snapshot(subscriber, referrer, upline)

        reject_subscription(request_id=growth_request.id, admin=staff_user)

        assert ledger_snapshot(subscriber, referrer, upline) == before
        assert not CommissionCredit.objects.exists()

    def test_reject_keeps_usage_counters(self, growth_request, staff_user, subscriber):
        consume_quota(account=subscriber, feature='images')

        reject_subscription(request_id=growth_request.id, admin=staff_user)

        assert Subscription.objects.get(account=subscriber).usage['images'] == 1

    def test_reject_downgrades_paid_account(self, staff_user, subscriber):
        """A paid account whose new request is rejected ends up on free."""
        first = submit_subscription_request(account=subscriber, plan='growth')
        approve_subscription(request_id=first.id, admin=staff_user)
        second = submit_subscription_request(account=subscriber, plan='enterprise')

        reject_subscription(request_id=second.id, admin=staff_user)

        assert Subscription.objects.get(account=subscriber).plan == 'free'

    def test_non_staff_cannot_reject(self, growth_request, subscriber):
        with pytest.raises(InsufficientPermissionsError):
            reject_subscription(request_id=growth_request.id, admin=subscriber)

    def test_reject_unknown_request(self, staff_user):
        with pytest.raises(SubscriptionRequestNotFoundError):
            reject_subscription(request_id=uuid4(), admin=staff_user)


# =============================================================================
# Concurrency Tests
# =============================================================================

class TestApprovalConcurrency(TransactionTestCase):
    """
    Concurrent approvals against a real database.

    TransactionTestCase is required: each thread opens its own connection
    and commits for real.
    """

    def setUp(self):
        self.staff = User.objects.create_user(
            email='staff@test.com',
            password='TestPass123!',
            is_staff=True,
        )
        self.upline = User.objects.create_user(email='upline@test.com', password='TestPass123!')

    def _make_subscriber(self, index):
        referrer = User.objects.create_user(
            email=f'referrer{index}@test.com',
            password='TestPass123!',
            referred_by=self.upline,
        )
        subscriber = User.objects.create_user(
            email=f'subscriber{index}@test.com',
            password='TestPass123!',
            referred_by=referrer,
        )
        ensure_subscription(account=subscriber)
        return submit_subscription_request(account=subscriber, plan='growth')

    def test_concurrent_approvals_sharing_upline(self):
        """Every upline credit lands even when approvals race."""
        requests = [self._make_subscriber(i) for i in range(5)]
        results = []
        errors = []

        def approve(sub_request):
            try:
                results.append(approve_subscription(request_id=sub_request.id, admin=self.staff))
            except Exception as e:
                errors.append(e)
            finally:
                connection.close()

        threads = [threading.Thread(target=approve, args=(r,)) for r in requests]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert errors == []
        assert len(results) == 5
        self.upline.refresh_from_db()
        assert self.upline.downline_earnings == 5 * 75_000
        assert self.upline.wallet_balance == 5 * 75_000

    def test_duplicate_approvals_pay_once(self):
        """The same request approved twice at once credits only once."""
        sub_request = self._make_subscriber(0)
        results = []
        errors = []

        def approve():
            try:
                results.append(approve_subscription(request_id=sub_request.id, admin=self.staff))
            except SubscriptionRequestNotFoundError as e:
                errors.append(e)
            finally:
                connection.close()

        threads = [threading.Thread(target=approve) for _ in range(3)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(results) == 1
        assert len(errors) == 2
        referrer = User.objects.get(email='referrer0@test.com')
        assert referrer.earnings == 300_000
        self.upline.refresh_from_db()
        assert self.upline.downline_earnings == 75_000
