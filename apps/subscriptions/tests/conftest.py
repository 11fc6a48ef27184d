import pytest
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User
from apps.subscriptions.models import SubscriptionRequest
from apps.subscriptions.services import ensure_subscription, submit_subscription_request


def make_account(email, referred_by=None, **extra):
    """Create an account the way signup does (with its free subscription)."""
    user = User.objects.create_user(
        email=email,
        password='TestPass123!',
        display_name=email.split('@')[0].title(),
        referred_by=referred_by,
        **extra,
    )
    ensure_subscription(account=user)
    return user


def authenticate(client, user):
    refresh = RefreshToken.for_user(user)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def staff_user(db):
    """Create and return an admin console user."""
    return make_account('staff@example.com', is_staff=True)


@pytest.fixture
def upline(db):
    return make_account('upline@example.com')


@pytest.fixture
def referrer(upline):
    return make_account('referrer@example.com', referred_by=upline)


@pytest.fixture
def subscriber(referrer):
    """upline <- referrer <- subscriber"""
    return make_account('subscriber@example.com', referred_by=referrer)


@pytest.fixture
def loner(db):
    return make_account('loner@example.com')


@pytest.fixture
def growth_request(subscriber) -> SubscriptionRequest:
    """A pending growth upgrade for the subscriber."""
    return submit_subscription_request(
        account=subscriber,
        plan='growth',
        proof_reference='TRF-001',
    )


@pytest.fixture
def staff_client(api_client, staff_user):
    return authenticate(api_client, staff_user)


@pytest.fixture
def subscriber_client(api_client, subscriber):
    return authenticate(api_client, subscriber)
